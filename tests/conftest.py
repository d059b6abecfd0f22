"""Pytest configuration for the intlkit test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def locale_config() -> dict[str, dict[str, str]]:
    """Small two-locale corpus used across runtime tests."""
    return {
        "en": {
            "intl.language": "English",
            "hello": "Hello",
            "greeting": "Hello {name}!",
            "task.assigned": "{user} assigned {assignee} a task",
            "user.status.ok": "Active",
            "user.status.banned": "Banned",
            "user.status": "Status: {@'user.status.{status}'}",
            "files": "{count, plural, one {# file} other {# files}}",
            "untranslated": "Only in English",
        },
        "fr": {
            "intl.language": "Français",
            "hello": "Bonjour",
            "greeting": "Bonjour {name} !",
            "task.assigned": "{user} a assigné une tâche à {assignee}",
            "user.status.ok": "Actif",
            "user.status.banned": "",
            "user.status": "Statut : {@'user.status.{status}'}",
            "files": "{count, plural, one {# fichier} other {# fichiers}}",
            "untranslated": "",
        },
    }
