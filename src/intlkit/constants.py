"""Shared constants for intlkit.

Centralizes limits, defaults and patterns used by both the runtime
(formatting) and extraction (build-time) layers. Placing them here avoids
circular imports between the two.

Constants are grouped by domain:
- Depth limits: ceiling for nested message references
- Identifiers: validation pattern for extracted message ids
- Extraction defaults: values used by ExtractionConfig

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_REFERENCE_DEPTH",
    # Identifiers
    "MESSAGE_ID_PATTERN",
    "LANGUAGE_NAME_ID",
    # Extraction defaults
    "DEFAULT_LANGUAGE",
    "DEFAULT_LOCALES",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_LOCALES_DIR",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_JSON_INDENT",
    # Artifact names
    "TEMPLATE_FILE",
    "MESSAGE_MAP_FILE",
    "FILE_MAP_FILE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum chain length of nested {@'...'} references resolved for one
# formatting call. A legitimate template uses one level; anything past this
# is a reference cycle. Reaching the ceiling leaves the placeholder literal.
MAX_REFERENCE_DEPTH: int = 20

# ============================================================================
# IDENTIFIERS
# ============================================================================

# Extracted descriptor ids must consist of these characters only (use fullmatch).
MESSAGE_ID_PATTERN: re.Pattern[str] = re.compile(r"[a-zA-Z_.\-]+")

# Message id holding a locale's name in its own language ("English", "Français").
LANGUAGE_NAME_ID: str = "intl.language"

# ============================================================================
# EXTRACTION DEFAULTS
# ============================================================================

DEFAULT_LANGUAGE: str = "en"

DEFAULT_LOCALES: tuple[str, ...] = (
    "en",
    "es",
    "fr",
    "it",
    "ja",
    "ko",
    "ru",
    "zh-cn",
    "zh-hk",
)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx")

DEFAULT_LOCALES_DIR: str = "locales"

DEFAULT_OUTPUT_DIR: str = "locales/.extract"

DEFAULT_JSON_INDENT: int = 4

# ============================================================================
# ARTIFACT NAMES
# ============================================================================

TEMPLATE_FILE: str = "template.json"
MESSAGE_MAP_FILE: str = "message-map.json"
FILE_MAP_FILE: str = "file-map.json"
