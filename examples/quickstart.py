"""Quickstart example for intlkit.

This example demonstrates message formatting with Intl and a small
extraction run over a throwaway project directory.

Note: Missing messages and values are logged, not raised. Configure logging
in production so that translation gaps show up in your logs.
"""

import json
import logging
import tempfile
from datetime import date
from pathlib import Path

from intlkit import ExtractionConfig, Intl, MessageDescriptor, extract_messages

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

intl = Intl(
    {
        "en": {
            "intl.language": "English",
            "hello": "Hello, World!",
            "task.assigned": "{user} assigned {assignee} a task",
            "user.status.ok": "Active",
            "user.status": "Status: {@'user.status.{status}'}",
            "emails": "You have {count, plural, =0 {no emails} one {# email} other {# emails}}.",
        },
        "fr": {
            "intl.language": "Français",
            "hello": "Bonjour le monde !",
            "task.assigned": "{user} a confié une tâche à {assignee}",
            "user.status.ok": "",
            "user.status": "Statut : {@'user.status.{status}'}",
            "emails": "",
        },
    }
)

# Example 1: Simple message
print("=" * 50)
print("Example 1: Simple Message")
print("=" * 50)

print(intl.format("hello"))
# Output: Hello, World!
print(intl.format("hello", locale="fr"))
# Output: Bonjour le monde !

# Example 2: Placeholders and nested references
print("\n" + "=" * 50)
print("Example 2: Placeholders and Nested References")
print("=" * 50)

fr = intl.for_locale("fr")
print(fr.format("task.assigned", {"user": "Jack", "assignee": "Black"}))
# Output: Jack a confié une tâche à Black
print(fr.format("user.status", {"status": "ok"}))
# Output: Statut : [en]Active

# Example 3: Plurals
print("\n" + "=" * 50)
print("Example 3: Plural Forms")
print("=" * 50)

for count in (0, 1, 5):
    print(intl.format("emails", {"count": count}))
# Output:
# You have no emails.
# You have 1 email.
# You have 5 emails.

# Example 4: Missing messages
print("\n" + "=" * 50)
print("Example 4: Missing Messages")
print("=" * 50)

print(intl.format(MessageDescriptor("welcome", "Welcome, {name}!"), {"name": "Ann"}))
# Output: Welcome, Ann!
print(intl.format("nowhere", fallback="-"))
# Output: -

# Example 5: Reading values back
print("\n" + "=" * 50)
print("Example 5: Extracting Variables")
print("=" * 50)

print(intl.extract_variables("task.assigned", "Jack assigned Black a task"))
# Output: {'user': 'Jack', 'assignee': 'Black'}

# Example 6: Dates
print("\n" + "=" * 50)
print("Example 6: Dates")
print("=" * 50)

print(fr.format_date(date(2024, 3, 1), "d MMMM yyyy"))
# Output: 1 mars 2024

# Example 7: Extraction
print("\n" + "=" * 50)
print("Example 7: Extracting Messages from Sources")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmp:
    root = Path(tmp)
    (root / "src").mkdir()
    (root / "src" / "app.js").write_text(
        "formatMessage({ id: 'app.title', defaultMessage: 'My App' });\n"
        "__('app.logout');\n",
        encoding="utf-8",
    )
    summary = extract_messages(
        ExtractionConfig(source_dir=("src",), locales=("en", "fr")), base_dir=root
    )
    for line in summary.report_lines():
        print(line)
    print(json.loads((root / "locales" / "en.json").read_text(encoding="utf-8")))
    # Output: {'app.logout': '', 'app.title': 'My App'}
