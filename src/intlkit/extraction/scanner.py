"""Source scanner: find message usages across a file set.

Each file is read as UTF-8 and split into lines. For every line (1-based),
every rule is applied in declaration order, and every match of a rule on
the line is recorded, left to right. Overlapping matches of different rules
are all kept.

Results are ordered deterministically: files in the order given, then
line, then rule, then position within the line. The file map of each file
is additionally sorted by (line, column).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from intlkit.diagnostics import DescriptorParseError, ErrorTemplate, IntlError
from intlkit.extraction.rules import RuleKind
from intlkit.syntax.descriptor import parse_descriptor

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from intlkit.extraction.rules import ExtractionRule
    from intlkit.types import MessageId

__all__ = [
    "FileOccurrence",
    "Occurrence",
    "ScanResult",
    "discover_files",
    "scan",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One match of a rule.

    Attributes:
        pos: "<file>:<line>:<column>", both 1-based
        code: The full matched text
        keys: Placeholder names listed at the call site, if the rule captures them
    """

    pos: str
    code: str
    keys: tuple[str, ...] | None = None

    def to_json(self) -> dict[str, object]:
        """Record as written to message-map.json."""
        record: dict[str, object] = {"pos": self.pos, "code": self.code}
        if self.keys is not None:
            record["keys"] = list(self.keys)
        return record


@dataclass(frozen=True, slots=True)
class FileOccurrence:
    """An occurrence together with its message id and line/column."""

    id: MessageId
    occurrence: Occurrence
    ln: int
    col: int

    def to_json(self) -> dict[str, object]:
        """Record as written to file-map.json."""
        return {"id": self.id, **self.occurrence.to_json(), "ln": self.ln, "col": self.col}


@dataclass(slots=True)
class ScanResult:
    """Everything one scan produces.

    Attributes:
        files: Scanned files (relative POSIX paths), in scan order
        message_map: Message id -> occurrences, in scan order
        file_map: File -> occurrences sorted by line, then column
        default_messages: Message id -> default message (last one seen wins)
        parse_failures: Number of matches skipped because their descriptor
            could not be parsed
    """

    files: list[str] = field(default_factory=list)
    message_map: dict[MessageId, list[Occurrence]] = field(default_factory=dict)
    file_map: dict[str, list[FileOccurrence]] = field(default_factory=dict)
    default_messages: dict[MessageId, str] = field(default_factory=dict)
    parse_failures: int = 0

    @property
    def message_ids(self) -> list[MessageId]:
        """Discovered ids in order of first occurrence."""
        return list(self.message_map)


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts[:-1])


def discover_files(
    base_dir: str | Path,
    source_dirs: Sequence[str] = (),
    extensions: Sequence[str] = (),
) -> list[str]:
    """List the files to scan.

    Args:
        base_dir: Directory all paths are relative to
        source_dirs: Directories below base_dir to search; the whole tree
            when empty
        extensions: File extensions without the dot; every file when empty

    Returns:
        Sorted, de-duplicated POSIX paths relative to base_dir. Files inside
        hidden directories (".git", ".extract") are skipped.
    """
    base = Path(base_dir)
    roots = [base / source for source in source_dirs] if source_dirs else [base]
    suffixes = {f".{ext.lstrip('.')}" for ext in extensions}
    found: set[str] = set()
    for root in roots:
        if not root.is_dir():
            logger.warning("Source directory %s does not exist, skipping", root)
            continue
        for path in root.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(base)
            if _is_hidden(relative):
                continue
            if suffixes and path.suffix not in suffixes:
                continue
            found.add(relative.as_posix())
    return sorted(found)


def _read_lines(path: Path) -> list[str]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IntlError(ErrorTemplate.source_unreadable(str(path), str(e))) from e
    return [line.removesuffix("\r") for line in content.split("\n")]


def _scan_line(
    result: ScanResult,
    file: str,
    line_no: int,
    line: str,
    rules: Sequence[ExtractionRule],
) -> None:
    for rule in rules:
        for match in rule.pattern.finditer(line):
            col = match.start() + 1
            pos = f"{file}:{line_no}:{col}"
            code = match.group(0)
            message_id = captured = match.group(1)
            if rule.kind is RuleKind.OBJECT:
                try:
                    descriptor = parse_descriptor(captured)
                except DescriptorParseError as e:
                    logger.warning("Error parsing %s: '%s' (%s)", pos, code, e)
                    result.parse_failures += 1
                    continue
                message_id = descriptor.id
                if descriptor.default_message:
                    result.default_messages[message_id] = descriptor.default_message
            if not message_id:
                continue

            occurrence = Occurrence(pos, code, rule.keys(match))
            result.message_map.setdefault(message_id, []).append(occurrence)
            result.file_map.setdefault(file, []).append(
                FileOccurrence(message_id, occurrence, line_no, col)
            )
            logger.debug("%s: %s", pos, message_id)


def scan(
    files: Iterable[str],
    rules: Sequence[ExtractionRule],
    base_dir: str | Path = ".",
) -> ScanResult:
    """Apply extraction rules to every line of every file.

    Args:
        files: Paths relative to base_dir, as returned by discover_files()
        rules: Rules in the order they are tried on each line
        base_dir: Directory the file paths are relative to

    Returns:
        ScanResult; descriptors that fail to parse are logged and counted

    Raises:
        IntlError: If a file cannot be read
    """
    base = Path(base_dir)
    result = ScanResult()
    for file in files:
        result.files.append(file)
        for line_no, line in enumerate(_read_lines(base / file), start=1):
            _scan_line(result, file, line_no, line, rules)
        if file in result.file_map:
            result.file_map[file].sort(key=lambda item: (item.ln, item.col))
    logger.info(
        "Scanned %d files: %d messages in %d files",
        len(result.files),
        len(result.message_map),
        len(result.file_map),
    )
    return result
