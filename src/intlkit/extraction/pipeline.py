"""Extraction pipeline: scan sources and synchronize locale dictionaries.

One run is a single synchronous batch:

    discover files -> scan -> read every dictionary -> merge -> write

Every dictionary is read and merged before the first file is written, so
a malformed dictionary aborts the run with nothing changed on disk.
Per-occurrence problems (descriptors that do not parse) are logged and
counted; they never abort the run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from intlkit.constants import FILE_MAP_FILE, MESSAGE_MAP_FILE, TEMPLATE_FILE
from intlkit.extraction.config import ExtractionConfig
from intlkit.extraction.dictionary import DictionaryBuilder
from intlkit.extraction.scanner import discover_files, scan
from intlkit.loading import locale_file, read_dictionary, write_json
from intlkit.types import LocaleCode, MessageDictionary, MessageId

__all__ = ["ExtractionSummary", "extract_messages"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractionSummary:
    """Outcome of one extraction run.

    Paths are relative to the base directory of the run.

    Attributes:
        files_processed: Number of files scanned
        message_count: Number of distinct message ids found
        files_with_messages: Number of files containing at least one usage
        locale_files: Locale code -> dictionary file written
        template_file: Path of template.json
        message_map_file: Path of message-map.json
        file_map_file: Path of file-map.json
        parse_failures: Descriptor matches skipped because they did not parse
        stale_ids: Locale -> persisted ids no longer found in sources
            (only computed when keys are not reserved)
    """

    files_processed: int
    message_count: int
    files_with_messages: int
    locale_files: dict[LocaleCode, Path]
    template_file: Path
    message_map_file: Path
    file_map_file: Path
    parse_failures: int = 0
    stale_ids: dict[LocaleCode, tuple[MessageId, ...]] = field(default_factory=dict)

    def report_lines(self) -> list[str]:
        """Human-readable summary, one line per entry."""
        lines = [
            f"total {self.files_processed} files processed",
            f"total {self.message_count} messages extracted in {self.files_with_messages} files",
        ]
        if self.parse_failures:
            lines.append(f"{self.parse_failures} message descriptors could not be parsed")
        lines.extend(
            [
                f"template: {self.template_file.as_posix()}",
                f"message map: {self.message_map_file.as_posix()}",
                f"file map: {self.file_map_file.as_posix()}",
                "locales:",
            ]
        )
        lines.extend(f"  {path.as_posix()}" for path in self.locale_files.values())
        for locale, ids in self.stale_ids.items():
            if ids:
                lines.append(f"{locale}: {len(ids)} ids not found in sources: {', '.join(ids)}")
        return lines


def _read_all(
    base: Path, config: ExtractionConfig, locales: list[LocaleCode]
) -> tuple[dict[LocaleCode, MessageDictionary], MessageDictionary]:
    existing = {
        locale: read_dictionary(base / locale_file(config.locales_dir, locale))
        for locale in locales
    }
    fallback: MessageDictionary = {}
    if config.fallback is not None:
        fallback = existing.get(config.fallback)
        if fallback is None:
            fallback = read_dictionary(base / locale_file(config.locales_dir, config.fallback))
    return existing, fallback


def extract_messages(
    config: ExtractionConfig | None = None,
    base_dir: str | Path = ".",
) -> ExtractionSummary:
    """Run one extraction.

    Args:
        config: Options (default: ExtractionConfig())
        base_dir: Directory that source, locale and output paths are
            relative to

    Returns:
        ExtractionSummary

    Raises:
        DictionaryLoadError: If a persisted dictionary is unreadable or
            malformed (nothing is written)
        IntlError: If a source file cannot be read or an output file
            cannot be written
    """
    config = config or ExtractionConfig()
    base = Path(base_dir)
    locales = list(dict.fromkeys(config.locales))
    logger.info("Extracting messages under %s", base.resolve())
    logger.debug("Options: %s", config)

    files = discover_files(base, config.source_dir, config.extensions)
    result = scan(files, config.patterns, base)
    builder = DictionaryBuilder(config, result)

    existing, fallback = _read_all(base, config, locales)
    merged = {locale: builder.build(locale, existing[locale], fallback) for locale in locales}

    stale: dict[LocaleCode, tuple[MessageId, ...]] = {}
    if not config.reserve_keys:
        for locale in locales:
            ids = tuple(builder.stale_ids(existing[locale]))
            if ids:
                logger.warning("%s: %d ids not found in sources", locale, len(ids))
            stale[locale] = ids

    locale_files: dict[LocaleCode, Path] = {}
    for locale in locales:
        path = locale_file(config.locales_dir, locale)
        write_json(base / path, merged[locale], config.json_indent)
        locale_files[locale] = path
        logger.info("Wrote %s", path.as_posix())

    output = Path(config.output_dir)
    template_file = output / TEMPLATE_FILE
    message_map_file = output / MESSAGE_MAP_FILE
    file_map_file = output / FILE_MAP_FILE
    write_json(base / template_file, builder.template, config.json_indent)
    write_json(base / message_map_file, builder.message_map_json(), config.json_indent)
    write_json(base / file_map_file, builder.file_map_json(), config.json_indent)

    summary = ExtractionSummary(
        files_processed=len(result.files),
        message_count=len(result.message_map),
        files_with_messages=len(result.file_map),
        locale_files=locale_files,
        template_file=template_file,
        message_map_file=message_map_file,
        file_map_file=file_map_file,
        parse_failures=result.parse_failures,
        stale_ids=stale,
    )
    logger.info(
        "Extracted %d messages from %d files", summary.message_count, summary.files_processed
    )
    return summary
