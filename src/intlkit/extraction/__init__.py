"""Build-time extraction of message usages from source files.

Exports:
    extract_messages: Run a full extraction (scan, merge, write)
    ExtractionConfig: Options of an extraction run
    ExtractionSummary: Outcome of a run
    ExtractionRule, RuleKind, DEFAULT_RULES: Scanning patterns
    scan, discover_files, ScanResult, Occurrence, FileOccurrence: Scanner
    DictionaryBuilder, merge_dictionary, build_template: Dictionary merge

Python 3.13+. Zero external dependencies.
"""

from .config import ExtractionConfig
from .dictionary import DictionaryBuilder, build_template, merge_dictionary
from .pipeline import ExtractionSummary, extract_messages
from .rules import DEFAULT_RULES, ExtractionRule, RuleKind
from .scanner import FileOccurrence, Occurrence, ScanResult, discover_files, scan

__all__ = [
    "DEFAULT_RULES",
    "DictionaryBuilder",
    "ExtractionConfig",
    "ExtractionRule",
    "ExtractionSummary",
    "FileOccurrence",
    "Occurrence",
    "RuleKind",
    "ScanResult",
    "build_template",
    "discover_files",
    "extract_messages",
    "merge_dictionary",
    "scan",
]
