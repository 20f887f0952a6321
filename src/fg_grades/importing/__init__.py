"""
Module: importing

Purpose:
    Reconciliation import of grades from an external roll-keyed table
    into the active class section.

Key Functions:
    - suggest_mapping(): Auto-map labels to columns
    - apply_import(): Merge rows into a section

Used By:
    - fg_grades.controller
"""

from .table import ExternalTable, cell_text
from .mapping import (
    ColumnMapping,
    MappingError,
    find_roll_column,
    match_column,
    resolve_roll_column,
    suggest_mapping,
)
from .importer import ImportResult, apply_import, index_rows

__all__ = [
    "ExternalTable",
    "cell_text",
    "ColumnMapping",
    "MappingError",
    "find_roll_column",
    "match_column",
    "resolve_roll_column",
    "suggest_mapping",
    "ImportResult",
    "apply_import",
    "index_rows",
]
