"""
Module: importing.mapping

Purpose:
    Decide which external column feeds the roll key and each grade label.

Key Classes:
    - ColumnMapping: Roll column + label -> column entries (partial, editable)
    - MappingError: No roll column could be resolved

Key Functions:
    - suggest_mapping(): Auto-fill a mapping by substring match
    - resolve_roll_column(): Explicit choice, else roll synonym scan

Dependencies:
    - fg_grades.loading.normalizer.display_label

Used By:
    - importing.importer
    - fg_grades.controller

Matching Rule:
    Case-insensitive substring match in either direction between a label's
    display text and a column name. The first column in declaration order
    wins. No fuzzy matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from fg_grades.config import DEFAULT_LABEL_DECORATIONS, DEFAULT_ROLL_SYNONYMS
from fg_grades.core.errors import GradeFileError
from fg_grades.loading.normalizer import display_label

logger = logging.getLogger(__name__)


class MappingError(GradeFileError):
    """The import cannot resolve which column holds roll numbers."""
    pass


@dataclass
class ColumnMapping:
    """
    Caller-owned column mapping for one import.

    Attributes:
        roll_column: Column holding roll numbers (None = auto-detect)
        labels: Raw component label -> external column name

    Example:
        >>> mapping = ColumnMapping(labels={"Midterm": "Midterm"})
        >>> mapping.set_label("Final", "Final exam")
        >>> mapping.column_for("Final")
        'Final exam'
    """
    roll_column: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)

    def set_label(self, label: str, column: Optional[str]) -> None:
        """Map `label` to `column`; None removes the entry."""
        if column is None:
            self.labels.pop(label, None)
        else:
            self.labels[label] = column

    def column_for(self, label: str) -> Optional[str]:
        return self.labels.get(label)


def find_roll_column(
    columns: Sequence[str],
    synonyms: Iterable[str] = DEFAULT_ROLL_SYNONYMS,
) -> Optional[str]:
    """First column whose name contains a roll synonym, or None."""
    needles = [s.lower() for s in synonyms]
    for column in columns:
        lowered = column.lower()
        if any(needle in lowered for needle in needles):
            return column
    return None


def resolve_roll_column(
    mapping: ColumnMapping,
    columns: Sequence[str],
    synonyms: Iterable[str] = DEFAULT_ROLL_SYNONYMS,
) -> str:
    """
    Roll column for an import.

    Order: explicit `mapping.roll_column`, then synonym scan of `columns`.

    Raises:
        MappingError: If neither yields a column
    """
    if mapping.roll_column:
        if mapping.roll_column not in columns:
            logger.warning(f"Roll column {mapping.roll_column!r} is not among the table columns {list(columns)}")
        return mapping.roll_column

    found = find_roll_column(columns, synonyms)
    if found is None:
        raise MappingError(
            f"Could not find a roll number column among {list(columns)}; choose one explicitly"
        )
    return found


def match_column(
    label: str,
    columns: Sequence[str],
    decorations: Iterable[str] = DEFAULT_LABEL_DECORATIONS,
    *,
    exclude: Iterable[str] = (),
) -> Optional[str]:
    """First column whose name and the label's display text contain one another."""
    shown = display_label(label, decorations).lower()
    if not shown:
        return None
    skipped = set(exclude)
    for column in columns:
        if column in skipped:
            continue
        lowered = column.strip().lower()
        if not lowered:
            continue
        if shown in lowered or lowered in shown:
            return column
    return None


def suggest_mapping(
    labels: Sequence[str],
    columns: Sequence[str],
    *,
    synonyms: Iterable[str] = DEFAULT_ROLL_SYNONYMS,
    decorations: Iterable[str] = DEFAULT_LABEL_DECORATIONS,
    base: Optional[ColumnMapping] = None,
) -> ColumnMapping:
    """
    Propose a mapping for `labels` against `columns`.

    Entries already present in `base` are kept as they are; only gaps are
    filled. The roll column is never suggested for a grade label.

    Args:
        labels: Raw labels, usually the global label set
        columns: External column names in declaration order
        synonyms: Roll identifier synonyms
        decorations: Label decorations ignored when matching
        base: Existing user choices to preserve

    Returns:
        New ColumnMapping (base is not modified)
    """
    synonyms = tuple(synonyms)
    decorations = tuple(decorations)
    mapping = ColumnMapping(
        roll_column=base.roll_column if base else None,
        labels=dict(base.labels) if base else {},
    )
    if mapping.roll_column is None:
        mapping.roll_column = find_roll_column(columns, synonyms)

    exclude = (mapping.roll_column,) if mapping.roll_column else ()
    for label in labels:
        if label in mapping.labels:
            continue
        column = match_column(label, columns, decorations, exclude=exclude)
        if column is not None:
            mapping.labels[label] = column

    logger.debug(f"Suggested mapping: roll={mapping.roll_column!r}, labels={mapping.labels}")
    return mapping
