"""
Module: importing.importer

Purpose:
    Reconciliation import: overwrite grades of one class section from an
    external roll-keyed table.

Key Functions:
    - apply_import(): Merge a table into a section

Key Classes:
    - ImportResult: Update count plus matched/unmatched rolls

Dependencies:
    - importing.mapping: Roll column resolution
    - importing.table: Cell text

Used By:
    - fg_grades.controller.GradeSession.apply_import

Merge Rules:
    - Rolls are keyed trimmed + uppercased; the last row wins on duplicates
    - Students without a matching row are left alone (not an error)
    - Only non-empty cells overwrite; empty cells never clear a grade
    - Each overwrite clears nil and counts once, even if the value is unchanged
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from fg_grades.config import DEFAULT_ROLL_SYNONYMS
from fg_grades.core.models import ClassSection, GradeComponent, GradeState, normalize_roll

from .mapping import ColumnMapping, resolve_roll_column
from .table import ExternalTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of one import batch (immutable).

    Attributes:
        updated_count: Component overwrites applied
        roll_column: Column used as the roll key
        matched_rolls: Rolls of students that found a row
        unmatched_rolls: Rolls of students with no row

    Example:
        >>> result = apply_import(section, table, mapping)
        >>> print(f"Updated {result.updated_count} grades")
    """
    updated_count: int
    roll_column: str
    matched_rolls: Tuple[str, ...] = ()
    unmatched_rolls: Tuple[str, ...] = ()


def index_rows(table: ExternalTable, roll_column: str) -> Dict[str, Mapping[str, Any]]:
    """Normalized roll -> row; later rows replace earlier ones."""
    lookup: Dict[str, Mapping[str, Any]] = {}
    for row in table.rows:
        key = normalize_roll(table.cell(row, roll_column))
        if key:
            lookup[key] = row
    return lookup


def apply_import(
    section: ClassSection,
    table: ExternalTable,
    mapping: ColumnMapping,
    *,
    roll_synonyms: Iterable[str] = DEFAULT_ROLL_SYNONYMS,
) -> ImportResult:
    """
    Merge `table` into the students of `section`.

    All overwrites are planned before any is applied, so a failure leaves
    the section unchanged.

    Args:
        section: The active class section (modified in place)
        table: External rows
        mapping: Roll column and label -> column choices
        roll_synonyms: Used when mapping has no explicit roll column

    Returns:
        ImportResult with the number of components overwritten

    Raises:
        MappingError: If no roll column can be resolved
    """
    roll_column = resolve_roll_column(mapping, table.columns, roll_synonyms)
    lookup = index_rows(table, roll_column)

    planned: List[Tuple[GradeComponent, str]] = []
    matched: List[str] = []
    unmatched: List[str] = []

    for student in section.students:
        row = lookup.get(student.roll_key)
        if row is None:
            unmatched.append(student.roll)
            continue
        matched.append(student.roll)
        for label, column in mapping.labels.items():
            component = student.component(label)
            if component is None:
                continue
            text = table.cell(row, column).strip()
            if text:
                planned.append((component, text))

    for component, text in planned:
        component.apply(GradeState.of(text))

    if unmatched:
        logger.debug(f"No external row for rolls: {unmatched}")
    logger.info(
        f"Import into {section.title!r}: {len(planned)} grades updated, "
        f"{len(matched)} students matched, {len(unmatched)} unmatched"
    )
    return ImportResult(
        updated_count=len(planned),
        roll_column=roll_column,
        matched_rolls=tuple(matched),
        unmatched_rolls=tuple(unmatched),
    )
