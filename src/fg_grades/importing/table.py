"""
Module: importing.table

Purpose:
    Typed wrapper around the rows handed over by the host's spreadsheet
    extractor. The column set is fixed by the first row's keys.

Key Classes:
    - ExternalTable: Ordered rows plus declared columns

Key Functions:
    - cell_text(): Display text of a spreadsheet cell value

Used By:
    - importing.mapping: Column suggestions, roll column resolution
    - importing.importer: Merge
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple


def cell_text(value: Any) -> str:
    """
    Text form of a cell value as a spreadsheet would display it.

    None is "", integral floats drop the ".0", everything else is str().

    Example:
        >>> cell_text(8.0), cell_text(8.5), cell_text(None), cell_text(" A1 ")
        ('8', '8.5', '', ' A1 ')
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class ExternalTable:
    """
    External tabular source (immutable).

    Attributes:
        columns: Column names in declaration order (first row's keys)
        rows: Row mappings in source order

    Example:
        >>> table = ExternalTable.from_rows([{"Roll": "A1", "Midterm": 8.5}])
        >>> table.columns
        ('Roll', 'Midterm')
    """
    columns: Tuple[str, ...]
    rows: Tuple[Mapping[str, Any], ...]

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> ExternalTable:
        materialized = tuple(dict(row) for row in rows)
        columns = tuple(str(key) for key in materialized[0]) if materialized else ()
        return cls(columns=columns, rows=materialized)

    def cell(self, row: Mapping[str, Any], column: str) -> str:
        """
        Text of `row[column]`, or "" if the column is undeclared or absent.
        """
        if column not in self.columns:
            return ""
        return cell_text(row.get(column))

    def __len__(self) -> int:
        return len(self.rows)
