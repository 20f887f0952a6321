"""Grade cell edit rule and grade colour bands."""

from .editor import (
    GradeBand,
    apply_edit,
    classify_grade,
    is_grade_literal,
    parse_grade,
)

__all__ = [
    "GradeBand",
    "apply_edit",
    "classify_grade",
    "is_grade_literal",
    "parse_grade",
]
