"""
Module: editing.editor

Purpose:
    The single-cell grade edit rule and the presentational grade band.

Key Functions:
    - apply_edit(): (current state, raw input) -> new state
    - is_grade_literal(): Numeric-literal acceptance test
    - classify_grade(): Value -> GradeBand for colouring

Key Classes:
    - GradeBand: LOW / NEUTRAL / HIGH

Dependencies:
    - re (std)
    - fg_grades.core.models.GradeState

Used By:
    - fg_grades.controller.GradeSession.edit_grade

Edit Rule:
    ""                -> Nil
    finite decimal    -> Value(input), stored exactly as typed
    anything else     -> unchanged (not an error, just not applied)
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Optional

from fg_grades.config import GradeBandThresholds
from fg_grades.core.models import GradeState

# Optional sign, digits with at most one decimal point, no exponent
_GRADE_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


class GradeBand(str, Enum):
    """Colour band of a grade cell."""
    LOW = "low"
    NEUTRAL = "neutral"
    HIGH = "high"


def is_grade_literal(text: str) -> bool:
    """
    True if `text` is a finite decimal number.

    Example:
        >>> [is_grade_literal(s) for s in ("8.5", "-3", ".5", "1,000", "1e3")]
        [True, True, True, False, False]
    """
    return _GRADE_LITERAL.fullmatch(text) is not None


def apply_edit(current: GradeState, raw: str) -> GradeState:
    """
    Compute the state of a cell after the user typed `raw`.

    Surrounding whitespace is ignored, so blank input clears the cell.

    Args:
        current: State before the edit
        raw: Text from the input widget

    Returns:
        New state, or `current` itself when the input is not accepted

    Example:
        >>> apply_edit(GradeState.empty(), "8.5")
        GradeState('8.5')
        >>> apply_edit(GradeState.of("7"), "abc")
        GradeState('7')
    """
    text = raw.strip()
    if text == "":
        return GradeState.empty()
    if is_grade_literal(text):
        return GradeState.of(text)
    return current


def parse_grade(value: Optional[str]) -> Optional[float]:
    """Numeric value of a stored grade, or None if it has none."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def classify_grade(
    value: Optional[str],
    thresholds: Optional[GradeBandThresholds] = None,
) -> GradeBand:
    """
    Band of a stored grade value.

    Nil, empty and non-numeric values are NEUTRAL.

    Example:
        >>> classify_grade("4.9"), classify_grade("9"), classify_grade(None)
        (<GradeBand.LOW: 'low'>, <GradeBand.HIGH: 'high'>, <GradeBand.NEUTRAL: 'neutral'>)
    """
    thresholds = thresholds or GradeBandThresholds()
    number = parse_grade(value)
    if number is None:
        return GradeBand.NEUTRAL
    if number < thresholds.low_below:
        return GradeBand.LOW
    if number >= thresholds.high_from:
        return GradeBand.HIGH
    return GradeBand.NEUTRAL
