"""
Module: loading

Purpose:
    Turn decoded container markup into a normalized Document.

Key Functions:
    - parse_document(): Markup -> Document
    - normalize_document(): Unify label sets across all students
    - collect_labels(): Global label set
    - display_label(): Header text for a raw label

Used By:
    - fg_grades.controller
"""

from .parser import ParseError, SchemaError, parse_document
from .normalizer import (
    FALLBACK_LABEL,
    collect_labels,
    display_label,
    display_labels,
    normalize_document,
)

__all__ = [
    "ParseError",
    "SchemaError",
    "parse_document",
    "FALLBACK_LABEL",
    "collect_labels",
    "display_label",
    "display_labels",
    "normalize_document",
]
