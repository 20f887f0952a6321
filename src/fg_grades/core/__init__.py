"""
Core Package

Container codec and the document models shared by every other subpackage.
"""

from .codec import FormatError, decode, encode
from .errors import GradeFileError
from .models import (
    ClassSection,
    Document,
    GradeComponent,
    GradeState,
    Student,
    normalize_roll,
)

__all__ = [
    "FormatError",
    "decode",
    "encode",
    "GradeFileError",
    "ClassSection",
    "Document",
    "GradeComponent",
    "GradeState",
    "Student",
    "normalize_roll",
]
