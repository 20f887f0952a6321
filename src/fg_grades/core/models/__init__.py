"""
Core Models Package

Data models for one loaded grade report.

| Model | Role |
|-------|------|
| `Document` | Semester + ordered `ClassSection`s |
| `ClassSection` | Subject/class + ordered `Student`s |
| `Student` | Roll, name, label-indexed `GradeComponent`s |
| `GradeComponent` | Label + verbatim value + nil flag |
| `GradeState` | Immutable value/nil pair used by the edit rule |
"""

from .grades import GradeComponent, GradeState
from .document import ClassSection, Document, Student, normalize_roll

__all__ = [
    "GradeComponent",
    "GradeState",
    "ClassSection",
    "Document",
    "Student",
    "normalize_roll",
]
