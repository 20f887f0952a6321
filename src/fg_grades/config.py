"""Centralized configuration for container parsing, grading bands and import.

Everything that was a literal in the grade report tooling (element names,
placeholder defaults, decorative label prefixes, roll column synonyms and
the colour band thresholds) lives here so hosts can override it in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

# Stripped from component labels for display only
DEFAULT_LABEL_DECORATIONS: Tuple[str, ...] = (
    "[Đánh giá quá trình]",
    "[Đánh giá cuối học phần]",
    "Đánh giá Assignment",
)

# Matched as case-insensitive substrings of external column names.
# No bare "id" here, it is a substring of "Midterm".
DEFAULT_ROLL_SYNONYMS: Tuple[str, ...] = (
    "roll",
    "mssv",
    "student id",
    "student_id",
    "studentid",
    "student code",
    "mã sinh viên",
    "mã sv",
    "ma sv",
)


@dataclass(frozen=True)
class ContainerConfig:
    """
    Element names and placeholder values for the grade report markup.

    Lookups are by local name, so these never carry a namespace.

    Attributes:
        semester_tag: Document-level semester field
        section_tag: One subject/class grouping
        subject_tag: Section subject field
        class_tag: Section class code field
        student_tag: One student record
        roll_tag: Student roll number field
        name_tag: Student full name field
        component_tag: One grade component element
        label_tag: Component label field
        grade_tag: Component grade field (may carry xsi:nil)
        grades_container_tag: Container created for students with no components
        root_tag: Root element for documents built in code
        default_semester: Used when the semester is absent or empty
        default_subject: Used when a section has no subject
        default_class: Used when a section has no class code
        declaration: Prepended to serialized output when missing
    """
    semester_tag: str = "Semester"
    section_tag: str = "SubjectClassGrade"
    subject_tag: str = "Subject"
    class_tag: str = "Class"
    student_tag: str = "Student"
    roll_tag: str = "Roll"
    name_tag: str = "Name"
    component_tag: str = "GradeComponent"
    label_tag: str = "Component"
    grade_tag: str = "Grade"
    grades_container_tag: str = "Grades"
    root_tag: str = "GradeReport"
    default_semester: str = "N/A"
    default_subject: str = "Unknown Subject"
    default_class: str = "Unknown Class"
    declaration: str = XML_DECLARATION


@dataclass(frozen=True)
class GradeBandThresholds:
    """
    Boundaries for the low / neutral / high grade colouring.

    Attributes:
        low_below: Values strictly below this are LOW
        high_from: Values at or above this are HIGH
    """
    low_below: float = 5.0
    high_from: float = 9.0

    def __post_init__(self) -> None:
        """Validate thresholds on construction."""
        if self.low_below > self.high_from:
            raise ValueError(
                f"low_below ({self.low_below}) must not exceed high_from ({self.high_from})"
            )


@dataclass(frozen=True)
class ImportConfig:
    """Settings for the reconciliation import."""
    roll_synonyms: Tuple[str, ...] = DEFAULT_ROLL_SYNONYMS

    def __post_init__(self) -> None:
        if not self.roll_synonyms:
            raise ValueError("roll_synonyms must not be empty")
        if any(not s.strip() for s in self.roll_synonyms):
            raise ValueError(f"roll_synonyms must not contain blank entries: {self.roll_synonyms!r}")


@dataclass(frozen=True)
class SessionConfig:
    """
    Everything a GradeSession needs, bundled (immutable).

    Example:
        >>> config = SessionConfig(bands=GradeBandThresholds(low_below=4.0))
        >>> config.container.section_tag
        'SubjectClassGrade'
    """
    container: ContainerConfig = field(default_factory=ContainerConfig)
    bands: GradeBandThresholds = field(default_factory=GradeBandThresholds)
    importing: ImportConfig = field(default_factory=ImportConfig)
    label_decorations: Tuple[str, ...] = DEFAULT_LABEL_DECORATIONS
