"""
Module: document

Purpose:
    The grade report document tree: Document -> ClassSection -> Student ->
    GradeComponent. Unlike most models in this package these are mutable;
    a loaded document is edited in place for the rest of a session.

Key Classes:
    - Student: Roll, name and a label-indexed component list
    - ClassSection: One subject/class grouping of students
    - Document: Semester plus ordered sections

Dependencies:
    - dataclasses (std)
    - .grades.GradeComponent

Used By:
    - loading.parser: Builds documents
    - loading.normalizer: Injects missing components
    - importing.importer, output.exporter, controller

Equality:
    Content only (semester, sections, students, labels, values, nil flags).
    Bound markup elements and the label index are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .grades import GradeComponent


def normalize_roll(roll: str) -> str:
    """Key form of a roll number: trimmed and uppercased."""
    return roll.strip().upper()


@dataclass
class Student:
    """
    One student row.

    Attributes:
        roll: External identifier, stored verbatim
        name: Full name
        components: Grade components in stored order
        element: Markup element this was parsed from (not compared)
        container: Element holding this student's components (not compared)

    The label index maps each label to its first component. It is built on
    construction and rebuilt only by `add_component` / `reindex`, never on
    value edits.

    Example:
        >>> s = Student("A1", "Ann", [GradeComponent("Quiz", "7", nil=False)])
        >>> s.component("Quiz").value
        '7'
    """

    roll: str
    name: str
    components: List[GradeComponent] = field(default_factory=list)
    element: Any = field(default=None, compare=False, repr=False)
    container: Any = field(default=None, compare=False, repr=False)
    _index: Dict[str, GradeComponent] = field(
        default_factory=dict, init=False, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        self.reindex()

    @property
    def roll_key(self) -> str:
        return normalize_roll(self.roll)

    def reindex(self) -> None:
        """Rebuild the label index from the component list."""
        self._index = {}
        for comp in self.components:
            self._index.setdefault(comp.label, comp)

    def component(self, label: str) -> Optional[GradeComponent]:
        return self._index.get(label)

    def has_label(self, label: str) -> bool:
        return label in self._index

    def labels(self) -> List[str]:
        """Distinct labels in stored order."""
        return list(self._index)

    def add_component(self, component: GradeComponent) -> None:
        self.components.append(component)
        self._index.setdefault(component.label, component)

    def ordered_components(self, labels: Sequence[str]) -> List[Optional[GradeComponent]]:
        """
        Components in the order of `labels` (typically the global label set).

        Returns None in positions this student has no component for.
        """
        return [self._index.get(label) for label in labels]


@dataclass
class ClassSection:
    """
    One subject/class grouping.

    Identity is the (subject, class_code) pair, but duplicates are allowed
    and treated as independent siblings.
    """

    subject: str
    class_code: str
    students: List[Student] = field(default_factory=list)
    element: Any = field(default=None, compare=False, repr=False)

    @property
    def title(self) -> str:
        """Tab caption, e.g. "Physics - 10A"."""
        return f"{self.subject} - {self.class_code}"


@dataclass
class Document:
    """
    Root of one edit session.

    Attributes:
        semester: Semester text ("N/A" when absent in the source)
        sections: Class sections in document order
        root: Root markup element when parsed (not compared)
    """

    semester: str
    sections: List[ClassSection] = field(default_factory=list)
    root: Any = field(default=None, compare=False, repr=False)

    def iter_students(self) -> Iterator[Student]:
        """All students, sections in order then students in order."""
        for section in self.sections:
            yield from section.students

    @property
    def student_count(self) -> int:
        return sum(len(section.students) for section in self.sections)
