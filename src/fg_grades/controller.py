"""
Module: controller

Purpose:
    Own one grade report edit session: the live Document, its global label
    set and the active section. Hosts drive everything through this object.
    Decode → Parse → Normalize → (Edit | Import)* → Serialize → Encode

Key Classes:
    - GradeSession: Session controller
    - SessionError: Misuse (nothing loaded, bad section/student index)

Dependencies:
    - fg_grades.core: Codec, models
    - fg_grades.loading: Parse and normalize
    - fg_grades.editing: Edit rule, grade bands
    - fg_grades.importing: Reconciliation import
    - fg_grades.output: Export
    - fg_grades.notifications: Optional hook

Used By:
    - Host applications (UI shells, scripts)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from fg_grades.config import SessionConfig
from fg_grades.core.codec import decode
from fg_grades.core.models import ClassSection, Document, GradeState, Student
from fg_grades.editing import GradeBand, apply_edit, classify_grade
from fg_grades.importing import (
    ColumnMapping,
    ExternalTable,
    ImportResult,
    apply_import,
    suggest_mapping,
)
from fg_grades.loading import display_labels, normalize_document, parse_document
from fg_grades.notifications import NotificationDispatcher, NotificationEvent
from fg_grades.output import export_container, serialize_document

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Operation not possible in the current session state."""
    pass


class GradeSession:
    """
    One edit session over at most one live Document.

    Loading replaces the document only after the new one decoded, parsed
    and normalized; a failed load keeps the previous document.

    Example:
        >>> session = GradeSession()
        >>> session.load(Path("report.fg").read_text())
        >>> session.edit_grade(0, "Midterm", "8.5")
        GradeState('8.5')
        >>> Path("export_grade.fg").write_text(session.export())
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        notifier: Optional[NotificationDispatcher] = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.notifier = notifier
        self._document: Optional[Document] = None
        self._labels: List[str] = []
        self._active_index = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def load(self, container: Union[str, bytes]) -> Document:
        """
        Load a .fg container.

        Raises:
            FormatError: Container is not hex-encoded UTF-8
            ParseError: Decoded text is not well-formed markup
            SchemaError: Markup has no class sections
        """
        return self.load_markup(decode(container))

    def load_markup(self, xml_text: str) -> Document:
        """Load already-decoded markup (same errors as `load`, minus FormatError)."""
        document = parse_document(xml_text, self.config.container)
        labels = normalize_document(document)

        self._document = document
        self._labels = labels
        self._active_index = 0

        logger.info(
            f"Loaded {document.semester!r}: {len(document.sections)} sections, "
            f"{document.student_count} students, {len(labels)} grade columns"
        )
        self._notify(
            "document_loaded",
            semester=document.semester,
            sections=len(document.sections),
            students=document.student_count,
        )
        return document

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    @property
    def document(self) -> Document:
        if self._document is None:
            raise SessionError("No grade report loaded")
        return self._document

    @property
    def labels(self) -> List[str]:
        """Global label set of the loaded document (a copy)."""
        return list(self._labels)

    @property
    def display_labels(self) -> List[str]:
        """Header texts for `labels`, same order."""
        return display_labels(self._labels, self.config.label_decorations)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_section(self) -> ClassSection:
        return self.document.sections[self._active_index]

    def select_section(self, index: int) -> ClassSection:
        section = self._section(index)
        self._active_index = index
        return section

    def student(self, student_index: int, *, section_index: Optional[int] = None) -> Student:
        section = self.active_section if section_index is None else self._section(section_index)
        if not 0 <= student_index < len(section.students):
            raise SessionError(
                f"Student index {student_index} out of range in {section.title!r} "
                f"({len(section.students)} students)"
            )
        return section.students[student_index]

    def _section(self, index: int) -> ClassSection:
        sections = self.document.sections
        if not 0 <= index < len(sections):
            raise SessionError(f"Section index {index} out of range (0-{len(sections) - 1})")
        return sections[index]

    # ─────────────────────────────────────────────────────────────────────────
    # Editing
    # ─────────────────────────────────────────────────────────────────────────

    def edit_grade(
        self,
        student_index: int,
        label: str,
        raw: str,
        *,
        section_index: Optional[int] = None,
    ) -> GradeState:
        """
        Apply one cell edit.

        Args:
            student_index: Row within the section
            label: Raw component label
            raw: Text as typed
            section_index: Defaults to the active section

        Returns:
            The component's state after the edit (unchanged if rejected)

        Raises:
            SessionError: Unknown student or label
        """
        student = self.student(student_index, section_index=section_index)
        component = student.component(label)
        if component is None:
            raise SessionError(f"Student {student.roll!r} has no grade component {label!r}")

        new_state = apply_edit(component.state, raw)
        if new_state != component.state:
            component.apply(new_state)
            logger.debug(f"{student.roll!r}/{label!r} -> {new_state!r}")
        return new_state

    def grade_band(self, state: GradeState) -> GradeBand:
        return classify_grade(state.value, self.config.bands)

    # ─────────────────────────────────────────────────────────────────────────
    # Reconciliation import
    # ─────────────────────────────────────────────────────────────────────────

    def suggest_mapping(self, table: ExternalTable, base: Optional[ColumnMapping] = None) -> ColumnMapping:
        """Auto-map the global labels to `table` columns, keeping `base` choices."""
        return suggest_mapping(
            self._labels,
            table.columns,
            synonyms=self.config.importing.roll_synonyms,
            decorations=self.config.label_decorations,
            base=base,
        )

    def apply_import(self, table: ExternalTable, mapping: ColumnMapping) -> ImportResult:
        """
        Merge `table` into the active section.

        Raises:
            MappingError: No roll column could be resolved
        """
        result = apply_import(
            self.active_section,
            table,
            mapping,
            roll_synonyms=self.config.importing.roll_synonyms,
        )
        self._notify(
            "import_applied",
            section=self.active_section.title,
            updated=result.updated_count,
            unmatched=len(result.unmatched_rolls),
        )
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def serialize(self) -> str:
        """Current document as markup text."""
        return serialize_document(self.document, self.config.container)

    def export(self) -> str:
        """Current document as .fg container text."""
        container = export_container(self.document, self.config.container)
        self._notify("export_written", size=len(container))
        return container

    def _notify(self, kind: str, **details) -> None:
        if self.notifier is not None:
            self.notifier.notify(NotificationEvent(kind=kind, details=details))
