"""
Module: output.exporter

Purpose:
    Serialize a Document back to grade report markup and re-encode it as
    container text.

Key Functions:
    - serialize_document(): Document -> markup text (with XML declaration)
    - export_container(): Document -> hex container text

Dependencies:
    - lxml.etree
    - fg_grades.core.markup: Element lookup and xsi:nil
    - fg_grades.core.codec.encode

Used By:
    - fg_grades.controller.GradeSession.export

Write-back:
    A parsed document owns its original element tree. Serializing writes the
    model state into that tree: grades, nil markers, and new elements for
    injected components. Everything the model does not describe (extra
    fields, comments, attribute order) is emitted unchanged. A document
    built in code gets a fresh tree with the configured element names, and
    its blank semester, subject or class take the configured placeholders.
"""

from __future__ import annotations

import logging
from typing import Optional

from lxml import etree

from fg_grades.config import ContainerConfig
from fg_grades.core.codec import encode
from fg_grades.core.markup import (
    append_child,
    first_descendant,
    set_nil,
    set_text,
)
from fg_grades.core.models import ClassSection, Document, GradeComponent, Student

logger = logging.getLogger(__name__)


def serialize_document(document: Document, config: Optional[ContainerConfig] = None) -> str:
    """
    Serialize `document` to markup text.

    Args:
        document: Document to write (its bound tree is updated in place)
        config: Element names for any elements that must be created

    Returns:
        Markup text starting with the XML declaration

    Example:
        >>> text = serialize_document(doc)
        >>> text.splitlines()[0]
        '<?xml version="1.0" encoding="utf-8"?>'
    """
    config = config or ContainerConfig()

    if document.root is None:
        document.semester = document.semester or config.default_semester
        document.root = etree.Element(config.root_tag)
        append_child(document.root, config.semester_tag, document.semester)

    for section in document.sections:
        _sync_section(document.root, section, config)

    text = etree.tostring(document.root.getroottree(), encoding="unicode")
    if not text.startswith("<?xml"):
        text = f"{config.declaration}\n{text}"
    return text


def export_container(document: Document, config: Optional[ContainerConfig] = None) -> str:
    """
    Serialize and hex-encode `document` as .fg container text.

    Returns:
        Uppercase, space separated hex byte pairs
    """
    container = encode(serialize_document(document, config))
    logger.info(
        f"Exported {len(document.sections)} sections, {document.student_count} students "
        f"({len(container)} chars)"
    )
    return container


def _sync_section(root, section: ClassSection, config: ContainerConfig) -> None:
    if section.element is None:
        # Blank fields would read back as placeholders, so write those instead
        section.subject = section.subject or config.default_subject
        section.class_code = section.class_code or config.default_class
        section.element = append_child(root, config.section_tag)
        append_child(section.element, config.subject_tag, section.subject)
        append_child(section.element, config.class_tag, section.class_code)
    for student in section.students:
        _sync_student(section.element, student, config)


def _sync_student(section_element, student: Student, config: ContainerConfig) -> None:
    if student.element is None:
        student.element = append_child(section_element, config.student_tag)
        append_child(student.element, config.roll_tag, student.roll)
        append_child(student.element, config.name_tag, student.name)
    for component in student.components:
        _sync_component(student, component, config)


def _sync_component(student: Student, component: GradeComponent, config: ContainerConfig) -> None:
    if component.element is None:
        if student.container is None:
            student.container = append_child(student.element, config.grades_container_tag)
        component.element = append_child(student.container, config.component_tag)
        append_child(component.element, config.label_tag, component.label)

    grade = first_descendant(component.element, config.grade_tag)
    if grade is None:
        grade = append_child(component.element, config.grade_tag)

    if component.nil:
        set_nil(grade, True)
    else:
        set_nil(grade, False)
        set_text(grade, component.value or "")
