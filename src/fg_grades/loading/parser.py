"""
Module: loading.parser

Purpose:
    Parse decoded grade report markup into a typed Document. Each model
    object keeps a reference to the element it came from so the exporter
    can write edits back into the original tree.

Key Functions:
    - parse_document(): Markup text -> Document

Key Classes:
    - ParseError: Markup is not well-formed
    - SchemaError: Markup has no class sections

Dependencies:
    - lxml.etree
    - fg_grades.core.markup: Local-name lookups, xsi:nil
    - fg_grades.core.models: Document tree

Used By:
    - fg_grades.controller: Session loading
"""

from __future__ import annotations

import logging
from typing import Optional

from lxml import etree

from fg_grades.config import ContainerConfig
from fg_grades.core.errors import GradeFileError
from fg_grades.core.markup import (
    descendants,
    first_descendant,
    is_nil,
    make_parser,
    text_of,
)
from fg_grades.core.models import (
    ClassSection,
    Document,
    GradeComponent,
    Student,
)

logger = logging.getLogger(__name__)


class ParseError(GradeFileError):
    """Decoded content is not well-formed markup."""
    pass


class SchemaError(GradeFileError):
    """Markup parsed but contains no class sections."""
    pass


def parse_document(xml_text: str, config: Optional[ContainerConfig] = None) -> Document:
    """
    Parse grade report markup.

    Missing fields fall back to placeholders: semester "N/A", subject
    "Unknown Subject", class "Unknown Class", roll and name "". Empty text
    counts as missing for the semester, subject and class. A component
    whose Grade element is missing is read as nil.

    Args:
        xml_text: Decoded container text
        config: Element names and placeholders (defaults if omitted)

    Returns:
        Document with every model object bound to its element

    Raises:
        ParseError: If the markup is malformed or empty
        SchemaError: If no section elements are present

    Example:
        >>> doc = parse_document(xml)
        >>> [s.title for s in doc.sections]
        ['Physics - 10A', 'Physics - 10B']
    """
    config = config or ContainerConfig()

    try:
        root = etree.fromstring(xml_text.encode("utf-8"), make_parser())
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Invalid XML decoded from file: {e}") from e
    if root is None:
        raise ParseError("Invalid XML decoded from file: no root element")

    semester = text_of(first_descendant(root, config.semester_tag, include_self=True))

    section_nodes = descendants(root, config.section_tag, include_self=True)
    if not section_nodes:
        raise SchemaError("No class data found in XML")

    sections = [_parse_section(node, config) for node in section_nodes]
    document = Document(
        semester=semester or config.default_semester,
        sections=sections,
        root=root,
    )

    logger.debug(
        f"Parsed {len(sections)} sections, {document.student_count} students "
        f"for semester {document.semester!r}"
    )
    return document


def _parse_section(node, config: ContainerConfig) -> ClassSection:
    subject = text_of(first_descendant(node, config.subject_tag))
    class_code = text_of(first_descendant(node, config.class_tag))
    students = [
        _parse_student(student_node, config)
        for student_node in descendants(node, config.student_tag)
    ]
    return ClassSection(
        subject=subject or config.default_subject,
        class_code=class_code or config.default_class,
        students=students,
        element=node,
    )


def _parse_student(node, config: ContainerConfig) -> Student:
    component_nodes = descendants(node, config.component_tag)
    components = [_parse_component(comp_node, config) for comp_node in component_nodes]

    if component_nodes:
        container = component_nodes[-1].getparent()
    else:
        container = first_descendant(node, config.grades_container_tag)

    return Student(
        roll=text_of(first_descendant(node, config.roll_tag)),
        name=text_of(first_descendant(node, config.name_tag)),
        components=components,
        element=node,
        container=container,
    )


def _parse_component(node, config: ContainerConfig) -> GradeComponent:
    label = text_of(first_descendant(node, config.label_tag))
    grade_node = first_descendant(node, config.grade_tag)

    if grade_node is None or is_nil(grade_node):
        return GradeComponent(label=label, value=None, nil=True, element=node)
    return GradeComponent(label=label, value=text_of(grade_node), nil=False, element=node)
