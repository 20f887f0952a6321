"""
Module: loading.normalizer

Purpose:
    Unify grade schemas across every section of a document. Different
    classes (and sometimes different students) export different component
    lists; after normalization every student carries every label.

Key Functions:
    - collect_labels(): First-seen-order union of all labels
    - normalize_document(): Inject nil components for missing labels
    - display_label(): Strip decorative prefixes from a raw label

Dependencies:
    - fg_grades.core.models

Used By:
    - fg_grades.controller: Runs once right after parsing
    - fg_grades.importing.mapping: Display text for auto-mapping

Algorithm:
    Pass 1 walks sections, students and components in document order and
    records each label the first time it appears. Pass 2 appends a nil
    component for every recorded label a student lacks. Pass 2 never
    removes or duplicates, so running it again is a no-op.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from fg_grades.config import DEFAULT_LABEL_DECORATIONS
from fg_grades.core.models import Document, GradeComponent

logger = logging.getLogger(__name__)

FALLBACK_LABEL = "Grade"


def collect_labels(document: Document) -> List[str]:
    """
    Compute the global label set.

    Args:
        document: Parsed (not necessarily normalized) document

    Returns:
        Every distinct raw label in first-seen document order
    """
    seen: dict[str, None] = {}
    for student in document.iter_students():
        for comp in student.components:
            seen.setdefault(comp.label, None)
    return list(seen)


def normalize_document(document: Document) -> List[str]:
    """
    Give every student an identical label set.

    Missing labels are appended as new components with nil=True and no
    value, in global label order. Existing components are untouched.

    Args:
        document: Document to normalize in place

    Returns:
        The global label set used

    Example:
        >>> labels = normalize_document(doc)
        >>> labels
        ['Quiz', 'Final', 'Lab']
        >>> doc.sections[0].students[0].component("Lab").nil
        True
    """
    labels = collect_labels(document)

    injected = 0
    for student in document.iter_students():
        missing = [label for label in labels if not student.has_label(label)]
        for label in missing:
            student.add_component(GradeComponent(label=label, value=None, nil=True))
        if missing:
            injected += len(missing)
            logger.debug(f"Student {student.roll!r}: injected {missing}")

    if injected:
        logger.info(f"Normalized schema to {len(labels)} labels, injected {injected} nil components")
    return labels


def display_label(raw: str, decorations: Iterable[str] = DEFAULT_LABEL_DECORATIONS) -> str:
    """
    Column header text for a raw component label.

    Removes each decoration substring, then trims. Different raw labels can
    collapse to the same display text; callers must keep using the raw
    label as the key.

    Example:
        >>> display_label("[Đánh giá quá trình] Quiz 1")
        'Quiz 1'
    """
    text = raw or FALLBACK_LABEL
    for decoration in decorations:
        text = text.replace(decoration, "")
    return text.strip()


def display_labels(labels: Sequence[str], decorations: Iterable[str] = DEFAULT_LABEL_DECORATIONS) -> List[str]:
    decorations = tuple(decorations)
    return [display_label(label, decorations) for label in labels]
