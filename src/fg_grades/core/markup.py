"""
Module: core.markup

Purpose:
    Small lxml helpers shared by the parser and the exporter. All lookups
    go by local name so that namespaced and plain reports behave the same.

Key Functions:
    - local_name(): Tag without namespace (None for comments/PIs)
    - first_descendant(): First matching descendant in document order
    - descendants(): All matching descendants in document order
    - text_of(): Concatenated text content
    - sibling_tag(): Tag in the same namespace as a given element
    - is_nil() / set_nil(): xsi:nil handling

Dependencies:
    - lxml.etree
"""

from __future__ import annotations

from typing import List, Optional

from lxml import etree

from fg_grades.config import XSI_NAMESPACE

NIL_ATTRIBUTE = f"{{{XSI_NAMESPACE}}}nil"


def make_parser() -> etree.XMLParser:
    """
    Strict parser with entity expansion and network access disabled.

    Input is always the UTF-8 form of already decoded text, so the
    document's own encoding declaration is overridden.
    """
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=False,
    )


def local_name(element) -> Optional[str]:
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def first_descendant(element, name: str, *, include_self: bool = False):
    """First element named `name` below `element` (querySelector semantics)."""
    for node in _walk(element, include_self):
        if local_name(node) == name:
            return node
    return None


def descendants(element, name: str, *, include_self: bool = False) -> List:
    return [node for node in _walk(element, include_self) if local_name(node) == name]


def _walk(element, include_self: bool):
    return element.iter() if include_self else element.iterdescendants()


def text_of(element) -> str:
    """All text under `element`, like DOM textContent."""
    if element is None:
        return ""
    return "".join(element.itertext())


def sibling_tag(element, name: str) -> str:
    """`name` qualified with the namespace of `element`, if it has one."""
    namespace = etree.QName(element).namespace
    return f"{{{namespace}}}{name}" if namespace else name


def append_child(parent, name: str, text: Optional[str] = None):
    child = etree.SubElement(parent, sibling_tag(parent, name))
    if text is not None:
        child.text = text
    return child


def is_nil(element) -> bool:
    return element.get(NIL_ATTRIBUTE, "").strip().lower() in ("true", "1")


def set_nil(element, nil: bool) -> None:
    """Mark `element` nil (no text, no children) or clear the marker."""
    if nil:
        for child in list(element):
            element.remove(child)
        element.text = None
        element.set(NIL_ATTRIBUTE, "true")
    elif NIL_ATTRIBUTE in element.attrib:
        del element.attrib[NIL_ATTRIBUTE]


def set_text(element, text: str) -> None:
    """Replace the content of `element` with `text`, like DOM textContent."""
    for child in list(element):
        element.remove(child)
    element.text = text
