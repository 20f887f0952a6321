"""Serialization of documents back to markup and container text."""

from .exporter import export_container, serialize_document

__all__ = [
    "export_container",
    "serialize_document",
]
