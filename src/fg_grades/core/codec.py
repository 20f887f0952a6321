"""
Module: core.codec

Purpose:
    Convert between the .fg container text (hex byte pairs, optionally
    whitespace separated) and the UTF-8 markup it wraps.

Key Functions:
    - decode(): Container text (or raw file bytes) -> markup text
    - encode(): Markup text -> uppercase, space separated hex pairs

Key Classes:
    - FormatError: Non-hex, odd-length or non-UTF-8 content

Dependencies:
    - re (std)

Used By:
    - fg_grades.controller: Loading containers
    - fg_grades.output.exporter: Writing containers

Law:
    decode(encode(t)) == t for every str t.
"""

from __future__ import annotations

import re
from typing import Union

from .errors import GradeFileError

_WHITESPACE = re.compile(r"\s+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_UTF8_BOM = b"\xef\xbb\xbf"


class FormatError(GradeFileError):
    """Container content is not a valid hex encoding of UTF-8 text."""
    pass


def decode(hex_text: Union[str, bytes]) -> str:
    """
    Decode container text into the markup it carries.

    Args:
        hex_text: Container contents. Bytes are accepted as read from disk
            and must be ASCII. A leading byte order mark is ignored.

    Returns:
        The decoded UTF-8 text. Empty input decodes to "".

    Raises:
        FormatError: If a non-hex character remains after removing
            whitespace, the digit count is odd, or the bytes are not UTF-8.

    Example:
        >>> decode("3C 61 2F 3E")
        '<a/>'
    """
    if isinstance(hex_text, (bytes, bytearray)):
        raw_text = bytes(hex_text)
        if raw_text.startswith(_UTF8_BOM):
            raw_text = raw_text[len(_UTF8_BOM):]
        try:
            hex_text = raw_text.decode("ascii")
        except UnicodeDecodeError as e:
            raise FormatError(f"Container contains non-ASCII bytes at offset {e.start}") from e
    elif hex_text.startswith("\ufeff"):
        hex_text = hex_text[1:]

    cleaned = _WHITESPACE.sub("", hex_text)
    if not _HEX_DIGITS.fullmatch(cleaned):
        bad = next(ch for ch in cleaned if ch not in "0123456789abcdefABCDEF")
        raise FormatError(f"File content is not valid hex format (found {bad!r})")
    if len(cleaned) % 2:
        raise FormatError(f"File content has an odd number of hex digits ({len(cleaned)})")

    raw = bytes.fromhex(cleaned)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"Decoded bytes are not valid UTF-8 at offset {e.start}: {e.reason}") from e


def encode(text: str) -> str:
    """
    Encode markup text as container text.

    Args:
        text: Any str; encoded as UTF-8.

    Returns:
        Uppercase hex byte pairs separated by single spaces.

    Example:
        >>> encode("<a/>")
        '3C 61 2F 3E'
    """
    return text.encode("utf-8").hex(" ").upper()
