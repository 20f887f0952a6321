"""
Unit Tests for the Container Codec

Tests hex <-> UTF-8 conversion and its rejection rules.
"""

import pytest

from fg_grades.core.codec import FormatError, decode, encode
from fg_grades.core.errors import GradeFileError


class TestEncode:
    """Tests for encode()."""

    def test_encode_when_ascii_then_uppercase_space_separated(self):
        """Each byte becomes one uppercase pair, separated by spaces."""
        assert encode("<a/>") == "3C 61 2F 3E"

    def test_encode_when_multibyte_then_emits_utf8_bytes(self):
        """Non-ASCII characters are encoded as their UTF-8 bytes."""
        assert encode("Đ") == "C4 90"

    def test_encode_when_empty_then_empty(self):
        assert encode("") == ""


class TestDecode:
    """Tests for decode()."""

    def test_decode_when_spaced_pairs_then_returns_text(self):
        assert decode("3C 61 2F 3E") == "<a/>"

    def test_decode_when_mixed_whitespace_and_lowercase_then_returns_text(self):
        """Any whitespace is ignored and lowercase digits are accepted."""
        assert decode("3c6\n1 2f\t3E\r\n") == "<a/>"

    def test_decode_when_bytes_then_returns_text(self):
        """Raw file bytes decode the same as text."""
        assert decode(b"3C 61 2F 3E") == "<a/>"

    def test_decode_when_empty_then_empty_text(self):
        assert decode("  \n ") == ""

    def test_decode_when_non_hex_character_then_raises_format_error(self):
        with pytest.raises(FormatError, match="not valid hex"):
            decode("3C 6G")

    def test_decode_when_odd_digit_count_then_raises_format_error(self):
        with pytest.raises(FormatError, match="odd number"):
            decode("3C 6")

    def test_decode_when_invalid_utf8_then_raises_format_error(self):
        """A lone continuation byte is not UTF-8."""
        with pytest.raises(FormatError, match="UTF-8"):
            decode("80")

    def test_decode_when_non_ascii_bytes_then_raises_format_error(self):
        with pytest.raises(FormatError):
            decode("3C ".encode("ascii") + "Đ".encode("utf-8"))

    def test_decode_when_bytes_start_with_bom_then_bom_ignored(self):
        assert decode(b"\xef\xbb\xbf3C 61 2F 3E") == "<a/>"

    def test_decode_when_text_starts_with_bom_then_bom_ignored(self):
        assert decode("\ufeff3C 61 2F 3E") == "<a/>"

    def test_format_error_when_caught_then_is_grade_file_error(self):
        with pytest.raises(GradeFileError):
            decode("zz")


class TestRoundTrip:
    """decode(encode(t)) == t."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain ascii",
            "[Đánh giá quá trình] Bài kiểm tra 1",
            "\ufeff<?xml version=\"1.0\"?><r/>",
            "tabs\tand\nnewlines\r\n",
            "emoji \U0001F600 and ≤ math",
        ],
    )
    def test_round_trip_when_valid_text_then_identical(self, text):
        assert decode(encode(text)) == text
