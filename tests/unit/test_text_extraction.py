# pylint: disable=missing-module-docstring,missing-function-docstring

from id3.enums.text_encoding import TextEncoding
from id3.text import (
    extract_text,
    find_terminator,
    read_terminated,
    resolve_encoding,
)


# ---------------------------------------------------------------------
# Encoding resolver
# ---------------------------------------------------------------------

def test_resolve_known_markers():
    assert resolve_encoding(0x00) is TextEncoding.LATIN_1
    assert resolve_encoding(0x01) is TextEncoding.UTF_16
    assert resolve_encoding(0x02) is TextEncoding.UTF_16_BE
    assert resolve_encoding(0x03) is TextEncoding.UTF_8


def test_resolve_unknown_marker_defaults_to_latin1():
    assert resolve_encoding(0x09) is TextEncoding.LATIN_1


def test_terminator_widths():
    assert TextEncoding.LATIN_1.terminator_width == 1
    assert TextEncoding.UTF_8.terminator_width == 1
    assert TextEncoding.UTF_16.terminator_width == 2
    assert TextEncoding.UTF_16_BE.terminator_width == 2


# ---------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------

def test_utf8_hello():
    data = b"\x03Hello\x00"

    extracted = extract_text(data)

    assert extracted.text == "Hello"
    assert extracted.encoding is TextEncoding.UTF_8
    assert extracted.offset == len(data)
    assert extracted.terminated is True


def test_offset_points_past_terminator_with_trailing_data():
    data = b"\x00abc\x00rest"

    extracted = extract_text(data)

    assert extracted.text == "abc"
    assert data[extracted.offset:] == b"rest"


def test_utf16_with_bom():
    data = b"\x01" + "Kapitel".encode("utf-16") + b"\x00\x00"

    extracted = extract_text(data)

    assert extracted.text == "Kapitel"
    assert extracted.encoding is TextEncoding.UTF_16
    assert extracted.offset == len(data)


def test_utf16be_scans_aligned_pairs():
    # "ĀA" -> 01 00 | 00 41: an unaligned scan would stop at index 2
    data = b"\x02" + "ĀA".encode("utf-16-be") + b"\x00\x00" + b"tail"

    extracted = extract_text(data)

    assert extracted.text == "ĀA"
    assert data[extracted.offset:] == b"tail"


def test_find_terminator_two_byte_is_aligned():
    data = b"\x02\x01\x00\x00\x41\x00\x00"

    assert find_terminator(data, 1, TextEncoding.UTF_16_BE) == 5


def test_missing_terminator_uses_rest_of_slice():
    data = b"\x03no terminator"

    extracted = extract_text(data)

    assert extracted.text == "no terminator"
    assert extracted.offset == len(data)
    assert extracted.terminated is False


def test_empty_string():
    extracted = extract_text(b"\x03\x00")

    assert extracted.text == ""
    assert extracted.offset == 2


def test_empty_slice():
    extracted = extract_text(b"")

    assert extracted.text is None
    assert extracted.offset == 0


def test_marker_only():
    extracted = extract_text(b"\x03")

    assert extracted.text is None
    assert extracted.offset == 1


def test_invalid_utf8_falls_back_to_latin1():
    extracted = extract_text(b"\x03\xff\xfeab\x00")

    assert extracted.text == "ÿþab"
    assert extracted.encoding is TextEncoding.LATIN_1
    assert extracted.offset == 6


def test_odd_length_utf16_falls_back_to_latin1():
    extracted = extract_text(b"\x02abc")

    assert extracted.text == "abc"
    assert extracted.encoding is TextEncoding.LATIN_1


def test_read_terminated_respects_end():
    data = b"abcdef\x00"

    extracted = read_terminated(data, 0, TextEncoding.LATIN_1, end=3)

    assert extracted.text == "abc"
    assert extracted.offset == 3
    assert extracted.terminated is False
