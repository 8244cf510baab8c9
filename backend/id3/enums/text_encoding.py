"""
ID3v2 text encodings.

The one-byte marker that prefixes every text-bearing frame body selects
one of these. Each member knows its Python codec name and the width of
its NUL terminator.
"""

from __future__ import annotations

from enum import Enum


class TextEncoding(int, Enum):
    """Encoding marker values as they appear on the wire."""

    LATIN_1 = 0x00
    UTF_16 = 0x01  # with byte-order mark
    UTF_16_BE = 0x02
    UTF_8 = 0x03

    @property
    def codec(self) -> str:
        return _CODECS[self]

    @property
    def terminator_width(self) -> int:
        """Number of NUL bytes that end a string in this encoding."""
        if self in (TextEncoding.UTF_16, TextEncoding.UTF_16_BE):
            return 2
        return 1


_CODECS: dict[TextEncoding, str] = {
    TextEncoding.LATIN_1: "latin-1",
    TextEncoding.UTF_16: "utf-16",
    TextEncoding.UTF_16_BE: "utf-16-be",
    TextEncoding.UTF_8: "utf-8",
}
