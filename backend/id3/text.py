"""
Encoding resolver and terminated-string extraction.

Usage example:

    extracted = extract_text(body)
    title = extracted.text          # None if nothing could be decoded
    rest = body[extracted.offset:]  # first byte past the terminator

Pure functions; never raise on malformed input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from id3.enums.text_encoding import TextEncoding


@dataclass(frozen=True)
class ExtractedText:
    """
    Result of a string extraction.

    text:
        Decoded string, or None if every fallback failed.

    encoding:
        Encoding the text was actually decoded with (may differ from the
        marker after a fallback).

    offset:
        Index into the source slice immediately past the terminator, or
        the slice length when the string ran to the end.

    terminated:
        False when no terminator was found before the end of the slice.
    """
    text: Optional[str]
    encoding: TextEncoding
    offset: int
    terminated: bool = True


def resolve_encoding(marker: int) -> TextEncoding:
    """
    Map an encoding marker byte to a TextEncoding.

    Unknown markers fall back to Latin-1.
    """
    try:
        return TextEncoding(marker)
    except ValueError:
        return TextEncoding.LATIN_1


def find_terminator(
    data: bytes,
    start: int,
    encoding: TextEncoding,
    end: Optional[int] = None,
) -> int:
    """
    Return the index of the first terminator in [start, end), or -1.

    Two-byte terminators are only matched on even distances from `start`
    so a zero high byte followed by a zero low byte of the next code unit
    is not mistaken for the end of the string.
    """
    limit = len(data) if end is None else min(end, len(data))

    if encoding.terminator_width == 1:
        return data.find(b"\x00", start, limit)

    for i in range(start, limit - 1, 2):
        if data[i] == 0 and data[i + 1] == 0:
            return i
    return -1


def _decode(raw: bytes, encoding: TextEncoding) -> tuple[Optional[str], TextEncoding]:
    candidates = [encoding]
    for fallback in (TextEncoding.LATIN_1, TextEncoding.UTF_8):
        if fallback not in candidates:
            candidates.append(fallback)

    for candidate in candidates:
        try:
            return raw.decode(candidate.codec), candidate
        except UnicodeDecodeError:
            continue

    return None, encoding


def read_terminated(
    data: bytes,
    start: int,
    encoding: TextEncoding,
    end: Optional[int] = None,
) -> ExtractedText:
    """
    Read one terminated string of a known encoding starting at `start`.

    `end` bounds the field (defaults to the length of `data`). If no
    terminator is found before it, the rest of the field is the string.
    On complete decode failure the offset stays at `start`.
    """
    limit = len(data) if end is None else min(end, len(data))

    if start >= limit:
        return ExtractedText(
            text=None,
            encoding=encoding,
            offset=limit,
            terminated=False,
        )

    stop = find_terminator(data, start, encoding, limit)
    terminated = stop >= 0
    if not terminated:
        stop = limit

    text, used = _decode(bytes(data[start:stop]), encoding)
    if text is None:
        return ExtractedText(
            text=None,
            encoding=encoding,
            offset=start,
            terminated=terminated,
        )

    offset = stop + encoding.terminator_width if terminated else stop

    return ExtractedText(
        text=text,
        encoding=used,
        offset=offset,
        terminated=terminated,
    )


def extract_text(data: bytes) -> ExtractedText:
    """
    Extract the first string of a slice that starts with an encoding marker.

    Returns the text, the encoding used and the offset past the terminator.
    """
    if not data:
        return ExtractedText(
            text=None,
            encoding=TextEncoding.LATIN_1,
            offset=0,
            terminated=False,
        )

    encoding = resolve_encoding(data[0])
    return read_terminated(data, 1, encoding)
