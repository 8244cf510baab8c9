"""
Frame factory and per-type body decoders.

Every decoder receives the whole buffer plus the [start, end) window of
its frame body, so nested chapter sub-frames are decoded in place and
issue offsets stay absolute.

Usage example:

    ctx = DecodeContext(version=header.version)
    frames, truncated = scan_frames(buf, scan_start, header.tag_end, ctx)
    if truncated is not None:
        ctx.record(truncated)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional
from urllib.parse import urlsplit

from constants import (
    CHAPTER_FRAME_ID,
    CHAPTER_TIMING_SIZE,
    FRAME_HEADER_SIZE,
    LINK_FRAME_ID,
    MAX_CHAPTER_DEPTH,
    MAX_CHAPTER_DEPTH_LIMIT,
    PICTURE_FRAME_ID,
    TEXT_FRAME_IDS,
    U32_SIZE,
)
from id3.enums.picture_type import PictureType
from id3.enums.text_encoding import TextEncoding
from id3.errors import (
    ChapterDepthExceeded,
    ID3Error,
    MalformedSubfield,
    TruncatedChapterHeader,
    TruncatedFrame,
)
from id3.frames import (
    ChapterFrame,
    Frame,
    GenericFrame,
    LinkFrame,
    PictureFrame,
    TextFrame,
)
from id3.header import FrameHeader, parse_frame_header
from id3.integers import read_u32_be
from id3.issues import ParseIssue
from id3.text import extract_text, read_terminated, resolve_encoding


# =============================================================================
# Decode context
# =============================================================================

@dataclass
class DecodeContext:
    """
    Per-parse state threaded through the decoders.

    version:
        Tag major version; sub-frames inherit it from their chapter.

    depth:
        Current chapter nesting level (0 = top-level frames).

    max_depth:
        Clamped to [0, MAX_CHAPTER_DEPTH_LIMIT] whatever the caller asks.

    issues:
        Shared sink for subfield and frame problems. Nested contexts
        append to the same list.
    """
    version: int
    max_depth: int = MAX_CHAPTER_DEPTH
    depth: int = 0
    issues: list[ParseIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.max_depth = max(0, min(self.max_depth, MAX_CHAPTER_DEPTH_LIMIT))

    def nested(self) -> DecodeContext:
        return DecodeContext(
            version=self.version,
            max_depth=self.max_depth,
            depth=self.depth + 1,
            issues=self.issues,
        )

    def record(self, error: ID3Error) -> None:
        self.issues.append(ParseIssue.from_error(error))


Decoder = Callable[[FrameHeader, bytes, int, int, DecodeContext], Frame]


# =============================================================================
# Scan loop
# =============================================================================

def scan_frames(
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,
    *,
    strict_tail: bool = True,
) -> tuple[tuple[Frame, ...], Optional[TruncatedFrame]]:
    """
    Decode consecutive frames in buf[start:end].

    Stops at padding or at the end of the window. A truncated frame stops
    the scan; the frames decoded so far are returned with the error.

    strict_tail:
        When False, a tail shorter than a frame header is treated as
        padding even if it holds non-zero bytes (chapter bodies).
    """
    frames: list[Frame] = []
    position = start

    while position < end:
        if not strict_tail and end - position < FRAME_HEADER_SIZE:
            break

        try:
            header = parse_frame_header(buf, position, version=ctx.version, end=end)
        except TruncatedFrame as exc:
            return tuple(frames), exc

        if header is None:
            break

        frames.append(decode_frame(buf, position, header, ctx))
        position += header.total_size

    return tuple(frames), None


def decode_frame(
    buf: bytes,
    offset: int,
    header: FrameHeader,
    ctx: DecodeContext,
) -> Frame:
    """
    Decode the frame whose header starts at `offset`. Never raises for
    malformed bodies; problems are recorded on `ctx`.
    """
    body_start = offset + header.body_offset
    body_end = offset + header.total_size
    decoder = select_decoder(header.frame_id)
    return decoder(header, buf, body_start, body_end, ctx)


# =============================================================================
# Frame factory
# =============================================================================

def select_decoder(frame_id: str) -> Decoder:
    """
    Map a frame id to its body decoder.

    Unknown ids map to the generic decoder, which keeps the raw body.
    """
    if frame_id == CHAPTER_FRAME_ID:
        return decode_chapter
    if frame_id in TEXT_FRAME_IDS:
        return decode_text
    if frame_id == PICTURE_FRAME_ID:
        return decode_picture
    if frame_id == LINK_FRAME_ID:
        return decode_link
    return decode_generic


# =============================================================================
# Variant decoders
# =============================================================================

def decode_generic(
    header: FrameHeader,
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,  # pylint: disable=unused-argument
) -> GenericFrame:
    return GenericFrame(header=header, body=bytes(buf[start:end]))


def decode_text(
    header: FrameHeader,
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,  # pylint: disable=unused-argument
) -> TextFrame:
    extracted = extract_text(bytes(buf[start:end]))
    return TextFrame(
        header=header,
        encoding=extracted.encoding,
        information=extracted.text,
    )


def decode_link(
    header: FrameHeader,
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,
) -> LinkFrame:
    """
    WXXX: encoding byte, description (frame encoding), then a Latin-1 URL
    running to the end of the body.
    """
    body = bytes(buf[start:end])
    if not body:
        ctx.record(MalformedSubfield(
            "empty link frame body",
            offset=start,
            frame_id=header.frame_id,
        ))
        return LinkFrame(
            header=header,
            encoding=TextEncoding.LATIN_1,
            description=None,
            url=None,
        )

    encoding = resolve_encoding(body[0])
    description = read_terminated(body, 1, encoding)

    url: Optional[str] = None
    if description.terminated:
        url = parse_url(body[description.offset:])
    else:
        ctx.record(MalformedSubfield(
            "link description runs to the end of the body",
            offset=start + 1,
            frame_id=header.frame_id,
        ))

    return LinkFrame(
        header=header,
        encoding=encoding,
        description=description.text,
        url=url,
    )


def parse_url(raw: bytes) -> Optional[str]:
    """
    Decode a Latin-1 URL field. Returns None for anything that does not
    look like a URI (empty, embedded whitespace or control characters).
    """
    text = raw.rstrip(b"\x00").decode("latin-1").strip()
    if not text:
        return None

    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
        return None

    try:
        parts = urlsplit(text)
    except ValueError:
        return None

    if not (parts.scheme or parts.netloc or parts.path):
        return None

    return text


def decode_picture(
    header: FrameHeader,
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,
) -> PictureFrame:
    """
    APIC: encoding byte, MIME type (Latin-1), picture type byte,
    description (frame encoding), image bytes to the end of the body.

    Fields decoded before a malformed one are kept.
    A MIME type outside printable ASCII (e.g. written in UTF-16) is kept
    as read and flagged.
    """
    body = bytes(buf[start:end])

    encoding = TextEncoding.LATIN_1
    mime_type: Optional[str] = None
    picture_type: PictureType | int | None = None
    description: Optional[str] = None
    image_bytes = b""

    try:
        if not body:
            raise MalformedSubfield("empty picture frame body")
        encoding = resolve_encoding(body[0])

        mime = read_terminated(body, 1, TextEncoding.LATIN_1)
        mime_type = mime.text
        if not mime.terminated:
            raise MalformedSubfield("MIME type runs to the end of the body", offset=1)
        if not _is_mime_text(mime_type):
            ctx.record(MalformedSubfield(
                f"MIME type is not printable ASCII: {mime_type!r}",
                offset=start + 1,
                frame_id=header.frame_id,
            ))

        position = mime.offset
        if position >= len(body):
            raise MalformedSubfield("missing picture type byte", offset=position)
        picture_type = to_picture_type(body[position])
        position += 1

        desc = read_terminated(body, position, encoding)
        description = desc.text
        if not desc.terminated:
            raise MalformedSubfield(
                "picture description runs to the end of the body",
                offset=position,
            )

        image_bytes = body[desc.offset:]

    except MalformedSubfield as exc:
        exc.offset = start + (exc.offset or 0)
        exc.frame_id = header.frame_id
        ctx.record(exc)

    return PictureFrame(
        header=header,
        encoding=encoding,
        mime_type=mime_type,
        picture_type=picture_type,
        description=description,
        image_bytes=image_bytes,
    )


def _is_mime_text(value: Optional[str]) -> bool:
    return not value or all(0x20 <= ord(ch) <= 0x7E for ch in value)


def to_picture_type(value: int) -> PictureType | int:
    try:
        return PictureType(value)
    except ValueError:
        return value


# =============================================================================
# Chapter decoder
# =============================================================================

def decode_chapter(
    header: FrameHeader,
    buf: bytes,
    start: int,
    end: int,
    ctx: DecodeContext,
) -> Frame:
    """
    CHAP: encoding byte, element id, four big-endian u32 timings, then
    embedded sub-frames until the body is exhausted.

    Sub-frames are decoded with the parent's tag version through the same
    factory. Nesting beyond ctx.max_depth yields a GenericFrame.
    """
    if ctx.depth >= ctx.max_depth:
        ctx.record(ChapterDepthExceeded(
            f"chapter nested deeper than {ctx.max_depth} levels",
            offset=start,
            frame_id=header.frame_id,
        ))
        return GenericFrame(header=header, body=bytes(buf[start:end]))

    # ReadElementId
    element_id = ""
    position = start
    if position < end:
        encoding = resolve_encoding(buf[position])
        extracted = read_terminated(buf, position + 1, encoding, end)
        element_id = extracted.text or ""
        position = extracted.offset

    # ReadTimestamps
    if end - position < CHAPTER_TIMING_SIZE:
        ctx.record(TruncatedChapterHeader(
            f"chapter {element_id!r} has {max(end - position, 0)} bytes for "
            f"timings, needs {CHAPTER_TIMING_SIZE}",
            offset=position,
            frame_id=header.frame_id,
        ))
        return ChapterFrame(
            header=header,
            element_id=element_id,
            start_time_ms=0,
            end_time_ms=0,
            start_byte_offset=0,
            end_byte_offset=0,
        )

    start_time_ms, end_time_ms, start_byte_offset, end_byte_offset = (
        read_u32_be(buf, position + i * U32_SIZE) for i in range(4)
    )
    position += CHAPTER_TIMING_SIZE

    # ReadSubframes
    children, truncated = scan_frames(
        buf,
        position,
        end,
        ctx.nested(),
        strict_tail=False,
    )
    if truncated is not None:
        ctx.record(truncated)

    return ChapterFrame(
        header=header,
        element_id=element_id,
        start_time_ms=start_time_ms,
        end_time_ms=end_time_ms,
        start_byte_offset=start_byte_offset,
        end_byte_offset=end_byte_offset,
        children=children,
    )
