"""
Top-level ID3v2 tag parsing.

Result contract:
- Header rejected            -> ParseResult(tag=None, issues=(header issue,))
- Frame scan cut short       -> tag with every frame decoded before the cut,
                                plus a TRUNCATED_FRAME issue
- Frame degraded             -> tag with the degraded frame, plus an issue

No exception escapes parse_tag.

Usage example:

    result = parse_tag(buffer)
    if result.failed:
        log_event({"event_type": "ID3_TAG_REJECTED", ...})
    for chapter in result.tag.chapters:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from constants import MAX_CHAPTER_DEPTH
from id3.decoders import DecodeContext, scan_frames
from id3.errors import HEADER_LEVEL_ERRORS
from id3.frames import Tag
from id3.header import parse_tag_header
from id3.issues import ParseIssue


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a parse call.

    tag:
        The decoded tag, or None if the header was rejected.

    issues:
        Every problem found, in the order it was found.

    truncated_at:
        Offset of the top-level frame that stopped the scan, if any.
    """
    tag: Optional[Tag]
    issues: tuple[ParseIssue, ...] = ()
    truncated_at: Optional[int] = None

    @property
    def failed(self) -> bool:
        return self.tag is None

    @property
    def ok(self) -> bool:
        return self.tag is not None and not self.issues

    @property
    def truncated(self) -> bool:
        return self.truncated_at is not None


def parse_tag(
    buffer: bytes,
    *,
    max_depth: int = MAX_CHAPTER_DEPTH,
) -> ParseResult:
    """
    Decode the ID3v2 tag at the start of `buffer`.

    `buffer` may be the whole file; bytes past the tag region are ignored.
    `max_depth` is clamped to MAX_CHAPTER_DEPTH_LIMIT.
    """
    try:
        header, scan_start = parse_tag_header(buffer)
    except HEADER_LEVEL_ERRORS as exc:
        return ParseResult(tag=None, issues=(ParseIssue.from_error(exc),))

    ctx = DecodeContext(version=header.version, max_depth=max_depth)
    frames, truncated = scan_frames(buffer, scan_start, header.tag_end, ctx)

    if truncated is not None:
        ctx.record(truncated)

    return ParseResult(
        tag=Tag(header=header, frames=frames),
        issues=tuple(ctx.issues),
        truncated_at=truncated.offset if truncated is not None else None,
    )
