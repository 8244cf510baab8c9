"""
ID3v2 decoding errors.

Raised inside the decoder and converted to ParseIssue values by
id3.reader.parse_tag. Nothing here escapes the top-level entry point.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from id3.enums.issue_kind import IssueKind


class ID3Error(Exception):
    """
    Base class for ID3v2 decoding errors.

    offset:
        Absolute byte position (within the buffer being scanned) where
        the problem was detected, if known.

    frame_id:
        Id of the frame being decoded, if any.
    """

    kind: ClassVar[IssueKind]

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        frame_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.frame_id = frame_id


# -------------------------
# Header-level (reject the tag)
# -------------------------

class NotAnId3Tag(ID3Error):
    """The buffer does not start with the "ID3" marker."""

    kind = IssueKind.NOT_AN_ID3_TAG


class UnsupportedVersion(ID3Error):
    """The major version byte is not 2, 3 or 4."""

    kind = IssueKind.UNSUPPORTED_VERSION


class TruncatedHeader(ID3Error):
    """
    The tag header, its declared region or the extended header does not
    fit in the buffer.
    """

    kind = IssueKind.TRUNCATED_HEADER


# -------------------------
# Frame-level (stop the scan)
# -------------------------

class TruncatedFrame(ID3Error):
    """A frame header or body runs past the end of the scan window."""

    kind = IssueKind.TRUNCATED_FRAME


# -------------------------
# Subfield-level (degrade one frame)
# -------------------------

class TruncatedChapterHeader(ID3Error):
    """Fewer than 16 bytes remain for the chapter timing fields."""

    kind = IssueKind.TRUNCATED_CHAPTER_HEADER


class MalformedSubfield(ID3Error):
    """A field inside a frame body runs past the end of the body."""

    kind = IssueKind.MALFORMED_SUBFIELD


class ChapterDepthExceeded(ID3Error):
    """A CHAP frame is nested deeper than the configured limit."""

    kind = IssueKind.CHAPTER_DEPTH_EXCEEDED


HEADER_LEVEL_ERRORS: tuple[type[ID3Error], ...] = (
    NotAnId3Tag,
    UnsupportedVersion,
    TruncatedHeader,
)
