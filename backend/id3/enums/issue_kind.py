"""
Parse issue kinds.

Rules:
- One member per failure class the decoder can report.
- No behavior, no helper methods.
"""

from __future__ import annotations

from enum import Enum


class IssueKind(str, Enum):
    """
    What went wrong while decoding a tag.

    Header-level kinds reject the whole tag. Frame-level kinds stop the
    scan. Subfield-level kinds degrade a single frame.
    """

    # Header-level
    NOT_AN_ID3_TAG = "NOT_AN_ID3_TAG"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    TRUNCATED_HEADER = "TRUNCATED_HEADER"

    # Frame-level
    TRUNCATED_FRAME = "TRUNCATED_FRAME"

    # Subfield-level
    TRUNCATED_CHAPTER_HEADER = "TRUNCATED_CHAPTER_HEADER"
    MALFORMED_SUBFIELD = "MALFORMED_SUBFIELD"
    CHAPTER_DEPTH_EXCEEDED = "CHAPTER_DEPTH_EXCEEDED"
