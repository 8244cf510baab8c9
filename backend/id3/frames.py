"""
Decoded frame and tag value types.

Rules:
- Frames carry data only (no decoding logic).
- Every frame embeds the FrameHeader it was decoded from.
- Chapters own their children; nothing is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from id3.enums.picture_type import PictureType
from id3.enums.text_encoding import TextEncoding
from id3.header import FrameHeader, TagHeader


# =============================================================================
# Base Frame
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """
    Base frame type.

    All frames carry:
    - header: id, declared size, flags
    """

    header: FrameHeader

    @property
    def frame_id(self) -> str:
        return self.header.frame_id


# =============================================================================
# Variants
# =============================================================================

@dataclass(frozen=True)
class GenericFrame(Frame):
    """Unrecognized frame id. Body preserved byte-for-byte."""
    body: bytes


@dataclass(frozen=True)
class TextFrame(Frame):
    """T??? text information frame."""
    encoding: TextEncoding
    information: Optional[str]


@dataclass(frozen=True)
class PictureFrame(Frame):
    """
    APIC attached picture.

    picture_type:
        PictureType member, or the raw byte value when it is outside the
        known range. None if the body ended before the type byte.
    """
    encoding: TextEncoding
    mime_type: Optional[str]
    picture_type: Union[PictureType, int, None]
    description: Optional[str]
    image_bytes: bytes


@dataclass(frozen=True)
class LinkFrame(Frame):
    """WXXX user-defined URL link."""
    encoding: TextEncoding
    description: Optional[str]
    url: Optional[str]


@dataclass(frozen=True)
class ChapterFrame(Frame):
    """
    CHAP chapter.

    Times are integer milliseconds; byte offsets are 0xFFFFFFFF when the
    writer left them unset.
    """
    element_id: str
    start_time_ms: int
    end_time_ms: int
    start_byte_offset: int
    end_byte_offset: int
    children: tuple[Frame, ...] = ()

    def find(self, frame_id: str) -> Optional[Frame]:
        """First child with the given id."""
        for child in self.children:
            if child.frame_id == frame_id:
                return child
        return None

    @property
    def title(self) -> Optional[str]:
        child = self.find("TIT2")
        if isinstance(child, TextFrame):
            return child.information
        return None


# =============================================================================
# Tag
# =============================================================================

@dataclass(frozen=True)
class Tag:
    """
    A decoded ID3v2 tag.

    frames:
        Top-level frames in file order.
    """
    header: TagHeader
    frames: tuple[Frame, ...] = ()

    def find(self, frame_id: str) -> Optional[Frame]:
        """First top-level frame with the given id."""
        for frame in self.frames:
            if frame.frame_id == frame_id:
                return frame
        return None

    @property
    def chapters(self) -> tuple[ChapterFrame, ...]:
        return tuple(f for f in self.frames if isinstance(f, ChapterFrame))
