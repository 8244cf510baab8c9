"""
Tag header and frame header parsing.

Layout (all offsets relative to the start of the structure):

Tag header:
    0..2  "ID3"
    3     major version (2, 3 or 4)
    4     revision
    5     flags
    6..9  tag size (synchsafe, excludes these 10 bytes)

Frame header:
    0..3  frame id (ASCII)
    4..7  body size (synchsafe for v2.4, big-endian otherwise)
    8     status flags
    9     format flags

The v2.3 and v2.4 flag bytes use different bit positions; mixing them
silently corrupts offsets, so every decoder here takes the tag version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from constants import (
    DATA_LENGTH_INDICATOR_SIZE,
    EXTENDED_HEADER_SIZE_BYTES,
    FRAME_FLAGS_OFFSET,
    FRAME_HEADER_SIZE,
    FRAME_ID_MAX_CHAR,
    FRAME_ID_MIN_CHAR,
    FRAME_ID_SIZE,
    FRAME_SIZE_OFFSET,
    SUPPORTED_VERSIONS,
    TAG_FLAG_EXPERIMENTAL,
    TAG_FLAG_EXTENDED_HEADER,
    TAG_FLAG_FOOTER,
    TAG_FLAG_UNSYNCHRONIZED,
    TAG_FLAGS_OFFSET,
    TAG_HEADER_SIZE,
    TAG_MAGIC,
    TAG_REVISION_OFFSET,
    TAG_SIZE_OFFSET,
    TAG_VERSION_OFFSET,
    V23_FORMAT_COMPRESSION,
    V23_FORMAT_ENCRYPTION,
    V23_FORMAT_GROUPING,
    V23_STATUS_FILE_ALTER,
    V23_STATUS_READ_ONLY,
    V23_STATUS_TAG_ALTER,
    V24_FORMAT_COMPRESSION,
    V24_FORMAT_DATA_LENGTH,
    V24_FORMAT_ENCRYPTION,
    V24_FORMAT_GROUPING,
    V24_FORMAT_UNSYNCHRONIZED,
    V24_STATUS_FILE_ALTER,
    V24_STATUS_READ_ONLY,
    V24_STATUS_TAG_ALTER,
)
from id3.errors import (
    NotAnId3Tag,
    TruncatedFrame,
    TruncatedHeader,
    UnsupportedVersion,
)
from id3.integers import decode_synchsafe, read_size, read_u32_be


# =============================================================================
# Tag header
# =============================================================================

@dataclass(frozen=True)
class TagFlags:
    """Tag-level flags from byte 5 of the header."""
    unsynchronized: bool = False
    has_extended_header: bool = False
    experimental: bool = False
    has_footer: bool = False

    @staticmethod
    def from_byte(value: int) -> TagFlags:
        return TagFlags(
            unsynchronized=bool(value & TAG_FLAG_UNSYNCHRONIZED),
            has_extended_header=bool(value & TAG_FLAG_EXTENDED_HEADER),
            experimental=bool(value & TAG_FLAG_EXPERIMENTAL),
            has_footer=bool(value & TAG_FLAG_FOOTER),
        )


@dataclass(frozen=True)
class TagHeader:
    """
    Decoded 10-byte tag header.

    tag_size:
        Size of everything after the header up to the end of the tag
        (extended header, frames, padding). Excludes the header itself
        and any v2.4 footer.

    The region may extend past the buffer handed to the parser; frame
    scanning then stops at the first frame that does not fit.
    """
    version: int
    revision: int
    flags: TagFlags
    tag_size: int

    @property
    def tag_end(self) -> int:
        """Absolute offset one past the last byte of the tag region."""
        return TAG_HEADER_SIZE + self.tag_size


def parse_tag_header(buf: bytes) -> tuple[TagHeader, int]:
    """
    Validate the tag preamble and locate the first frame.

    Returns:
        (header, frame_scan_start)

    Raises:
        TruncatedHeader, NotAnId3Tag, UnsupportedVersion
    """
    if len(buf) < TAG_HEADER_SIZE:
        raise TruncatedHeader(
            f"tag header needs {TAG_HEADER_SIZE} bytes, have {len(buf)}",
            offset=0,
        )

    if buf[:len(TAG_MAGIC)] != TAG_MAGIC:
        raise NotAnId3Tag(
            f"missing ID3 marker: {bytes(buf[:len(TAG_MAGIC)])!r}",
            offset=0,
        )

    version = buf[TAG_VERSION_OFFSET]
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(
            f"unsupported ID3v2 version: {version}",
            offset=TAG_VERSION_OFFSET,
        )

    header = TagHeader(
        version=version,
        revision=buf[TAG_REVISION_OFFSET],
        flags=TagFlags.from_byte(buf[TAG_FLAGS_OFFSET]),
        tag_size=decode_synchsafe(buf, TAG_SIZE_OFFSET),
    )

    if header.tag_size == 0:
        raise TruncatedHeader("tag declares an empty region", offset=TAG_SIZE_OFFSET)

    return header, _frame_scan_start(buf, header)


def _frame_scan_start(buf: bytes, header: TagHeader) -> int:
    position = TAG_HEADER_SIZE
    if not header.flags.has_extended_header:
        return position

    if position + EXTENDED_HEADER_SIZE_BYTES > min(header.tag_end, len(buf)):
        raise TruncatedHeader(
            "extended header size field runs past the tag region",
            offset=position,
        )

    if header.version == 4:
        # v2.4: synchsafe, counts its own size field
        size = decode_synchsafe(buf, position)
        if size < EXTENDED_HEADER_SIZE_BYTES:
            raise TruncatedHeader(
                f"extended header size {size} is smaller than its size field",
                offset=position,
            )
        position += size
    else:
        # v2.3: big-endian, excludes its own size field
        position += read_u32_be(buf, position) + EXTENDED_HEADER_SIZE_BYTES

    if position > header.tag_end:
        raise TruncatedHeader(
            f"extended header ends at {position}, past tag end {header.tag_end}",
            offset=TAG_HEADER_SIZE,
        )

    return position


# =============================================================================
# Frame header
# =============================================================================

@dataclass(frozen=True)
class FrameFlags:
    """Status and format flags of a frame, decoded per tag version."""

    # Status
    tag_alter_preservation: bool = False
    file_alter_preservation: bool = False
    read_only: bool = False

    # Format
    grouping_identity: bool = False
    compressed: bool = False
    encrypted: bool = False
    unsynchronized: bool = False
    has_data_length_indicator: bool = False

    @staticmethod
    def from_bytes(status: int, fmt: int, *, version: int) -> FrameFlags:
        if version == 4:
            return FrameFlags(
                tag_alter_preservation=bool(status & V24_STATUS_TAG_ALTER),
                file_alter_preservation=bool(status & V24_STATUS_FILE_ALTER),
                read_only=bool(status & V24_STATUS_READ_ONLY),
                grouping_identity=bool(fmt & V24_FORMAT_GROUPING),
                compressed=bool(fmt & V24_FORMAT_COMPRESSION),
                encrypted=bool(fmt & V24_FORMAT_ENCRYPTION),
                unsynchronized=bool(fmt & V24_FORMAT_UNSYNCHRONIZED),
                has_data_length_indicator=bool(fmt & V24_FORMAT_DATA_LENGTH),
            )

        return FrameFlags(
            tag_alter_preservation=bool(status & V23_STATUS_TAG_ALTER),
            file_alter_preservation=bool(status & V23_STATUS_FILE_ALTER),
            read_only=bool(status & V23_STATUS_READ_ONLY),
            grouping_identity=bool(fmt & V23_FORMAT_GROUPING),
            compressed=bool(fmt & V23_FORMAT_COMPRESSION),
            encrypted=bool(fmt & V23_FORMAT_ENCRYPTION),
        )


@dataclass(frozen=True)
class FrameHeader:
    """
    Decoded 10-byte frame header.

    body_size:
        Size field as declared on the wire.

    When a v2.4 data-length indicator is present, 4 extra bytes sit
    between the header and the body and are accounted for here.
    """
    frame_id: str
    body_size: int
    flags: FrameFlags = FrameFlags()

    @property
    def body_offset(self) -> int:
        """Offset of the body relative to the start of the frame."""
        if self.flags.has_data_length_indicator:
            return FRAME_HEADER_SIZE + DATA_LENGTH_INDICATOR_SIZE
        return FRAME_HEADER_SIZE

    @property
    def total_size(self) -> int:
        """Bytes the frame occupies, header included."""
        return self.body_offset + self.body_size


def _is_frame_id(raw: bytes) -> bool:
    if not any(raw):
        return False
    return all(FRAME_ID_MIN_CHAR <= b <= FRAME_ID_MAX_CHAR for b in raw)


def parse_frame_header(
    buf: bytes,
    offset: int,
    *,
    version: int,
    end: Optional[int] = None,
) -> Optional[FrameHeader]:
    """
    Parse the frame header at `offset`.

    `end` bounds the scan window (defaults to the buffer length).

    Returns None when padding is reached (zero or non-ASCII id, or a
    zero-filled tail too short for a header).

    Raises:
        TruncatedFrame if the header or the declared body does not fit
        before `end`.
    """
    limit = len(buf) if end is None else min(end, len(buf))
    remaining = limit - offset

    if remaining < FRAME_HEADER_SIZE:
        # a window cut short by the buffer is never padding
        cut_short = end is not None and end > len(buf)
        if not cut_short and not any(buf[offset:limit]):
            return None
        raise TruncatedFrame(
            f"{remaining} bytes left, frame header needs {FRAME_HEADER_SIZE}",
            offset=offset,
        )

    raw_id = bytes(buf[offset:offset + FRAME_ID_SIZE])
    if not _is_frame_id(raw_id):
        return None

    frame_id = raw_id.decode("ascii")

    header = FrameHeader(
        frame_id=frame_id,
        body_size=read_size(buf, offset + FRAME_SIZE_OFFSET, version=version),
        flags=FrameFlags.from_bytes(
            buf[offset + FRAME_FLAGS_OFFSET],
            buf[offset + FRAME_FLAGS_OFFSET + 1],
            version=version,
        ),
    )

    if offset + header.total_size > limit:
        raise TruncatedFrame(
            f"{frame_id} declares {header.total_size} bytes at {offset}, "
            f"window ends at {limit}",
            offset=offset,
            frame_id=frame_id,
        )

    return header
