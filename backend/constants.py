"""
FORMAT-AS-CONSTANTS
-------------------
Single source of truth for the ID3v2 wire layout and decoder limits.

Rules:
- If changing a value changes decoding behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final, FrozenSet

# =============================================================================
# Tag header (10 bytes)
# =============================================================================
# "ID3" + version + revision + flags + 4B synchsafe size

TAG_MAGIC: Final[bytes] = b"ID3"
TAG_HEADER_SIZE: Final[int] = 10

TAG_VERSION_OFFSET: Final[int] = 3
TAG_REVISION_OFFSET: Final[int] = 4
TAG_FLAGS_OFFSET: Final[int] = 5
TAG_SIZE_OFFSET: Final[int] = 6

SUPPORTED_VERSIONS: Final[FrozenSet[int]] = frozenset({2, 3, 4})

TAG_FLAG_UNSYNCHRONIZED: Final[int] = 0x80
TAG_FLAG_EXTENDED_HEADER: Final[int] = 0x40
TAG_FLAG_EXPERIMENTAL: Final[int] = 0x20
TAG_FLAG_FOOTER: Final[int] = 0x10

EXTENDED_HEADER_SIZE_BYTES: Final[int] = 4

# =============================================================================
# Frame header (10 bytes)
# =============================================================================
# 4B ASCII id + 4B size + 2B flags

FRAME_HEADER_SIZE: Final[int] = 10
FRAME_ID_SIZE: Final[int] = 4
FRAME_SIZE_OFFSET: Final[int] = 4
FRAME_FLAGS_OFFSET: Final[int] = 8

# v2.4 only: 4B synchsafe length between header and body
DATA_LENGTH_INDICATOR_SIZE: Final[int] = 4

# ID3v2.4 frame flags
V24_STATUS_TAG_ALTER: Final[int] = 0x40
V24_STATUS_FILE_ALTER: Final[int] = 0x20
V24_STATUS_READ_ONLY: Final[int] = 0x10
V24_FORMAT_GROUPING: Final[int] = 0x40
V24_FORMAT_COMPRESSION: Final[int] = 0x08
V24_FORMAT_ENCRYPTION: Final[int] = 0x04
V24_FORMAT_UNSYNCHRONIZED: Final[int] = 0x02
V24_FORMAT_DATA_LENGTH: Final[int] = 0x01

# ID3v2.3 frame flags (upper bits only)
V23_STATUS_TAG_ALTER: Final[int] = 0x80
V23_STATUS_FILE_ALTER: Final[int] = 0x40
V23_STATUS_READ_ONLY: Final[int] = 0x20
V23_FORMAT_COMPRESSION: Final[int] = 0x80
V23_FORMAT_ENCRYPTION: Final[int] = 0x40
V23_FORMAT_GROUPING: Final[int] = 0x20

# Printable ASCII range accepted for frame ids
FRAME_ID_MIN_CHAR: Final[int] = 0x20
FRAME_ID_MAX_CHAR: Final[int] = 0x7E

# =============================================================================
# Integers
# =============================================================================

SYNCHSAFE_BITS_PER_BYTE: Final[int] = 7
SYNCHSAFE_MAX: Final[int] = 2**28 - 1
U32_SIZE: Final[int] = 4

# =============================================================================
# Frame dispatch
# =============================================================================

CHAPTER_FRAME_ID: Final[str] = "CHAP"
PICTURE_FRAME_ID: Final[str] = "APIC"
LINK_FRAME_ID: Final[str] = "WXXX"

TEXT_FRAME_IDS: Final[FrozenSet[str]] = frozenset({
    "TIT1", "TIT2", "TIT3",
    "TALB", "TOAL", "TRCK", "TPOS", "TSST", "TSRC",
    "TPE1", "TPE2", "TPE3", "TPE4",
    "TOPE", "TEXT", "TOLY", "TCOM",
    "TMCL", "TIPL", "TENC",
})

# =============================================================================
# Chapters
# =============================================================================
# element id terminator + 4 x u32 (start ms, end ms, start offset, end offset)

CHAPTER_TIMING_SIZE: Final[int] = 4 * U32_SIZE

# Nesting guard: a CHAP deeper than this decodes as a generic frame
MAX_CHAPTER_DEPTH: Final[int] = 4

# Hard ceiling for any configured depth; keeps recursion well inside
# the interpreter stack
MAX_CHAPTER_DEPTH_LIMIT: Final[int] = 64

# =============================================================================
# Collaborators
# =============================================================================

MAX_UPLOAD_BYTES_DEFAULT: Final[int] = 64 * 1024 * 1024
IMAGE_EXPORT_DIR_DEFAULT: Final[str] = "artwork"
