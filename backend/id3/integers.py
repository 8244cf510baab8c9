"""
Integer helpers for ID3v2 headers.

Two 32-bit layouts appear on the wire:
- plain big-endian (v2.3 frame sizes, chapter timings)
- synchsafe: 4 bytes, 7 low bits each (tag size, v2.4 frame sizes)
"""

from __future__ import annotations

import struct

from constants import SYNCHSAFE_BITS_PER_BYTE, SYNCHSAFE_MAX, U32_SIZE


def read_u32_be(buf: bytes, offset: int = 0) -> int:
    return struct.unpack_from(">I", buf, offset)[0]


def u32_be(value: int) -> bytes:
    return struct.pack(">I", value)


def decode_synchsafe(buf: bytes, offset: int = 0) -> int:
    """
    Decode a 4-byte synchsafe integer.

    The top bit of each byte is ignored rather than rejected; some writers
    leave it set and the value is still usable.
    """
    if offset + U32_SIZE > len(buf):
        raise struct.error(
            f"need {U32_SIZE} bytes at offset {offset}, have {len(buf) - offset}"
        )

    value = 0
    for byte in buf[offset:offset + U32_SIZE]:
        value = (value << SYNCHSAFE_BITS_PER_BYTE) | (byte & 0x7F)
    return value


def encode_synchsafe(value: int) -> bytes:
    """
    Encode an int (0 .. 2**28 - 1) as 4 synchsafe bytes.
    """
    if value < 0 or value > SYNCHSAFE_MAX:
        raise ValueError(f"synchsafe value out of range: {value}")

    return bytes(
        (value >> shift) & 0x7F
        for shift in (21, 14, 7, 0)
    )


def read_size(buf: bytes, offset: int, *, version: int) -> int:
    """
    Read a frame size field: synchsafe for v2.4, plain big-endian otherwise.
    """
    if version == 4:
        return decode_synchsafe(buf, offset)
    return read_u32_be(buf, offset)
