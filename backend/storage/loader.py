"""
File loader.

Reads just the ID3v2 tag region of an MP3 file (header + declared size)
and hands the bytes to the decoder. Audio data is never read.

OSError from the filesystem propagates to the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from constants import MAX_CHAPTER_DEPTH, TAG_HEADER_SIZE, TAG_MAGIC, TAG_SIZE_OFFSET
from id3.integers import decode_synchsafe
from id3.reader import ParseResult, parse_tag
from observability.logger import log_event, log_issues, now_ms
from observability.metrics import timed

PathLike = Union[str, Path]


def read_tag_bytes(path: PathLike) -> bytes:
    """
    Return the first 10 + tag_size bytes of the file.

    Files that do not start with a tag header yield whatever prefix was
    read; the decoder reports why it is not a tag.
    """
    with open(path, "rb") as fh:
        head = fh.read(TAG_HEADER_SIZE)
        if len(head) < TAG_HEADER_SIZE or head[:len(TAG_MAGIC)] != TAG_MAGIC:
            return head

        tag_size = decode_synchsafe(head, TAG_SIZE_OFFSET)
        return head + fh.read(tag_size)


def load_tag(
    path: PathLike,
    *,
    max_depth: int = MAX_CHAPTER_DEPTH,
) -> ParseResult:
    """
    Read and decode the tag of one file, logging the outcome.
    """
    source = str(path)

    with timed("id3_parse", details={"path": source}) as extra:
        buffer = read_tag_bytes(path)
        result = parse_tag(buffer, max_depth=max_depth)
        extra["bytes"] = len(buffer)

    if result.tag is None:
        log_event({
            "ts_ms": now_ms(),
            "event_type": "ID3_TAG_REJECTED",
            "path": source,
            "issues": [issue.as_dict() for issue in result.issues],
        })
        return result

    log_event({
        "ts_ms": now_ms(),
        "event_type": "ID3_TAG_LOADED",
        "path": source,
        "version": result.tag.header.version,
        "frames": len(result.tag.frames),
        "chapters": len(result.tag.chapters),
        "truncated": result.truncated,
    })
    log_issues(result.issues, source=source)

    return result
