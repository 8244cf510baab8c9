"""
Tag -> generic nested mapping.

Responsibilities:
- Render a decoded Tag as plain dicts for display or JSON transport
- Group chapters under "Chapters", keyed by element id

Non-responsibilities:
- No decoding
- No logging
- No I/O

Output shape:

    {
        "TIT2": "Episode 12",
        "APIC": {"Description": ..., "Type": ..., "MIME type": ..., "Data": ...},
        "Chapters": {
            "chp0": {
                "timeScale": "seconds",
                "startTime": 0.0,
                "endTime": 61.5,
                "TIT2": "Intro",
            },
        },
    }

The first frame with a given id wins; later duplicates are dropped.
TIT1 is also rendered under "Title".
"""

from __future__ import annotations

import base64
from dataclasses import asdict
from typing import Any

from id3.enums.picture_type import PictureType
from id3.frames import (
    ChapterFrame,
    Frame,
    GenericFrame,
    LinkFrame,
    PictureFrame,
    Tag,
    TextFrame,
)

CHAPTERS_KEY = "Chapters"
MS_PER_SECOND = 1000

# Extra keys some consumers read instead of the frame id
_TEXT_ALIASES: dict[str, str] = {"TIT1": "Title"}


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    """
    Render top-level frames and chapters. Image payloads stay as bytes.
    """
    frames: dict[str, Any] = {}
    chapters: dict[str, Any] = {}

    for frame in tag.frames:
        if isinstance(frame, ChapterFrame):
            chapters.setdefault(frame.element_id, chapter_to_dict(frame))
            continue
        _merge_first(frames, frame_to_dict(frame))

    result: dict[str, Any] = dict(frames)
    if chapters:
        result[CHAPTERS_KEY] = chapters
    return result


def tag_to_jsonable(tag: Tag) -> dict[str, Any]:
    """
    Same as tag_to_dict, with every bytes value base64-encoded.
    """
    return _jsonable(tag_to_dict(tag))


def frame_to_dict(frame: Frame) -> dict[str, Any]:
    """Render one non-chapter frame as {frame_id: value}."""
    if isinstance(frame, TextFrame):
        rendered: dict[str, Any] = {frame.frame_id: frame.information}
        alias = _TEXT_ALIASES.get(frame.frame_id)
        if alias is not None:
            rendered[alias] = frame.information
        return rendered

    if isinstance(frame, PictureFrame):
        return {
            frame.frame_id: {
                "Description": frame.description,
                "Type": picture_type_label(frame.picture_type),
                "MIME type": frame.mime_type,
                "Data": frame.image_bytes,
            }
        }

    if isinstance(frame, LinkFrame):
        return {
            frame.frame_id: {
                "Description": frame.description,
                "Url": frame.url,
            }
        }

    if isinstance(frame, ChapterFrame):
        return {frame.frame_id: chapter_to_dict(frame)}

    if isinstance(frame, GenericFrame):
        return {
            frame.frame_id: {
                "size": frame.header.body_size,
                "flags": asdict(frame.header.flags),
            }
        }

    return {frame.frame_id: None}


def chapter_to_dict(chapter: ChapterFrame) -> dict[str, Any]:
    """
    Render a chapter: times in seconds, children merged in.
    """
    rendered: dict[str, Any] = {
        "timeScale": "seconds",
        "startTime": chapter.start_time_ms / MS_PER_SECOND,
        "endTime": chapter.end_time_ms / MS_PER_SECOND,
        "startOffset": chapter.start_byte_offset,
        "endOffset": chapter.end_byte_offset,
    }
    for child in chapter.children:
        _merge_first(rendered, frame_to_dict(child))
    return rendered


def chapters_to_list(tag: Tag) -> list[dict[str, Any]]:
    """
    Ordered chapter summary, one entry per top-level CHAP frame.
    """
    summary: list[dict[str, Any]] = []
    for chapter in tag.chapters:
        link = chapter.find("WXXX")
        picture = chapter.find("APIC")
        summary.append({
            "elementId": chapter.element_id,
            "title": chapter.title,
            "startTimeMs": chapter.start_time_ms,
            "endTimeMs": chapter.end_time_ms,
            "url": link.url if isinstance(link, LinkFrame) else None,
            "hasImage": isinstance(picture, PictureFrame) and bool(picture.image_bytes),
        })
    return summary


def picture_type_label(value: PictureType | int | None) -> str:
    if isinstance(value, PictureType):
        return value.label
    if value is None:
        return ""
    return f"Unknown (0x{value:02X})"


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _merge_first(target: dict[str, Any], rendered: dict[str, Any]) -> None:
    for key, value in rendered.items():
        target.setdefault(key, value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
