"""
Picture exporter.

Writes the image payload of every APIC frame in a tag (chapter artwork
included) to a directory. The only side-effecting part of the project
besides the loader.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from id3.enums.picture_type import PictureType
from id3.frames import ChapterFrame, PictureFrame, Tag
from observability.logger import log_event, now_ms

_EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/webp": "webp",
    # v2.2 writers put a bare format name here
    "jpg": "jpg",
    "png": "png",
}

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")


def extension_for(mime_type: str | None) -> str:
    if not mime_type:
        return "bin"
    return _EXTENSIONS.get(mime_type.strip().lower(), "bin")


def export_pictures(tag: Tag, directory: Union[str, Path]) -> list[Path]:
    """
    Write each non-empty picture payload to `directory`.

    File names: <owner>_<index>_<picture type>.<ext>, where owner is the
    chapter element id or "tag" for top-level pictures.

    Returns the written paths in tag order.
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    index = 0
    for owner, picture in _pictures(tag):
        if not picture.image_bytes:
            continue

        kind = (
            picture.picture_type.name.lower()
            if isinstance(picture.picture_type, PictureType)
            else f"type{picture.picture_type}"
        )
        name = f"{_safe(owner)}_{index}_{kind}.{extension_for(picture.mime_type)}"
        path = out_dir / name
        path.write_bytes(picture.image_bytes)
        written.append(path)
        index += 1

        log_event({
            "ts_ms": now_ms(),
            "event_type": "ID3_PICTURE_EXPORTED",
            "path": str(path),
            "owner": owner,
            "bytes": len(picture.image_bytes),
            "mime_type": picture.mime_type,
        })

    return written


def _pictures(tag: Tag) -> list[tuple[str, PictureFrame]]:
    found: list[tuple[str, PictureFrame]] = []
    for frame in tag.frames:
        if isinstance(frame, PictureFrame):
            found.append(("tag", frame))
        elif isinstance(frame, ChapterFrame):
            found.extend(
                (frame.element_id or "chapter", child)
                for child in frame.children
                if isinstance(child, PictureFrame)
            )
    return found


def _safe(name: str) -> str:
    cleaned = _UNSAFE.sub("_", name).strip("._")
    return cleaned or "unnamed"
