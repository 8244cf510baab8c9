"""
Route registration for the chapter reader API.

Responsibilities:
- Define HTTP endpoints
- Run the decoder on uploaded bytes
- Pull config from app.state

The request body is the raw MP3 (or just its leading tag bytes).
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request

from config import AppConfig
from id3.frames import Tag
from id3.reader import ParseResult, parse_tag
from observability.logger import log_event, log_issues, now_ms
from serialization.tag_dict import chapters_to_list, tag_to_jsonable


def register_routes(app: FastAPI) -> None:
    """Register all routes on the FastAPI app."""
    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.post("/tags")
    async def read_tags(request: Request) -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        result, tag = await _parse_request(app, request, route="/tags")
        return {
            "version": tag.header.version,
            "revision": tag.header.revision,
            "truncated": result.truncated,
            "tag": tag_to_jsonable(tag),
            "issues": [issue.as_dict() for issue in result.issues],
        }

    @app.post("/chapters")
    async def read_chapters(request: Request) -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        result, tag = await _parse_request(app, request, route="/chapters")
        return {
            "chapters": chapters_to_list(tag),
            "issues": [issue.as_dict() for issue in result.issues],
        }


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

async def _parse_request(
    app: FastAPI,
    request: Request,
    *,
    route: str,
) -> tuple[ParseResult, Tag]:
    """
    Read the body, decode it, log the outcome.

    Raises:
        HTTPException 413 if the body is over the configured limit,
        HTTPException 422 if the tag header is rejected.
    """
    config: AppConfig = app.state.config
    body = await _read_limited(request, config.max_upload_bytes)

    result = parse_tag(body, max_depth=config.max_chapter_depth)

    log_event({
        "ts_ms": now_ms(),
        "event_type": "HTTP_PARSE_REQUEST",
        "route": route,
        "bytes": len(body),
        "accepted": not result.failed,
        "frames": len(result.tag.frames) if result.tag is not None else 0,
    })
    log_issues(result.issues, source=route)

    if result.tag is None:
        raise HTTPException(
            status_code=422,
            detail=[issue.as_dict() for issue in result.issues],
        )

    return result, result.tag


async def _read_limited(request: Request, limit: int) -> bytes:
    """
    Read the request body, stopping as soon as it passes `limit` bytes.

    A declared Content-Length over the limit is rejected before anything
    is read.

    Raises:
        HTTPException 413
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"declared body of {declared} bytes exceeds {limit}",
        )

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise HTTPException(
                status_code=413,
                detail=f"body exceeds {limit} bytes",
            )

    return bytes(body)
