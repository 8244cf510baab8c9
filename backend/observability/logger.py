"""
JSONL event logger.

- One JSON object per line on stdout
- No buffering, no batching
- Never raises: a logging failure must not break a parse

The decoder core does not log. Collaborators (loader, exporter, HTTP
routes) report what happened through this module.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable, Iterable, Mapping

from id3.issues import ParseIssue


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print

_enabled: bool = True


def configure(*, enabled: bool) -> None:
    """Turn event output on or off (AppConfig.enable_json_logs)."""
    global _enabled  # pylint: disable=global-statement
    _enabled = enabled


def now_ms() -> int:
    return int(time.time() * 1000)


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event.

    Non-JSON values (bytes, enums, paths) are rendered with str() so a
    stray field never drops the event.
    """
    if not _enabled:
        return

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError) as e:
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)


def log_issues(
    issues: Iterable[ParseIssue],
    *,
    source: str,
) -> None:
    """Emit one ID3_PARSE_ISSUE event per issue."""
    for issue in issues:
        log_event({
            "ts_ms": now_ms(),
            "event_type": "ID3_PARSE_ISSUE",
            "source": source,
            **issue.as_dict(),
        })
