"""
Timing helpers for observability.

- Durations use monotonic time
- Event timestamps (ts_ms) use wall-clock time
- One measurement = one METRIC_TIMER event
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import log_event, now_ms


@contextmanager
def timed(
    name: str,
    *,
    details: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Measure the duration of a block and emit it as a metric.

    The yielded dict is merged into `details`, so the block can attach
    facts it only learns while running (frame counts, byte sizes).

    Usage:
        with timed("id3_parse", details={"path": str(path)}) as extra:
            result = parse_tag(buffer)
            extra["frames"] = len(result.tag.frames)

    The metric is emitted even if the block raises.
    """
    extra: dict[str, Any] = {}
    start_ns = time.monotonic_ns()
    try:
        yield extra
    finally:
        duration_ms = (time.monotonic_ns() - start_ns) // 1_000_000
        log_event({
            "ts_ms": now_ms(),
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_ms": duration_ms,
            "details": {**(details or {}), **extra},
        })
