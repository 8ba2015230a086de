"""Process-local counters for tool calls, GitHub requests and pagination.

Nothing is exported to an external backend; ``/healthz`` serves a snapshot.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

_GITHUB_COUNTERS = ("requests_total", "errors_total", "rate_limit_events_total", "timeouts_total")
_PAGINATION_COUNTERS = ("listings_total", "pages_total", "items_total", "capped_total")


def _fresh_state() -> Dict[str, Any]:
    return {
        "tools": {},
        "github": dict.fromkeys(_GITHUB_COUNTERS, 0),
        "pagination": dict.fromkeys(_PAGINATION_COUNTERS, 0),
    }


_METRICS: Dict[str, Any] = _fresh_state()


def _reset_metrics_for_tests() -> None:
    _METRICS.clear()
    _METRICS.update(_fresh_state())


def _bump(section: str, counter: str, amount: int = 1) -> None:
    bucket = _METRICS.setdefault(section, {})
    bucket[counter] = bucket.get(counter, 0) + amount


def _record_tool_call(tool_name: str, *, duration_ms: int, errored: bool) -> None:
    bucket = _METRICS.setdefault("tools", {}).setdefault(
        tool_name,
        {"calls_total": 0, "errors_total": 0, "latency_ms_sum": 0, "latency_ms_max": 0},
    )
    duration_ms = max(0, int(duration_ms))
    bucket["calls_total"] += 1
    bucket["latency_ms_sum"] += duration_ms
    bucket["latency_ms_max"] = max(bucket["latency_ms_max"], duration_ms)
    if errored:
        bucket["errors_total"] += 1


def _is_rate_limited(status_code: Optional[int], resp: Optional[httpx.Response]) -> bool:
    if status_code == 429:
        return True
    if resp is None:
        return False
    remaining = resp.headers.get("X-RateLimit-Remaining")
    return remaining is not None and remaining.strip().isdigit() and int(remaining) == 0


def _record_github_request(
    *,
    status_code: Optional[int],
    error: bool,
    resp: Optional[httpx.Response] = None,
    exc: Optional[BaseException] = None,
) -> None:
    _bump("github", "requests_total")
    if error:
        _bump("github", "errors_total")
    if _is_rate_limited(status_code, resp):
        _bump("github", "rate_limit_events_total")
    if isinstance(exc, httpx.TimeoutException):
        _bump("github", "timeouts_total")


def _record_listing(*, pages: int, items: int, capped: bool) -> None:
    """Count one completed paginated listing."""

    _bump("pagination", "listings_total")
    _bump("pagination", "pages_total", pages)
    _bump("pagination", "items_total", items)
    if capped:
        _bump("pagination", "capped_total")


def _metrics_snapshot() -> Dict[str, Any]:
    """Copy of the counters that is safe to serialize and mutate."""

    return {
        "tools": {name: dict(bucket) for name, bucket in _METRICS.get("tools", {}).items()},
        "github": {key: int(_METRICS.get("github", {}).get(key, 0)) for key in _GITHUB_COUNTERS},
        "pagination": {key: int(_METRICS.get("pagination", {}).get(key, 0)) for key in _PAGINATION_COUNTERS},
    }


__all__ = [
    "_metrics_snapshot",
    "_record_github_request",
    "_record_listing",
    "_record_tool_call",
    "_reset_metrics_for_tests",
]
