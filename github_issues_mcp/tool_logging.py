"""Logging helpers for GitHub API requests.

Goals:
- One readable line per request (method, path, status, duration).
- Preserve structured metadata in log extras for debugging and metrics.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from github_issues_mcp.config import GITHUB_API_BASE, GITHUB_LOGGER
from github_issues_mcp.metrics import _record_github_request as _record_github_request_metrics


def _github_api_url_for_logs(path: str, params: Optional[dict[str, Any]] = None) -> str:
    """Build an absolute GitHub API URL for logging.

    A request that fails before an httpx.Response exists still gets a stable
    URL in the logs.
    """

    base = (GITHUB_API_BASE or "https://api.github.com").rstrip("/")
    normalized = path if path.startswith("/") else f"/{path}"
    url = f"{base}{normalized}"
    if params:
        cleaned = {k: v for k, v in params.items() if v is not None}
        qs = urlencode(cleaned, doseq=True)
        if qs:
            url = f"{url}?{qs}"
    return url


def _shorten_api_url(api_url: str) -> str:
    base = (GITHUB_API_BASE or "").rstrip("/")
    for prefix in (base, "https://api.github.com", "http://api.github.com"):
        if prefix and api_url.startswith(prefix):
            return api_url[len(prefix) :]
    return api_url


def _record_github_request(
    *,
    status_code: Optional[int],
    duration_ms: int,
    error: bool,
    method: str,
    url: str,
    resp: Optional[httpx.Response] = None,
    exc: Optional[BaseException] = None,
) -> None:
    """Log GitHub request metadata and record metrics."""

    log_extra: dict[str, Any] = {
        "status_code": status_code,
        "duration_ms": duration_ms,
        "error": error,
        "method": method,
        "url": url,
    }
    if resp is not None:
        log_extra["rate_limit_remaining"] = resp.headers.get("X-RateLimit-Remaining")
    if exc is not None:
        log_extra["exc_type"] = exc.__class__.__name__

    status = status_code if status_code is not None else "ERR"
    msg = f"GitHub API {method} {_shorten_api_url(url)} -> {status} ({duration_ms}ms)"

    if error:
        GITHUB_LOGGER.warning(msg, extra=log_extra)
    else:
        GITHUB_LOGGER.info(msg, extra=log_extra)

    _record_github_request_metrics(
        status_code=status_code,
        error=error,
        resp=resp,
        exc=exc,
    )


__all__ = ["_github_api_url_for_logs", "_record_github_request"]
