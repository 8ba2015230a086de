from __future__ import annotations

import os
import sys
from typing import Any
from urllib.parse import urlparse

from github_issues_mcp.config import (
    GITHUB_API_BASE,
    GITHUB_TOKEN_ENV_VARS,
    GITHUB_USER_AGENT,
    HTTPX_TIMEOUT,
)
from github_issues_mcp.exceptions import ConfigError
from github_issues_mcp.http_clients import _get_github_token


def _check(name: str, level: str, message: str) -> dict[str, Any]:
    return {"name": name, "level": level, "message": message}


def validate_environment() -> dict[str, Any]:
    """Validate the running environment and return an operator-friendly report.

    The output is a structured list of checks with levels (ok/warning/error).
    No network calls are made; the token is only checked for presence.
    """

    checks: list[dict[str, Any]] = []

    try:
        _get_github_token()
    except ConfigError as exc:
        checks.append(_check("github_token", "error", str(exc)))
    else:
        source = next(name for name in GITHUB_TOKEN_ENV_VARS if os.environ.get(name) is not None)
        checks.append(_check("github_token", "ok", f"Token configured via {source}"))

    parsed = urlparse(GITHUB_API_BASE)
    if parsed.scheme != "https" or not parsed.netloc:
        checks.append(
            _check("github_api_base", "warning", f"GITHUB_API_BASE is not an https URL: {GITHUB_API_BASE!r}")
        )
    else:
        checks.append(_check("github_api_base", "ok", GITHUB_API_BASE))

    if HTTPX_TIMEOUT <= 0:
        checks.append(_check("httpx_timeout", "warning", "HTTPX_TIMEOUT disables request timeouts"))
    else:
        checks.append(_check("httpx_timeout", "ok", f"{HTTPX_TIMEOUT:g}s"))

    checks.append(_check("user_agent", "ok", GITHUB_USER_AGENT))

    levels = {check["level"] for check in checks}
    status = "error" if "error" in levels else "warning" if "warning" in levels else "ok"
    return {
        "status": status,
        "checks": checks,
        "python": sys.version.split()[0],
    }
