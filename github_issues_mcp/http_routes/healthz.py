"""``GET /healthz`` for the HTTP transports.

Liveness only: the token is checked for presence, GitHub is never called.
"""

from __future__ import annotations

import platform
import sys
import time
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse

from github_issues_mcp import __version__
from github_issues_mcp.config import SERVER_START_TIME
from github_issues_mcp.http_clients import _get_optional_github_token
from github_issues_mcp.mcp_server.context import SERVER_NAME
from github_issues_mcp.metrics import _metrics_snapshot


def _build_health_payload() -> dict[str, Any]:
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "version": __version__,
        "uptime_seconds": max(0, int(time.time() - SERVER_START_TIME)),
        "github_token_present": _get_optional_github_token() is not None,
        "runtime": {"python": sys.version.split()[0], "platform": platform.platform()},
        "metrics": _metrics_snapshot(),
    }


async def healthz(request: Request) -> JSONResponse:
    return JSONResponse(_build_health_payload(), headers={"Cache-Control": "no-store"})


def register_healthz_route(app: Starlette) -> None:
    app.add_route("/healthz", healthz, methods=["GET"])


__all__ = ["healthz", "register_healthz_route"]
