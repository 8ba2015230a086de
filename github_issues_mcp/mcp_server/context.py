"""
Server instance and request-independent settings.

Goals:
- Provide the single FastMCP instance every tool and prompt registers on.
- Keep host/port resolution in one place for the network transports.
"""

from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP

SERVER_NAME = "github_issues_mcp"

SERVER_INSTRUCTIONS = (
    "Tools for GitHub issues: create, list, get and update issues, list the "
    "authenticated user's organizations and an organization's repositories. "
    "Listing tools paginate automatically; pass max_results to cap the total."
)


def _resolve_host() -> str:
    host = (os.getenv("FASTMCP_HOST") or os.getenv("HOST") or "").strip()
    return host or "127.0.0.1"


def _resolve_port() -> int:
    raw = (os.getenv("FASTMCP_PORT") or os.getenv("PORT") or "").strip()
    if raw.isdigit():
        return int(raw)
    return 8000


mcp = FastMCP(
    SERVER_NAME,
    instructions=SERVER_INSTRUCTIONS,
    host=_resolve_host(),
    port=_resolve_port(),
)

__all__ = ["SERVER_INSTRUCTIONS", "SERVER_NAME", "mcp"]
