"""Decorator utilities for MCP tool registration and consistent tool telemetry.

This module wraps MCP tools to provide:
- registration on the shared FastMCP instance (schema comes from the signature)
- read/write classification exposed as MCP tool annotations
- consistent tool-event logging and per-tool metrics
- conversion of every failure into the tool's text error payload

Console logs carry a short one-line summary; the structured event is attached
as a compact JSON string under ``tool_json``.
"""

from __future__ import annotations

import functools
import json
import time
import uuid
import warnings
from typing import Any, Awaitable, Callable, Mapping, Optional

from mcp.types import ToolAnnotations
from pydantic.json_schema import PydanticJsonSchemaWarning

from github_issues_mcp.config import DETAILED_LEVEL, TOOLS_LOGGER
from github_issues_mcp.mcp_server.context import mcp
from github_issues_mcp.mcp_server.errors import _structured_tool_error, format_tool_error
from github_issues_mcp.mcp_server.registry import _REGISTERED_MCP_TOOLS
from github_issues_mcp.metrics import _record_tool_call

ToolFunc = Callable[..., Awaitable[str]]

_SECRET_ARG_KEYS = {"token", "authorization", "auth"}


def _arg_keys(kwargs: Mapping[str, Any]) -> list[str]:
    return sorted(k for k in kwargs if k not in _SECRET_ARG_KEYS)[:32]


def _log_tool_event(payload: Mapping[str, Any]) -> None:
    """Emit a single readable console line + attach full payload as JSON string."""

    event = payload.get("event", "tool")
    status = payload.get("status", "")
    tool = payload.get("tool_name", "")
    dur = payload.get("duration_ms")
    dur_s = f" {int(dur)}ms" if isinstance(dur, (int, float)) else ""

    msg = f"[tool] {tool} {status}{dur_s} ({event})"
    tool_json = json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"), default=str)
    extra = {"tool_json": tool_json, "tool_name": tool, "call_id": payload.get("call_id")}

    if TOOLS_LOGGER.isEnabledFor(DETAILED_LEVEL) and status == "start":
        TOOLS_LOGGER.detailed(msg, extra=extra)  # type: ignore[attr-defined]
    else:
        TOOLS_LOGGER.info(msg, extra=extra)


def mcp_tool(
    name: str,
    description: str,
    *,
    action: str,
    write_action: bool = False,
    tags: Optional[list[str]] = None,
) -> Callable[[ToolFunc], ToolFunc]:
    """Register an async function as an MCP tool.

    ``action`` completes the error sentence (``Error <action>: ...``). The
    wrapped tool always returns text; exceptions are logged and rendered, never
    propagated to the MCP host.
    """

    tags = list(tags or [])

    def decorator(func: ToolFunc) -> ToolFunc:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> str:
            call_id = str(uuid.uuid4())
            start = time.perf_counter()
            _log_tool_event(
                {
                    "event": "tool_call.start",
                    "status": "start",
                    "tool_name": name,
                    "call_id": call_id,
                    "write_action": write_action,
                    "arg_keys": _arg_keys(kwargs),
                }
            )

            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                duration_ms = int((time.perf_counter() - start) * 1000)
                error = _structured_tool_error(exc, context=name)
                _record_tool_call(name, duration_ms=duration_ms, errored=True)
                _log_tool_event(
                    {
                        "event": "tool_call.error",
                        "status": "error",
                        "tool_name": name,
                        "call_id": call_id,
                        "duration_ms": duration_ms,
                        "error": error,
                    }
                )
                return format_tool_error(error, action=action)

            duration_ms = int((time.perf_counter() - start) * 1000)
            _record_tool_call(name, duration_ms=duration_ms, errored=False)
            _log_tool_event(
                {
                    "event": "tool_call.ok",
                    "status": "ok",
                    "tool_name": name,
                    "call_id": call_id,
                    "duration_ms": duration_ms,
                    "result_chars": len(result),
                }
            )
            return result

        wrapper.__mcp_tool_name__ = name  # type: ignore[attr-defined]
        wrapper.__mcp_write_action__ = bool(write_action)  # type: ignore[attr-defined]
        wrapper.__mcp_tags__ = list(tags)  # type: ignore[attr-defined]

        annotations = ToolAnnotations(
            readOnlyHint=not write_action,
            destructiveHint=False,
            openWorldHint=True,
        )
        with warnings.catch_warnings():
            # UNSET defaults have no JSON form; the schema simply omits them.
            warnings.filterwarnings("ignore", category=PydanticJsonSchemaWarning)
            registered = mcp.tool(name=name, description=description, annotations=annotations)(wrapper)
        _REGISTERED_MCP_TOOLS.append((name, registered))
        return wrapper

    return decorator


__all__ = ["mcp_tool"]
