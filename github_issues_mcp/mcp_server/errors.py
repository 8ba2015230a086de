"""Utilities for producing consistent tool-failure messages.

Tools never raise across the MCP boundary. Every failure is classified,
logged once and rendered as a single text message, e.g.::

    Error listing issues: 404 - Not Found
    Error: GITHUB_AUTH_TOKEN environment variable is not set
"""

from __future__ import annotations

from typing import Any, Dict

from github_issues_mcp.config import BASE_LOGGER
from github_issues_mcp.exceptions import ConfigError, TransportError, UpstreamError, UsageError


def _summarize_exception(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _classify_category(exc: BaseException) -> str:
    if isinstance(exc, ConfigError):
        return "config"
    if isinstance(exc, UsageError):
        return "usage"
    if isinstance(exc, UpstreamError):
        return "github_api"
    if isinstance(exc, TransportError):
        return "transport"
    if isinstance(exc, (ValueError, TypeError)):
        return "validation"
    return "unknown"


def _structured_tool_error(exc: BaseException, *, context: str) -> Dict[str, Any]:
    """Build a serializable description of a tool failure and log it."""

    message = _summarize_exception(exc)
    category = _classify_category(exc)

    payload: Dict[str, Any] = {
        "error": exc.__class__.__name__,
        "message": message,
        "context": context,
        "category": category,
    }
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        payload["status_code"] = status_code

    log_extra = {
        "tool_context": context,
        "tool_error_type": payload["error"],
        "tool_error_message": message,
        "tool_error_category": category,
    }
    if category == "unknown":
        BASE_LOGGER.exception("Tool failure in %s: %s", context, message, extra=log_extra)
    else:
        BASE_LOGGER.warning("Tool failure in %s: %s", context, message, extra=log_extra)

    return payload


def format_tool_error(error: Dict[str, Any], *, action: str) -> str:
    """Render a structured tool error as the user-facing text payload."""

    if error.get("category") in {"config", "usage"}:
        return f"Error: {error['message']}"
    return f"Error {action}: {error['message']}"


__all__ = ["_structured_tool_error", "format_tool_error"]
