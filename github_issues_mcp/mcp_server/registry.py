from __future__ import annotations

from typing import Any, Optional

_REGISTERED_MCP_TOOLS: list[tuple[str, Any]] = []


def _find_registered_tool(tool_name: str) -> Optional[Any]:
    for name, func in _REGISTERED_MCP_TOOLS:
        if name == tool_name:
            return func
    return None


def _registered_tool_names() -> list[str]:
    return [name for name, _ in _REGISTERED_MCP_TOOLS]
