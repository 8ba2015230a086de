"""GitHub issues MCP server package.

Tool implementations live under ``github_issues_mcp.main_tools``; the MCP
surface (tool registration, error rendering) under
``github_issues_mcp.mcp_server``. ``main`` at the repository root wires both.
"""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
