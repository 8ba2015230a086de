"""Environment-driven settings and logging setup for the GitHub issues server.

Settings are read once at import time, except the GitHub token, which
``http_clients`` reads on every tool call.
"""

from __future__ import annotations

import logging
import os
import time

# Log levels
# ------------------------------------------------------------------------------
#
# DETAILED sits between DEBUG and INFO. The paginator uses it for one line per
# fetched page, which is too chatty for INFO.

DETAILED_LEVEL = 15


def _install_detailed_level() -> None:
    if logging.getLevelName(DETAILED_LEVEL) != "DETAILED":
        logging.addLevelName(DETAILED_LEVEL, "DETAILED")

    if not hasattr(logging.Logger, "detailed"):
        def detailed(self: logging.Logger, msg, *args, **kwargs):
            if self.isEnabledFor(DETAILED_LEVEL):
                self._log(DETAILED_LEVEL, msg, args, **kwargs)
        logging.Logger.detailed = detailed  # type: ignore[attr-defined]


def _resolve_log_level(level_name: str | None) -> int:
    """Map LOG_LEVEL (a name, DETAILED, or a number) to a logging level."""

    name = str(level_name or "").strip().upper()
    if not name:
        return logging.INFO
    if name.lstrip("-").isdigit():
        return int(name)
    if name == "DETAILED":
        return DETAILED_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _env_float(name: str, default: float) -> float:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


_install_detailed_level()

# GitHub
# ------------------------------------------------------------------------------

# Checked in order. The first variable that is set wins even when blank, so a
# blank token is reported instead of silently falling through.
GITHUB_TOKEN_ENV_VARS = ("GITHUB_AUTH_TOKEN", "GITHUB_TOKEN", "GITHUB_PAT")

GITHUB_API_BASE = os.environ.get("GITHUB_API_BASE", "https://api.github.com")
GITHUB_USER_AGENT = os.environ.get("GITHUB_USER_AGENT", "MCP-GitHub-Issue-Creator")
GITHUB_ACCEPT = "application/vnd.github.v3+json"

# Seconds; zero or less disables the client timeout.
HTTPX_TIMEOUT = _env_float("HTTPX_TIMEOUT", 30.0)

DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100
BODY_PREVIEW_CHARS = 200

# Logging
# ------------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_STYLE = os.environ.get("LOG_STYLE", "color").lower()
LOG_FORMAT = os.environ.get(
    "LOG_FORMAT",
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# Third-party loggers held at WARNING unless LOG_LEVEL is DEBUG.
QUIET_LOGGERS = ("httpx", "httpcore", "mcp", "sse_starlette", "uvicorn.access")

_ANSI_RESET = "\x1b[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\x1b[36m",
    DETAILED_LEVEL: "\x1b[36m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[35m",
}


class _ColorFormatter(logging.Formatter):
    """Colors the level name only; the message text is left untouched."""

    def __init__(self, fmt: str, *, use_color: bool) -> None:
        super().__init__(fmt)
        self._use_color = bool(use_color)

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno) if self._use_color else None
        if color is None:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{_ANSI_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _configure_logging() -> None:
    root = logging.getLogger()
    if getattr(root, "_github_issues_mcp_configured", False):
        return

    level = _resolve_log_level(LOG_LEVEL)

    # StreamHandler writes to stderr; stdout belongs to the stdio transport.
    handler = logging.StreamHandler()
    handler.setFormatter(_ColorFormatter(LOG_FORMAT, use_color=LOG_STYLE in {"color", "ansi"}))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    if level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    root._github_issues_mcp_configured = True  # type: ignore[attr-defined]


_configure_logging()

BASE_LOGGER = logging.getLogger("github_issues_mcp")
GITHUB_LOGGER = BASE_LOGGER.getChild("github_client")
TOOLS_LOGGER = BASE_LOGGER.getChild("tools")
PAGINATION_LOGGER = BASE_LOGGER.getChild("pagination")

SERVER_START_TIME = time.time()

__all__ = [
    "BASE_LOGGER",
    "BODY_PREVIEW_CHARS",
    "DEFAULT_PER_PAGE",
    "DETAILED_LEVEL",
    "GITHUB_ACCEPT",
    "GITHUB_API_BASE",
    "GITHUB_LOGGER",
    "GITHUB_TOKEN_ENV_VARS",
    "GITHUB_USER_AGENT",
    "HTTPX_TIMEOUT",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "MAX_PER_PAGE",
    "PAGINATION_LOGGER",
    "SERVER_START_TIME",
    "TOOLS_LOGGER",
]
