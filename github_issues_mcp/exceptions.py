"""Custom exception types used across the GitHub issues MCP server."""

from __future__ import annotations


class GitHubIssuesError(Exception):
    pass


class ConfigError(GitHubIssuesError):
    """Raised when the GitHub credential is missing, before any request."""

    pass


class UpstreamError(GitHubIssuesError):
    """Raised when GitHub answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code} - {message}")
        self.status_code = status_code
        self.message = message


class TransportError(GitHubIssuesError):
    """Raised on network-level failures (DNS, timeout, connection reset)."""

    pass


class UsageError(GitHubIssuesError):
    """Raised when a tool cannot proceed because of the caller's inputs.

    This is intended to surface a clear, single-line message to the caller.
    """

    pass


class NoOpUpdateError(UsageError):
    def __init__(self, message: str = "No fields provided to update") -> None:
        super().__init__(message)


__all__ = [
    "ConfigError",
    "GitHubIssuesError",
    "NoOpUpdateError",
    "TransportError",
    "UpstreamError",
    "UsageError",
]
