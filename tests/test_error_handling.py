import pytest

from github_issues_mcp.exceptions import (
    ConfigError,
    NoOpUpdateError,
    TransportError,
    UpstreamError,
)
from github_issues_mcp.mcp_server.errors import _structured_tool_error, format_tool_error


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (ConfigError("GITHUB_AUTH_TOKEN environment variable is not set"), "config"),
        (NoOpUpdateError(), "usage"),
        (UpstreamError(422, "Validation Failed"), "github_api"),
        (TransportError("GitHub request failed: timed out"), "transport"),
        (ValueError("bad"), "validation"),
        (KeyError("x"), "unknown"),
    ],
)
def test_structured_tool_error_categories(exc, category):
    payload = _structured_tool_error(exc, context="some_tool")
    assert payload["category"] == category
    assert payload["context"] == "some_tool"
    assert payload["error"] == exc.__class__.__name__


def test_structured_tool_error_keeps_status_code():
    payload = _structured_tool_error(UpstreamError(403, "Forbidden"), context="t")
    assert payload["status_code"] == 403
    assert payload["message"] == "403 - Forbidden"


def test_format_tool_error_variants():
    config = _structured_tool_error(ConfigError("GITHUB_AUTH_TOKEN environment variable is not set"), context="t")
    upstream = _structured_tool_error(UpstreamError(404, "Not Found"), context="t")

    assert format_tool_error(config, action="creating issue") == (
        "Error: GITHUB_AUTH_TOKEN environment variable is not set"
    )
    assert format_tool_error(upstream, action="creating issue") == "Error creating issue: 404 - Not Found"


def test_exception_without_message_uses_class_name():
    payload = _structured_tool_error(RuntimeError(), context="t")
    assert format_tool_error(payload, action="listing issues") == "Error listing issues: RuntimeError"
