import httpx
import pytest

from github_issues_mcp import http_clients
from github_issues_mcp.exceptions import ConfigError, TransportError, UpstreamError
from github_issues_mcp.http_clients import GitHubResponse, github_context, github_request
from github_issues_mcp.metrics import _metrics_snapshot, _reset_metrics_for_tests

_TOKEN_VARS = ("GITHUB_AUTH_TOKEN", "GITHUB_TOKEN", "GITHUB_PAT")


@pytest.fixture
def no_token_env(monkeypatch):
    for name in _TOKEN_VARS:
        monkeypatch.delenv(name, raising=False)


def test_get_github_token_variants(monkeypatch, no_token_env):
    with pytest.raises(ConfigError) as excinfo:
        http_clients._get_github_token()
    assert str(excinfo.value) == "GITHUB_AUTH_TOKEN environment variable is not set"

    monkeypatch.setenv("GITHUB_TOKEN", "  abc123  ")
    assert http_clients._get_github_token() == "abc123"

    monkeypatch.setenv("GITHUB_AUTH_TOKEN", "primary")
    assert http_clients._get_github_token() == "primary"

    monkeypatch.setenv("GITHUB_AUTH_TOKEN", "   ")
    with pytest.raises(ConfigError) as excinfo:
        http_clients._get_github_token()
    assert str(excinfo.value) == "GITHUB_AUTH_TOKEN environment variable is empty"
    assert http_clients._get_optional_github_token() is None


@pytest.mark.asyncio
async def test_github_context_without_token_never_opens_client(monkeypatch, no_token_env):
    def explode(*args, **kwargs):  # pragma: no cover - must not be called
        raise AssertionError("client should not be created")

    monkeypatch.setattr(http_clients.httpx, "AsyncClient", explode)

    with pytest.raises(ConfigError):
        async with github_context():
            pass


@pytest.mark.asyncio
async def test_github_request_sends_auth_headers_and_drops_none_params():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["headers"] = request.headers
        return httpx.Response(200, json={"ok": True}, headers={"Link": '<x?page=2>; rel="next"'})

    async with github_context("secret", transport=httpx.MockTransport(handler)) as ctx:
        resp = await github_request(ctx, "GET", "/repos/o/r/issues", params={"state": "open", "labels": None})

    assert captured["method"] == "GET"
    assert captured["url"] == "https://api.github.com/repos/o/r/issues?state=open"
    assert captured["headers"]["Authorization"] == "Bearer secret"
    assert captured["headers"]["Accept"] == "application/vnd.github.v3+json"
    assert captured["headers"]["User-Agent"] == "MCP-GitHub-Issue-Creator"
    assert isinstance(resp, GitHubResponse)
    assert resp.json == {"ok": True}
    assert resp.link_header == '<x?page=2>; rel="next"'


@pytest.mark.asyncio
async def test_github_request_accept_override_and_json_body():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["accept"] = request.headers["Accept"]
        captured["body"] = request.content
        return httpx.Response(201, json={"number": 1})

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        await github_request(
            ctx,
            "POST",
            "/repos/o/r/issues",
            json_body={"title": "x"},
            accept="application/vnd.github.full+json",
        )

    assert captured["accept"] == "application/vnd.github.full+json"
    assert b'"title"' in captured["body"]


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (httpx.Response(404, json={"message": "Not Found"}), "404 - Not Found"),
        (httpx.Response(422, json={"errors": ["bad"]}), '422 - {"errors": ["bad"]}'),
        (httpx.Response(502, text="Bad gateway upstream"), "502 - Bad gateway upstream"),
        (httpx.Response(500), "500 - Internal Server Error"),
    ],
)
@pytest.mark.asyncio
async def test_github_request_upstream_error_messages(response, expected):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        with pytest.raises(UpstreamError) as excinfo:
            await github_request(ctx, "GET", "/x")

    assert str(excinfo.value) == expected
    assert excinfo.value.status_code == response.status_code


@pytest.mark.asyncio
async def test_github_request_invalid_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        with pytest.raises(UpstreamError) as excinfo:
            await github_request(ctx, "GET", "/x")

    assert excinfo.value.message == "Response body is not valid JSON"


@pytest.mark.asyncio
async def test_github_request_empty_body_is_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        resp = await github_request(ctx, "DELETE", "/x")

    assert resp.status_code == 204
    assert resp.json is None


@pytest.mark.asyncio
async def test_github_request_transport_failure_records_metrics():
    _reset_metrics_for_tests()

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        with pytest.raises(TransportError) as excinfo:
            await github_request(ctx, "GET", "/x")

    assert "GitHub request failed" in str(excinfo.value)
    github = _metrics_snapshot()["github"]
    assert github["requests_total"] == 1
    assert github["errors_total"] == 1
    assert github["timeouts_total"] == 1


@pytest.mark.asyncio
async def test_rate_limited_response_counts_rate_limit_event():
    _reset_metrics_for_tests()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403,
            json={"message": "API rate limit exceeded"},
            headers={"X-RateLimit-Remaining": "0"},
        )

    async with github_context("t", transport=httpx.MockTransport(handler)) as ctx:
        with pytest.raises(UpstreamError):
            await github_request(ctx, "GET", "/x")

    github = _metrics_snapshot()["github"]
    assert github["rate_limit_events_total"] == 1
    assert github["errors_total"] == 1
