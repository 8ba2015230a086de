"""Authenticated GitHub REST requests.

Every tool invocation opens its own :class:`GitHubContext` through
:func:`github_context`; core operations receive that context explicitly and
never read the credential from the environment themselves.
"""

from __future__ import annotations

import json
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from .config import (
    GITHUB_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_TOKEN_ENV_VARS,
    GITHUB_USER_AGENT,
    HTTPX_TIMEOUT,
)
from .exceptions import ConfigError, TransportError, UpstreamError
from .tool_logging import _github_api_url_for_logs, _record_github_request

# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def _get_github_token() -> str:
    """Return a trimmed GitHub token or raise ConfigError when missing/empty.

    The environment is read on every call so tests (and long-running
    processes) see token changes without reloading modules.
    """

    token = None
    token_source = None
    for env_var in GITHUB_TOKEN_ENV_VARS:
        candidate = os.environ.get(env_var)
        if candidate is not None:
            token = candidate
            token_source = env_var
            break

    if token is None:
        raise ConfigError(f"{GITHUB_TOKEN_ENV_VARS[0]} environment variable is not set")

    token = token.strip()
    if not token:
        raise ConfigError(f"{token_source} environment variable is empty")

    return token


def _get_optional_github_token() -> Optional[str]:
    """Return a trimmed GitHub token or None when missing/empty."""

    try:
        return _get_github_token()
    except ConfigError:
        return None


# ---------------------------------------------------------------------------
# Context and responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GitHubContext:
    """Credential plus HTTP capability for a single tool invocation."""

    token: str
    client: httpx.AsyncClient
    user_agent: str = GITHUB_USER_AGENT
    accept: str = GITHUB_ACCEPT

    def headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        return {
            "Accept": accept or self.accept,
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
        }


@dataclass
class GitHubResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    json: Any = None
    text: str = ""

    @property
    def link_header(self) -> Optional[str]:
        for key, value in self.headers.items():
            if key.lower() == "link":
                return value
        return None


@asynccontextmanager
async def github_context(
    token: Optional[str] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[GitHubContext]:
    """Open a GitHubContext backed by a fresh AsyncClient.

    The token is resolved before the client is created so a missing credential
    never reaches the network.
    """

    resolved = token.strip() if isinstance(token, str) and token.strip() else _get_github_token()

    async with httpx.AsyncClient(
        base_url=GITHUB_API_BASE,
        timeout=HTTPX_TIMEOUT if HTTPX_TIMEOUT > 0 else None,
        follow_redirects=True,
        transport=transport,
    ) as client:
        yield GitHubContext(token=resolved, client=client)


# ---------------------------------------------------------------------------
# Request helper
# ---------------------------------------------------------------------------


def _upstream_message(resp: httpx.Response) -> str:
    """Prefer GitHub's ``message`` field, then the JSON body, then raw text."""

    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase or "Unknown error"

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return json.dumps(body)


async def github_request(
    ctx: GitHubContext,
    method: str,
    path: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json_body: Optional[Dict[str, Any]] = None,
    accept: Optional[str] = None,
) -> GitHubResponse:
    """Perform one authenticated GitHub request.

    Raises UpstreamError for non-success statuses and TransportError for
    network-level failures. No retries are attempted.
    """

    cleaned_params = {k: v for k, v in (params or {}).items() if v is not None}
    url_for_logs = _github_api_url_for_logs(path, params=cleaned_params)
    start = time.time()

    try:
        resp = await ctx.client.request(
            method,
            path,
            params=cleaned_params or None,
            json=json_body,
            headers=ctx.headers(accept),
        )
    except httpx.HTTPError as exc:
        _record_github_request(
            method=method,
            url=url_for_logs,
            status_code=None,
            duration_ms=int((time.time() - start) * 1000),
            error=True,
            exc=exc,
        )
        raise TransportError(f"GitHub request failed: {exc}") from exc

    # Redirects are followed by the client; any other 3xx left here is an error.
    error_flag = not resp.is_success
    _record_github_request(
        method=method,
        url=url_for_logs,
        status_code=resp.status_code,
        duration_ms=int((time.time() - start) * 1000),
        error=error_flag,
        resp=resp,
    )

    if error_flag:
        raise UpstreamError(resp.status_code, _upstream_message(resp))

    payload: Any = None
    if resp.content:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError(resp.status_code, "Response body is not valid JSON") from exc

    return GitHubResponse(
        status_code=resp.status_code,
        headers=dict(resp.headers),
        json=payload,
        text=resp.text,
    )


__all__ = [
    "GitHubContext",
    "GitHubResponse",
    "_get_github_token",
    "_get_optional_github_token",
    "github_context",
    "github_request",
]
