import json

import httpx
import pytest

import main
from github_issues_mcp import http_clients


def _use_handler(monkeypatch, handler):
    monkeypatch.setenv("GITHUB_AUTH_TOKEN", "test-token")
    transport = httpx.MockTransport(handler)

    def fake_context(token=None):
        return http_clients.github_context(token, transport=transport)

    monkeypatch.setattr(main, "github_context", fake_context)


def _repo(name, **overrides):
    payload = {
        "name": name,
        "full_name": f"acme/{name}",
        "description": f"{name} repo",
        "private": False,
        "language": "Go",
        "stargazers_count": 1,
        "forks_count": 0,
        "open_issues_count": 0,
        "html_url": f"https://github.com/acme/{name}",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_list_repositories_follows_all_pages(monkeypatch):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        seen.append((request.url.path, params))
        if params["page"] == "1":
            return httpx.Response(
                200,
                json=[_repo("one"), _repo("two")],
                headers={"Link": '<https://api.github.com/orgs/acme/repos?page=2>; rel="next"'},
            )
        return httpx.Response(200, json=[_repo("three", archived=True)])

    _use_handler(monkeypatch, handler)

    result = await main.list_github_repositories(org="acme", sort="full_name", per_page=2)

    assert seen == [
        ("/orgs/acme/repos", {"type": "all", "sort": "full_name", "page": "1", "per_page": "2"}),
        ("/orgs/acme/repos", {"type": "all", "sort": "full_name", "page": "2", "per_page": "2"}),
    ]
    assert result.startswith("Found 3 repositories in acme\n\n")
    assert "• three public (Go) [ARCHIVED]" in result
    detail = json.loads(result.split("Detailed results:\n", 1)[1])
    assert [r["name"] for r in detail] == ["one", "two", "three"]


@pytest.mark.asyncio
async def test_list_repositories_explicit_page_fetches_one_page(monkeypatch):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["page"])
        return httpx.Response(
            200,
            json=[_repo("a"), _repo("b")],
            headers={"Link": '<https://api.github.com/orgs/acme/repos?page=4>; rel="next"'},
        )

    _use_handler(monkeypatch, handler)

    result = await main.list_github_repositories(org="acme", type="sources", per_page=2, page=3)

    assert seen == ["3"]
    assert result.startswith("Found 2 repositories in acme (type: sources)")
    assert "More repositories available on page 4." in result


@pytest.mark.asyncio
async def test_list_repositories_error_text(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    _use_handler(monkeypatch, handler)

    result = await main.list_github_repositories(org="ghost")
    assert result == "Error listing organization repositories: 404 - Not Found"


@pytest.mark.asyncio
async def test_get_organisations_lists_memberships(monkeypatch):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.path, dict(request.url.params)))
        return httpx.Response(
            200,
            json=[
                {"login": "acme", "id": 1, "description": "Rockets"},
                {"login": "globex", "id": 2, "description": None},
            ],
        )

    _use_handler(monkeypatch, handler)

    result = await main.get_github_organisations(max_results=5)

    assert seen == [("/user/orgs", {"page": "1", "per_page": "30"})]
    assert result.startswith("Found 2 organization(s) for authenticated user\n\n")
    assert "• acme - Rockets\n• globex - (No description)" in result


@pytest.mark.asyncio
async def test_get_organisations_cap(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[{"login": f"org{n}"} for n in range(3)],
            headers={"Link": '<https://api.github.com/user/orgs?page=2>; rel="next"'},
        )

    _use_handler(monkeypatch, handler)

    result = await main.get_github_organisations(per_page=3, max_results=2)

    assert result.startswith("Found 2 organization(s) for authenticated user")
    assert "org2" not in result
    assert "Showing first 2 results (limited by max_results)." in result


@pytest.mark.asyncio
async def test_list_repositories_page_with_cap_does_not_point_past_skipped_items(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        # Last page: no next link.
        return httpx.Response(200, json=[_repo("a"), _repo("b"), _repo("c")])

    _use_handler(monkeypatch, handler)

    result = await main.list_github_repositories(org="acme", per_page=3, page=3, max_results=1)

    assert result.startswith("Found 1 repositories in acme")
    assert "available on page" not in result
    assert "Showing first 1 results (limited by max_results)." in result
