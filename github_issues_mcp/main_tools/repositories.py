from __future__ import annotations

from typing import Any, Dict, Optional

from github_issues_mcp.formatting import format_organization_listing, format_repository_listing
from github_issues_mcp.http_clients import GitHubContext
from github_issues_mcp.pagination import paginate
from github_issues_mcp.records import OrganizationRecord, RepositoryRecord


def _page_window(page: Optional[int]) -> Dict[str, Any]:
    """An explicit ``page`` fetches exactly that page; otherwise follow all pages."""

    if page is None:
        return {"start_page": 1, "max_pages": None}
    return {"start_page": max(1, int(page)), "max_pages": 1}


async def list_org_repositories(
    ctx: GitHubContext,
    *,
    org: str,
    type: str = "all",
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    per_page: int = 30,
    page: Optional[int] = None,
    max_results: Optional[int] = None,
) -> str:
    """List repositories of an organization."""

    params: Dict[str, Any] = {"type": type}
    if sort:
        params["sort"] = sort
    if direction:
        params["direction"] = direction

    result = await paginate(
        ctx,
        f"/orgs/{org}/repos",
        params=params,
        per_page=per_page,
        max_results=max_results,
        **_page_window(page),
    )
    repos = [RepositoryRecord.from_api(item) for item in result.items]
    return format_repository_listing(
        org,
        repos,
        result,
        repo_type=type,
        max_results=max_results,
        single_page=page is not None,
    )


async def list_user_organizations(
    ctx: GitHubContext,
    *,
    per_page: int = 30,
    page: Optional[int] = None,
    max_results: Optional[int] = None,
) -> str:
    """List organizations the authenticated user belongs to."""

    result = await paginate(
        ctx,
        "/user/orgs",
        per_page=per_page,
        max_results=max_results,
        **_page_window(page),
    )
    orgs = [OrganizationRecord.from_api(item) for item in result.items]
    return format_organization_listing(
        orgs,
        result,
        max_results=max_results,
        single_page=page is not None,
    )
