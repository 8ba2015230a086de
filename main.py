"""GitHub issues MCP server.

This module is the entry point. It registers the issue, organization and
repository tools plus the ``create-ticket`` prompt on the shared FastMCP
instance and exposes an ASGI ``app`` (SSE transport) for ``uvicorn main:app``.

Every tool opens its own GitHub context (credential + HTTP client) and hands
it to the implementation in ``github_issues_mcp.main_tools``.
"""

from typing import Annotated, List, Literal, Optional

from pydantic import Field

from github_issues_mcp.config import DEFAULT_PER_PAGE, MAX_PER_PAGE
from github_issues_mcp.http_clients import github_context
from github_issues_mcp.http_routes.healthz import register_healthz_route
from github_issues_mcp.mcp_server.context import mcp
from github_issues_mcp.mcp_server.decorators import mcp_tool
from github_issues_mcp.mutations import UNSET

Owner = Annotated[str, Field(description="Repository owner's username or organization")]
Repo = Annotated[str, Field(description="Repository name")]
PerPage = Annotated[
    int,
    Field(ge=1, le=MAX_PER_PAGE, description=f"Results per page (default: {DEFAULT_PER_PAGE}, max: {MAX_PER_PAGE})"),
]
MaxResults = Annotated[
    Optional[int],
    Field(ge=1, description="Maximum total results to return (handles pagination automatically)"),
]
Page = Annotated[
    Optional[int],
    Field(ge=1, description="Fetch only this page number (omit to follow all pages)"),
]


@mcp_tool(
    name="create_github_issue",
    description="Create a new issue in a GitHub repository.",
    action="creating issue",
    write_action=True,
    tags=["issues", "write"],
)
async def create_github_issue(
    owner: Owner,
    repo: Repo,
    title: Annotated[str, Field(description="Issue title")],
    body: Annotated[Optional[str], Field(description="Issue description")] = None,
    assignees: Annotated[Optional[List[str]], Field(description="Array of usernames to assign")] = None,
    labels: Annotated[Optional[List[str]], Field(description="Array of label names")] = None,
    milestone: Annotated[Optional[int], Field(description="Milestone number")] = None,
) -> str:
    from github_issues_mcp.main_tools.issues import create_issue as _impl

    async with github_context() as ctx:
        return await _impl(
            ctx,
            owner=owner,
            repo=repo,
            title=title,
            body=body,
            assignees=assignees,
            labels=labels,
            milestone=milestone,
        )


@mcp_tool(
    name="list_github_issues",
    description="List issues in a GitHub repository, following pagination up to max_results.",
    action="listing issues",
    tags=["issues", "read"],
)
async def list_github_issues(
    owner: Owner,
    repo: Repo,
    state: Annotated[
        Optional[Literal["open", "closed", "all"]], Field(description="Filter by state (default: open)")
    ] = None,
    assignee: Annotated[Optional[str], Field(description="Filter by assignee username")] = None,
    creator: Annotated[Optional[str], Field(description="Filter by creator username")] = None,
    labels: Annotated[Optional[List[str]], Field(description="Array of label names to filter by")] = None,
    sort: Annotated[
        Optional[Literal["created", "updated", "comments"]], Field(description="Sort criteria (default: created)")
    ] = None,
    direction: Annotated[
        Optional[Literal["asc", "desc"]], Field(description="Sort direction (default: desc)")
    ] = None,
    per_page: PerPage = DEFAULT_PER_PAGE,
    max_results: MaxResults = None,
) -> str:
    from github_issues_mcp.main_tools.issues import list_issues as _impl

    async with github_context() as ctx:
        return await _impl(
            ctx,
            owner=owner,
            repo=repo,
            state=state,
            assignee=assignee,
            creator=creator,
            labels=labels,
            sort=sort,
            direction=direction,
            per_page=per_page,
            max_results=max_results,
        )


@mcp_tool(
    name="get_github_issue",
    description="Get a single GitHub issue with labels, assignees, milestone and reactions.",
    action="getting issue",
    tags=["issues", "read"],
)
async def get_github_issue(
    owner: Owner,
    repo: Repo,
    issue_number: Annotated[int, Field(description="Issue number to retrieve")],
    media_type: Annotated[
        Optional[Literal["raw", "text", "html", "full"]],
        Field(description="Media type for the response (default: raw)"),
    ] = None,
) -> str:
    from github_issues_mcp.main_tools.issues import get_issue as _impl

    async with github_context() as ctx:
        return await _impl(ctx, owner=owner, repo=repo, issue_number=issue_number, media_type=media_type)


@mcp_tool(
    name="update_github_issue",
    description="Update an existing GitHub issue. Only supplied fields change; milestone=null removes the milestone.",
    action="updating issue",
    write_action=True,
    tags=["issues", "write"],
)
async def update_github_issue(
    owner: Owner,
    repo: Repo,
    issue_number: Annotated[int, Field(description="Issue number to update")],
    title: Annotated[Optional[str], Field(description="New title for the issue")] = None,
    body: Annotated[Optional[str], Field(description="New body content for the issue")] = None,
    state: Annotated[Optional[Literal["open", "closed"]], Field(description="Issue state")] = None,
    state_reason: Annotated[
        Optional[Literal["completed", "not_planned", "reopened"]],
        Field(description="Reason for closing (only when state is 'closed')"),
    ] = None,
    labels: Annotated[Optional[List[str]], Field(description="Array of label names to set")] = None,
    assignees: Annotated[Optional[List[str]], Field(description="Array of usernames to assign")] = None,
    milestone: Annotated[Optional[int], Field(description="Milestone number (null to remove)")] = UNSET,
) -> str:
    from github_issues_mcp.main_tools.issues import update_issue as _impl

    async with github_context() as ctx:
        return await _impl(
            ctx,
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            title=title,
            body=body,
            state=state,
            state_reason=state_reason,
            labels=labels,
            assignees=assignees,
            milestone=milestone,
        )


@mcp_tool(
    name="get_github_organisations",
    description="List organizations for the authenticated GitHub user.",
    action="listing organizations",
    tags=["organizations", "read"],
)
async def get_github_organisations(
    per_page: PerPage = DEFAULT_PER_PAGE,
    page: Page = None,
    max_results: MaxResults = None,
) -> str:
    from github_issues_mcp.main_tools.repositories import list_user_organizations as _impl

    async with github_context() as ctx:
        return await _impl(ctx, per_page=per_page, page=page, max_results=max_results)


@mcp_tool(
    name="list_github_repositories",
    description="List repositories of a GitHub organization.",
    action="listing organization repositories",
    tags=["repositories", "read"],
)
async def list_github_repositories(
    org: Annotated[str, Field(description="Organization name")],
    type: Annotated[
        Literal["all", "public", "private", "forks", "sources", "member"],
        Field(description="Type of repositories to list (default: all)"),
    ] = "all",
    sort: Annotated[
        Optional[Literal["created", "updated", "pushed", "full_name"]],
        Field(description="Sort field (default: created)"),
    ] = None,
    direction: Annotated[
        Optional[Literal["asc", "desc"]],
        Field(description="Sort direction (default: desc when using full_name, asc otherwise)"),
    ] = None,
    per_page: PerPage = DEFAULT_PER_PAGE,
    page: Page = None,
    max_results: MaxResults = None,
) -> str:
    from github_issues_mcp.main_tools.repositories import list_org_repositories as _impl

    async with github_context() as ctx:
        return await _impl(
            ctx,
            org=org,
            type=type,
            sort=sort,
            direction=direction,
            per_page=per_page,
            page=page,
            max_results=max_results,
        )


@mcp.prompt(
    name="create-ticket",
    description="Draft a well-structured GitHub issue from rough details.",
)
def create_ticket(rough_details: Optional[str] = None) -> str:
    from github_issues_mcp.main_tools.prompts import render_create_ticket_prompt

    return render_create_ticket_prompt(rough_details)


def validate_environment() -> dict:
    """Check GitHub-related environment settings and report problems."""
    from github_issues_mcp.main_tools.env import validate_environment as _impl

    return _impl()


# ASGI app for ``uvicorn main:app``; the SSE transport serves ``/sse``.
app = mcp.sse_app()
register_healthz_route(app)


if __name__ == "__main__":
    mcp.run()
