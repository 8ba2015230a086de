"""Issue tools: create, list, get and update.

Each function receives an open GitHubContext and returns the text shown to
the caller. Failures raise; the tool decorator turns them into messages.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from github_issues_mcp.exceptions import NoOpUpdateError
from github_issues_mcp.formatting import (
    format_created_issue,
    format_issue_detail,
    format_issue_listing,
    format_updated_issue,
)
from github_issues_mcp.http_clients import GitHubContext, github_request
from github_issues_mcp.mutations import (
    UNSET,
    build_create_payload,
    build_update_payload,
    describe_update,
)
from github_issues_mcp.pagination import paginate
from github_issues_mcp.records import IssueRecord


def _issues_path(owner: str, repo: str) -> str:
    return f"/repos/{owner}/{repo}/issues"


def issue_filters(
    *,
    state: Optional[str] = None,
    assignee: Optional[str] = None,
    creator: Optional[str] = None,
    labels: Optional[List[str]] = None,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if state:
        params["state"] = state
    if assignee:
        params["assignee"] = assignee
    if creator:
        params["creator"] = creator
    if labels:
        params["labels"] = ",".join(labels)
    if sort:
        params["sort"] = sort
    if direction:
        params["direction"] = direction
    return params


async def create_issue(
    ctx: GitHubContext,
    *,
    owner: str,
    repo: str,
    title: str,
    body: Optional[str] = None,
    assignees: Optional[List[str]] = None,
    labels: Optional[List[str]] = None,
    milestone: Optional[int] = None,
) -> str:
    payload = build_create_payload(
        title,
        body=body,
        assignees=assignees,
        labels=labels,
        milestone=milestone,
    )
    resp = await github_request(ctx, "POST", _issues_path(owner, repo), json_body=payload)
    return format_created_issue(IssueRecord.from_api(resp.json))


async def list_issues(
    ctx: GitHubContext,
    *,
    owner: str,
    repo: str,
    state: Optional[str] = None,
    assignee: Optional[str] = None,
    creator: Optional[str] = None,
    labels: Optional[List[str]] = None,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    per_page: int = 30,
    max_results: Optional[int] = None,
) -> str:
    """List a repository's issues (pull requests included), following pages."""

    result = await paginate(
        ctx,
        _issues_path(owner, repo),
        params=issue_filters(
            state=state,
            assignee=assignee,
            creator=creator,
            labels=labels,
            sort=sort,
            direction=direction,
        ),
        per_page=per_page,
        max_results=max_results,
    )
    issues = [IssueRecord.from_api(item) for item in result.items]
    return format_issue_listing(f"{owner}/{repo}", issues, result, max_results=max_results)


async def get_issue(
    ctx: GitHubContext,
    *,
    owner: str,
    repo: str,
    issue_number: int,
    media_type: Optional[str] = None,
) -> str:
    accept = f"application/vnd.github.{media_type}+json" if media_type else None
    resp = await github_request(
        ctx,
        "GET",
        f"{_issues_path(owner, repo)}/{issue_number}",
        accept=accept,
    )
    return format_issue_detail(IssueRecord.from_api(resp.json))


async def update_issue(
    ctx: GitHubContext,
    *,
    owner: str,
    repo: str,
    issue_number: int,
    title: Optional[str] = None,
    body: Optional[str] = None,
    state: Optional[str] = None,
    state_reason: Optional[str] = None,
    labels: Optional[List[str]] = None,
    assignees: Optional[List[str]] = None,
    milestone: Any = UNSET,
) -> str:
    """Patch only the supplied fields; ``milestone=None`` clears the milestone."""

    payload = build_update_payload(
        title=title,
        body=body,
        state=state,
        state_reason=state_reason,
        labels=labels,
        assignees=assignees,
        milestone=milestone,
    )
    if not payload:
        raise NoOpUpdateError()

    resp = await github_request(
        ctx,
        "PATCH",
        f"{_issues_path(owner, repo)}/{issue_number}",
        json_body=payload,
    )
    return format_updated_issue(issue_number, IssueRecord.from_api(resp.json), describe_update(payload))
