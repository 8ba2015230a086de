"""Text rendering for tool results.

Every function here is pure: the same record always renders to the same text,
and records with missing optional fields still render (with defaults).
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config import BODY_PREVIEW_CHARS
from .pagination import PaginatedResult
from .records import IssueRecord, OrganizationRecord, RepositoryRecord

NO_DESCRIPTION = "(No description)"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def body_preview(body: Optional[str], limit: int = BODY_PREVIEW_CHARS) -> str:
    """Single-line preview of an issue body, cut at ``limit`` characters."""

    text = body.strip() if body else ""
    if not text:
        return NO_DESCRIPTION
    if len(text) > limit:
        text = text[:limit] + "..."
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def count_summary(count: int, noun: str, scope: str) -> str:
    return f"Found {count} {noun} {scope}"


def pagination_note(
    noun: str,
    result: PaginatedResult,
    *,
    max_results: Optional[int] = None,
    single_page: bool = False,
) -> str:
    parts: List[str] = []
    if result.has_more:
        # A capped page was truncated, so "next page" would skip its tail.
        if single_page and not result.capped:
            parts.append(f"More {noun} available on page {result.next_page}.")
        elif max_results:
            parts.append(
                "More results available. "
                f"Showing first {len(result.items)} results (limited by max_results)."
            )
        else:
            parts.append(
                "More results available. "
                "Use max_results parameter to limit results or increase per_page."
            )
    if result.estimated_total and not max_results:
        parts.append(f"Estimated total: ~{result.estimated_total} {noun}.")
    return " ".join(parts)


def _join_sections(*sections: str) -> str:
    return "\n\n".join(section for section in sections if section)


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


def _number(issue: IssueRecord) -> str:
    return str(issue.number) if issue.number is not None else "?"


def format_issue_line(issue: IssueRecord) -> str:
    marker = " (PR)" if issue.is_pull_request else ""
    return f"#{_number(issue)}: {issue.title} [{issue.state}]{marker}\n   {body_preview(issue.body)}"


def format_issue_listing(
    full_name: str,
    issues: Sequence[IssueRecord],
    result: PaginatedResult,
    *,
    max_results: Optional[int] = None,
) -> str:
    summary = count_summary(len(issues), "issue(s)", f"in {full_name}")
    listing = "\n\n".join(format_issue_line(issue) for issue in issues)
    return _join_sections(
        summary,
        listing,
        pagination_note("issues", result, max_results=max_results),
    )


def issue_detail(issue: IssueRecord) -> Dict[str, Any]:
    detail: Dict[str, Any] = {
        "number": issue.number,
        "title": issue.title,
        "state": issue.state,
        "body": issue.body,
    }
    # Only present when the requested media type asked for them.
    if issue.body_text is not None:
        detail["body_text"] = issue.body_text
    if issue.body_html is not None:
        detail["body_html"] = issue.body_html
    detail.update(
        {
            "created_at": issue.created_at,
            "updated_at": issue.updated_at,
            "closed_at": issue.closed_at,
            "author": issue.author,
            "author_association": issue.author_association,
            "assignees": list(issue.assignees),
            "labels": list(issue.labels),
            "milestone": issue.milestone,
            "comments": issue.comments,
            "is_pull_request": issue.is_pull_request,
            "html_url": issue.html_url,
            "reactions": dict(issue.reactions),
        }
    )
    return detail


def format_issue_detail(issue: IssueRecord) -> str:
    pr = " (Pull Request)" if issue.is_pull_request else ""
    header = "\n".join(
        [
            f"Issue #{_number(issue)}: {issue.title}",
            f"State: {issue.state}{pr}",
            f"Author: @{issue.author or 'unknown'}",
            f"Created: {issue.created_at or 'unknown'}",
        ]
    )
    return f"{header}\n\n{_dump(issue_detail(issue))}"


def format_created_issue(issue: IssueRecord) -> str:
    return f"Successfully created issue #{issue.number}: {issue.title}\nURL: {issue.html_url}"


def format_updated_issue(issue_number: int, issue: IssueRecord, changes: Iterable[str]) -> str:
    changed = "\n".join(f"- {change}" for change in changes)
    return (
        f"Successfully updated issue #{issue_number}: {issue.title}\n\n"
        f"Updated fields:\n{changed}\n\n"
        f"URL: {issue.html_url}"
    )


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


def repository_summary(repo: RepositoryRecord) -> Dict[str, Any]:
    return {
        "name": repo.name,
        "full_name": repo.full_name,
        "description": repo.description or NO_DESCRIPTION,
        "private": repo.private,
        "fork": repo.fork,
        "created_at": repo.created_at,
        "updated_at": repo.updated_at,
        "pushed_at": repo.pushed_at,
        "size": repo.size,
        "stargazers_count": repo.stargazers_count,
        "watchers_count": repo.watchers_count,
        "language": repo.language,
        "forks_count": repo.forks_count,
        "open_issues_count": repo.open_issues_count,
        "default_branch": repo.default_branch,
        "archived": repo.archived,
        "disabled": repo.disabled,
        "url": repo.html_url,
        "clone_url": repo.clone_url,
        "topics": list(repo.topics),
    }


def format_repository_block(repo: RepositoryRecord) -> str:
    lang = f" ({repo.language})" if repo.language else ""
    status = " [ARCHIVED]" if repo.archived else ""
    return (
        f"• {repo.name} {repo.visibility}{lang}{status}\n"
        f"  {repo.description or NO_DESCRIPTION}\n"
        f"  ★ {repo.stargazers_count} | forks {repo.forks_count} | open issues {repo.open_issues_count}"
    )


def format_repository_listing(
    org: str,
    repos: Sequence[RepositoryRecord],
    result: PaginatedResult,
    *,
    repo_type: str = "all",
    max_results: Optional[int] = None,
    single_page: bool = False,
) -> str:
    summary = count_summary(len(repos), "repositories", f"in {org}")
    if repo_type != "all":
        summary += f" (type: {repo_type})"
    listing = "\n\n".join(format_repository_block(repo) for repo in repos)
    return _join_sections(
        summary,
        listing,
        pagination_note("repositories", result, max_results=max_results, single_page=single_page),
        f"Detailed results:\n{_dump([repository_summary(repo) for repo in repos])}",
    )


# ---------------------------------------------------------------------------
# Organizations
# ---------------------------------------------------------------------------


def organization_summary(org: OrganizationRecord) -> Dict[str, Any]:
    return {
        "login": org.login,
        "id": org.id,
        "description": org.description or NO_DESCRIPTION,
        "url": org.url,
        "avatar_url": org.avatar_url,
        "repos_url": org.repos_url,
    }


def format_organization_line(org: OrganizationRecord) -> str:
    return f"• {org.login} - {org.description or NO_DESCRIPTION}"


def format_organization_listing(
    orgs: Sequence[OrganizationRecord],
    result: PaginatedResult,
    *,
    max_results: Optional[int] = None,
    single_page: bool = False,
) -> str:
    summary = count_summary(len(orgs), "organization(s)", "for authenticated user")
    listing = "\n".join(format_organization_line(org) for org in orgs)
    return _join_sections(
        summary,
        listing,
        pagination_note("organizations", result, max_results=max_results, single_page=single_page),
        f"Detailed results:\n{_dump([organization_summary(org) for org in orgs])}",
    )
