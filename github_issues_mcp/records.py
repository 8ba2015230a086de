"""Decoded GitHub records.

Each record keeps only the fields the formatter reads. Optional upstream
fields stay ``None`` (or an empty collection / zero count) when GitHub omits
them, so building a record from any mapping never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

REACTION_KEYS = ("+1", "-1", "laugh", "hooray", "confused", "heart", "rocket", "eyes")


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _int_or_zero(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    return value if isinstance(value, int) else 0


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, int) else None


def _login(raw: Any) -> Optional[str]:
    if isinstance(raw, Mapping):
        return _str_or_none(raw.get("login"))
    return None


def _logins(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    return [login for login in (_login(item) for item in raw) if login]


def _label_names(raw: Any) -> List[str]:
    names: List[str] = []
    if isinstance(raw, list):
        for item in raw:
            # Labels come back as objects, but the issues API also accepts and
            # occasionally echoes plain strings.
            if isinstance(item, Mapping) and isinstance(item.get("name"), str):
                names.append(item["name"])
            elif isinstance(item, str):
                names.append(item)
    return names


@dataclass(frozen=True)
class IssueRecord:
    number: Optional[int] = None
    title: str = ""
    state: str = ""
    body: Optional[str] = None
    body_text: Optional[str] = None
    body_html: Optional[str] = None
    html_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None
    author: Optional[str] = None
    author_association: Optional[str] = None
    assignees: List[str] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    milestone: Optional[str] = None
    comments: int = 0
    is_pull_request: bool = False
    reactions: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: Any) -> "IssueRecord":
        data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        milestone = data.get("milestone")
        reactions_raw = data.get("reactions")
        reactions_raw = reactions_raw if isinstance(reactions_raw, Mapping) else {}

        reactions = {"total": _int_or_zero(reactions_raw.get("total_count"))}
        for key in REACTION_KEYS:
            reactions[key] = _int_or_zero(reactions_raw.get(key))

        return cls(
            number=_int_or_none(data.get("number")),
            title=_str_or_none(data.get("title")) or "",
            state=_str_or_none(data.get("state")) or "",
            body=_str_or_none(data.get("body")),
            body_text=_str_or_none(data.get("body_text")),
            body_html=_str_or_none(data.get("body_html")),
            html_url=_str_or_none(data.get("html_url")),
            created_at=_str_or_none(data.get("created_at")),
            updated_at=_str_or_none(data.get("updated_at")),
            closed_at=_str_or_none(data.get("closed_at")),
            author=_login(data.get("user")),
            author_association=_str_or_none(data.get("author_association")),
            assignees=_logins(data.get("assignees")),
            labels=_label_names(data.get("labels")),
            milestone=_str_or_none(milestone.get("title")) if isinstance(milestone, Mapping) else None,
            comments=_int_or_zero(data.get("comments")),
            is_pull_request=bool(data.get("pull_request")),
            reactions=reactions,
        )


@dataclass(frozen=True)
class RepositoryRecord:
    name: str = ""
    full_name: Optional[str] = None
    description: Optional[str] = None
    private: bool = False
    fork: bool = False
    archived: bool = False
    disabled: bool = False
    language: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    size: int = 0
    default_branch: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    pushed_at: Optional[str] = None
    html_url: Optional[str] = None
    clone_url: Optional[str] = None
    topics: List[str] = field(default_factory=list)

    @property
    def visibility(self) -> str:
        return "private" if self.private else "public"

    @classmethod
    def from_api(cls, raw: Any) -> "RepositoryRecord":
        data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        topics = data.get("topics")
        return cls(
            name=_str_or_none(data.get("name")) or "",
            full_name=_str_or_none(data.get("full_name")),
            description=_str_or_none(data.get("description")),
            private=bool(data.get("private")),
            fork=bool(data.get("fork")),
            archived=bool(data.get("archived")),
            disabled=bool(data.get("disabled")),
            language=_str_or_none(data.get("language")),
            stargazers_count=_int_or_zero(data.get("stargazers_count")),
            watchers_count=_int_or_zero(data.get("watchers_count")),
            forks_count=_int_or_zero(data.get("forks_count")),
            open_issues_count=_int_or_zero(data.get("open_issues_count")),
            size=_int_or_zero(data.get("size")),
            default_branch=_str_or_none(data.get("default_branch")),
            created_at=_str_or_none(data.get("created_at")),
            updated_at=_str_or_none(data.get("updated_at")),
            pushed_at=_str_or_none(data.get("pushed_at")),
            html_url=_str_or_none(data.get("html_url")),
            clone_url=_str_or_none(data.get("clone_url")),
            topics=[t for t in topics if isinstance(t, str)] if isinstance(topics, list) else [],
        )


@dataclass(frozen=True)
class OrganizationRecord:
    login: str = ""
    id: Optional[int] = None
    description: Optional[str] = None
    html_url: Optional[str] = None
    avatar_url: Optional[str] = None
    repos_url: Optional[str] = None

    @property
    def url(self) -> str:
        return self.html_url or f"https://github.com/{self.login}"

    @classmethod
    def from_api(cls, raw: Any) -> "OrganizationRecord":
        data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        return cls(
            login=_str_or_none(data.get("login")) or "",
            id=_int_or_none(data.get("id")),
            description=_str_or_none(data.get("description")),
            html_url=_str_or_none(data.get("html_url")),
            avatar_url=_str_or_none(data.get("avatar_url")),
            repos_url=_str_or_none(data.get("repos_url")),
        )


__all__ = ["IssueRecord", "OrganizationRecord", "RepositoryRecord"]
