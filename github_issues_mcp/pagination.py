"""Page-by-page aggregation shared by every listing tool.

GitHub signals continuation through the ``Link`` response header::

    <https://api.github.com/repositories/1/issues?page=2&per_page=20>; rel="next",
    <https://api.github.com/repositories/1/issues?page=3&per_page=20>; rel="last"

:func:`parse_link_header` is the only code that reads that header; the
paginator works with the structured :class:`LinkRelations` it returns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import parse_qs, urlparse

from .config import DEFAULT_PER_PAGE, MAX_PER_PAGE, PAGINATION_LOGGER
from .http_clients import GitHubContext, github_request
from .metrics import _record_listing

_LINK_RE = re.compile(r'<(?P<url>[^>]*)>\s*;\s*rel="(?P<rel>[^"]*)"')


@dataclass(frozen=True)
class LinkRelations:
    has_next: bool = False
    last_page: Optional[int] = None


def _page_from_url(url: str) -> Optional[int]:
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[-1])
    except ValueError:
        return None


def parse_link_header(header: Optional[str]) -> LinkRelations:
    """Return the continuation relations encoded in a ``Link`` header."""

    if not header:
        return LinkRelations()

    has_next = False
    last_page: Optional[int] = None
    for match in _LINK_RE.finditer(header):
        rels = match.group("rel").split()
        if "next" in rels:
            has_next = True
        if "last" in rels and last_page is None:
            last_page = _page_from_url(match.group("url"))
    return LinkRelations(has_next=has_next, last_page=last_page)


def effective_page_size(requested: Optional[int]) -> int:
    """Clamp the requested page size to GitHub's 1..100 range."""

    if requested is None:
        return DEFAULT_PER_PAGE
    return max(1, min(int(requested), MAX_PER_PAGE))


@dataclass
class PaginatedResult:
    items: List[Any] = field(default_factory=list)
    has_more: bool = False
    estimated_total: Optional[int] = None
    pages_fetched: int = 0
    per_page: int = DEFAULT_PER_PAGE
    start_page: int = 1
    # True when max_results cut the listing short.
    capped: bool = False

    @property
    def next_page(self) -> int:
        return self.start_page + self.pages_fetched


async def paginate(
    ctx: GitHubContext,
    path: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    per_page: Optional[int] = DEFAULT_PER_PAGE,
    max_results: Optional[int] = None,
    start_page: int = 1,
    max_pages: Optional[int] = None,
) -> PaginatedResult:
    """Fetch pages of ``path`` sequentially and aggregate their items.

    Stops when the server stops advertising a ``next`` page, when a page comes
    back short, when ``max_results`` items were collected (the result is then
    truncated to exactly ``max_results`` and ``has_more`` is forced on) or
    after ``max_pages`` pages. Any request failure propagates; no partial
    result is returned.
    """

    size = effective_page_size(per_page)
    result = PaginatedResult(per_page=size, start_page=start_page)
    page = start_page
    while True:
        query: Dict[str, Any] = dict(params or {})
        query["page"] = page
        query["per_page"] = size

        response = await github_request(ctx, "GET", path, params=query)
        page_items = response.json if isinstance(response.json, list) else []
        result.items.extend(page_items)
        result.pages_fetched += 1

        relations = parse_link_header(response.link_header)
        result.has_more = relations.has_next
        if result.estimated_total is None and relations.last_page is not None:
            result.estimated_total = relations.last_page * size

        PAGINATION_LOGGER.detailed(
            "Fetched %s page %s (%s items, total %s, next=%s)",
            path,
            page,
            len(page_items),
            len(result.items),
            relations.has_next,
        )

        if max_results and len(result.items) >= max_results:
            del result.items[max_results:]
            result.has_more = True
            result.capped = True
            break

        if not result.has_more or len(page_items) < size:
            break

        if max_pages is not None and result.pages_fetched >= max_pages:
            break

        page += 1

    _record_listing(pages=result.pages_fetched, items=len(result.items), capped=result.capped)
    return result


__all__ = [
    "LinkRelations",
    "PaginatedResult",
    "effective_page_size",
    "paginate",
    "parse_link_header",
]
