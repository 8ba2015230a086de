"""Create/update payload construction for issues.

``UNSET`` marks a field the caller never mentioned. For updates that is
different from ``None``: an unset field is left out of the PATCH body so
GitHub keeps its current value, while ``None`` on a clearable field (the
milestone) is sent as ``null`` and removes the association.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

CLEARABLE_FIELDS = frozenset({"milestone"})

UPDATE_FIELDS = ("title", "body", "state", "state_reason", "labels", "assignees", "milestone")


def build_create_payload(
    title: str,
    *,
    body: Optional[str] = None,
    assignees: Optional[List[str]] = None,
    labels: Optional[List[str]] = None,
    milestone: Optional[int] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"title": title}
    if body is not None:
        payload["body"] = body
    if assignees is not None:
        payload["assignees"] = assignees
    if labels is not None:
        payload["labels"] = labels
    if milestone is not None:
        payload["milestone"] = milestone
    return payload


def build_update_payload(**fields: Any) -> Dict[str, Any]:
    """Build a PATCH body from the fields the caller actually supplied.

    ``state_reason`` only applies to closing and is dropped unless
    ``state == "closed"``. An empty result means there is nothing to update.
    """

    unknown = set(fields) - set(UPDATE_FIELDS)
    if unknown:
        raise TypeError(f"Unknown update fields: {', '.join(sorted(unknown))}")

    payload: Dict[str, Any] = {}
    for name in UPDATE_FIELDS:
        value = fields.get(name, UNSET)
        if value is UNSET:
            continue
        if value is None and name not in CLEARABLE_FIELDS:
            continue
        payload[name] = value

    if "state_reason" in payload and payload.get("state") != "closed":
        del payload["state_reason"]

    return payload


def _abbreviate(text: str, limit: int = 50) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return f'"{text}"'


def describe_update(payload: Dict[str, Any]) -> List[str]:
    """Human-readable list of the fields a PATCH body changes."""

    changes: List[str] = []
    for name in UPDATE_FIELDS:
        if name not in payload:
            continue
        value = payload[name]
        if name == "title":
            changes.append(f'title: "{value}"')
        elif name == "body":
            changes.append(f"body: {_abbreviate(value or '')}")
        elif name in {"labels", "assignees"}:
            changes.append(f"{name}: [{', '.join(_as_strings(value))}]")
        elif name == "milestone":
            changes.append("milestone: removed" if value is None else f"milestone: #{value}")
        else:
            changes.append(f"{name}: {value}")
    return changes


def _as_strings(values: Iterable[Any]) -> List[str]:
    return [str(v) for v in values or []]


__all__ = [
    "CLEARABLE_FIELDS",
    "UNSET",
    "build_create_payload",
    "build_update_payload",
    "describe_update",
]
