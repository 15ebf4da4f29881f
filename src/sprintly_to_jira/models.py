"""Data models for migration from Sprint.ly to JIRA.

Source models are read-only views over Sprint.ly API payloads; unknown keys in
the payload are ignored. DestinationIssue is the JIRA-shaped record that the
CSV layout turns into a row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

# Sprint.ly statuses that map to a JIRA "Done" resolution
RESOLVED_STATUSES: Final[frozenset[str]] = frozenset({"completed", "accepted"})
RESOLUTION_DONE: Final[str] = "Done"


@dataclass(frozen=True)
class Person:
    """A Sprint.ly user, used only as a lookup key into the user map."""

    email: str
    first_name: str = ""
    last_name: str = ""
    id: int | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any] | None) -> Person | None:
        if not payload:
            return None
        return cls(
            email=payload.get("email") or "",
            first_name=payload.get("first_name") or "",
            last_name=payload.get("last_name") or "",
            id=payload.get("id"),
        )

    @property
    def display_name(self) -> str:
        # Sprint.ly sometimes stores the full name in first_name already
        first = self.first_name.strip()
        last = self.last_name.strip()
        if first and last and not first.endswith(last):
            return f"{first} {last}"
        return first or last or self.email


@dataclass(frozen=True)
class SourceComment:
    """A comment on a Sprint.ly item (includes commit comments)."""

    body: str
    created_at: str = ""
    created_by: Person | None = None
    type: str = "comment"
    id: int | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SourceComment:
        return cls(
            body=payload.get("body") or "",
            created_at=payload.get("created_at") or "",
            created_by=Person.from_dict(payload.get("created_by")),
            type=payload.get("type") or "comment",
            id=payload.get("id"),
        )


@dataclass(frozen=True)
class SourceAttachment:
    """A file attached to a Sprint.ly item."""

    href: str

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SourceAttachment:
        return cls(href=payload["href"])


@dataclass(frozen=True)
class SourceItem:
    """A Sprint.ly item as returned by the items API."""

    number: int
    status: str
    title: str = ""
    description: str = ""
    created_at: str = ""
    last_modified: str = ""
    tags: tuple[str, ...] = ()
    created_by: Person | None = None
    assigned_to: Person | None = None
    type: str | None = None
    score: str | None = None
    product_id: int | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SourceItem:
        product = payload.get("product") or {}
        return cls(
            number=int(payload["number"]),
            status=payload.get("status") or "",
            title=payload.get("title") or "",
            description=payload.get("description") or "",
            created_at=payload.get("created_at") or "",
            last_modified=payload.get("last_modified") or "",
            tags=tuple(payload.get("tags") or ()),
            created_by=Person.from_dict(payload.get("created_by")),
            assigned_to=Person.from_dict(payload.get("assigned_to")),
            type=payload.get("type"),
            score=payload.get("score"),
            product_id=product.get("id"),
        )


@dataclass
class DestinationIssue:
    """A JIRA issue ready for CSV layout.

    comments and attachments stay None until they are transformed separately,
    since attachments need async resolution.
    """

    issue_id: int
    issue_key: str
    issue_type: str
    summary: str
    description: str
    status: str
    reporter: str | None
    assignee: str | None = None
    parent_id: int | None = None
    date_created: str = ""
    date_modified: str = ""
    labels: list[str] = field(default_factory=list)
    comments: list[str] | None = None
    attachments: list[str] | None = None

    @property
    def resolution(self) -> str | None:
        return RESOLUTION_DONE if self.status in RESOLVED_STATUSES else None
