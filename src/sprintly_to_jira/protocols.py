"""Protocols for the collaborators of the migrator.

The migrator only needs two things from the outside world:

1. ItemSource: fetches Sprint.ly items, comments and attachment references
   (implemented by SprintlyClient)
2. AttachmentProxy: turns an attachment reference into a public URL
   (implemented by AttachmentResolver)

Keeping these behind protocols lets the transformation be tested with
in-memory fakes instead of HTTP mocks.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import SourceAttachment, SourceComment, SourceItem


class ItemSource(Protocol):
    """Protocol for reading items from Sprint.ly."""

    def get_item(self, item_number: int) -> SourceItem:
        """Get a single item by its number.

        Raises:
            SourceFetchError: If the item does not exist or cannot be fetched
        """
        ...

    def get_comments(self, item_number: int) -> Iterable[SourceComment]:
        """Return all comments of an item in chronological order."""
        ...

    def get_attachments(self, item_number: int) -> Iterable[SourceAttachment]:
        """Return all attachment references of an item."""
        ...


class AttachmentProxy(Protocol):
    """Protocol for resolving attachments to URLs JIRA can fetch at import time."""

    async def transform_item_attachments(
        self, attachments: Iterable[SourceAttachment], *, item_number: int | None = None
    ) -> list[str]:
        """Resolve all attachments of an item, preserving order.

        Raises:
            AttachmentResolutionError: If any attachment cannot be resolved
        """
        ...
