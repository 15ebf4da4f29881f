"""Format Sprint.ly comments for JIRA CSV comment columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .markdown import MarkdownRewriter
    from .models import SourceComment
    from .user_mapper import UserMapper


def format_comment(created_at: str, author: str, body: str) -> str:
    """Render a comment in JIRA's "date; author; body" CSV import format."""
    return f"{created_at}; {author}; {body}"


def transform_item_comments(
    comments: Iterable[SourceComment],
    *,
    rewriter: MarkdownRewriter,
    user_mapper: UserMapper,
    project_key: str | None = None,
    item_number: int | None = None,
) -> list[str]:
    """Transform an item's comments into CSV cell strings, preserving order.

    Unmapped authors fall back to their Sprint.ly name instead of failing,
    as comment authorship is informational only.
    """
    context = f"comments of item #{item_number}" if item_number is not None else "comments"
    return [
        format_comment(
            comment.created_at,
            user_mapper.display_name(comment.created_by),
            rewriter.rewrite(comment.body, project_key=project_key, context=context),
        )
        for comment in comments
    ]
