"""Transform Sprint.ly items into JIRA issue records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from .exceptions import MissingReporterError
from .models import DestinationIssue

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .markdown import MarkdownRewriter
    from .models import SourceItem
    from .user_mapper import UserMapper

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_ISSUE_TYPE: Final[str] = "Task"
SUB_TASK_ISSUE_TYPE: Final[str] = "Sub-Task"

# Sprint.ly item types whose JIRA name is not just the capitalized type
ISSUE_TYPE_MAP: Final[dict[str, str]] = {
    "defect": "Bug",
    "test": "Task",
}


def map_issue_type(sprintly_type: str | None) -> str:
    """Translate a Sprint.ly item type to a JIRA issue type name."""
    if not sprintly_type:
        return DEFAULT_ISSUE_TYPE
    key = sprintly_type.lower()
    return ISSUE_TYPE_MAP.get(key, key.capitalize())


class ItemTransformer:
    """Converts one SourceItem into a DestinationIssue.

    The result depends only on the item and the read-only maps given here.
    """

    def __init__(
        self,
        *,
        jira_project_key: str,
        user_mapper: UserMapper,
        rewriter: MarkdownRewriter,
        ticket_parent_map: Mapping[int, int] | None = None,
    ) -> None:
        self.jira_project_key: str = jira_project_key
        self.user_mapper: UserMapper = user_mapper
        self.rewriter: MarkdownRewriter = rewriter
        self.ticket_parent_map: Mapping[int, int] = ticket_parent_map or {}

    def issue_key(self, item_number: int) -> str:
        return f"{self.jira_project_key}-{item_number}"

    def transform_item(self, item: SourceItem) -> DestinationIssue:
        """Build the JIRA issue for a Sprint.ly item.

        Raises:
            MissingReporterError: If the item has no created_by
            ConfigurationGapError: If the reporter or assignee email is not in the user map
        """
        if item.created_by is None:
            raise MissingReporterError(item.number)

        parent_id = self.ticket_parent_map.get(item.number)
        issue_type = SUB_TASK_ISSUE_TYPE if parent_id is not None else map_issue_type(item.type)

        reporter = self.user_mapper.map_person(item.created_by, item_number=item.number, field="Reporter")
        assignee = self.user_mapper.map_person(item.assigned_to, item_number=item.number, field="Assignee")

        context = f"item #{item.number}"
        issue = DestinationIssue(
            issue_id=item.number,
            issue_key=self.issue_key(item.number),
            issue_type=issue_type,
            summary=self.rewriter.rewrite(item.title, project_key=self.jira_project_key, context=context),
            description=self.rewriter.rewrite(item.description, project_key=self.jira_project_key, context=context),
            status=item.status,
            reporter=reporter,
            assignee=assignee,
            parent_id=parent_id,
            date_created=item.created_at,
            date_modified=item.last_modified,
            labels=list(item.tags),
        )
        logger.debug(f"Transformed item #{item.number} -> {issue.issue_key} ({issue.issue_type})")
        return issue
