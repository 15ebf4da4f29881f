"""Fixed-width JIRA CSV layout.

JIRA's CSV importer needs one column per label, comment and attachment, so
every row reserves a fixed number of columns for each. Rows that would not fit
are rejected rather than truncated, since truncation silently drops data.
"""

from __future__ import annotations

import csv
import logging
from typing import TYPE_CHECKING, Final

from .exceptions import ColumnOverflowError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from .models import DestinationIssue

logger: logging.Logger = logging.getLogger(__name__)

FIXED_COLUMNS: Final[tuple[str, ...]] = (
    "Issue Key",
    "Issue Id",
    "Parent Id",
    "Issue Type",
    "Summary",
    "Assignee",
    "Reporter",
    "Description",
    "Status",
    "Date Created",
    "Date Modified",
    "Resolution",
)


def _cell(value: object) -> str:
    return "" if value is None else str(value)


class CsvLayout:
    """Header and row builder for a given set of column bounds."""

    def __init__(self, *, max_labels: int, max_comments: int, max_attachments: int) -> None:
        bounds = {"maxLabels": max_labels, "maxComments": max_comments, "maxAttachments": max_attachments}
        for name, bound in bounds.items():
            if bound < 0:
                msg = f"{name} must not be negative, got {bound}"
                raise ValueError(msg)
        self.max_labels: int = max_labels
        self.max_comments: int = max_comments
        self.max_attachments: int = max_attachments

    @property
    def row_length(self) -> int:
        return len(FIXED_COLUMNS) + self.max_labels + self.max_comments + self.max_attachments

    def header_row(self) -> list[str]:
        header = list(FIXED_COLUMNS)
        header += [f"Label {i}" for i in range(1, self.max_labels + 1)]
        header += [f"Comment {i}" for i in range(1, self.max_comments + 1)]
        header += [f"Attachment {i}" for i in range(1, self.max_attachments + 1)]
        return header

    def row_for(self, issue: DestinationIssue) -> list[str]:
        """Lay out one issue as a CSV row of row_length cells.

        Raises:
            ColumnOverflowError: If labels, comments or attachments exceed their bound
        """
        row = [
            issue.issue_key,
            _cell(issue.issue_id),
            _cell(issue.parent_id),
            issue.issue_type,
            issue.summary,
            _cell(issue.assignee),
            _cell(issue.reporter),
            issue.description,
            issue.status,
            issue.date_created,
            issue.date_modified,
            _cell(issue.resolution),
        ]
        row += self._padded(issue, "labels", issue.labels, self.max_labels)
        row += self._padded(issue, "comments", issue.comments or [], self.max_comments)
        row += self._padded(issue, "attachments", issue.attachments or [], self.max_attachments)
        return row

    @staticmethod
    def _padded(issue: DestinationIssue, field: str, values: Sequence[str], bound: int) -> list[str]:
        if len(values) > bound:
            raise ColumnOverflowError(issue.issue_id, field, len(values), bound)
        return [_cell(v) for v in values] + [""] * (bound - len(values))

    def transform_all_items_to_csv_array(self, issues: Iterable[DestinationIssue]) -> list[list[str]]:
        """Header row followed by one row per issue, in input order."""
        return [self.header_row(), *(self.row_for(issue) for issue in issues)]

    @staticmethod
    def write_csv(rows: Iterable[Sequence[str]], path: Path) -> int:
        """Write rows to a UTF-8 CSV file, returning the number of rows written."""
        count = 0
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL)
            for row in rows:
                writer.writerow(row)
                count += 1
        logger.info(f"Wrote {count} CSV rows to {path}")
        return count
