"""
Main migration class for Sprint.ly to JIRA CSV migration.

Items are processed one at a time, in number order. Each item is fetched,
transformed, given its comments and resolved attachments, and checked against
the CSV layout. An item that fails is reported with its number and the field at
fault, and the run continues, so the operator can fix the configuration and
re-run just the failed numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from .attachments import AttachmentResolver
from .comments import transform_item_comments
from .csv_layout import CsvLayout
from .exceptions import MigrationError, SourceFetchError
from .item_transformer import ItemTransformer
from .markdown import MarkdownRewriter
from .user_mapper import UserMapper

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import MigrationConfig
    from .models import DestinationIssue
    from .protocols import AttachmentProxy, ItemSource

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ItemFailure:
    """An item that could not be migrated."""

    item_number: int
    field: str
    message: str


@dataclass
class MigrationReport:
    """Result of a migration run."""

    issues: list[DestinationIssue] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    comments_migrated: int = 0
    attachments_migrated: int = 0

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def failed_numbers(self) -> list[int]:
        return [f.item_number for f in self.failures]

    @property
    def statistics(self) -> dict[str, int]:
        return {
            "issues_migrated": len(self.issues),
            "issues_failed": len(self.failures),
            "comments_migrated": self.comments_migrated,
            "attachments_migrated": self.attachments_migrated,
        }


class SprintlyToJiraMigrator:
    """Migrates a range of Sprint.ly items into JIRA CSV rows."""

    def __init__(
        self,
        config: MigrationConfig,
        source: ItemSource,
        *,
        attachment_proxy: AttachmentProxy | None = None,
        fail_fast: bool = False,
    ) -> None:
        self.config: MigrationConfig = config
        self.source: ItemSource = source
        self.fail_fast: bool = fail_fast

        self.user_mapper: UserMapper = UserMapper(config.user_map)
        self.rewriter: MarkdownRewriter = MarkdownRewriter(
            config.project_map,
            config.jira_base_url,
            config.jira_project_key,
            warn_unmapped_projects=config.warn_unmapped_projects,
        )
        self.transformer: ItemTransformer = ItemTransformer(
            jira_project_key=config.jira_project_key,
            user_mapper=self.user_mapper,
            rewriter=self.rewriter,
            ticket_parent_map=config.ticket_parent_map,
        )
        self.layout: CsvLayout = CsvLayout(
            max_labels=config.max_labels,
            max_comments=config.max_comments,
            max_attachments=config.max_attachments,
        )
        self.attachment_proxy: AttachmentProxy = attachment_proxy or AttachmentResolver(config.file_proxy_base_url)

        logger.info(
            f"Initialized migrator for Sprint.ly product {config.sprintly_project_num} -> "
            f"JIRA project {config.jira_project_key}"
        )

    @staticmethod
    def _fetch(item_number: int, field: str, fetch: Callable[[int], T]) -> T:
        """Call the item source, reporting malformed payloads as a SourceFetchError for this item."""
        try:
            return fetch(item_number)
        except (KeyError, TypeError, ValueError) as e:
            msg = f"malformed payload ({type(e).__name__}: {e})"
            raise SourceFetchError(item_number, msg, field=field) from e

    async def migrate_item(self, item_number: int) -> tuple[DestinationIssue, list[str]]:
        """Fetch and fully transform one item, returning the issue and its CSV row.

        Raises:
            MigrationError: If any step fails for this item
        """
        item = self._fetch(item_number, "item", self.source.get_item)
        issue = self.transformer.transform_item(item)

        comments = self._fetch(item_number, "comments", lambda n: list(self.source.get_comments(n)))
        issue.comments = transform_item_comments(
            comments,
            rewriter=self.rewriter,
            user_mapper=self.user_mapper,
            project_key=self.config.jira_project_key,
            item_number=item_number,
        )

        attachments = self._fetch(item_number, "attachments", lambda n: list(self.source.get_attachments(n)))
        issue.attachments = await self.attachment_proxy.transform_item_attachments(
            attachments, item_number=item_number
        )

        return issue, self.layout.row_for(issue)

    async def migrate(self) -> MigrationReport:
        """Migrate all items in the configured number range.

        Returns:
            MigrationReport with the CSV rows (header first) and per-item failures

        Raises:
            MigrationError: On the first item failure, if fail_fast is set
        """
        report = MigrationReport(rows=[self.layout.header_row()])
        numbers = self.config.item_numbers
        logger.info(f"Migrating items #{numbers.start}..#{numbers.stop - 1}")

        for item_number in numbers:
            try:
                issue, row = await self.migrate_item(item_number)
            except MigrationError as e:
                failure = ItemFailure(item_number, getattr(e, "field", None) or "item", str(e))
                report.failures.append(failure)
                logger.error(f"Item #{item_number} failed ({failure.field}): {e}")
                if self.fail_fast:
                    raise
                continue

            report.issues.append(issue)
            report.rows.append(row)
            report.comments_migrated += len(issue.comments or [])
            report.attachments_migrated += len(issue.attachments or [])
            logger.info(f"Migrated item #{item_number} -> {issue.issue_key}")

        if report.failures:
            logger.warning(
                f"{len(report.failures)} item(s) failed: {', '.join(f'#{n}' for n in report.failed_numbers)}"
            )
        return report

    async def migrate_to_csv(self, path: Path | None = None) -> MigrationReport:
        """Migrate and write the CSV file (configured output path by default)."""
        report = await self.migrate()
        output = path or Path(self.config.output_path)
        try:
            self.layout.write_csv(report.rows, output)
        except OSError as e:
            msg = f"Failed to write CSV file {output}: {e}"
            raise MigrationError(msg) from e
        return report
