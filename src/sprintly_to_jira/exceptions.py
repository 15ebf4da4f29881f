"""
Custom exception classes for the Sprint.ly to JIRA migration tool.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for migration errors."""


class ConfigError(MigrationError):
    """Raised when the migration configuration file is missing or invalid."""


class ConfigurationGapError(MigrationError):
    """Raised when a Sprint.ly user has no entry in the user map.

    An explicit ``null`` entry is a valid mapping; only a missing key is a gap.
    """

    def __init__(self, email: str, *, item_number: int | None = None, field: str | None = None) -> None:
        self.email: str = email
        self.item_number: int | None = item_number
        self.field: str | None = field
        where = f" ({field} of item #{item_number})" if item_number is not None else ""
        super().__init__(f"Unmapped user: {email}{where}. Add it to userMap (use null for no JIRA user).")


class MissingReporterError(MigrationError):
    """Raised when a Sprint.ly item has no created_by person."""

    def __init__(self, item_number: int) -> None:
        self.item_number: int = item_number
        self.field: str = "Reporter"
        super().__init__(f"Item #{item_number} has no created_by; cannot determine Reporter")


class ColumnOverflowError(MigrationError):
    """Raised when an item has more labels/comments/attachments than columns allocated."""

    def __init__(self, item_number: int | None, field: str, count: int, bound: int) -> None:
        self.item_number: int | None = item_number
        self.field: str = field
        self.count: int = count
        self.bound: int = bound
        super().__init__(
            f"Item #{item_number} has {count} {field} but only {bound} columns are configured. "
            f"Increase the max{field.capitalize()} setting."
        )


class AttachmentResolutionError(MigrationError):
    """Raised when the file proxy cannot resolve an attachment to a public URL."""

    def __init__(self, item_number: int | None, href: str, reason: str = "") -> None:
        self.item_number: int | None = item_number
        self.href: str = href
        self.field: str = "attachments"
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to resolve attachment {href} of item #{item_number}{detail}")


class SourceFetchError(MigrationError):
    """Raised when an item cannot be fetched from Sprint.ly."""

    def __init__(self, item_number: int, message: str, *, field: str = "item") -> None:
        self.item_number: int = item_number
        self.field: str = field
        super().__init__(f"Failed to fetch {field} for item #{item_number}: {message}")
