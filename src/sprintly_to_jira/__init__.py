"""
Sprint.ly to JIRA Migration Tool

Exports Sprint.ly items to a CSV file for JIRA's CSV importer, rewriting
cross-references to JIRA links and mapping users to JIRA usernames.
"""

from __future__ import annotations

from .cli import main
from .config import MigrationConfig
from .csv_layout import CsvLayout
from .exceptions import (
    AttachmentResolutionError,
    ColumnOverflowError,
    ConfigError,
    ConfigurationGapError,
    MigrationError,
    MissingReporterError,
    SourceFetchError,
)
from .item_transformer import ItemTransformer
from .markdown import MarkdownRewriter
from .migrator import MigrationReport, SprintlyToJiraMigrator
from .user_mapper import UserMapper
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "AttachmentResolutionError",
    "ColumnOverflowError",
    "ConfigError",
    "ConfigurationGapError",
    "CsvLayout",
    "ItemTransformer",
    "MarkdownRewriter",
    "MigrationConfig",
    "MigrationError",
    "MigrationReport",
    "MissingReporterError",
    "SourceFetchError",
    "SprintlyToJiraMigrator",
    "UserMapper",
    "main",
    "setup_logging",
]
