"""
Migration configuration: loading and validation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from .exceptions import ConfigError
from .sprintly_utils import DEFAULT_BASE_URL

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH: Final[str] = "jira-import.csv"

_REQUIRED_KEYS: Final[tuple[str, ...]] = (
    "sprintly_project_num",
    "jira_project_key",
    "jira_base_url",
    "file_proxy_base_url",
    "user_map",
    "project_map",
    "first_ticket_num",
    "last_ticket_num",
    "max_labels",
    "max_comments",
    "max_attachments",
)


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def _int_keyed(raw: dict[str, Any], name: str, *, int_values: bool = False) -> dict[int, Any]:
    try:
        return {int(k): int(v) if int_values else v for k, v in raw.items()}
    except (TypeError, ValueError, AttributeError) as e:
        msg = f"{name} must map item/project numbers: {e}"
        raise ConfigError(msg) from e


@dataclass(frozen=True)
class MigrationConfig:
    """Settings for migrating one Sprint.ly product (queue) into one JIRA project."""

    sprintly_project_num: int
    jira_project_key: str
    jira_base_url: str
    file_proxy_base_url: str
    user_map: dict[str, str | None]
    project_map: dict[int, str]
    first_ticket_num: int
    last_ticket_num: int
    max_labels: int
    max_comments: int
    max_attachments: int
    ticket_parent_map: dict[int, int] = field(default_factory=dict)
    sprintly_base_url: str = DEFAULT_BASE_URL
    sprintly_email: str | None = None
    warn_unmapped_projects: bool = True
    output_path: str = DEFAULT_OUTPUT_PATH

    def __post_init__(self) -> None:
        if self.first_ticket_num < 1:
            msg = f"firstTicketNum must be positive, got {self.first_ticket_num}"
            raise ConfigError(msg)
        if self.last_ticket_num < self.first_ticket_num:
            msg = f"lastTicketNum ({self.last_ticket_num}) is before firstTicketNum ({self.first_ticket_num})"
            raise ConfigError(msg)
        for name in ("max_labels", "max_comments", "max_attachments"):
            if getattr(self, name) < 0:
                msg = f"{name} must not be negative"
                raise ConfigError(msg)
        if self.project_map.get(self.sprintly_project_num) not in (None, self.jira_project_key):
            logger.warning(
                f"projectMap maps {self.sprintly_project_num} to {self.project_map[self.sprintly_project_num]}, "
                f"but jiraProjectKey is {self.jira_project_key}"
            )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> MigrationConfig:
        """Build a config from a dict with camelCase or snake_case keys."""
        values = {_snake_case(k): v for k, v in raw.items()}

        missing = [k for k in _REQUIRED_KEYS if k not in values]
        if missing:
            msg = f"Missing configuration options: {', '.join(missing)}"
            raise ConfigError(msg)

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration options: {', '.join(unknown)}")

        values = {k: v for k, v in values.items() if k in known}
        values["project_map"] = _int_keyed(values["project_map"], "projectMap")
        values["ticket_parent_map"] = _int_keyed(
            values.get("ticket_parent_map") or {}, "ticketParentMap", int_values=True
        )
        try:
            return cls(**values)
        except TypeError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e

    @classmethod
    def load(cls, path: Path) -> MigrationConfig:
        """Load the configuration from a JSON file."""
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            msg = f"Cannot read configuration file {path}: {e}"
            raise ConfigError(msg) from e
        except json.JSONDecodeError as e:
            msg = f"Configuration file {path} is not valid JSON: {e}"
            raise ConfigError(msg) from e
        if not isinstance(raw, dict):
            msg = f"Configuration file {path} must contain a JSON object"
            raise ConfigError(msg)
        return cls.from_dict(raw)

    @property
    def item_numbers(self) -> range:
        return range(self.first_ticket_num, self.last_ticket_num + 1)
