"""
Sprint.ly user to JIRA username mapping.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import ConfigurationGapError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .models import Person

logger: logging.Logger = logging.getLogger(__name__)


class LookupState(enum.Enum):
    FOUND = "found"
    FOUND_NULL = "found_null"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class UserLookup:
    """Result of looking up an email in the user map.

    FOUND_NULL (mapped to null, e.g. an ex-employee) and NOT_FOUND (no entry)
    are kept apart: the first is a valid empty mapping, the second a configuration gap.
    """

    state: LookupState
    username: str | None = None

    @property
    def found(self) -> bool:
        return self.state is not LookupState.NOT_FOUND


class UserMapper:
    """Maps Sprint.ly emails to JIRA usernames using an explicit user map."""

    def __init__(self, user_map: Mapping[str, str | None]) -> None:
        self._user_map: Mapping[str, str | None] = user_map

    def lookup(self, email: str) -> UserLookup:
        if email not in self._user_map:
            return UserLookup(LookupState.NOT_FOUND)
        username = self._user_map[email]
        if username is None:
            return UserLookup(LookupState.FOUND_NULL)
        return UserLookup(LookupState.FOUND, username)

    def map_email(self, email: str, *, item_number: int | None = None, field: str | None = None) -> str | None:
        """Return the JIRA username for an email.

        Raises:
            ConfigurationGapError: If the email has no entry in the user map
        """
        result = self.lookup(email)
        if not result.found:
            raise ConfigurationGapError(email, item_number=item_number, field=field)
        return result.username

    def map_person(
        self, person: Person | None, *, item_number: int | None = None, field: str | None = None
    ) -> str | None:
        """Map an optional person; an absent person (e.g. unassigned item) maps to None."""
        if person is None:
            return None
        return self.map_email(person.email, item_number=item_number, field=field)

    def display_name(self, person: Person | None) -> str:
        """Name to show for informational text such as comment authors. Never raises."""
        if person is None:
            return "Unknown"
        result = self.lookup(person.email)
        if result.username:
            return result.username
        if not result.found:
            logger.debug(f"No JIRA user for {person.email}, using display name")
        return person.display_name
