from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Final

import requests

from . import utils
from .exceptions import SourceFetchError
from .models import SourceAttachment, SourceComment, SourceItem

if TYPE_CHECKING:
    from collections.abc import Iterator

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_TOKEN_ENV_VAR: Final[str] = "SPRINTLY_API_KEY"  # noqa: S105
_DEFAULT_TOKEN_PASS_PATH: Final[str] = "sprintly/api_key"  # noqa: S105
_REQUEST_TIMEOUT_SECONDS: Final[int] = 30

DEFAULT_BASE_URL: Final[str] = "https://sprint.ly"


def get_token(pass_path: str | None = None) -> str | None:
    """Get Sprint.ly API key from pass path, env var SPRINTLY_API_KEY, or default pass location."""
    if pass_path:
        return utils.get_pass_value(pass_path)

    token: str | None = os.environ.get(_TOKEN_ENV_VAR)
    if token:
        return token

    try:
        return utils.get_pass_value(_DEFAULT_TOKEN_PASS_PATH)
    except (ValueError, utils.PassError):
        logger.warning("No Sprint.ly API key specified nor found")
        return None


class SprintlyClient:
    """Read-only client for the Sprint.ly REST API of one product."""

    def __init__(
        self,
        product_id: int,
        *,
        email: str | None = None,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.product_id: int = product_id
        self.base_url: str = base_url.rstrip("/")
        self._session: requests.Session = session or requests.Session()
        if email and api_key:
            self._session.auth = (email, api_key)

    def _item_url(self, item_number: int, suffix: str = "") -> str:
        return f"{self.base_url}/api/products/{self.product_id}/items/{item_number}{suffix}.json"

    def _get_json(self, url: str, item_number: int, field: str) -> Any:  # noqa: ANN401 - JSON payload
        try:
            response = self._session.get(url, timeout=_REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            msg = "not found" if status == 404 else f"HTTP {status}"
            raise SourceFetchError(item_number, msg, field=field) from e
        except (requests.RequestException, ValueError) as e:
            raise SourceFetchError(item_number, str(e), field=field) from e

    def get_item(self, item_number: int) -> SourceItem:
        payload = self._get_json(self._item_url(item_number), item_number, "item")
        return SourceItem.from_dict(payload)

    def get_comments(self, item_number: int) -> Iterator[SourceComment]:
        payload = self._get_json(self._item_url(item_number, "/comments"), item_number, "comments")
        for comment in payload or []:
            yield SourceComment.from_dict(comment)

    def get_attachments(self, item_number: int) -> Iterator[SourceAttachment]:
        payload = self._get_json(self._item_url(item_number, "/attachments"), item_number, "attachments")
        for attachment in payload or []:
            yield SourceAttachment.from_dict(attachment)
