"""Resolve Sprint.ly attachments to public URLs through the file proxy."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Final
from urllib.parse import urlparse

import requests

from .exceptions import AttachmentResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import SourceAttachment

logger: logging.Logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT_SECONDS: Final[int] = 30


def proxy_url_for(href: str, file_proxy_base_url: str) -> str:
    """Swap the Sprint.ly origin of an attachment href for the file proxy.

    e.g. https://sprint.ly/product/1/file/2 -> <proxy>/product/1/file/2
    """
    parsed = urlparse(href)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return f"{file_proxy_base_url.rstrip('/')}{path}"


class AttachmentResolver:
    """Asks the file proxy for publicly fetchable URLs of Sprint.ly attachments.

    The proxy authenticates against Sprint.ly and redirects to the stored file
    (e.g. on S3); the final URL after redirects is what JIRA fetches at import time.
    """

    _session: requests.Session
    _resolved_cache: dict[str, str]

    def __init__(self, file_proxy_base_url: str, session: requests.Session | None = None) -> None:
        self.file_proxy_base_url: str = file_proxy_base_url
        self._session = session or requests.Session()
        self._resolved_cache = {}

    @property
    def resolved_count(self) -> int:
        return len(self._resolved_cache)

    def resolve(self, href: str, *, item_number: int | None = None) -> str:
        """Resolve one attachment href (blocking).

        Raises:
            AttachmentResolutionError: If the proxy request fails
        """
        if href in self._resolved_cache:
            return self._resolved_cache[href]

        url = proxy_url_for(href, self.file_proxy_base_url)
        try:
            response = self._session.head(url, allow_redirects=True, timeout=_REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as e:
            raise AttachmentResolutionError(item_number, href, str(e)) from e

        public_url = response.url
        self._resolved_cache[href] = public_url
        logger.debug(f"Resolved attachment {href} -> {public_url}")
        return public_url

    async def transform_item_attachments(
        self, attachments: Iterable[SourceAttachment], *, item_number: int | None = None
    ) -> list[str]:
        """Resolve all attachments of an item, in order.

        A single failure fails the whole set.

        Raises:
            AttachmentResolutionError: If any attachment cannot be resolved
        """
        urls: list[str] = []
        for attachment in attachments:
            url = await asyncio.to_thread(self.resolve, attachment.href, item_number=item_number)
            urls.append(url)
        return urls
