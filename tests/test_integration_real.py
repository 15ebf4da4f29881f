"""
Integration tests against real Sprint.ly and file proxy endpoints.

These need your own Sprint.ly data and are skipped unless configured:

- SPRINTLY_TEST_PRODUCT: Sprint.ly product number to read from
- SPRINTLY_TEST_ITEM: an item number in that product
- SPRINTLY_TEST_EMAIL and SPRINTLY_API_KEY: API credentials
- FILE_PROXY_BASE_URL and SPRINTLY_TEST_ATTACHMENT_HREF: for attachment resolution
"""

import asyncio
import os
from urllib.parse import urlparse

import pytest

from sprintly_to_jira import sprintly_utils as slu
from sprintly_to_jira.attachments import AttachmentResolver
from sprintly_to_jira.models import SourceAttachment


def _require_env(*names: str) -> list[str]:
    missing = [n for n in names if not os.environ.get(n)]
    if missing:
        pytest.skip(f"Missing environment variables: {', '.join(missing)}")
    return [os.environ[n] for n in names]


@pytest.mark.integration
def test_fetch_real_item() -> None:
    product, number, email, api_key = _require_env(
        "SPRINTLY_TEST_PRODUCT", "SPRINTLY_TEST_ITEM", "SPRINTLY_TEST_EMAIL", "SPRINTLY_API_KEY"
    )
    client = slu.SprintlyClient(int(product), email=email, api_key=api_key)

    item = client.get_item(int(number))
    comments = list(client.get_comments(int(number)))

    assert item.number == int(number)
    assert item.created_by is not None
    assert all(c.created_at for c in comments)


@pytest.mark.integration
def test_resolve_real_attachment() -> None:
    proxy, href = _require_env("FILE_PROXY_BASE_URL", "SPRINTLY_TEST_ATTACHMENT_HREF")
    resolver = AttachmentResolver(proxy)

    [url] = asyncio.run(resolver.transform_item_attachments([SourceAttachment(href)]))

    parsed = urlparse(url)
    assert parsed.scheme == "https"
    assert parsed.netloc != urlparse(proxy).netloc
