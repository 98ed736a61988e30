"""Builders for RSS documents and fake HTTP responses used across tests."""

from datetime import datetime, timezone
from email.utils import format_datetime
from unittest.mock import MagicMock


def rss_item(
    title: str,
    link: str,
    pub_date: datetime | None = None,
    description: str = "Plain description.",
    image: str | None = None,
    guid: str | None = None,
) -> str:
    """One <item>; `image` becomes an image/jpeg enclosure."""
    parts = [f"<title>{title}</title>", f"<link>{link}</link>"]
    if guid:
        parts.append(f'<guid isPermaLink="false">{guid}</guid>')
    if pub_date:
        parts.append(f"<pubDate>{format_datetime(pub_date.replace(tzinfo=timezone.utc))}</pubDate>")
    parts.append(f"<description><![CDATA[{description}]]></description>")
    if image:
        parts.append(f'<enclosure url="{image}" type="image/jpeg" length="0" />')
    return "<item>" + "".join(parts) + "</item>"


def rss_document(title: str, items: list[str]) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title><link>https://example.org</link><description>test</description>"
        + "".join(items)
        + "</channel></rss>"
    ).encode()


def fake_get(documents: dict[str, bytes | Exception]):
    """Build a requests.get replacement serving documents by URL."""

    def _get(url, headers=None, timeout=None, stream=False):
        doc = documents[url]
        if isinstance(doc, Exception):
            raise doc
        resp = MagicMock()
        resp.content = doc
        resp.iter_content.side_effect = lambda chunk_size=1: iter([doc])
        resp.raise_for_status = MagicMock()
        return resp

    return _get
