"""Shape feed items into article rows; dedupe, cap, and age labels."""

import logging
from datetime import datetime, timezone
from typing import Any

from collectors.items import FeedItem
from config import SUMMARY_MAX_LENGTH
from db.models import utcnow

logger = logging.getLogger(__name__)


def article_id_for(item: FeedItem) -> str | None:
    """Stable id: the item's guid, else its link."""
    return (item.guid or item.link or "").strip() or None


def to_article(
    item: FeedItem,
    image_url: str,
    category: str,
    source_name: str | None,
    source_url: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any] | None:
    """Build an article row. Returns None when the item has no usable id."""
    article_id = article_id_for(item)
    if not article_id:
        logger.debug("Skipping item without guid or link: %r", item.title)
        return None

    url = item.link
    if not url and article_id.startswith(("http://", "https://")):
        url = article_id

    return {
        "article_id": article_id,
        "title": item.title.strip() or "No Title",
        "summary": item.snippet[:SUMMARY_MAX_LENGTH].strip(),
        "full_content": item.content or item.snippet,
        "url": url,
        "image_url": image_url,
        "pub_date": item.published or now or utcnow(),
        "source_name": source_name or "News",
        "source_url": source_url,
        "category": category,
    }


def dedupe(articles: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the first article per trimmed title and per article_id."""
    seen_titles: set[str] = set()
    seen_ids: set[str] = set()
    unique: list[dict[str, Any]] = []
    for article in articles:
        title = (article.get("title") or "").strip()
        if title in seen_titles or article["article_id"] in seen_ids:
            logger.debug("Duplicate dropped: %s", title)
            continue
        seen_titles.add(title)
        seen_ids.add(article["article_id"])
        unique.append(article)
    return unique


def select_latest(articles: list[dict[str, Any]], limit: int) -> list[dict[str, Any]]:
    """Newest first, capped at limit."""
    ordered = sorted(articles, key=lambda a: a["pub_date"], reverse=True)
    return ordered[:limit]


def _coerce_datetime(value: datetime | str | None) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def format_time_ago(pub_date: datetime | str | None, now: datetime | None = None) -> str:
    """Relative age label: 'Just now', '{N}h ago', '{N}d ago', or 'Recently'.

    Naive datetimes are treated as UTC.
    """
    dt = _coerce_datetime(pub_date)
    if dt is None:
        return "Recently"
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    now = now or utcnow()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)

    hours = int((now - dt).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
