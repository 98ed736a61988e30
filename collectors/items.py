"""Canonical feed item shape.

feedparser exposes the same information under different keys depending on
the feed dialect (RSS enclosure vs Atom link, media:content vs
media:thumbnail, content:encoded vs description). FeedItem.from_entry
flattens all of that once so the rest of the pipeline sees one shape.
"""

import html
import re
from calendar import timegm
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from time import struct_time
from typing import Any


def strip_html(text: str | None) -> str:
    """Remove HTML tags, unescape entities, collapse whitespace."""
    if not text:
        return ""
    text = re.sub(r"<[^>]+>", " ", text)
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_published(entry: Any) -> datetime | None:
    """Parse a feed entry's publication date as naive UTC."""
    for key in ("published_parsed", "updated_parsed"):
        val = entry.get(key)
        if isinstance(val, struct_time):
            try:
                return datetime.fromtimestamp(timegm(val), tz=timezone.utc).replace(tzinfo=None)
            except (ValueError, OverflowError):
                pass
    # Fallback: raw strings, ISO 8601 then RFC 822
    for key in ("published", "updated"):
        raw = entry.get(key)
        if not raw:
            continue
        try:
            return _to_naive_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except (ValueError, TypeError):
            pass
        try:
            return _to_naive_utc(parsedate_to_datetime(raw))
        except (ValueError, TypeError, IndexError):
            pass
    return None


@dataclass
class Enclosure:
    url: str
    type: str = ""


@dataclass
class MediaObject:
    url: str
    medium: str = ""
    type: str = ""


@dataclass
class FeedItem:
    """A feed entry before filtering and normalization."""

    guid: str | None = None
    link: str | None = None
    title: str = ""
    snippet: str = ""  # plain text
    content: str = ""  # raw HTML, content:encoded when present
    description: str = ""  # raw HTML summary/description
    published: datetime | None = None
    image: str | None = None
    enclosures: list[Enclosure] = field(default_factory=list)
    media: list[MediaObject] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: Any) -> "FeedItem":
        """Adapt a feedparser entry (or any mapping shaped like one)."""
        content = ""
        for c in _as_list(entry.get("content")):
            if isinstance(c, dict) and c.get("value"):
                content = c["value"]
                break
        description = entry.get("summary") or entry.get("description") or ""

        return cls(
            guid=(entry.get("id") or entry.get("guid") or None),
            link=(entry.get("link") or None),
            title=(entry.get("title") or "").strip(),
            snippet=strip_html(description or content),
            content=content,
            description=description,
            published=parse_published(entry),
            image=_explicit_image(entry.get("image")),
            enclosures=_enclosures(entry),
            media=_media(entry),
        )


def _explicit_image(raw: Any) -> str | None:
    if isinstance(raw, str):
        return raw.strip() or None
    if isinstance(raw, dict):
        url = raw.get("href") or raw.get("url")
        return url.strip() if url else None
    return None


def _enclosures(entry: Any) -> list[Enclosure]:
    found: list[Enclosure] = []
    seen: set[str] = set()
    candidates = _as_list(entry.get("enclosures")) + [
        link for link in _as_list(entry.get("links"))
        if isinstance(link, dict) and link.get("rel") == "enclosure"
    ]
    # Single scalar enclosure, as some non-feedparser sources provide
    candidates += _as_list(entry.get("enclosure"))
    for enc in candidates:
        if not isinstance(enc, dict):
            continue
        url = enc.get("href") or enc.get("url")
        if url and url not in seen:
            seen.add(url)
            found.append(Enclosure(url=url, type=(enc.get("type") or "").lower()))
    return found


def _media(entry: Any) -> list[MediaObject]:
    found: list[MediaObject] = []
    for m in _as_list(entry.get("media_content")):
        if isinstance(m, dict) and m.get("url"):
            found.append(MediaObject(
                url=m["url"],
                medium=(m.get("medium") or "").lower(),
                type=(m.get("type") or "").lower(),
            ))
    for m in _as_list(entry.get("media_thumbnail")):
        if isinstance(m, dict) and m.get("url"):
            found.append(MediaObject(url=m["url"], medium="image"))
    return found
