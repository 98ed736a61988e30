"""Fetch and parse RSS/Atom feeds in parallel with per-feed isolation."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import feedparser
import requests

from collectors.items import FeedItem
from collectors.sources import FeedConfig
from config import FEED_TIMEOUT, FEED_USER_AGENT, FETCH_MAX_WORKERS, MAX_ITEMS_PER_FEED

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": FEED_USER_AGENT,
    "Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml;q=0.9, */*;q=0.8",
}
_CHUNK_SIZE = 16 * 1024


@dataclass
class FetchedFeed:
    """Items from one successfully parsed feed."""

    source: FeedConfig
    title: str | None
    items: list[FeedItem] = field(default_factory=list)


def _read_body(resp: requests.Response, deadline: float) -> bytes:
    """Read a streamed body, giving up once the deadline has passed."""
    chunks: list[bytes] = []
    for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise requests.Timeout("Feed body not received before the deadline")
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_feed(
    source: FeedConfig,
    timeout: float = FEED_TIMEOUT,
    max_items: int = MAX_ITEMS_PER_FEED,
) -> FetchedFeed | None:
    """Download and parse one feed. Returns None on any failure.

    `timeout` bounds the whole download as well as each socket read.
    """
    logger.info("Fetching feed: %s", source.url)
    deadline = time.monotonic() + timeout
    try:
        resp = requests.get(source.url, headers=_HEADERS, timeout=timeout, stream=True)
        try:
            resp.raise_for_status()
            content = _read_body(resp, deadline)
        finally:
            resp.close()
    except requests.RequestException as e:
        logger.warning("Failed to fetch %s: %s", source.url, e)
        return None

    feed = feedparser.parse(content)
    if feed.bozo and not feed.entries:
        logger.warning("Feed %s is malformed with no entries: %s", source.url, feed.get("bozo_exception"))
        return None

    items: list[FeedItem] = []
    for entry in feed.entries[:max_items]:
        try:
            items.append(FeedItem.from_entry(entry))
        except Exception:
            logger.exception("Failed to adapt entry from %s", source.url)

    title = feed.feed.get("title") or source.name
    logger.info("Got %d entries from %s", len(items), title or source.url)
    return FetchedFeed(source=source, title=title, items=items)


def fetch_feeds(
    sources: list[FeedConfig],
    timeout: float = FEED_TIMEOUT,
    max_workers: int = FETCH_MAX_WORKERS,
    max_items: int = MAX_ITEMS_PER_FEED,
) -> list[FetchedFeed]:
    """Fetch every feed concurrently; failed feeds are left out.

    Results keep the order of `sources`.
    """
    if not sources:
        return []

    results: list[FetchedFeed | None] = [None] * len(sources)
    workers = max(1, min(max_workers, len(sources)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(fetch_feed, source, timeout, max_items): i
            for i, source in enumerate(sources)
        }
        for future in as_completed(futures):
            idx = futures[future]
            try:
                results[idx] = future.result()
            except Exception:
                logger.exception("Feed task crashed: %s", sources[idx].url)

    fetched = [r for r in results if r is not None]
    logger.info("Fetched %d of %d feeds", len(fetched), len(sources))
    return fetched
