"""RSS ingestion: configured feeds -> filtered, deduped articles per category."""

import logging
from typing import Any

from collectors.base import BaseCollector
from collectors.fetcher import FetchedFeed, fetch_feeds
from collectors.images import extract_image
from collectors.normalize import dedupe, select_latest, to_article
from collectors.sources import FeedConfig, load_feed_sources, load_keyword_rules
from config import FEED_TIMEOUT, FETCH_MAX_WORKERS, MAX_ARTICLES_PER_CATEGORY
from db.models import utcnow
from filtering.keywords import KeywordRules, is_relevant

logger = logging.getLogger(__name__)


class RSSCollector(BaseCollector):
    """One pipeline for every category; feeds and keyword rules are data."""

    source = "rss"

    def __init__(
        self,
        category: str | None = None,
        timeout: float = FEED_TIMEOUT,
        max_workers: int = FETCH_MAX_WORKERS,
        per_category_limit: int = MAX_ARTICLES_PER_CATEGORY,
        replace_categories: set[str] | None = None,
    ) -> None:
        super().__init__(replace_categories=replace_categories)
        self.category = category
        self.timeout = timeout
        self.max_workers = max_workers
        self.per_category_limit = per_category_limit

    def _articles_from_feed(self, feed: FetchedFeed, rules: KeywordRules) -> list[dict[str, Any]]:
        """Image extraction, relevance filter and shaping for one feed."""
        category = feed.source.category
        now = utcnow()
        articles: list[dict[str, Any]] = []
        for item in feed.items:
            image = extract_image(item)
            if not image:
                logger.debug("No image, skipping: %s", item.title)
                continue
            if not is_relevant(item.title, item.snippet, rules, category):
                logger.debug("Not relevant for %s, skipping: %s", category, item.title)
                continue
            article = to_article(
                item,
                image_url=image,
                category=category,
                source_name=feed.title,
                source_url=feed.source.url,
                now=now,
            )
            if article:
                articles.append(article)
        return articles

    def process(
        self,
        sources: list[FeedConfig],
        feeds: list[FetchedFeed],
        rules: KeywordRules,
    ) -> dict[str, list[dict[str, Any]]]:
        """Turn fetched feeds into capped, deduped article lists per category."""
        by_category: dict[str, list[dict[str, Any]]] = {}
        for source in sources:
            by_category.setdefault(source.category, [])
        for feed in feeds:
            by_category.setdefault(feed.source.category, []).extend(
                self._articles_from_feed(feed, rules)
            )

        # article_id is unique in the store, so the first category claiming an id keeps it
        claimed: set[str] = set()
        result: dict[str, list[dict[str, Any]]] = {}
        for category, articles in by_category.items():
            latest = select_latest(dedupe(articles), len(articles))
            kept = [a for a in latest if a["article_id"] not in claimed][: self.per_category_limit]
            claimed.update(a["article_id"] for a in kept)
            result[category] = kept
            logger.info("[%s] %d articles after filtering (of %d candidates)", category, len(kept), len(articles))
        return result

    def collect(self) -> dict[str, list[dict[str, Any]]]:
        """Load configuration, fetch every feed, and curate per category.

        Raises ConfigLoadError when configuration is unavailable.
        """
        sources = load_feed_sources(self.category)
        rules = load_keyword_rules()
        feeds = fetch_feeds(sources, timeout=self.timeout, max_workers=self.max_workers)
        return self.process(sources, feeds, rules)
