"""Feed and keyword configuration, table-backed with a static fallback."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

import config
from db.database import get_session
from db.models import FeedSource, KeywordRule
from filtering.keywords import ALLOW, EXCLUDE, POLARITIES, REQUIRE, KeywordRules

logger = logging.getLogger(__name__)


class ConfigLoadError(RuntimeError):
    """Feed or keyword configuration could not be loaded."""


@dataclass(frozen=True)
class FeedConfig:
    url: str
    category: str
    name: str | None = None


def _static_feeds() -> list[FeedConfig]:
    return [
        FeedConfig(url=f["url"], category=f["category"], name=f.get("name"))
        for f in config.RSS_FEEDS
    ]


def load_feed_sources(category: str | None = None) -> list[FeedConfig]:
    """Enabled feeds, from the feed_sources table when it has rows.

    Raises ConfigLoadError when the datastore cannot be read.
    """
    session = get_session()
    try:
        total = session.scalar(select(func.count()).select_from(FeedSource)) or 0
        if total:
            rows = session.scalars(
                select(FeedSource).where(FeedSource.enabled.is_(True)).order_by(FeedSource.id)
            ).all()
            feeds = [FeedConfig(url=r.url, category=r.category, name=r.name) for r in rows]
            origin = "feed_sources table"
        else:
            feeds = _static_feeds()
            origin = "static config"
    except SQLAlchemyError as e:
        raise ConfigLoadError(f"Could not load feed sources: {e}") from e
    finally:
        session.close()

    valid: list[FeedConfig] = []
    for feed in feeds:
        if feed.category not in config.CATEGORIES:
            logger.warning("Skipping feed %s with unknown category %r", feed.url, feed.category)
            continue
        if category and feed.category != category:
            continue
        valid.append(feed)

    logger.info("Loaded %d feeds from %s", len(valid), origin)
    return valid


def load_keyword_rules() -> KeywordRules:
    """Relevance rules, from the keyword_rules table when it has rows."""
    session = get_session()
    try:
        rows = session.scalars(select(KeywordRule).order_by(KeywordRule.id)).all()
    except SQLAlchemyError as e:
        raise ConfigLoadError(f"Could not load keyword rules: {e}") from e
    finally:
        session.close()

    if not rows:
        return KeywordRules.from_lists(
            config.EXCLUDED_KEYWORDS,
            config.ALLOWED_KEYWORDS,
            config.REQUIRED_TERM_GROUPS,
        )

    rules = KeywordRules()
    for row in rows:
        if row.polarity not in POLARITIES:
            logger.warning("Skipping keyword %r with unknown polarity %r", row.keyword, row.polarity)
            continue
        try:
            rules.add(row.keyword, row.polarity, category=row.category, term_group=row.term_group)
        except ValueError as e:
            logger.warning("Skipping keyword rule %d: %s", row.id, e)
    logger.info("Loaded %d keyword rules from keyword_rules table", len(rows))
    return rules


def seed_feed_sources() -> tuple[int, int]:
    """Copy the static feed and keyword lists into their tables.

    Existing rows are left alone. Returns (feeds added, rules added).
    """
    session = get_session()
    try:
        existing_feeds = {(f.url, f.category) for f in session.scalars(select(FeedSource))}
        feeds_added = 0
        for feed in _static_feeds():
            if (feed.url, feed.category) in existing_feeds:
                continue
            session.add(FeedSource(url=feed.url, category=feed.category, name=feed.name, enabled=True))
            existing_feeds.add((feed.url, feed.category))
            feeds_added += 1

        existing_rules = {
            (r.keyword, r.polarity, r.category, r.term_group)
            for r in session.scalars(select(KeywordRule))
        }
        wanted = [(kw, EXCLUDE, None, None) for kw in config.EXCLUDED_KEYWORDS]
        wanted += [(kw, ALLOW, None, None) for kw in config.ALLOWED_KEYWORDS]
        for category, groups in config.REQUIRED_TERM_GROUPS.items():
            for group, terms in groups.items():
                wanted += [(kw, REQUIRE, category, group) for kw in terms]

        rules_added = 0
        for key in wanted:
            if key in existing_rules:
                continue
            keyword, polarity, category, group = key
            session.add(KeywordRule(keyword=keyword, polarity=polarity, category=category, term_group=group))
            existing_rules.add(key)
            rules_added += 1

        session.commit()
    finally:
        session.close()

    logger.info("Seeded %d feeds and %d keyword rules", feeds_added, rules_added)
    return feeds_added, rules_added
