"""Base collector with common persistence logic."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from collectors.sources import ConfigLoadError
from config import REPLACE_CATEGORIES
from db.database import init_db
from db.models import utcnow
from db.writer import replace_category, upsert_articles

logger = logging.getLogger(__name__)


@dataclass
class IngestSummary:
    """What one run wrote."""

    total_updated: int = 0
    failed_batches: int = 0
    per_category: dict[str, int] = field(default_factory=dict)
    finished_at: datetime = field(default_factory=utcnow)

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalUpdated": self.total_updated,
            "failedBatches": self.failed_batches,
            "categories": dict(self.per_category),
        }


class BaseCollector(ABC):
    """Abstract base for article collectors."""

    source: str  # Must be set by subclasses

    def __init__(self, replace_categories: set[str] | None = None) -> None:
        try:
            init_db()
        except SQLAlchemyError as e:
            raise ConfigLoadError(f"Database unavailable: {e}") from e
        self.replace_categories = (
            set(REPLACE_CATEGORIES) if replace_categories is None else set(replace_categories)
        )

    @abstractmethod
    def collect(self) -> dict[str, list[dict[str, Any]]]:
        """Fetch articles. Returns category -> article dicts, ready to persist."""
        ...

    def save(self, articles_by_category: dict[str, list[dict[str, Any]]]) -> IngestSummary:
        """Persist each category with its write strategy.

        Empty categories are skipped so a failed fetch never clears what the
        store already serves.
        """
        summary = IngestSummary()
        upserts: list[dict[str, Any]] = []

        for category, articles in articles_by_category.items():
            if not articles:
                logger.info("[%s] No articles collected, keeping stored rows", category)
                continue
            if category in self.replace_categories:
                result = replace_category(category, articles)
                summary.total_updated += result.written
                summary.failed_batches += result.failed_batches
                summary.per_category[category] = result.per_category.get(category, 0)
            else:
                upserts.extend(articles)
                summary.per_category[category] = 0

        if upserts:
            result = upsert_articles(upserts)
            summary.total_updated += result.written
            summary.failed_batches += result.failed_batches
            # Counts reflect committed rows only
            for category, written in result.per_category.items():
                summary.per_category[category] = written

        summary.finished_at = utcnow()
        logger.info(
            "[%s] Wrote %d articles (%d failed batches)",
            self.source, summary.total_updated, summary.failed_batches,
        )
        return summary

    def run(self) -> IngestSummary:
        """Collect and save."""
        articles = self.collect()
        if not any(articles.values()):
            logger.info("[%s] No articles collected", self.source)
            return IngestSummary()
        return self.save(articles)
