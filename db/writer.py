"""Article persistence: batched upsert, category replacement, retention purge."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import WRITE_BATCH_SIZE
from db.database import get_session
from db.models import Article, utcnow

logger = logging.getLogger(__name__)

_ARTICLE_COLUMNS = (
    "article_id",
    "title",
    "summary",
    "full_content",
    "url",
    "image_url",
    "pub_date",
    "source_name",
    "source_url",
    "category",
)


@dataclass
class WriteResult:
    """Outcome of a write: rows written and batches that failed."""

    written: int = 0
    failed_batches: int = 0
    per_category: dict[str, int] = field(default_factory=dict)

    def _count(self, rows: list[dict[str, Any]]) -> None:
        self.written += len(rows)
        for row in rows:
            self.per_category[row["category"]] = self.per_category.get(row["category"], 0) + 1


def _row(data: dict[str, Any]) -> dict[str, Any]:
    row = {col: data.get(col) for col in _ARTICLE_COLUMNS}
    row["collected_at"] = utcnow()
    return row


def _batches(rows: list[dict[str, Any]], size: int) -> list[list[dict[str, Any]]]:
    return [rows[i:i + size] for i in range(0, len(rows), size)]


def _upsert_statement(session: Session, rows: list[dict[str, Any]]) -> Any:
    """INSERT ... ON CONFLICT (article_id) DO UPDATE for the session's dialect."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(Article).values(rows)
    elif dialect == "sqlite":
        stmt = sqlite.insert(Article).values(rows)
    else:
        raise ValueError(f"Upsert not supported for dialect {dialect!r}")
    updates = {
        col: getattr(stmt.excluded, col)
        for col in (*_ARTICLE_COLUMNS, "collected_at")
        if col != "article_id"
    }
    return stmt.on_conflict_do_update(index_elements=["article_id"], set_=updates)


def upsert_articles(articles: list[dict[str, Any]], batch_size: int = WRITE_BATCH_SIZE) -> WriteResult:
    """Insert or overwrite articles keyed on article_id, one transaction per batch.

    A failing batch is rolled back and logged; remaining batches still run.
    Rows without an image_url are refused.
    """
    result = WriteResult()
    rows = [_row(a) for a in articles if a.get("image_url")]
    if len(rows) != len(articles):
        logger.warning("Refused %d articles without image_url", len(articles) - len(rows))

    for index, batch in enumerate(_batches(rows, batch_size)):
        session = get_session()
        try:
            session.execute(_upsert_statement(session, batch))
            session.commit()
            result._count(batch)
        except SQLAlchemyError:
            session.rollback()
            result.failed_batches += 1
            logger.exception("Upsert batch %d (%d rows) failed", index, len(batch))
        finally:
            session.close()

    logger.info("Upserted %d articles (%d failed batches)", result.written, result.failed_batches)
    return result


def replace_category(
    category: str,
    articles: list[dict[str, Any]],
    batch_size: int = WRITE_BATCH_SIZE,
) -> WriteResult:
    """Delete every row in a category and insert the fresh set.

    Delete and insert share one transaction, so a failure leaves the
    previous rows in place.
    """
    rows = [_row(a) for a in articles if a.get("image_url")]
    if not rows:
        logger.info("[%s] Nothing to replace, keeping existing rows", category)
        return WriteResult()

    session = get_session()
    try:
        session.execute(delete(Article).where(Article.category == category))
        # Ids may still exist under another category
        for batch in _batches(rows, batch_size):
            session.execute(_upsert_statement(session, batch))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("[%s] Category replacement failed, rolled back", category)
        return WriteResult(failed_batches=1)
    finally:
        session.close()

    logger.info("[%s] Replaced category with %d articles", category, len(rows))
    result = WriteResult()
    result._count(rows)
    return result


def purge_older_than(cutoff: datetime) -> int:
    """Delete articles published before cutoff. Returns the number removed."""
    session = get_session()
    try:
        result = session.execute(delete(Article).where(Article.pub_date < cutoff))
        session.commit()
        deleted = result.rowcount or 0
    finally:
        session.close()

    logger.info("Purged %d articles published before %s", deleted, cutoff.isoformat())
    return deleted
