"""Idempotent database migrations for rfp-news.

Both SQLite and Postgres support ADD COLUMN for nullable columns, so each
migration only checks whether the column exists first. Tables created
without a listed column gain it here; tables that have it are left alone.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def _column_exists(engine: Engine, table: str, column: str) -> bool:
    """Check if a column exists in the given table."""
    columns = inspect(engine).get_columns(table)
    return column in [c["name"] for c in columns]


def run_migrations(engine: Engine) -> None:
    """Run all pending migrations idempotently."""
    migrations = [
        ("rss_articles", "source_url", "VARCHAR"),
        ("keyword_rules", "term_group", "VARCHAR"),
    ]

    with engine.connect() as conn:
        for table, column, col_type in migrations:
            if not _column_exists(engine, table, column):
                logger.info("Adding column %s.%s (%s)", table, column, col_type)
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {col_type}"))
                conn.commit()
            else:
                logger.debug("Column %s.%s already exists, skipping", table, column)
