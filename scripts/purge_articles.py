#!/usr/bin/env python3
"""Retention sweep: delete articles older than the retention window."""

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import RETENTION_DAYS
from db.database import init_db
from db.models import utcnow
from db.writer import purge_older_than

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Purge old RSS articles")
    parser.add_argument("--days", type=int, default=RETENTION_DAYS, help="Keep articles newer than this")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    init_db()
    deleted = purge_older_than(utcnow() - timedelta(days=args.days))
    logger.info("Deleted %d articles older than %d day(s)", deleted, args.days)


if __name__ == "__main__":
    main()
