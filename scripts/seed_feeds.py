#!/usr/bin/env python3
"""Copy the static feed and keyword lists into the database tables."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from collectors.sources import seed_feed_sources
from db.database import init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> None:
    init_db()
    feeds, rules = seed_feed_sources()
    logger.info("Added %d feeds and %d keyword rules", feeds, rules)


if __name__ == "__main__":
    main()
