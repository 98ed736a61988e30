#!/usr/bin/env python3
"""CLI to run one RSS ingestion pass."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from collectors import ConfigLoadError, RSSCollector
from config import CATEGORIES


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch RSS feeds and store curated articles")
    parser.add_argument(
        "--category",
        choices=CATEGORIES,
        help="Only ingest feeds for one category (default: all)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        summary = RSSCollector(category=args.category).run()
    except ConfigLoadError:
        logging.exception("Ingestion aborted")
        sys.exit(1)

    for category, count in sorted(summary.per_category.items()):
        logging.info("  %s: %d", category, count)
    logging.info(
        "Done. Total articles written: %d (%d failed batches)",
        summary.total_updated, summary.failed_batches,
    )


if __name__ == "__main__":
    main()
