from collectors.base import BaseCollector, IngestSummary
from collectors.rss import RSSCollector
from collectors.sources import ConfigLoadError

__all__ = [
    "BaseCollector",
    "ConfigLoadError",
    "IngestSummary",
    "RSSCollector",
]
