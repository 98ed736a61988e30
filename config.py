"""rfp-news configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

# --- Paths ---
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
DB_PATH = DATA_DIR / "rfp_news.db"

# Postgres (e.g. Supabase) via DATABASE_URL, otherwise a local SQLite file
DATABASE_URL: str = os.getenv("DATABASE_URL", "")

# --- API ---
API_HOST = "127.0.0.1"
API_PORT = 8001
CRON_SECRET: str = os.getenv("CRON_SECRET", "")
CACHE_MAX_AGE: int = 300  # seconds
RETRIEVAL_LIMIT: int = 6

# --- Categories ---
CATEGORIES: list[str] = ["general", "funder", "nonprofit", "california"]

# Categories whose read path also includes other categories' articles
CATEGORY_READ_GROUPS: dict[str, list[str]] = {
    "general": ["general", "california"],
}

# Categories written with delete-then-insert; all others are upserted
REPLACE_CATEGORIES: set[str] = set()

# --- Ingestion ---
# Seconds allowed for a whole feed download
FEED_TIMEOUT: float = float(os.getenv("FEED_TIMEOUT", "10"))
FETCH_MAX_WORKERS: int = int(os.getenv("FETCH_MAX_WORKERS", "8"))
FEED_USER_AGENT = "Mozilla/5.0 (compatible; rfp-news RSS reader)"
MAX_ITEMS_PER_FEED: int = 8
MAX_ARTICLES_PER_CATEGORY: int = 6
SUMMARY_MAX_LENGTH: int = 200
WRITE_BATCH_SIZE: int = 100
RETENTION_DAYS: int = int(os.getenv("RETENTION_DAYS", "1"))

# --- Feeds ---
# Static fallback; rows in the feed_sources table take precedence when present
RSS_FEEDS: list[dict[str, str]] = [
    # National and US news
    {"category": "general", "url": "https://feeds.npr.org/1001/rss.xml", "name": "NPR"},
    {"category": "general", "url": "https://rss.nytimes.com/services/xml/rss/nyt/US.xml", "name": "NYT US"},
    {"category": "general", "url": "https://feeds.a.dj.com/rss/RSSWorldNews.xml", "name": "WSJ World"},
    {"category": "general", "url": "https://www.cbsnews.com/latest/rss/main", "name": "CBS News"},
    {"category": "general", "url": "http://feeds.bbci.co.uk/news/world/us_and_canada/rss.xml", "name": "BBC US & Canada"},
    # California and Bay Area
    {"category": "california", "url": "https://www.mercurynews.com/feed/", "name": "The Mercury News"},
    {"category": "california", "url": "https://www.sfchronicle.com/bayarea/feed/Bay-Area-News-435.php", "name": "SF Chronicle"},
    {"category": "california", "url": "https://www.latimes.com/california/rss2.0.xml", "name": "LA Times California"},
    {"category": "california", "url": "https://calmatters.org/feed/", "name": "CalMatters"},
    {"category": "california", "url": "https://www.kqed.org/news/feed", "name": "KQED"},
    {"category": "california", "url": "https://abc7news.com/feed/", "name": "ABC7 News"},
    {"category": "california", "url": "https://www.berkeleyside.org/feed", "name": "Berkeleyside"},
    {"category": "california", "url": "https://oaklandside.org/feed/", "name": "The Oaklandside"},
    {"category": "california", "url": "https://www.paloaltoonline.com/feed/", "name": "Palo Alto Online"},
    # Philanthropy and funders
    {"category": "funder", "url": "https://nonprofitquarterly.org/feed/", "name": "Nonprofit Quarterly"},
    {"category": "funder", "url": "https://www.insidephilanthropy.com/home/rss", "name": "Inside Philanthropy"},
    {"category": "funder", "url": "https://www.philanthropy.com/feed/grants", "name": "Chronicle of Philanthropy"},
    {"category": "funder", "url": "https://www.hewlett.org/feed/", "name": "Hewlett Foundation"},
    {"category": "funder", "url": "https://www.siliconvalleycf.org/feed/", "name": "Silicon Valley Community Foundation"},
    # Nonprofit sector
    {"category": "nonprofit", "url": "https://www.philanthropy.com/feed", "name": "Chronicle of Philanthropy"},
    {"category": "nonprofit", "url": "https://ssir.org/rss", "name": "Stanford Social Innovation Review"},
    {"category": "nonprofit", "url": "https://www.thenonprofittimes.com/feed/", "name": "The NonProfit Times"},
    {"category": "nonprofit", "url": "https://blueavocado.org/feed/", "name": "Blue Avocado"},
    {"category": "nonprofit", "url": "https://www.councilofnonprofits.org/feed", "name": "Council of Nonprofits"},
]

# --- Keyword rules ---
# Static fallback; rows in the keyword_rules table take precedence when present
EXCLUDED_KEYWORDS: list[str] = [
    # Sports
    "sports", "nba", "nfl", "mlb", "nhl", "wnba", "mls", "olympics", "world cup",
    "super bowl", "playoffs", "championship", "touchdown", "home run", "slam dunk",
    "athlete", "warriors", "49ers", "sharks", "lakers", "dodgers",
    # Celebrities
    "celebrity", "kardashian", "taylor swift", "movie star", "red carpet", "gossip",
    "tmz", "hollywood", "actor", "actress",
    # Real estate
    "real estate", "housing market", "home sales", "mortgage", "home prices",
    "condo", "realtor", "foreclosure", "house hunter", "million home",
]

# Known-good terms that veto a borderline exclude match
ALLOWED_KEYWORDS: list[str] = [
    "nonprofit", "non-profit", "foundation", "grant", "grants", "philanthropy",
    "charity", "community", "affordable housing", "homelessness", "youth",
]

BAY_AREA_TERMS: list[str] = [
    "san francisco", "oakland", "berkeley", "fremont", "san jose", "palo alto",
    "mountain view", "sunnyvale", "santa clara", "cupertino", "silicon valley",
    "menlo park", "redwood city", "san mateo", "daly city", "walnut creek",
    "richmond", "bay area", "east bay", "south bay", "north bay", "peninsula",
]

CALIFORNIA_TERMS: list[str] = ["california", "socal", "norcal", *BAY_AREA_TERMS]

PHILANTHROPY_TERMS: list[str] = [
    "philanthrop", "foundation", "grant", "donation", "donor", "giving", "charit",
    "nonprofit", "non-profit", "endowment", "fund", "volunteer", "social impact",
    "social good",
]

# Category -> term groups; an item must match every group to pass
REQUIRED_TERM_GROUPS: dict[str, dict[str, list[str]]] = {
    "funder": {"geography": CALIFORNIA_TERMS, "subject": PHILANTHROPY_TERMS},
    "nonprofit": {"geography": CALIFORNIA_TERMS, "subject": PHILANTHROPY_TERMS},
}
