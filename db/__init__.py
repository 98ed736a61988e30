from db.database import get_engine, get_session, init_db
from db.models import Article, FeedSource, KeywordRule

__all__ = ["get_engine", "get_session", "init_db", "Article", "FeedSource", "KeywordRule"]
