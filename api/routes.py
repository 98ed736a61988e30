"""API routes for rfp-news."""

import logging
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Header, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

import config
from collectors.normalize import format_time_ago
from collectors.rss import RSSCollector
from collectors.sources import ConfigLoadError
from db.database import get_session
from db.models import Article, utcnow
from db.writer import purge_older_than

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _iso(dt: Any) -> str | None:
    return dt.isoformat() + "Z" if dt is not None else None


def _check_cron_auth(authorization: str | None) -> None:
    """Bearer check against CRON_SECRET; open when no secret is configured."""
    if config.CRON_SECRET and authorization != f"Bearer {config.CRON_SECRET}":
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok", "service": "rfp-news"}


@router.get("/rss/{category}")
def get_category_articles(category: str, response: Response) -> Any:
    """Latest articles for a category, newest first, ages computed now."""
    if category not in config.CATEGORIES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid category. Must be one of: {', '.join(config.CATEGORIES)}",
        )

    categories = config.CATEGORY_READ_GROUPS.get(category, [category])
    session = get_session()
    try:
        articles = session.scalars(
            select(Article)
            .where(Article.category.in_(categories))
            .order_by(Article.pub_date.desc())
            .limit(config.RETRIEVAL_LIMIT)
        ).all()
    except SQLAlchemyError:
        logger.exception("Article query failed for %s", category)
        return JSONResponse(status_code=500, content={"success": False, "error": "Database query failed"})
    finally:
        session.close()

    now = utcnow()
    formatted = [_serialize(a, now) for a in articles]
    logger.info("Served %d %s articles", len(formatted), category)

    response.headers["Cache-Control"] = f"public, max-age={config.CACHE_MAX_AGE}"
    return {
        "success": True,
        "articles": formatted,
        "lastUpdated": formatted[0]["pubDate"] if formatted else None,
        "cached": True,
    }


@router.get("/rss")
def get_articles_by_query(response: Response, category: str | None = Query(default=None)) -> Any:
    """Query-string form of the category endpoint."""
    if not category:
        raise HTTPException(status_code=400, detail="Category parameter is required")
    return get_category_articles(category, response)


@router.api_route("/cron/update-rss", methods=["GET", "POST"])
def update_rss(authorization: str | None = Header(default=None)) -> Any:
    """Run one ingestion pass over every configured feed."""
    _check_cron_auth(authorization)
    logger.info("Starting RSS update job")
    try:
        summary = RSSCollector().run()
    except (ConfigLoadError, SQLAlchemyError) as e:
        logger.error("RSS update failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e), "timestamp": _iso(utcnow())},
        )

    logger.info("RSS update completed. Total articles: %d", summary.total_updated)
    return {"success": True, **summary.as_dict(), "timestamp": _iso(summary.finished_at)}


@router.api_route("/cron/cleanup-rss", methods=["GET", "POST"])
def cleanup_rss(authorization: str | None = Header(default=None)) -> Any:
    """Delete articles older than the retention window."""
    _check_cron_auth(authorization)
    cutoff = utcnow() - timedelta(days=config.RETENTION_DAYS)
    try:
        deleted = purge_older_than(cutoff)
    except SQLAlchemyError as e:
        logger.exception("Retention sweep failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": f"Cleanup failed: {e}", "timestamp": _iso(utcnow())},
        )
    return {"success": True, "deleted": deleted, "timestamp": _iso(utcnow())}


def _serialize(article: Article, now: Any) -> dict[str, Any]:
    """Serialize an Article to the card shape the UI consumes."""
    return {
        "id": article.article_id,
        "title": article.title,
        "summary": article.summary,
        "url": article.url,
        "image": article.image_url,
        "timeAgo": format_time_ago(article.pub_date, now),
        "category": article.source_name,
        "pubDate": _iso(article.pub_date),
    }
