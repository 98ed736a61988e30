"""SQLAlchemy models for rfp-news."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC now, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class Article(Base):
    """Normalized feed item that passed every filter."""

    __tablename__ = "rss_articles"

    article_id: Mapped[str] = mapped_column(String, primary_key=True)  # guid or link
    title: Mapped[str] = mapped_column(String, nullable=False)
    summary: Mapped[str] = mapped_column(Text, default="")
    full_content: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(String)
    image_url: Mapped[str] = mapped_column(String, nullable=False)
    pub_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    source_name: Mapped[str | None] = mapped_column(String)
    source_url: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    collected_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    __table_args__ = (
        Index("idx_rss_category_pub", "category", "pub_date"),
        Index("idx_rss_pub_date", "pub_date"),
    )

    def __repr__(self) -> str:
        return f"<Article(article_id={self.article_id!r}, category={self.category!r}, title={self.title!r})>"


class FeedSource(Base):
    """One configured feed and the category its items are filed under."""

    __tablename__ = "feed_sources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    url: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (UniqueConstraint("url", "category", name="uq_feed_url_category"),)


class KeywordRule(Base):
    """Relevance keyword: exclude, allow, or require (grouped)."""

    __tablename__ = "keyword_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    keyword: Mapped[str] = mapped_column(String, nullable=False)
    polarity: Mapped[str] = mapped_column(String, nullable=False)  # exclude, allow, require
    category: Mapped[str | None] = mapped_column(String, nullable=True)  # null = all categories
    term_group: Mapped[str | None] = mapped_column(String, nullable=True)  # require rules only
