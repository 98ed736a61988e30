"""Tests for article shaping, dedupe and age labels."""

from datetime import datetime, timedelta, timezone

from collectors.items import FeedItem
from collectors.normalize import dedupe, format_time_ago, select_latest, to_article

NOW = datetime(2024, 6, 1, 12, 0, 0)


def test_time_ago_just_now():
    assert format_time_ago(NOW - timedelta(minutes=30), NOW) == "Just now"


def test_time_ago_hours():
    assert format_time_ago(NOW - timedelta(hours=5), NOW) == "5h ago"
    assert format_time_ago(NOW - timedelta(hours=23, minutes=59), NOW) == "23h ago"


def test_time_ago_days():
    assert format_time_ago(NOW - timedelta(hours=50), NOW) == "2d ago"
    assert format_time_ago(NOW - timedelta(hours=24), NOW) == "1d ago"


def test_time_ago_unparseable():
    assert format_time_ago("not a date", NOW) == "Recently"
    assert format_time_ago(None, NOW) == "Recently"


def test_time_ago_iso_string_and_aware():
    assert format_time_ago("2024-06-01T09:00:00Z", NOW) == "3h ago"
    aware = datetime(2024, 6, 1, 5, 0, tzinfo=timezone(timedelta(hours=-4)))  # 09:00 UTC
    assert format_time_ago(aware, NOW) == "3h ago"


def test_time_ago_future_date():
    assert format_time_ago(NOW + timedelta(hours=2), NOW) == "Just now"


def _article(article_id, title, hours_ago=0):
    return {"article_id": article_id, "title": title, "pub_date": NOW - timedelta(hours=hours_ago)}


def test_dedupe_same_trimmed_title():
    articles = [_article("a", "Budget passes"), _article("b", "  Budget passes "), _article("c", "Other")]
    unique = dedupe(articles)
    assert [a["article_id"] for a in unique] == ["a", "c"]


def test_dedupe_same_id():
    unique = dedupe([_article("a", "One"), _article("a", "Two")])
    assert len(unique) == 1


def test_select_latest_orders_and_caps():
    articles = [_article(str(i), f"t{i}", hours_ago=i) for i in (3, 1, 5, 2)]
    latest = select_latest(articles, 3)
    assert [a["article_id"] for a in latest] == ["1", "2", "3"]


def test_to_article_shapes_fields():
    item = FeedItem(
        guid="https://example.org/p/1",
        link="https://example.org/p/1?utm=rss",
        title=" Headline ",
        snippet="x" * 500,
        content="<p>body</p>",
        published=NOW - timedelta(hours=1),
    )
    article = to_article(item, "https://cdn/img.jpg", "funder", "The Chronicle", "https://feed", now=NOW)
    assert article["article_id"] == "https://example.org/p/1"
    assert article["title"] == "Headline"
    assert len(article["summary"]) == 200
    assert article["full_content"] == "<p>body</p>"
    assert article["url"] == "https://example.org/p/1?utm=rss"
    assert article["category"] == "funder"
    assert article["source_name"] == "The Chronicle"
    assert article["pub_date"] == NOW - timedelta(hours=1)


def test_to_article_defaults():
    item = FeedItem(link="https://example.org/x", snippet="short")
    article = to_article(item, "https://cdn/img.jpg", "general", None, now=NOW)
    assert article["article_id"] == "https://example.org/x"
    assert article["title"] == "No Title"
    assert article["pub_date"] == NOW
    assert article["source_name"] == "News"
    assert article["full_content"] == "short"


def test_to_article_url_falls_back_to_guid():
    item = FeedItem(guid="https://example.org/only-guid")
    assert to_article(item, "https://cdn/i.png", "general", "S", now=NOW)["url"] == "https://example.org/only-guid"


def test_to_article_without_id():
    assert to_article(FeedItem(title="Orphan"), "https://cdn/i.png", "general", "S", now=NOW) is None
