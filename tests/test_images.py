"""Tests for feed item adaptation and image extraction."""

from datetime import datetime
from time import strptime

from collectors.images import extract_image, image_from_html
from collectors.items import FeedItem, parse_published, strip_html


def _item(**entry):
    return FeedItem.from_entry(entry)


def test_explicit_image_string():
    assert extract_image(_item(image="https://cdn.example.org/a.jpg")) == "https://cdn.example.org/a.jpg"


def test_explicit_image_dict():
    assert extract_image(_item(image={"href": "https://cdn.example.org/b.png"})) == "https://cdn.example.org/b.png"


def test_image_enclosure():
    item = _item(enclosures=[
        {"href": "https://cdn.example.org/episode.mp3", "type": "audio/mpeg"},
        {"href": "https://cdn.example.org/cover.jpg", "type": "image/jpeg"},
    ])
    assert extract_image(item) == "https://cdn.example.org/cover.jpg"


def test_enclosure_from_links():
    item = _item(links=[
        {"rel": "alternate", "href": "https://example.org/post"},
        {"rel": "enclosure", "href": "https://cdn.example.org/c.webp", "type": "image/webp"},
    ])
    assert extract_image(item) == "https://cdn.example.org/c.webp"


def test_scalar_enclosure():
    item = _item(enclosure={"url": "https://cdn.example.org/d.gif", "type": "image/gif"})
    assert extract_image(item) == "https://cdn.example.org/d.gif"


def test_non_image_enclosure_ignored():
    assert extract_image(_item(enclosures=[{"href": "https://x.org/a.mp3", "type": "audio/mpeg"}])) is None


def test_media_content_image_medium():
    item = _item(media_content=[
        {"url": "https://cdn.example.org/clip.mp4", "medium": "video"},
        {"url": "https://cdn.example.org/still.jpg", "medium": "image"},
    ])
    assert extract_image(item) == "https://cdn.example.org/still.jpg"


def test_media_content_image_type():
    item = _item(media_content=[{"url": "https://cdn.example.org/e", "type": "image/png"}])
    assert extract_image(item) == "https://cdn.example.org/e"


def test_media_thumbnail():
    item = _item(media_thumbnail=[{"url": "https://cdn.example.org/thumb.jpg"}])
    assert extract_image(item) == "https://cdn.example.org/thumb.jpg"


def test_img_in_content():
    item = _item(content=[{"value": '<p>Hi</p><img class="x" src="https://cdn.example.org/f.jpeg?w=400">'}])
    assert extract_image(item) == "https://cdn.example.org/f.jpeg?w=400"


def test_img_in_description():
    item = _item(summary="<img src='https://cdn.example.org/g.png'> text")
    assert extract_image(item) == "https://cdn.example.org/g.png"


def test_img_without_image_extension_ignored():
    item = _item(summary='<img src="https://tracker.example.org/pixel?id=1">')
    assert extract_image(item) is None


def test_no_image():
    assert extract_image(_item(title="Just text", summary="No pictures here")) is None


def test_precedence_explicit_over_enclosure():
    item = _item(
        image="https://cdn.example.org/explicit.jpg",
        enclosures=[{"href": "https://cdn.example.org/enc.jpg", "type": "image/jpeg"}],
        summary='<img src="https://cdn.example.org/inline.jpg">',
    )
    assert extract_image(item) == "https://cdn.example.org/explicit.jpg"


def test_image_from_html_skips_to_first_valid():
    html = '<img src="/spacer"><img src="https://cdn.example.org/real.gif">'
    assert image_from_html(html) == "https://cdn.example.org/real.gif"


def test_strip_html():
    assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"
    assert strip_html("&amp; &lt; &gt;") == "& < >"
    assert strip_html(None) == ""


def test_from_entry_fields():
    item = _item(
        id="guid-1",
        link="https://example.org/post",
        title="  Spaced title  ",
        summary="<p>Short <em>summary</em></p>",
        content=[{"value": "<p>Full body</p>"}],
    )
    assert item.guid == "guid-1"
    assert item.title == "Spaced title"
    assert item.snippet == "Short summary"
    assert item.content == "<p>Full body</p>"


def test_parse_published_struct_time():
    parsed = strptime("2024-03-01 12:30:00", "%Y-%m-%d %H:%M:%S")
    assert parse_published({"published_parsed": parsed}) == datetime(2024, 3, 1, 12, 30)


def test_parse_published_rfc822_string():
    dt = parse_published({"published": "Fri, 01 Mar 2024 12:30:00 -0800"})
    assert dt == datetime(2024, 3, 1, 20, 30)


def test_parse_published_garbage():
    assert parse_published({"published": "sometime last week"}) is None
    assert parse_published({}) is None
