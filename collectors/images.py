"""Pick a representative image for a feed item."""

import re

from collectors.items import FeedItem

_IMG_SRC = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE)
_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|gif|webp)(\?|$)", re.IGNORECASE)


def _is_image_type(mime: str) -> bool:
    return "image" in (mime or "").lower()


def image_from_html(html: str | None) -> str | None:
    """First <img src> in the markup that points at an image file."""
    if not html:
        return None
    for match in _IMG_SRC.finditer(html):
        src = match.group(1).strip()
        if _IMAGE_EXT.search(src):
            return src
    return None


def extract_image(item: FeedItem) -> str | None:
    """Resolve an image URL, or None when the item has none.

    Order: explicit image field, image enclosure, image media object,
    then an <img> in the item's content or description.
    """
    if item.image:
        return item.image

    for enc in item.enclosures:
        if _is_image_type(enc.type):
            return enc.url

    for media in item.media:
        if media.medium == "image" or _is_image_type(media.type):
            return media.url

    return image_from_html(item.content) or image_from_html(item.description)
