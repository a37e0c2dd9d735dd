# rentradar/adapters/feeds/parser.py
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterator, Protocol

from ...domain.text import decode_entities, strip_markup
from ...domain.types import FeedItem

_ITEM_RE = re.compile(r"<item\b[\s\S]*?</item>", re.IGNORECASE)
_ENCLOSURE_RE = re.compile(r"<enclosure[^>]*url=\"([^\"]+)\"[^>]*>", re.IGNORECASE)
_MEDIA_RE = re.compile(r"<media:content[^>]*url=\"([^\"]+)\"[^>]*>", re.IGNORECASE)


class FeedParser(Protocol):
    def parse(self, xml: str) -> list[FeedItem]:
        """Feed document text -> items in document order. Never raises."""
        ...


@lru_cache(maxsize=None)
def _tag_re(tag: str) -> re.Pattern[str]:
    return re.compile(rf"<{re.escape(tag)}[^>]*>([\s\S]*?)</{re.escape(tag)}>", re.IGNORECASE)


def extract_tag(block: str, tag: str) -> str:
    match = _tag_re(tag).search(block)
    return decode_entities(match.group(1)).strip() if match else ""


def extract_enclosure_url(block: str) -> str:
    match = _ENCLOSURE_RE.search(block) or _MEDIA_RE.search(block)
    return match.group(1) if match else ""


def iter_feed_items(xml: str | None) -> Iterator[FeedItem]:
    """
    Regex scan over `<item>` blocks.

    Good enough for the RSS shapes we pull (Kijiji, Craigslist); swap in a
    structural parser behind FeedParser if a feed outgrows it.
    """
    if not xml:
        return
    for block in _ITEM_RE.findall(xml):
        raw_description = extract_tag(block, "description")
        yield FeedItem(
            title=extract_tag(block, "title"),
            link=extract_tag(block, "link"),
            description=strip_markup(raw_description),
            raw_description=raw_description,
            pub_date=extract_tag(block, "pubDate"),
            enclosure=extract_enclosure_url(block),
        )


def parse_feed_items(xml: str | None) -> list[FeedItem]:
    return list(iter_feed_items(xml))


class RegexFeedParser:
    def parse(self, xml: str) -> list[FeedItem]:
        return parse_feed_items(xml)
