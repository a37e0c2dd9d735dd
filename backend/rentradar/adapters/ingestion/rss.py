# rentradar/adapters/ingestion/rss.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence
from urllib.parse import quote, urlencode

import httpx

from ...config import Settings, settings
from ...domain.parsing import detect_parking_mention, extract_price, match_region
from ...domain.types import FeedItem, RawCandidate
from ..clients.http_resilience import HttpPolicy, fetch_feed_text
from ..feeds.parser import FeedParser, RegexFeedParser

log = logging.getLogger(__name__)

FALLBACK_CITY = "GTA"


def feed_item_to_candidate(item: FeedItem, *, city: str, neighborhood: str) -> RawCandidate:
    """
    Shared FeedItem -> raw candidate mapping for syndication sources.
    Price comes from the description first, then the title.
    """
    description = item.description
    price = extract_price(description)
    if price is None:
        price = extract_price(item.title)

    return {
        "title": item.title,
        "url": item.link,
        "price": price,
        "address": "",
        "city": city,
        "neighborhood": neighborhood,
        "building": "",
        "unit": "",
        "beds": "",
        "baths": "",
        "sqft": None,
        "fee_month": None,
        "parking": detect_parking_mention(description),
        "amenities": [],
        "floor": None,
        "total_floors": None,
        "exposure": "",
        "images": [item.enclosure] if item.enclosure else [],
        "description": description,
        "date_found": item.pub_date,
        "score": None,
        "notes": "",
    }


@dataclass
class KijijiRssProvider:
    """
    Per-region fan-out: the same search feed is queried once per region with
    the region as keyword, and each result is tagged with that region.
    """

    base_url: str
    policy: HttpPolicy = field(default_factory=HttpPolicy)
    parser: FeedParser = field(default_factory=RegexFeedParser)
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(cls, s: Settings | None = None, **kw) -> "KijijiRssProvider":
        s = s or settings
        return cls(base_url=s.KIJIJI_RSS_BASE_URL, policy=HttpPolicy.from_settings(s), **kw)

    def build_url(self, max_rent: int, region: str) -> str:
        return f"{self.base_url}?ad=offering&price=0__{max_rent}&keywords={quote(region, safe='')}"

    async def fetch(self, max_rent: int, regions: Sequence[str]) -> list[RawCandidate]:
        out: list[RawCandidate] = []
        for region in regions:
            xml = await fetch_feed_text(
                self.build_url(max_rent, region),
                f"kijiji:{region}",
                policy=self.policy,
                transport=self.transport,
            )
            items = self.parser.parse(xml)
            log.debug("[rss:kijiji:%s] %d items", region, len(items))
            out.extend(feed_item_to_candidate(it, city=region, neighborhood=region) for it in items)
        return out


@dataclass
class CraigslistRssProvider:
    """Single combined search; regions are matched against the item text."""

    search_url: str
    query: str = "1+den parking"
    policy: HttpPolicy = field(default_factory=HttpPolicy)
    parser: FeedParser = field(default_factory=RegexFeedParser)
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(cls, s: Settings | None = None, **kw) -> "CraigslistRssProvider":
        s = s or settings
        return cls(
            search_url=s.CRAIGSLIST_RSS_URL,
            query=s.CRAIGSLIST_QUERY,
            policy=HttpPolicy.from_settings(s),
            **kw,
        )

    def build_url(self, max_rent: int) -> str:
        params = {
            "availabilityMode": 0,
            "format": "rss",
            "max_price": max_rent,
            "query": self.query,
        }
        return f"{self.search_url}?{urlencode(params, quote_via=quote)}"

    async def fetch(self, max_rent: int, regions: Sequence[str]) -> list[RawCandidate]:
        xml = await fetch_feed_text(self.build_url(max_rent), "craigslist", policy=self.policy, transport=self.transport)
        out: list[RawCandidate] = []
        for it in self.parser.parse(xml):
            region = match_region((it.title, it.description), regions)
            out.append(
                feed_item_to_candidate(
                    it,
                    city=region or FALLBACK_CITY,
                    neighborhood=region or "",
                )
            )
        return out
