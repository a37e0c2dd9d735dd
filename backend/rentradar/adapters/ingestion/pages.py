# rentradar/adapters/ingestion/pages.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from playwright.async_api import Page

from ...domain.types import RawCandidate

log = logging.getLogger(__name__)


@dataclass
class RealtorPageProvider:
    """
    realtor.ca search results sit behind anti-bot protection, so this source
    needs a rendered page. A missing page (browser failed to start) means no
    results, never an error.
    """

    page: Page | None = None

    async def fetch(self, max_rent: int, regions: Sequence[str]) -> list[RawCandidate]:
        if self.page is None:
            return []
        # TODO: scrape search cards (title, price, address, city, link, image, floor)
        # filtered to rent <= max_rent, 1 bed + den, parking, York Region.
        log.debug("realtor: page scraping not implemented yet (max_rent=%s, regions=%d)", max_rent, len(regions))
        return []


@dataclass
class CondosPageProvider:
    """Condo listings with infinite scroll. Same page-handle contract as RealtorPageProvider."""

    page: Page | None = None

    async def fetch(self, max_rent: int, regions: Sequence[str]) -> list[RawCandidate]:
        if self.page is None:
            return []
        # TODO: scroll the results list and collect card details
        # (title, price, address, beds, baths, photos).
        log.debug("condos: page scraping not implemented yet (max_rent=%s, regions=%d)", max_rent, len(regions))
        return []
