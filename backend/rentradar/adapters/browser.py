# rentradar/adapters/browser.py
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from playwright.async_api import Page, async_playwright

from ..config import Settings, settings

log = logging.getLogger(__name__)


@asynccontextmanager
async def open_page(s: Settings | None = None, *, enabled: bool | None = None) -> AsyncIterator[Page | None]:
    """
    Headless Chromium page for the page-rendering sources.

    Yields None when the browser is disabled or fails to launch; callers treat
    that as "no page-backed sources this run". Shutdown errors are logged,
    not raised.
    """
    s = s or settings
    if enabled is None:
        enabled = s.BROWSER_ENABLED
    if not enabled:
        yield None
        return

    os.environ.setdefault("PLAYWRIGHT_BROWSERS_PATH", str(Path(s.PLAYWRIGHT_BROWSERS_PATH).resolve()))

    pw = None
    browser = None
    page: Page | None = None
    try:
        pw = await async_playwright().start()
        browser = await pw.chromium.launch(headless=s.BROWSER_HEADLESS)
        page = await browser.new_page()
    except Exception as e:
        log.error("[playwright] launch failed: %s", e)
        page = None

    try:
        yield page
    finally:
        for closer in (page and page.close, browser and browser.close, pw and pw.stop):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                log.error("[playwright] shutdown error: %s", e)
