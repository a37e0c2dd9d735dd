# rentradar/service_layer/use_cases/refresh.py
from __future__ import annotations

import logging
from typing import Sequence

from playwright.async_api import Page

from ...config import PipelineConfig, Settings, settings
from ...domain.normalize import normalize_listing
from ...schemas import ListingRecord

from ...adapters.ingestion.base import SourceAdapter
from ...adapters.ingestion.pages import CondosPageProvider, RealtorPageProvider
from ...adapters.ingestion.rss import CraigslistRssProvider, KijijiRssProvider

from ..demo_seed import SEED_SOURCE
from .aggregate import AggregateResult, aggregate, format_counts

log = logging.getLogger(__name__)


def build_default_adapters(page: Page | None = None, s: Settings | None = None) -> list[SourceAdapter]:
    """Registry of the sources we pull, in run order."""
    s = s or settings
    return [
        SourceAdapter.of("Kijiji", KijijiRssProvider.from_settings(s)),
        SourceAdapter.of("Craigslist", CraigslistRssProvider.from_settings(s)),
        SourceAdapter.of("Realtor", RealtorPageProvider(page=page)),
        SourceAdapter.of("Condos", CondosPageProvider(page=page)),
    ]


def _check_adapter_names(adapters: Sequence[SourceAdapter]) -> None:
    names: set[str] = set()
    for a in adapters:
        if not a.name:
            raise ValueError("adapter name must be non-empty")
        if a.name == SEED_SOURCE:
            raise ValueError(f"adapter name {a.name!r} is reserved for seed data")
        if a.name in names:
            raise ValueError(f"duplicate adapter name {a.name!r}")
        names.add(a.name)


async def collect_adapter(adapter: SourceAdapter, config: PipelineConfig) -> list[ListingRecord]:
    """
    Run one adapter and normalize its output. Any failure is logged with the
    adapter's name and counts as zero results.
    """
    tag = adapter.name.lower()
    try:
        raw_rows = await adapter.run(config.max_rent, config.regions)
        normalized = [normalize_listing(row, adapter.name) for row in (raw_rows or [])]
    except Exception as e:
        log.error("[adapter:%s] failed: %s: %s", tag, type(e).__name__, e)
        return []

    log.info("[adapter:%s] collected %d", tag, len(normalized))
    return normalized


async def run_pipeline(adapters: Sequence[SourceAdapter], config: PipelineConfig) -> AggregateResult:
    """
    Adapters run one after another, never concurrently. Nothing a single
    source does can abort the run.
    """
    _check_adapter_names(adapters)

    batches: list[list[ListingRecord]] = []
    for adapter in adapters:
        batches.append(await collect_adapter(adapter, config))

    result = aggregate(batches)
    log.info("[summary] counts by source -> %s", format_counts(result.counts_by_source))
    return result
