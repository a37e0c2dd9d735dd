# rentradar/service_layer/use_cases/aggregate.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from ...schemas import ListingRecord, PipelineSummary
from ..demo_seed import seed_listings

log = logging.getLogger(__name__)


@dataclass
class AggregateResult:
    records: list[ListingRecord]
    counts_by_source: dict[str, int]
    used_seed: bool = False

    def summary(self) -> PipelineSummary:
        return PipelineSummary(
            total=len(self.records),
            used_seed=self.used_seed,
            counts_by_source=dict(self.counts_by_source),
        )


def dedup_key(record: ListingRecord) -> str:
    """url, else title. "" means the record can't be deduplicated."""
    return record.url or record.title


def dedupe_listings(records: Iterable[ListingRecord]) -> list[ListingRecord]:
    """First occurrence of a key wins; keyless records are dropped."""
    seen: dict[str, ListingRecord] = {}
    for r in records:
        key = dedup_key(r)
        if not key:
            continue
        if key not in seen:
            seen[key] = r
    return list(seen.values())


def count_by_source(records: Iterable[ListingRecord]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for r in records:
        counts[r.source] = counts.get(r.source, 0) + 1
    return counts


def format_counts(counts: dict[str, int]) -> str:
    return ", ".join(f"{source}={n}" for source, n in counts.items()) or "none"


def aggregate(batches: Sequence[Sequence[ListingRecord]]) -> AggregateResult:
    """
    Merge per-adapter batches into the final dataset:
      1) concatenate in adapter order
      2) dedupe by url/title
      3) empty -> seed dataset (visibly tagged DemoSeed)
      4) per-source counts, first-seen order
    """
    merged = [r for batch in batches for r in batch]
    records = dedupe_listings(merged)

    used_seed = False
    if not records:
        log.warning("[summary] adapters empty; falling back to demo seed data.")
        records = dedupe_listings(seed_listings())
        used_seed = True

    return AggregateResult(records=records, counts_by_source=count_by_source(records), used_seed=used_seed)
