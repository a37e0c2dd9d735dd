import logging

from rentradar.domain.normalize import normalize_listing
from rentradar.service_layer.demo_seed import DEMO_SEED, SEED_SOURCE
from rentradar.service_layer.use_cases.aggregate import (
    aggregate,
    count_by_source,
    dedupe_listings,
    format_counts,
)


def _rec(source: str, **kw):
    return normalize_listing(kw, source)


def test_same_url_keeps_first_regardless_of_fields():
    first = _rec("Kijiji", url="https://x/1", title="First", price=1800)
    second = _rec("Craigslist", url="https://x/1", title="Second", price=1500)

    out = dedupe_listings([first, second])
    assert out == [first]


def test_title_is_key_when_url_empty_and_keyless_records_are_dropped():
    a = _rec("Kijiji", title="Same title")
    b = _rec("Kijiji", title="Same title", price=1700)
    c = _rec("Kijiji", url="https://x/c")
    keyless = _rec("Kijiji", description="no url, no title")

    assert dedupe_listings([a, b, keyless, c]) == [a, c]


def test_aggregate_preserves_first_seen_order_across_batches():
    k1 = _rec("Kijiji", url="https://x/1")
    k2 = _rec("Kijiji", url="https://x/2")
    c1 = _rec("Craigslist", url="https://x/3")
    dup = _rec("Craigslist", url="https://x/1")

    result = aggregate([[k1, k2], [], [c1, dup]])

    assert [r.url for r in result.records] == ["https://x/1", "https://x/2", "https://x/3"]
    assert result.counts_by_source == {"Kijiji": 2, "Craigslist": 1}
    assert list(result.counts_by_source) == ["Kijiji", "Craigslist"]
    assert result.used_seed is False


def test_empty_aggregate_falls_back_to_seed(caplog):
    with caplog.at_level(logging.WARNING):
        result = aggregate([[], []])

    assert result.used_seed is True
    assert len(result.records) == len(DEMO_SEED)
    assert {r.source for r in result.records} == {SEED_SOURCE}
    assert result.counts_by_source == {SEED_SOURCE: len(DEMO_SEED)}
    assert "falling back to demo seed data" in caplog.text

    first = result.records[0]
    assert first.amenities == ["gym", "pool", "balcony"]
    assert first.price == 1890


def test_summary_and_count_formatting():
    recs = [_rec("A", url="1"), _rec("B", url="2"), _rec("A", url="3")]
    counts = count_by_source(recs)

    assert counts == {"A": 2, "B": 1}
    assert format_counts(counts) == "A=2, B=1"
    assert format_counts({}) == "none"

    summary = aggregate([recs]).summary()
    assert summary.total == 3
    assert summary.used_seed is False
    assert summary.counts_by_source == {"A": 2, "B": 1}
