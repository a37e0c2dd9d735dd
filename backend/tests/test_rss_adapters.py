import httpx
import pytest

from rentradar.adapters.ingestion.pages import CondosPageProvider, RealtorPageProvider
from rentradar.adapters.ingestion.rss import CraigslistRssProvider, KijijiRssProvider
from rentradar.domain.normalize import normalize_listing

from rss_fixtures import rss_doc, rss_item

REGIONS = ("Markham", "North York")


@pytest.mark.asyncio
async def test_kijiji_fans_out_per_region_and_tags_results(fast_policy):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        region = request.url.params["keywords"]
        xml = rss_doc(
            rss_item(
                title=f"1+den in {region}",
                link=f"https://kijiji.example/{region.replace(' ', '-')}",
                description="<p>$1,850 per month, parking included</p>",
                pub_date="Mon, 06 Jan 2025 10:00:00 +0000",
                extra='<enclosure url="https://img.example/a.jpg"/>',
            )
        )
        return httpx.Response(200, text=xml)

    provider = KijijiRssProvider(
        base_url="https://kijiji.example/rss", policy=fast_policy, transport=httpx.MockTransport(handler)
    )
    rows = await provider.fetch(1900, REGIONS)

    assert [r.url.params["keywords"] for r in seen] == ["Markham", "North York"]
    assert all(r.url.params["price"] == "0__1900" for r in seen)
    assert all(r.url.params["ad"] == "offering" for r in seen)

    assert [row["city"] for row in rows] == ["Markham", "North York"]
    assert [row["neighborhood"] for row in rows] == ["Markham", "North York"]
    first = rows[0]
    assert first["price"] == 1850
    assert first["parking"] is True
    assert first["images"] == ["https://img.example/a.jpg"]
    assert first["description"] == "$1,850 per month, parking included"
    assert first["date_found"] == "Mon, 06 Jan 2025 10:00:00 +0000"
    assert "source" not in first


@pytest.mark.asyncio
async def test_kijiji_dead_feed_is_zero_results(fast_policy, static_transport):
    provider = KijijiRssProvider(
        base_url="https://kijiji.example/rss", policy=fast_policy, transport=static_transport("", status=500)
    )
    assert await provider.fetch(1900, REGIONS) == []


@pytest.mark.asyncio
async def test_craigslist_single_query_matches_regions(fast_policy, static_transport):
    xml = rss_doc(
        rss_item(title="$1795 1br+den North York", link="https://cl.example/1", description="steps to subway"),
        rss_item(title="Spacious den", link="https://cl.example/2", description="in markham, PARKING"),
        rss_item(title="Downtown loft $2,000", link="https://cl.example/3", description="no car needed"),
    )
    transport = static_transport(xml)
    provider = CraigslistRssProvider(search_url="https://cl.example/search/apa", policy=fast_policy, transport=transport)

    rows = await provider.fetch(1900, REGIONS)

    (req,) = transport.seen
    assert req.url.params["max_price"] == "1900"
    assert req.url.params["format"] == "rss"

    assert [(r["city"], r["neighborhood"]) for r in rows] == [
        ("North York", "North York"),
        ("Markham", "Markham"),
        ("GTA", ""),
    ]
    assert [r["price"] for r in rows] == [1795, None, 2000]
    assert [r["parking"] for r in rows] == [False, True, False]


@pytest.mark.asyncio
async def test_media_content_only_becomes_images(fast_policy, static_transport):
    xml = rss_doc(rss_item(title="Condo", link="https://cl.example/9", extra='<media:content url="http://x/y.jpg">'))
    provider = CraigslistRssProvider(
        search_url="https://cl.example/search/apa", policy=fast_policy, transport=static_transport(xml)
    )

    (row,) = await provider.fetch(1900, REGIONS)
    assert normalize_listing(row, "Craigslist").images == ["http://x/y.jpg"]


class _ExplodingPage:
    def __getattr__(self, name):
        raise AssertionError(f"page.{name} must not be touched")


@pytest.mark.asyncio
async def test_page_providers_tolerate_missing_page():
    assert await RealtorPageProvider(page=None).fetch(1900, REGIONS) == []
    assert await CondosPageProvider(page=None).fetch(1900, REGIONS) == []


@pytest.mark.asyncio
async def test_page_providers_are_empty_for_now():
    page = _ExplodingPage()
    assert await RealtorPageProvider(page=page).fetch(1900, REGIONS) == []
    assert await CondosPageProvider(page=page).fetch(1900, REGIONS) == []
