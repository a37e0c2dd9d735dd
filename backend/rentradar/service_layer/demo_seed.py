from __future__ import annotations

from ..domain.normalize import normalize_listing
from ..schemas import ListingRecord

SEED_SOURCE = "DemoSeed"

DEMO_SEED: tuple[dict, ...] = (
    {
        "date_found": "2025-01-01T09:00:00.000Z",
        "source": SEED_SOURCE,
        "title": "Downtown Markham 1+Den with Parking",
        "url": "https://example.com/listings/downtown-markham-1plusden",
        "price": 1890,
        "address": "15 Water Walk Dr",
        "city": "Markham",
        "neighborhood": "Downtown Markham",
        "building": "Water Walk",
        "unit": "1208",
        "beds": "1+1",
        "baths": "1",
        "sqft": 640,
        "fee_month": None,
        "parking": True,
        "amenities": ["gym", "pool", "balcony"],
        "floor": 12,
        "total_floors": 25,
        "exposure": "S",
        "images": ["https://picsum.photos/seed/downtownmarkham/800/500"],
        "description": "Sunlit 1+den with parking and balcony overlooking community centre.",
        "score": None,
        "notes": "",
    },
    {
        "date_found": "2025-01-01T09:05:00.000Z",
        "source": SEED_SOURCE,
        "title": "Angus Glen Townhome 1+Den Garage",
        "url": "https://example.com/listings/angus-glen-townhome",
        "price": 1850,
        "address": "10000 Kennedy Rd",
        "city": "Markham",
        "neighborhood": "Angus Glen",
        "building": "Village at Angus Glen",
        "unit": "",
        "beds": "1+1",
        "baths": "1",
        "sqft": 710,
        "fee_month": None,
        "parking": True,
        "amenities": ["balcony", "garage"],
        "floor": 2,
        "total_floors": 3,
        "exposure": "E",
        "images": ["https://picsum.photos/seed/angusglen/800/500"],
        "description": "Townhome loft with garage parking and quiet street steps to golf club.",
        "score": None,
        "notes": "",
    },
    {
        "date_found": "2025-01-01T09:10:00.000Z",
        "source": SEED_SOURCE,
        "title": "North York 1+Den near Finch Subway",
        "url": "https://example.com/listings/north-york-1plusden",
        "price": 1795,
        "address": "15 Greenview Ave",
        "city": "Toronto",
        "neighborhood": "North York",
        "building": "Meridian",
        "unit": "",
        "beds": "1+1",
        "baths": "1",
        "sqft": 600,
        "fee_month": None,
        "parking": True,
        "amenities": ["gym", "pool", "concierge"],
        "floor": 20,
        "total_floors": 31,
        "exposure": "SE",
        "images": ["https://picsum.photos/seed/northyork/800/500"],
        "description": "Bright unit with full den and steps to Finch TTC hub.",
        "score": None,
        "notes": "",
    },
)


def seed_listings() -> list[ListingRecord]:
    """Fallback dataset, normalized like any adapter output and tagged DemoSeed."""
    return [normalize_listing(row, row.get("source") or SEED_SOURCE) for row in DEMO_SEED]
