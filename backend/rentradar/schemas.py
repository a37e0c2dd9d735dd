from pydantic import BaseModel, Field


class ListingRecord(BaseModel):
    """Canonical listing. Every source is normalized into exactly this shape."""

    date_found: str
    source: str = Field(..., min_length=1)
    title: str = ""
    url: str = ""
    price: int | None = None

    address: str = ""
    city: str = ""
    neighborhood: str = ""
    building: str = ""
    unit: str = ""
    beds: str = ""
    baths: str = ""

    sqft: int | None = None
    fee_month: int | None = None
    parking: bool = False
    amenities: list[str] = Field(default_factory=list)
    floor: int | None = None
    total_floors: int | None = None
    exposure: str = ""
    images: list[str] = Field(default_factory=list)
    description: str = ""

    # reserved for downstream ranking
    score: float | None = None
    notes: str = ""


class PipelineSummary(BaseModel):
    total: int = Field(..., ge=0)
    used_seed: bool
    counts_by_source: dict[str, int]
