# rentradar/domain/normalize.py
from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Mapping

from ..schemas import ListingRecord
from .parsing import to_float, to_int, to_str

_LIST_SPLIT_RE = re.compile(r"[;,]")

# Tried in order; the first one that parses wins.
DATE_KEYS: tuple[str, ...] = ("date_found", "pubDate", "pub_date", "date")

_STR_FIELDS: tuple[str, ...] = (
    "title",
    "url",
    "address",
    "city",
    "neighborhood",
    "building",
    "unit",
    "beds",
    "baths",
    "exposure",
    "description",
    "notes",
)
_INT_FIELDS: tuple[str, ...] = ("price", "sqft", "fee_month", "floor", "total_floors")


def parse_timestamp(value: Any) -> datetime | None:
    """
    Accepts datetimes, ISO-8601 strings (trailing Z ok) and RFC-822 dates as
    used by RSS pubDate. Naive values are taken as UTC; the result is always
    in UTC, or None when it falls outside the datetime range.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        s = str(value).strip()
        if not s:
            return None
        try:
            parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(s)
            except (TypeError, ValueError, IndexError, OverflowError):
                return None
            if parsed is None:
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes it past year 1 or 9999
        return None


def resolve_date_found(raw: Mapping[str, Any], *, now: datetime | None = None) -> str:
    for key in DATE_KEYS:
        parsed = parse_timestamp(raw.get(key))
        if parsed is not None:
            return parsed.isoformat()
    return (now or datetime.now(timezone.utc)).astimezone(timezone.utc).isoformat()


def _is_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def normalize_amenities(value: Any) -> list[str]:
    """
    - list/tuple: keep truthy entries (trimmed)
    - scalar: split on `;` or `,`
    Empty pieces are dropped either way.
    """
    if value is None:
        return []
    pieces = [to_str(v) for v in value if v] if _is_sequence(value) else _LIST_SPLIT_RE.split(to_str(value))
    return [p.strip() for p in pieces if p.strip()]


def normalize_images(value: Any) -> list[str]:
    items = list(value) if _is_sequence(value) else [value]
    return [to_str(v).strip() for v in items if v and to_str(v).strip()]


def normalize_listing(raw: Mapping[str, Any], source_name: str) -> ListingRecord:
    """
    Map any adapter payload into the canonical ListingRecord.

    Total over any mapping: missing or unusable values fall back to the
    field defaults, so every record carries the full field set.
    """
    if not source_name or not str(source_name).strip():
        raise ValueError("source_name must be a non-empty string")

    raw = raw or {}
    fields: dict[str, Any] = {k: to_str(raw.get(k)) for k in _STR_FIELDS}
    fields.update({k: to_int(raw.get(k)) for k in _INT_FIELDS})

    return ListingRecord(
        date_found=resolve_date_found(raw),
        source=str(source_name),
        parking=bool(raw.get("parking") or False),
        amenities=normalize_amenities(raw.get("amenities")),
        images=normalize_images(raw.get("images")),
        score=to_float(raw.get("score")),
        **fields,
    )
