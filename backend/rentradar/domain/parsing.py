# rentradar/domain/parsing.py
from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

log = logging.getLogger(__name__)

_PRICE_RE = re.compile(r"\$?(\d{3,5})")


def to_int(x: Any) -> int | None:
    if x is None or x == "" or isinstance(x, bool):
        return None
    try:
        return int(float(x))
    except Exception:
        return None


def to_float(x: Any) -> float | None:
    if x is None or x == "" or isinstance(x, bool):
        return None
    try:
        return float(x)
    except Exception:
        return None


def to_str(x: Any) -> str:
    if x is None:
        return ""
    return x if isinstance(x, str) else str(x)


def extract_price(text: str | None) -> int | None:
    """
    First run of 3-5 digits (optionally after `$`) once thousands separators
    are removed: "$1,800/month" -> 1800. No plausibility check beyond that.
    """
    if not text:
        return None
    match = _PRICE_RE.search(text.replace(",", ""))
    return int(match.group(1)) if match else None


def detect_parking_mention(text: str | None) -> bool:
    return "parking" in (text or "").lower()


def match_region(text: str | Sequence[str] | None, regions: Iterable[str]) -> str | None:
    """
    First region (in caller order) found in the text. Region names are used
    as case-insensitive patterns ("Richmond\\s+Hill" works); a name that does
    not compile is skipped. `text` may be several fields, each searched on
    its own so a match never spans two of them.
    """
    texts = [text] if isinstance(text, str) or text is None else list(text)
    texts = [t for t in texts if t]
    if not texts:
        return None
    for region in regions:
        if not region:
            continue
        try:
            pattern = re.compile(region, re.IGNORECASE)
        except re.error:
            log.debug("skipping region with invalid pattern: %r", region)
            continue
        if any(pattern.search(t) for t in texts):
            return region
    return None
