# rentradar/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Adapter output before normalization. Shape varies per source.
RawCandidate = dict[str, Any]


@dataclass(frozen=True)
class FeedItem:
    title: str = ""
    link: str = ""
    description: str = ""  # tag-stripped
    raw_description: str = ""  # decoded, markup kept
    pub_date: str = ""  # as found in the feed, unparsed
    enclosure: str = ""
