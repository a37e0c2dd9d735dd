# rentradar/adapters/ingestion/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol, Sequence

from ...domain.types import RawCandidate

AdapterRun = Callable[[int, Sequence[str]], Awaitable[list[RawCandidate]]]


class ListingProvider(Protocol):
    async def fetch(self, max_rent: int, regions: Sequence[str]) -> list[RawCandidate]:
        """Raw candidates for this source. Shape is source-specific."""
        ...


@dataclass(frozen=True)
class SourceAdapter:
    """
    A named source. `name` is only used for logging and as the `source` tag
    at normalization time; providers never write it into their output.
    """

    name: str
    run: AdapterRun

    @classmethod
    def of(cls, name: str, provider: ListingProvider) -> "SourceAdapter":
        return cls(name=name, run=provider.fetch)
