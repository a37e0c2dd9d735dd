from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_RENT = 1900
DEFAULT_REGIONS: tuple[str, ...] = (
    "Markham",
    "Angus Glen",
    "Unionville",
    "North York",
    "Richmond Hill",
    "Vaughan",
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"

    # --- Search filters (raw strings; resolved by PipelineConfig.from_settings) ---
    MAX_RENT: str | None = None
    REGIONS: str | None = None

    # --- Syndication sources ---
    KIJIJI_RSS_BASE_URL: str = (
        "https://www.kijiji.ca/rss-srp-apartments-condos/gta-greater-toronto-area/1+den__1+1/k0c37l1700272"
    )
    CRAIGSLIST_RSS_URL: str = "https://toronto.craigslist.org/search/apa"
    CRAIGSLIST_QUERY: str = "1+den parking"

    # --- Outbound HTTP ---
    HTTP_TIMEOUT_S: float = 20.0
    HTTP_MAX_RETRIES: int = 2
    HTTP_BACKOFF_BASE_S: float = 0.5
    HTTP_RATE_LIMIT_RPS: float = 0.0  # 0 disables the limiter
    HTTP_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
    )

    # --- Page automation (Playwright) ---
    BROWSER_ENABLED: bool = True
    BROWSER_HEADLESS: bool = True
    PLAYWRIGHT_BROWSERS_PATH: str = ".playwright-browsers"

    # --- Output ---
    EXPORT_PATH: str = "exports/unified.json"


def sanitize_max_rent(value: Any) -> int:
    """Positive integer rent ceiling, else DEFAULT_MAX_RENT."""
    if value is None or value == "":
        return DEFAULT_MAX_RENT
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return DEFAULT_MAX_RENT
    return parsed if parsed > 0 else DEFAULT_MAX_RENT


def parse_regions(value: str | None) -> tuple[str, ...]:
    """Split a `;`/`,` separated region list. Empty input means the defaults."""
    if not value:
        return DEFAULT_REGIONS
    regions = tuple(chunk.strip() for chunk in re.split(r"[;,]", value) if chunk.strip())
    return regions or DEFAULT_REGIONS


@dataclass(frozen=True)
class PipelineConfig:
    max_rent: int = DEFAULT_MAX_RENT
    regions: tuple[str, ...] = DEFAULT_REGIONS

    @classmethod
    def from_settings(cls, s: Settings) -> "PipelineConfig":
        return cls(max_rent=sanitize_max_rent(s.MAX_RENT), regions=parse_regions(s.REGIONS))


settings = Settings()
