from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from typing import Sequence

from ..adapters.browser import open_page
from ..adapters.sinks.json_file import write_listings
from ..config import PipelineConfig, parse_regions, sanitize_max_rent, settings
from ..service_layer.use_cases.aggregate import AggregateResult
from ..service_layer.use_cases.refresh import build_default_adapters, run_pipeline

log = logging.getLogger("rentradar")


def _quiet_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rentradar", description="Collect rental listings into one JSON file")
    parser.add_argument("--max-rent", default=None, help="Rent ceiling (default: MAX_RENT or 1900)")
    parser.add_argument("--regions", default=None, help="Regions separated by ';' or ',' (default: REGIONS)")
    parser.add_argument("--out", default=None, help=f"Output path (default: {settings.EXPORT_PATH})")
    parser.add_argument("--no-browser", action="store_true", help="Skip page-rendered sources")
    return parser


def _resolve_config(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig.from_settings(settings)
    if args.max_rent is not None:
        config = replace(config, max_rent=sanitize_max_rent(args.max_rent))
    if args.regions:
        config = replace(config, regions=parse_regions(args.regions))
    return config


async def collect(config: PipelineConfig, *, use_browser: bool = True) -> AggregateResult:
    async with open_page(settings, enabled=use_browser and settings.BROWSER_ENABLED) as page:
        adapters = build_default_adapters(page=page, s=settings)
        return await run_pipeline(adapters, config)


async def _main(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    log.info("max_rent=%s regions=%s", config.max_rent, ", ".join(config.regions))

    result = await collect(config, use_browser=not args.no_browser)

    path = write_listings(args.out or settings.EXPORT_PATH, result.records)
    log.info("[write] %s", path)
    log.info("[summary] %s", result.summary().model_dump_json())

    sample = [r.title for r in result.records[:2] if r.title]
    if sample:
        log.info("[sample] first titles -> %s", " | ".join(sample))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _quiet_logging(settings.LOG_LEVEL)
    try:
        return asyncio.run(_main(args))
    except Exception as e:
        log.error("[fatal] %s: %s", type(e).__name__, e)
        return 1


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
