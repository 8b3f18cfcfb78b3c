import argparse
import asyncio
import logging
import sys

from tubescraper.config import Delays, RunSettings, load_input
from tubescraper.dispatcher import crawl_keywords
from tubescraper.errors import ConfigError
from tubescraper.sink import JsonLinesSink
from tubescraper.utils.log import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Keyword search scraper for YouTube video details")
    p.add_argument("--keyword", action="append", dest="keywords", default=None,
                   help="Search term (repeat for several). Overrides the input file.")
    p.add_argument("--input", type=str, default=None,
                   help='Input JSON: {"keywords": [...], "maxCount": 20, "cutoffDate": "YYYY-MM-DD"}')
    p.add_argument("--max-count", type=int, default=None, help="Videos to collect per keyword (default 20)")
    p.add_argument("--cutoff-date", type=str, default=None,
                   help="Skip videos uploaded before this local date (YYYY-MM-DD)")
    p.add_argument("--out-json", type=str, default="dataset.jsonl", help="Output JSON lines path")
    p.add_argument("--headless", dest="headless", action="store_true", default=True,
                   help="Run headless browser (default)")
    p.add_argument("--headed", dest="headless", action="store_false", help="Show the browser window")
    p.add_argument("--slow-mo", type=int, default=0, help="Slow every Playwright action by N ms")
    p.add_argument("--storage-state", type=str, default=None,
                   help="Playwright storage_state json (cookies / consent)")
    p.add_argument("--max-rounds", type=int, default=200, help="Scroll rounds per keyword before giving up")
    p.add_argument("--log-level", type=str, default="INFO")
    p.add_argument("--log-file", type=str, default=None)
    return p.parse_args(argv)


def build_settings(args) -> RunSettings:
    return RunSettings(
        headless=args.headless,
        slow_mo_ms=args.slow_mo,
        storage_state=args.storage_state,
        delays=Delays(),
        max_rounds=args.max_rounds,
    )


async def run(args) -> int:
    run_input = load_input(
        path=args.input,
        keywords=args.keywords,
        max_count=args.max_count,
        cutoff_date=args.cutoff_date,
    )
    config = run_input.collection_config()

    with JsonLinesSink(args.out_json) as sink:
        summary = await crawl_keywords(run_input.keywords, config, sink, build_settings(args))

    logger.info(
        "[OK] %d records from %d keywords (%d failed) -> %s",
        summary.emitted,
        len(summary.terms),
        summary.failed_terms,
        args.out_json,
    )
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    try:
        return asyncio.run(run(args))
    except ConfigError as e:
        logger.error("Invalid input: %s", e)
        return 2
    except Exception:
        logger.exception("Scraper failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
