"""Command line entry point for the trade view service."""

import argparse
import asyncio
import json
import sys
from datetime import date
from typing import Any, Dict, List, Optional

from shared.schemas.models import Period, TradeRecord
from shared.utils.errors import ConfigurationError, SourceError
from shared.utils.logging import LOG_FORMATS, get_logger, setup_logging
from .config import TradeViewConfig
from .pipeline import TradeViewPipeline, TradeViewResult
from .source.client import TradeSourceClient, default_start_date, load_trades_file


logger = get_logger(__name__)

EXIT_OK = 0
EXIT_SOURCE_ERROR = 1
EXIT_CONFIG_ERROR = 2

CHART_SECTIONS = {
    "bar": ("series", "bar_chart"),
    "treemap": ("hierarchy",),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trade-view",
        description="Bucket trades by calendar period and emit chart projections as JSON",
    )
    parser.add_argument("--input", help="Read trades from a JSON file instead of the API")
    parser.add_argument("--url", help="Trades API URL (defaults to TRADE_VIEW_SOURCE_URL)")
    parser.add_argument("--start", type=date.fromisoformat, help="Start date (YYYY-MM-DD); defaults to one year ago")
    parser.add_argument("--min-size", type=float, help="Minimum trade size requested from the API")
    parser.add_argument(
        "--period",
        help="Aggregation period: Daily, Weekly, Monthly or Quarterly",
    )
    parser.add_argument("--chart", choices=["bar", "treemap", "both"], default="both", help="Projection(s) to emit")
    parser.add_argument("--log-level", help="Logging level (debug, info, warning, error)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log output format")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation for the output")
    return parser


async def load_records(args: argparse.Namespace, config: TradeViewConfig) -> List[TradeRecord]:
    """Load trades from the file given on the command line or from the API."""
    if args.input:
        return load_trades_file(args.input)

    if args.url:
        config.source_url = args.url
    start = args.start or default_start_date(years=config.lookback_years)
    min_size = args.min_size if args.min_size is not None else config.min_trade_size

    async with TradeSourceClient(config) as client:
        return await client.fetch_trades(start, min_size)


def render_output(result: TradeViewResult, chart: str) -> Dict[str, Any]:
    """Select the sections of the result requested by ``--chart``."""
    document = result.to_dict()
    if chart == "both":
        return document

    dropped = {
        section
        for name, sections in CHART_SECTIONS.items()
        if name != chart
        for section in sections
    }
    return {key: value for key, value in document.items() if key not in dropped}


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = TradeViewConfig()
        period = Period.parse(args.period) if args.period else config.default_period
    except (ConfigurationError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(
        config.service_name,
        log_level=args.log_level or config.observability.log_level,
        format_type=args.log_format or config.observability.log_format,
    )

    try:
        records = await load_records(args, config)
    except SourceError as e:
        logger.error("Failed to load trades", **e.to_dict())
        return EXIT_SOURCE_ERROR

    result = TradeViewPipeline(config).run(records, period)
    json.dump(render_output(result, args.chart), sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
