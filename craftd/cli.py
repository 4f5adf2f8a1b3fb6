# craftd/cli.py
# Command-line interface entry point (argparse)
import argparse
import datetime as dt
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from craftd.applications.heatmap import build_application_heatmap
from craftd.career.financials import (
    get_compensation_breakdown,
    get_financial_metrics,
    get_salary_progression_data,
    get_work_experiences_with_financials,
)
from craftd.career.progression import get_career_progression_summary
from craftd.career.timeline import get_career_timeline
from craftd.config.loaders import ConfigLoadError, load_config
from craftd.config.models import CraftdConfig
from craftd.data.readers import CareerData, DataReadError, read_career_data
from craftd.logging_config import (
    CALCULATIONS_LOGGER,
    DEBUG_LOGGER,
    ERROR_LOGGER,
    PERFORMANCE_LOGGER,
    LoggingSetup,
)
from craftd.utils.date_utils import to_date

# Get logger for this module
logger = logging.getLogger(__name__)

COMMANDS = ("summary", "timeline", "financials", "heatmap")


def _as_of(value: str) -> dt.date:
    try:
        return to_date(value)
    except (ValueError, OverflowError) as e:
        raise argparse.ArgumentTypeError(f"Invalid --as-of date: {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="craftd",
        description="Compute career progression, financial and application-activity reports.",
    )
    parser.add_argument("command", choices=COMMANDS, help="Report to produce.")
    parser.add_argument(
        "--data",
        type=str,
        required=True,
        help="Career data file (.yaml, .json or .csv).",
    )
    parser.add_argument(
        "--as-of",
        type=_as_of,
        default=None,
        help="Date ongoing jobs run to (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to the YAML configuration file.")
    parser.add_argument("--log-dir", type=str, default=None, help="Directory to store log files.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def run_summary(data: CareerData, as_of: dt.date, config: CraftdConfig) -> Dict[str, Any]:
    return get_career_progression_summary(data.periods, data.events, as_of=as_of).to_dict()


def run_timeline(data: CareerData, as_of: dt.date, config: CraftdConfig) -> List[Dict[str, Any]]:
    timeline = get_career_timeline(data.periods, data.events, currency=config.currency)
    return [item.to_dict() for item in timeline]


def run_financials(data: CareerData, as_of: dt.date, config: CraftdConfig) -> Dict[str, Any]:
    return {
        "metrics": get_financial_metrics(data.periods, as_of=as_of).to_dict(),
        "work_experiences": [
            exp.to_dict() for exp in get_work_experiences_with_financials(data.periods, as_of=as_of)
        ],
        "salary_progression": [p.to_dict() for p in get_salary_progression_data(data.periods)],
        "compensation_breakdown": [
            c.to_dict() for c in get_compensation_breakdown(data.periods, currency=config.currency)
        ],
    }


def run_heatmap(data: CareerData, as_of: dt.date, config: CraftdConfig) -> Dict[str, Any]:
    return build_application_heatmap(
        data.applications,
        as_of=as_of,
        weeks_to_show=config.heatmap.weeks_to_show,
        days=config.heatmap.days,
    ).to_dict()


RUNNERS: Dict[str, Callable[[CareerData, dt.date, CraftdConfig], Any]] = {
    "summary": run_summary,
    "timeline": run_timeline,
    "financials": run_financials,
    "heatmap": run_heatmap,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the craftd CLI."""
    args = parse_arguments(argv)

    try:
        config = load_config(args.config)
    except ConfigLoadError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    log_dir = Path(args.log_dir) if args.log_dir else config.logging.log_dir
    logging_setup = LoggingSetup(
        log_dir=log_dir,
        debug=args.debug or config.logging.debug,
        clear_existing=config.logging.clear_existing,
    )
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER)
    calc_logger = logging.getLogger(CALCULATIONS_LOGGER)
    err_logger = logging.getLogger(ERROR_LOGGER)
    debug_logger = logging.getLogger(DEBUG_LOGGER)

    with logging_setup:
        logger.info(f"Starting craftd {args.command}")
        debug_logger.debug(f"Command line arguments: {argv if argv is not None else sys.argv[1:]}")

        try:
            data = read_career_data(args.data)
        except DataReadError as e:
            err_logger.error(f"Could not read career data: {e}")
            print(f"Error reading career data: {e}", file=sys.stderr)
            return 1

        as_of = args.as_of or dt.date.today()
        calc_logger.info(
            f"{args.command}: {len(data.periods)} work experiences, {len(data.events)} career events, "
            f"{len(data.applications)} applications, as of {as_of}"
        )
        started = time.perf_counter()
        result = RUNNERS[args.command](data, as_of, config)
        perf_logger.info(f"{args.command} computed in {time.perf_counter() - started:.4f}s")

        print(json.dumps(result, indent=args.indent, ensure_ascii=False))
        logger.info(f"Finished craftd {args.command}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
