import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from putting_analyzer.analytics import (
    analyze_by_distance,
    analyze_by_slope,
    calculate_analytics_summary,
    calculate_stats,
    filter_rounds_by_period,
)
from putting_analyzer.api_clients import APIError
from putting_analyzer.config import ConfigManager
from putting_analyzer.models import Period, load_rounds
from putting_analyzer.ocr import ScorecardReader, convert_ocr_batch, image_to_data_url
from putting_analyzer.utils import ConfigError

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_USAGE_ERROR = 2

REMOTE_PREFIXES = ("http://", "https://", "data:")


def setup_logging(log_level):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )


def _parse_period(raw: str) -> Period:
    try:
        return Period(raw.strip().lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected one of {[p.value for p in Period]}, got {raw!r}"
        )


def _parse_positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError("expected a number")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="putting_analyzer",
        description="Putting statistics from recorded golf rounds",
    )
    parser.add_argument('--config', type=str, default='config.json', help='Path to config file')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level')

    subparsers = parser.add_subparsers(dest='command', required=True)

    summary = subparsers.add_parser('summary', help='Combined analytics summary')
    summary.add_argument('rounds', type=str, help='Rounds JSON file')
    summary.add_argument('--period', type=_parse_period, help='week, month, year or all (default from config)')
    summary.add_argument('--json', action='store_true', help='Print the summary as JSON')
    summary.add_argument('--csv-dir', type=str, help='Write one CSV per breakdown into this directory')

    bands = subparsers.add_parser('bands', help='Overall stats and first-putt success by band and slope')
    bands.add_argument('rounds', type=str, help='Rounds JSON file')
    bands.add_argument('--period', type=_parse_period, help='week, month, year or all (default from config)')

    scan = subparsers.add_parser('scan', help='Read scorecard images into hole records')
    scan.add_argument('images', nargs='+', help='Image files or http(s)/data: URLs')
    scan.add_argument('--stride-length', type=_parse_positive_float,
                      help='Meters per paced step (default from config)')
    scan.add_argument('--output', type=str, help='Write holes JSON here instead of stdout')

    return parser


def _load_period_rounds(cfg: ConfigManager, args):
    rounds = load_rounds(args.rounds)
    period = args.period or cfg.default_period
    return filter_rounds_by_period(rounds, period)


def run_summary(cfg: ConfigManager, args) -> None:
    rounds = _load_period_rounds(cfg, args)
    summary = calculate_analytics_summary(rounds)

    if args.csv_dir:
        from putting_analyzer.analytics.report import write_summary_csv
        for path in write_summary_csv(summary, args.csv_dir):
            print(path)
    elif args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        from putting_analyzer.analytics.report import render_tables
        print(render_tables(summary))


def run_bands(cfg: ConfigManager, args) -> None:
    rounds = _load_period_rounds(cfg, args)
    output = {
        'stats': asdict(calculate_stats(rounds)),
        'distance': {band: asdict(rate) for band, rate in analyze_by_distance(rounds).items()},
        'slope': {slope.value: asdict(rate) for slope, rate in analyze_by_slope(rounds).items()},
    }
    print(json.dumps(output, indent=2))


def _image_urls(images: List[str]) -> List[str]:
    urls = []
    for image in images:
        if image.startswith(REMOTE_PREFIXES):
            urls.append(image)
        else:
            urls.append(image_to_data_url(image))
    return urls


async def run_scan(cfg: ConfigManager, args) -> None:
    logger = logging.getLogger("putting_analyzer")
    cfg.validate_for_mode('scan')
    stride_length = args.stride_length or cfg.stride_length

    reader = ScorecardReader(cfg)
    readings = await reader.read_batch(_image_urls(args.images))

    hole_readings = []
    for image, reading in zip(args.images, readings):
        parsed = reading.hole_reading()
        if parsed is None:
            logger.warning(f"No usable reading for {image}: {reading.error or 'reply was not JSON'}")
            continue
        hole_readings.append(parsed)

    holes = convert_ocr_batch(hole_readings, stride_length)
    payload = json.dumps([hole.to_dict() for hole in holes], indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote {len(holes)} holes to {args.output}")
    else:
        print(payload)

    stats = reader.get_api_stats()
    logger.info(
        f"OCR usage: {stats['total_requests']} requests, "
        f"{stats['total_input_tokens']} input / {stats['total_output_tokens']} output tokens, "
        f"${stats['total_cost']:.4f}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger("putting_analyzer")

    try:
        cfg = ConfigManager(args.config)
    except (ConfigError, json.JSONDecodeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_USAGE_ERROR

    try:
        if args.command == 'summary':
            run_summary(cfg, args)
        elif args.command == 'bands':
            run_bands(cfg, args)
        elif args.command == 'scan':
            asyncio.run(run_scan(cfg, args))
    except ConfigError as e:
        # missing config for the command
        logger.error(str(e))
        return EXIT_USAGE_ERROR
    except (APIError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        return EXIT_RUNTIME_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
