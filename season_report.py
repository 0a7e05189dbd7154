#!/usr/bin/env python3
"""
Season Points Report CLI

Builds championship standings from a directory of plain-text timing results,
one file per event (file names must contain "event <number>").

Usage:
    python season_report.py --season 2025
    python season_report.py --season 2024 --output 2024-results.csv
    python season_report.py --config season.json --html
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from racepoints import (
    ClassNaming,
    RacePointsError,
    RowMode,
    SeasonConfig,
    get_season_config,
    load_config,
    run_season,
    write_sheet,
)
from racepoints.logging_config import setup_logging


def build_config(args: argparse.Namespace) -> SeasonConfig:
    """Start from the config file or season preset, then apply overrides."""
    if args.config:
        config = load_config(args.config)
    elif args.season:
        config = get_season_config(args.season)
    else:
        config = SeasonConfig()

    overrides = {}
    if args.data_dir:
        overrides['data_dir'] = Path(args.data_dir)
    if args.output:
        overrides['output_path'] = Path(args.output)
    if args.keep is not None:
        overrides['keep'] = args.keep
    if args.mode:
        overrides['row_mode'] = RowMode(args.mode)
    if args.class_names:
        overrides['class_naming'] = ClassNaming(args.class_names.replace('-', '_'))
    if args.normalize_names:
        overrides['normalize_names'] = True

    if overrides:
        config = SeasonConfig(**{**config.model_dump(), **overrides})
    return config


def main(argv=None):
    parser = argparse.ArgumentParser(description="Season championship points from timing results")
    parser.add_argument(
        "--season", "-y",
        type=int,
        default=None,
        help="Season preset to use (2024 or 2025)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON config file (overrides --season)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Directory of event results files",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for the standings CSV",
    )
    parser.add_argument(
        "--keep", "-k",
        type=int,
        default=None,
        help="Best results counted per driver (0 counts all)",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RowMode],
        default=None,
        help="strict: every numbered line must be a finisher; lenient: skip finishers without a lap time",
    )
    parser.add_argument(
        "--class-names",
        choices=["first-token", "full-line"],
        default=None,
        help="Name classes by the first word of the header or the whole header line",
    )
    parser.add_argument(
        "--normalize-names",
        action="store_true",
        help="Merge drivers whose names differ only in spacing or case",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also render the CSV as an HTML sheet",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for log files (default: ./logs)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Only log to the console",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every line read",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )

    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING

    logger = setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=level,
        log_to_file=not args.no_log_file,
    )

    try:
        config = build_config(args)
        report = run_season(config)
        if args.html:
            write_sheet(report.output_path)
    except (RacePointsError, OSError, KeyError, ValueError, ValidationError) as e:
        logger.error(f'❌ {e}')
        return 1

    for class_name, standings in report.standings.items():
        logger.info(f'{class_name}:')
        for rank, standing in enumerate(standings, 1):
            logger.info(f'  {rank}. {standing.name}: {standing.total} pts')

    logger.info('Done')
    return 0


if __name__ == "__main__":
    sys.exit(main())
