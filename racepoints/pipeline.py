"""Season report pipeline that ties everything together."""

import logging
from typing import Optional

from .exporter import export_csv
from .loader import read_event_directory
from .models import SeasonReport
from .schemas import SeasonConfig
from .season import combine_results, drop_lowest, rank_results
from .validators import validate_season

logger = logging.getLogger('racepoints.pipeline')


def run_season(config: Optional[SeasonConfig] = None) -> SeasonReport:
    """
    Build the season standings CSV from a directory of event results.

    Steps: read and parse every event file, combine points per driver,
    apply the drop-lowest rule, rank each class, write the CSV.

    Args:
        config: Season configuration (default: SeasonConfig())

    Returns:
        SeasonReport with the parsed events, standings, CSV text and warnings

    Raises:
        FileNotFoundError: If the data directory doesn't exist
        RacePointsError: If a results file is malformed or misnamed
    """
    config = config or SeasonConfig()

    logger.info(f'Reading events from {config.data_dir}')
    events = read_event_directory(config)
    logger.info(f'Found {len(events)} event(s): {", ".join(events) or "none"}')

    combined = combine_results(events, fold_case=config.normalize_names)
    trimmed = drop_lowest(combined, keep=config.keep)
    standings = rank_results(trimmed)

    driver_count = sum(len(s) for s in standings.values())
    logger.info(f'Ranked {driver_count} driver(s) in {len(standings)} class(es)')

    warnings = validate_season(events, standings, keep=config.keep)
    for warning in warnings:
        logger.warning(warning)

    csv_text = export_csv(standings, config.output_path)

    return SeasonReport(
        events=events,
        standings=standings,
        csv_text=csv_text,
        output_path=config.output_path,
        warnings=warnings,
    )
