"""Discovery and loading of per-event results files."""

import logging
import math
from pathlib import Path
from typing import Dict, Optional

from .constants import EVENT_ID_PATTERN
from .exceptions import DuplicateEventError, MissingEventIdentifierError
from .models import ParsedEvent
from .parser import parse_result_file
from .schemas import SeasonConfig

logger = logging.getLogger('racepoints.loader')


def extract_event_id(filename: str) -> Optional[str]:
    """
    Get the event identifier from a results file name.

    Examples:
        "Round 3 - Event 3.txt" -> "event 3"
        "event 12 results.txt" -> "event 12"
        "practice.txt" -> None
    """
    match = EVENT_ID_PATTERN.search(filename)
    if not match:
        return None
    return f'event {match.group(1)}'


def _sort_key(path: Path) -> tuple[float, str]:
    """Order files by event number, then by name."""
    match = EVENT_ID_PATTERN.search(path.name)
    number = int(match.group(1)) if match else math.inf
    return number, path.name.lower()


def read_event_directory(config: SeasonConfig) -> Dict[str, ParsedEvent]:
    """
    Parse every results file in the season's data directory.

    Subdirectories, hidden files and files with a skipped extension are
    ignored. Empty files are skipped as events with no data yet.

    Args:
        config: Season configuration (data_dir, row_mode, score_table, ...)

    Returns:
        Dict mapping event id (e.g. "event 3") to that event's parsed results,
        in event number order

    Raises:
        FileNotFoundError: If the data directory doesn't exist
        NotADirectoryError: If the data directory is a file
        MalformedLineError: If a results file has a bad finisher row
        MissingEventIdentifierError: If a results file name has no event number
        DuplicateEventError: If two files are results for the same event
    """
    data_dir = Path(config.data_dir)

    if not data_dir.exists():
        logger.error(f'Data directory not found: {data_dir}')
        raise FileNotFoundError(f'Data directory not found: {data_dir}')
    if not data_dir.is_dir():
        logger.error(f'Data path is not a directory: {data_dir}')
        raise NotADirectoryError(f'Data path is not a directory: {data_dir}')

    events: Dict[str, ParsedEvent] = {}
    sources: Dict[str, str] = {}

    for path in sorted(data_dir.iterdir(), key=_sort_key):
        filename = path.name.lower()

        if not path.is_file() or filename.startswith('.'):
            continue
        if filename.endswith(tuple(ext.lower() for ext in config.skip_extensions)):
            logger.debug(f'Skipping {path.name}')
            continue

        logger.info(f'Reading file {path.name}')
        contents = parse_result_file(
            path,
            mode=config.row_mode,
            table=config.score_table,
            class_naming=config.class_naming,
            normalize_names=config.normalize_names,
        )
        if contents is None:
            logger.info(f'{path.name} is empty, skipping')
            continue

        event_id = extract_event_id(path.name)
        if event_id is None:
            logger.error(f'No event number in file name: {path.name}')
            raise MissingEventIdentifierError(path.name)
        if event_id in events:
            logger.error(f'{path.name} and {sources[event_id]} are both {event_id}')
            raise DuplicateEventError(event_id, [sources[event_id], path.name])

        events[event_id] = contents
        sources[event_id] = path.name
        logger.debug(f'{path.name} -> {event_id}: {len(contents)} class(es)')

    return events
