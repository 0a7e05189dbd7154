"""Season aggregation: combine events, drop the worst results, rank drivers."""

import logging
from typing import Dict, List, Mapping, Optional

from .constants import DEFAULT_KEEP
from .models import DriverStanding, ParsedEvent, SeasonResults

logger = logging.getLogger('racepoints.season')


def combine_results(
    events: Mapping[str, ParsedEvent],
    fold_case: bool = False,
) -> SeasonResults:
    """
    Collect each driver's points per class across all events.

    A driver who didn't finish an event gets no entry for it (not a zero).

    Args:
        events: Event id -> parsed event, in the order points should be appended
        fold_case: Treat driver names differing only in case as one driver,
            keeping the first spelling seen. Spellings that meet in the same
            event and class still give one score, from the last of them.

    Returns:
        Dict of class name -> {driver name: [points per event]}
    """
    combined: SeasonResults = {}
    # class -> folded name -> display name
    spellings: Dict[str, Dict[str, str]] = {}

    for event_id, event in events.items():
        for class_name, drivers in event.items():
            class_results = combined.setdefault(class_name, {})
            class_spellings = spellings.setdefault(class_name, {})

            # Spellings folded together within one event keep the last row's points
            seen = set()
            for driver, points in drivers.items():
                if fold_case:
                    driver = class_spellings.setdefault(driver.casefold(), driver)
                if driver in seen:
                    class_results[driver][-1] = points
                    continue
                seen.add(driver)
                class_results.setdefault(driver, []).append(points)

        logger.debug(f'Combined {event_id}: {len(event)} class(es)')

    return combined


def keep_best(scores: List[int], keep: Optional[int] = DEFAULT_KEEP) -> List[int]:
    """
    Keep a driver's best results.

    Scores are sorted highest first, cut to `keep` entries and zeros removed.
    A keep of 0 or None returns the scores unchanged.

    Examples:
        keep_best([3, 10, 0, 7, 9, 5], keep=4) -> [10, 9, 7, 5]
        keep_best([6, 0, 0], keep=4) -> [6]
    """
    if not keep:
        return list(scores)
    return [score for score in sorted(scores, reverse=True)[:keep] if score]


def drop_lowest(results: SeasonResults, keep: Optional[int] = DEFAULT_KEEP) -> SeasonResults:
    """
    Apply the drop-lowest rule to every driver in every class.

    Args:
        results: Combined season results
        keep: Number of best results counted per driver (0/None keeps all)

    Returns:
        New dict with the same shape and trimmed score lists

    Raises:
        ValueError: If keep is negative
    """
    if keep is not None and keep < 0:
        raise ValueError(f'keep must be 0 or more, got {keep}')

    if not keep:
        logger.debug('Counting every result (no drop rule)')
    else:
        logger.debug(f'Counting best {keep} result(s) per driver')

    return {
        class_name: {driver: keep_best(scores, keep) for driver, scores in drivers.items()}
        for class_name, drivers in results.items()
    }


def rank_results(results: SeasonResults) -> Dict[str, List[DriverStanding]]:
    """
    Rank drivers within each class by total points.

    Ties keep the order drivers were first seen in.

    Returns:
        Dict of class name -> standings sorted by total, highest first
    """
    ranked: Dict[str, List[DriverStanding]] = {}

    for class_name, drivers in results.items():
        standings = [
            DriverStanding(name=name, scores=list(scores), total=sum(scores))
            for name, scores in drivers.items()
        ]
        standings.sort(key=lambda s: s.total, reverse=True)
        ranked[class_name] = standings

    return ranked
