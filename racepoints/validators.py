"""Sanity checks for parsed events and season standings."""

from typing import List, Mapping

from .models import DriverStanding, ParsedEvent


def validate_event(event_id: str, event: ParsedEvent) -> list[str]:
    """
    Check one event's parsed results.

    Checks:
    - Classes with no finishers
    - Drivers listed in more than one class

    Args:
        event_id: Event identifier (e.g. 'event 3')
        event: Parsed event results

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for class_name, drivers in event.items():
        if not drivers:
            warnings.append(f'{event_id}: class {class_name} has no finishers')

    classes_by_driver: dict[str, list[str]] = {}
    for class_name, drivers in event.items():
        for driver in drivers:
            classes_by_driver.setdefault(driver, []).append(class_name)

    for driver, classes in classes_by_driver.items():
        if len(classes) > 1:
            warnings.append(f'{event_id}: {driver} finished in several classes: {", ".join(classes)}')

    return warnings


def validate_standings(
    standings: Mapping[str, List[DriverStanding]],
    keep: int = 0,
) -> list[str]:
    """
    Check that ranked standings are internally consistent.

    Checks:
    - Each total equals the sum of its scores
    - No driver counts more than `keep` results (when keep > 0)
    - Totals are in descending order within a class
    - No class or driver name contains a comma (the CSV is not quoted)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for class_name, class_standings in standings.items():
        if ',' in class_name:
            warnings.append(f'Class name {class_name!r} contains a comma and will break the CSV')

        previous_total = None
        for standing in class_standings:
            if ',' in standing.name:
                warnings.append(
                    f'{class_name}: driver name {standing.name!r} contains a comma and will break the CSV'
                )

            scores_sum = sum(standing.scores)
            if scores_sum != standing.total:
                warnings.append(
                    f'{class_name}: {standing.name} scores sum to {scores_sum} but total is {standing.total}'
                )

            if keep and len(standing.scores) > keep:
                warnings.append(
                    f'{class_name}: {standing.name} counts {len(standing.scores)} results (max {keep})'
                )

            if previous_total is not None and standing.total > previous_total:
                warnings.append(
                    f'{class_name}: {standing.name} ({standing.total}) ranked below a lower total ({previous_total})'
                )
            previous_total = standing.total

    return warnings


def validate_season(
    events: Mapping[str, ParsedEvent],
    standings: Mapping[str, List[DriverStanding]],
    keep: int = 0,
) -> list[str]:
    """
    Run all event and standings checks for a season.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings: list[str] = []
    for event_id, event in events.items():
        warnings.extend(validate_event(event_id, event))
    warnings.extend(validate_standings(standings, keep))
    return warnings
