"""CSV export of season standings.

Layout, one block per class:

    GT3
    ,Alice Driver,17,10,7
    ,Bob Racer,9,9

Fields are joined with commas and never quoted.
"""

import logging
from pathlib import Path
from typing import List, Mapping

from .models import DriverStanding
from .utils import save_text

logger = logging.getLogger('racepoints.exporter')


def standing_row(standing: DriverStanding) -> str:
    """Format one driver line: empty first field, name, total, then each score."""
    fields = ['', standing.name, standing.total, *standing.scores]
    return ','.join(str(f) for f in fields)


def build_csv(ranked: Mapping[str, List[DriverStanding]]) -> str:
    """
    Serialize ranked standings to CSV text.

    Args:
        ranked: Class name -> standings, in output order

    Returns:
        Newline-joined CSV text (no trailing newline)
    """
    lines: List[str] = []
    for class_name, standings in ranked.items():
        lines.append(class_name)
        lines.extend(standing_row(s) for s in standings)
    return '\n'.join(lines)


def export_csv(ranked: Mapping[str, List[DriverStanding]], output_path: Path | str) -> str:
    """
    Write ranked standings to a CSV file.

    Returns:
        The CSV text that was written
    """
    text = build_csv(ranked)
    save_text(output_path, text)
    logger.info(f'Standings saved to {output_path}')
    return text
