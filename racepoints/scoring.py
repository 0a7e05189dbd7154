"""Position to points conversion."""

from typing import Mapping, Union

from .constants import SCORE_TABLE


def points_for_position(
    position: Union[int, str, None],
    table: Mapping[int, int] = SCORE_TABLE,
) -> int:
    """
    Convert a finishing position to championship points.

    Scoring (default table):
        - 1st: 10 points, 2nd: 9 points ... 10th: 1 point
        - 11th or lower: 0 points
        - Missing, non-numeric or non-positive positions: 0 points

    Args:
        position: Finishing position as an int or a string of digits
        table: Position -> points mapping (default: SCORE_TABLE)

    Returns:
        Points earned for the position
    """
    if isinstance(position, bool):
        return 0
    if isinstance(position, str):
        position = position.strip()
        if not position.isdecimal():
            return 0
        position = int(position)
    if not isinstance(position, int) or position < 1:
        return 0
    return table.get(position, 0)
