"""Plain-text timing results parsing.

A results file is a sequence of class sections:

    GT3 Class
    1   045   Alice Driver     21  1:02.345
    2   118   Bob Racer        21  1:03.001
    [Fastest laps]
    GT4 Class
    1   200   Carol Speed      19  1:10.870

Lines starting with ``[`` or ``+`` are ignored, lines starting with a digit are
finisher rows, and any other non-blank line opens a new class.
"""

import logging
import re
import string
import unicodedata
from pathlib import Path
from typing import Dict, Mapping, Optional

from .constants import (
    IGNORED_PREFIXES,
    RESULT_ROW_PATTERN,
    SCORE_TABLE,
    TIME_TOKEN_PATTERN,
    UNCLASSIFIED,
)
from .exceptions import MalformedLineError
from .models import ClassNaming, ParsedEvent, RowMode
from .scoring import points_for_position

logger = logging.getLogger('racepoints.parser')


def normalize_name(name: str) -> str:
    """Normalize a driver name so spacing/encoding differences don't split a driver."""
    name = unicodedata.normalize('NFKC', name).replace('\xa0', ' ')
    return re.sub(r'\s+', ' ', name).strip()


def class_name_from_header(line: str, naming: ClassNaming = ClassNaming.FIRST_TOKEN) -> str:
    """
    Derive a class name from a header line.

    Examples:
        "GT3 Class" -> "GT3" (FIRST_TOKEN)
        "GT3 Class" -> "GT3 Class" (FULL_LINE)
    """
    line = line.strip()
    if naming == ClassNaming.FULL_LINE:
        return line
    return line.split()[0]


def parse_results(
    text: str,
    mode: RowMode = RowMode.STRICT,
    table: Mapping[int, int] = SCORE_TABLE,
    class_naming: ClassNaming = ClassNaming.FIRST_TOKEN,
    normalize_names: bool = False,
    source: Optional[str] = None,
) -> Optional[ParsedEvent]:
    """
    Parse one event's results into points per driver per class.

    Args:
        text: Raw file contents
        mode: STRICT fails on any bad digit-led line; LENIENT also skips
            finisher rows that carry no lap time
        table: Position -> points mapping
        class_naming: How header lines become class names
        normalize_names: Normalize driver names at ingestion and match them
            case-insensitively within a class, keeping the first spelling
        source: File name used in error messages

    Returns:
        Dict of class name -> {driver name: points}, or None if the text is blank

    Raises:
        MalformedLineError: If a digit-led line isn't a finisher row
    """
    if not text or not text.strip():
        return None

    results: ParsedEvent = {}
    drivers: Dict[str, int] = {}
    # folded name -> display name, per class
    spellings: Dict[str, str] = {}
    current_class: Optional[str] = None

    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        logger.debug(line)

        if not line or line.startswith(IGNORED_PREFIXES):
            continue

        if line[0] in string.digits:
            match = RESULT_ROW_PATTERN.match(line)
            if not match:
                logger.error(f'This line is badly formatted: "{line}"')
                raise MalformedLineError(line, line_number, source)

            if mode == RowMode.LENIENT and not TIME_TOKEN_PATTERN.search(line):
                logger.debug(f'Skipping row without a lap time: "{line}"')
                continue

            name = match.group(2).strip()
            if normalize_names:
                name = normalize_name(name)
                name = spellings.setdefault(name.casefold(), name)
            drivers[name] = points_for_position(int(match.group(1)), table)
            continue

        # Class header: close the previous section and start a new one
        if current_class is not None:
            results[current_class] = drivers
        elif drivers:
            logger.warning(f'{len(drivers)} result row(s) found before any class header')
            results[UNCLASSIFIED] = drivers
        current_class = class_name_from_header(line, class_naming)
        drivers = {}
        spellings = {}

    if current_class is not None:
        results[current_class] = drivers
    elif drivers:
        logger.warning(f'{len(drivers)} result row(s) found before any class header')
        results[UNCLASSIFIED] = drivers

    return results


def parse_result_file(path: Path | str, **kwargs) -> Optional[ParsedEvent]:
    """
    Read and parse a results file.

    Args:
        path: Path to the results text file
        **kwargs: Passed through to parse_results()

    Returns:
        Parsed results, or None if the file is empty
    """
    path = Path(path)
    logger.debug(f'Reading results from: {path}')
    text = path.read_text(encoding='utf-8-sig')
    return parse_results(text, source=path.name, **kwargs)
