"""Constants and mappings for the season points report."""

import re
from pathlib import Path
from types import MappingProxyType

# Finishing position -> championship points. Anything outside 1-10 scores 0.
SCORE_TABLE = MappingProxyType({
    1: 10,
    2: 9,
    3: 8,
    4: 7,
    5: 6,
    6: 5,
    7: 4,
    8: 3,
    9: 2,
    10: 1,
})

# Best N results counted per driver in the season total
DEFAULT_KEEP = 4

DEFAULT_DATA_DIR = Path('2025-data')
DEFAULT_OUTPUT_PATH = Path('output.csv')

# Files in the data directory that are previous output, not results
DEFAULT_SKIP_EXTENSIONS = ('.csv',)

# Class name used for result rows that appear before any class header
UNCLASSIFIED = 'Unclassified'

# Line prefixes that never carry results (section brackets, continuation rows)
IGNORED_PREFIXES = ('[', '+')

# "<position> <sep> <3-digit car/lap token> <sep> <driver name>"
RESULT_ROW_PATTERN = re.compile(r'^([0-9]+)[^0-9]+[0-9]{3}([^0-9]+)')

# Lap or gap time such as 12.345, required on finisher rows in lenient mode
TIME_TOKEN_PATTERN = re.compile(r'[0-9]{2}\.[0-9]{3}')

EVENT_ID_PATTERN = re.compile(r'event\s*([0-9]+)', re.IGNORECASE)
