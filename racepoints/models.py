"""Data models for the season points report."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

# class name -> driver name -> points for one event
ParsedEvent = Dict[str, Dict[str, int]]

# class name -> driver name -> points per event
SeasonResults = Dict[str, Dict[str, List[int]]]


class RowMode(str, Enum):
    """How strictly digit-led lines are checked."""
    STRICT = 'strict'  # every digit-led line must be a finisher row
    LENIENT = 'lenient'  # finisher rows without a lap time are skipped


class ClassNaming(str, Enum):
    """How a class header line becomes a class name."""
    FIRST_TOKEN = 'first_token'
    FULL_LINE = 'full_line'


@dataclass
class DriverStanding:
    """A driver's season result within one class."""
    name: str
    scores: List[int] = field(default_factory=list)
    total: int = 0


@dataclass
class SeasonReport:
    """Everything produced by one pipeline run."""
    events: Dict[str, ParsedEvent]
    standings: Dict[str, List[DriverStanding]]
    csv_text: str
    output_path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)
