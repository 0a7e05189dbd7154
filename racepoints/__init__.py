from .models import ClassNaming, DriverStanding, RowMode, SeasonReport
from .exceptions import (
    RacePointsError,
    MalformedLineError,
    MissingEventIdentifierError,
    DuplicateEventError,
)
from .scoring import points_for_position
from .parser import parse_results, parse_result_file
from .loader import extract_event_id, read_event_directory
from .season import combine_results, drop_lowest, rank_results
from .exporter import build_csv, export_csv
from .schemas import SeasonConfig, SheetOptions
from .config import get_season_config, load_config, SEASON_PRESETS
from .pipeline import run_season
from .sheet import render_sheet, write_sheet

__all__ = [
    # Models
    'ClassNaming',
    'DriverStanding',
    'RowMode',
    'SeasonReport',
    # Errors
    'RacePointsError',
    'MalformedLineError',
    'MissingEventIdentifierError',
    'DuplicateEventError',
    # Parsing
    'points_for_position',
    'parse_results',
    'parse_result_file',
    'extract_event_id',
    'read_event_directory',
    # Season aggregation
    'combine_results',
    'drop_lowest',
    'rank_results',
    'build_csv',
    'export_csv',
    # Configuration
    'SeasonConfig',
    'SheetOptions',
    'get_season_config',
    'load_config',
    'SEASON_PRESETS',
    # Pipeline
    'run_season',
    # HTML sheet
    'render_sheet',
    'write_sheet',
]
