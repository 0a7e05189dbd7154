"""Season configuration management."""

from pathlib import Path

from .models import RowMode
from .schemas import SeasonConfig
from .utils import load_model

# Per-season settings. 2024 counted every result with the strict row check;
# 2025 drops all but the best four and ignores rows without a lap time.
SEASON_PRESETS: dict[int, SeasonConfig] = {
    2024: SeasonConfig(
        data_dir=Path('2024-data'),
        output_path=Path('output.csv'),
        keep=0,
        row_mode=RowMode.STRICT,
        skip_extensions=(),
    ),
    2025: SeasonConfig(
        data_dir=Path('2025-data'),
        output_path=Path('output.csv'),
        keep=4,
        row_mode=RowMode.LENIENT,
        skip_extensions=('.csv',),
    ),
}


def get_season_config(season: int) -> SeasonConfig:
    """
    Get the preset configuration for a season.

    Returns a copy, so callers can adjust fields without touching the preset.

    Raises:
        KeyError: If there is no preset for the season

    Example:
        from racepoints.config import get_season_config
        config = get_season_config(2025)
        print(f"Best {config.keep} results count")
    """
    try:
        preset = SEASON_PRESETS[season]
    except KeyError:
        available = ', '.join(str(s) for s in sorted(SEASON_PRESETS))
        raise KeyError(f'No preset for season {season} (available: {available})') from None
    return preset.model_copy(deep=True)


def load_config(path: Path | str) -> SeasonConfig:
    """
    Load a season configuration from a JSON file.

    Example file:
        {"data_dir": "2025-data", "output_path": "2025-results.csv", "keep": 4}

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file doesn't match SeasonConfig
    """
    return load_model(path, SeasonConfig)
