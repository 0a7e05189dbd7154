"""Pydantic schemas for run configuration."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_KEEP,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SKIP_EXTENSIONS,
    SCORE_TABLE,
)
from .models import ClassNaming, RowMode


class SeasonConfig(BaseModel):
    """Settings for one season report run."""

    model_config = ConfigDict(extra='forbid')

    data_dir: Path = DEFAULT_DATA_DIR
    output_path: Path = DEFAULT_OUTPUT_PATH
    score_table: dict[int, int] = Field(default_factory=lambda: dict(SCORE_TABLE))
    keep: int = Field(default=DEFAULT_KEEP, ge=0)  # 0 counts every result
    row_mode: RowMode = RowMode.LENIENT
    class_naming: ClassNaming = ClassNaming.FIRST_TOKEN
    skip_extensions: tuple[str, ...] = DEFAULT_SKIP_EXTENSIONS
    normalize_names: bool = False

    @field_validator('score_table')
    @classmethod
    def validate_score_table(cls, v):
        """Ensure positions are positive and points non-negative."""
        for position, points in v.items():
            if position < 1:
                raise ValueError(f'Invalid position in score table: {position}')
            if points < 0:
                raise ValueError(f'Invalid points for position {position}: {points}')
        return v

    @field_validator('skip_extensions')
    @classmethod
    def validate_extensions(cls, v):
        """Ensure every extension starts with a dot."""
        for ext in v:
            if not ext.startswith('.'):
                raise ValueError(f'Extension must start with ".": {ext}')
        return v


class SheetOptions(BaseModel):
    """Layout settings for the HTML sheet render of a CSV file."""

    model_config = ConfigDict(extra='forbid')

    title: str = ''
    cell_width: int = Field(default=140, ge=1)  # px
    cell_height: int = Field(default=28, ge=1)  # px
    freeze_rows: int = Field(default=1, ge=0)
    freeze_cols: int = Field(default=1, ge=0)

    @classmethod
    def from_env(cls, default_title: str = '', environ: Optional[dict] = None) -> 'SheetOptions':
        """
        Build options from SHEET_TITLE, CELL_W, CELL_H, FREEZE_ROWS and FREEZE_COLS.

        Unset or blank variables fall back to the defaults.

        Args:
            default_title: Title used when SHEET_TITLE is not set
            environ: Mapping to read from (default: os.environ)

        Returns:
            Validated SheetOptions
        """
        environ = os.environ if environ is None else environ
        values = {'title': environ.get('SHEET_TITLE') or default_title}
        for field_name, var in (
            ('cell_width', 'CELL_W'),
            ('cell_height', 'CELL_H'),
            ('freeze_rows', 'FREEZE_ROWS'),
            ('freeze_cols', 'FREEZE_COLS'),
        ):
            if environ.get(var):
                values[field_name] = environ[var]
        return cls(**values)
