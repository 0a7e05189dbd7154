"""Utility functions for file I/O."""

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('racepoints.utils')


def load_model(path: Path | str, schema: type[T]) -> T:
    """
    Load a JSON file into a Pydantic model.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If the contents don't match the schema
    """
    path = Path(path)
    logger.debug(f'Loading {schema.__name__} from: {path}')

    if not path.is_file():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    text = path.read_text(encoding='utf-8')
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} (line {e.lineno})')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} is not a valid {schema.__name__}: {e}')
        raise ValueError(f'{path} is not a valid {schema.__name__}:\n{e}') from e


def save_text(
    path: Path | str,
    text: str,
    create_dirs: bool = True,
) -> None:
    """
    Write a text file as UTF-8.

    Args:
        path: Path to write to (str or Path object)
        text: File contents, written as-is
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving text to: {path}')

    if create_dirs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {path.parent}: {e}')
            raise

    try:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        logger.debug(f'Successfully saved {len(text)} characters to: {path}')
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise
