"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_racepoints_logger():
    """Drop handlers added by CLI runs so they don't leak between tests."""
    yield
    logger = logging.getLogger('racepoints')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
