import logging

import pytest

from runtime_stager.stager_logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_stager_logger():
    """Drop handlers installed by configure_logging so they never outlive a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
