"""Pytest configuration and shared fixtures."""

import logging

import pytest

from bitbucket_cloud_cli.logging_config import PACKAGE_LOGGER, StderrHandler


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() calls made by CLI commands."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if isinstance(h, StderrHandler)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
