"""
Root pytest configuration file for testgen-jira tests.
"""

import logging

import pytest

from testgen_jira.utils.logging import LOGGER_NAMES


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Keep handlers and levels set by setup_logging from leaking between tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    levels = {name: logging.getLogger(name).level for name in LOGGER_NAMES}
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    for name, saved in levels.items():
        logging.getLogger(name).setLevel(saved)
