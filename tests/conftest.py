import logging

import pytest

from kalkulator_dasar.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging()."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
