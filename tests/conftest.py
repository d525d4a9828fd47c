import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger("command_hooks")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for handler in list(logger.handlers):
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
