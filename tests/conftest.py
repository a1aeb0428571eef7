import logging

import pytest


@pytest.fixture(autouse=True)
def reset_cli_logging():
    yield
    logger = logging.getLogger("sizetree")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
