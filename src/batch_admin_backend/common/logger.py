'''
Application logger for the batch admin backend.

Every module logs through the single ``BA-backend`` logger. Output goes to
stdout so the process supervisor (uvicorn, docker) collects it.
'''
import logging
import sys

from .config import settings

LOGGER_NAME = 'BA-backend'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(module)s: %(message)s'


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if settings.TEST_MODE else logging.INFO)

    # uvicorn reload imports the app twice
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


log = setup_logger()
