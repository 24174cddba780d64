"""
Logging setup for warmer functions
"""
import logging

from .config import WarmerSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

PACKAGE_LOGGER = "lambda_warmer"


def configure_logging(settings: WarmerSettings = None) -> None:
    """
    Apply the configured log level to the lambda_warmer loggers.

    The root logger belongs to the host application (or the Lambda runtime,
    which sets it from AWS_LAMBDA_LOG_LEVEL) and its level is left alone.
    A stream handler is only added when the root logger has none, so that
    records are visible when running outside the runtime.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT)
