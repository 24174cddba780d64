"""
Function Invokers

Concrete FunctionInvoker implementations and the settings-based factory.
"""

import logging

from ...core.config import WarmerSettings, get_settings
from .aws_lambda import LambdaInvoker
from .local import LocalContext, LocalInvoker

logger = logging.getLogger(__name__)


def create_invoker(settings: WarmerSettings = None) -> LambdaInvoker:
    """
    Build the default Lambda invoker from configuration.

    Args:
        settings: Settings instance (uses default if None)

    Returns:
        Configured LambdaInvoker
    """
    settings = settings or get_settings()

    invoker = LambdaInvoker(
        region=settings.aws_region,
        max_retries=settings.invoke_max_retries,
        connect_timeout=settings.invoke_connect_timeout,
        read_timeout=settings.invoke_read_timeout,
    )
    logger.debug(f"Lambda invoker created (region: {settings.aws_region or 'default'})")
    return invoker


__all__ = [
    "LambdaInvoker",
    "LocalInvoker",
    "LocalContext",
    "create_invoker",
]
