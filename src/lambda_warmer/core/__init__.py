"""
Configuration, logging and error tracking shared by warmer functions
"""

from .config import WarmerSettings, get_settings
from .logging_setup import configure_logging
from .naming import NamingConvention
from .posthog_client import PostHogClient, capture_invocation_failure

__all__ = [
    "WarmerSettings",
    "get_settings",
    "configure_logging",
    "NamingConvention",
    "PostHogClient",
    "capture_invocation_failure",
]
