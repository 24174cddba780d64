"""
Lambda warmer configuration
"""
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from .naming import NamingConvention

class WarmerSettings(BaseSettings):
    """Warmer settings"""

    # Warm-up behaviour
    log_enabled: bool = True
    delay_ms: int = 75  # milliseconds slept before warm-up work starts

    # Envelope field naming
    naming: NamingConvention = NamingConvention.CAMEL

    # Logging
    log_level: str = "INFO"

    # Lambda invoke transport
    aws_region: Optional[str] = None
    invoke_max_retries: int = 3
    invoke_connect_timeout: Optional[int] = None  # seconds, botocore default when unset
    invoke_read_timeout: Optional[int] = None  # seconds, botocore default when unset

    # PostHog Analytics & Error Tracking
    posthog_api_key: Optional[str] = None
    posthog_host: str = "https://us.i.posthog.com"

    model_config = SettingsConfigDict(
        env_prefix="LAMBDA_WARMER_",
        env_file=".env",
        case_sensitive=False,
    )

    @field_validator("naming", mode="before")
    @classmethod
    def _lower_naming(cls, value):
        return value.lower() if isinstance(value, str) else value

    @property
    def delay(self) -> float:
        """Warm-up delay in seconds"""
        return max(self.delay_ms, 0) / 1000.0

@lru_cache()
def get_settings() -> WarmerSettings:
    """Get cached settings instance"""
    return WarmerSettings()
