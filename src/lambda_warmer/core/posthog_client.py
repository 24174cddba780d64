"""
PostHog error tracking for warmer functions

Exceptions escaping an invocation are reported with the Lambda request id as
distinct id before they propagate to the runtime.
"""

import logging
from typing import Any, Dict, Optional

from posthog import Posthog

logger = logging.getLogger(__name__)

SERVICE_NAME = "lambda-warmer"
ANONYMOUS_ID = "lambda-warmer-anonymous"


class PostHogClient:
    """PostHog client shared by all warmer functions of an execution environment"""

    _instance: Optional[Posthog] = None
    _enabled: bool = False

    @classmethod
    def initialize(cls, api_key: Optional[str], api_host: Optional[str] = None) -> None:
        """Create the client on first use; later calls keep the existing one"""
        if cls._instance is not None:
            return

        if not api_key or not api_host:
            logger.debug(
                "PostHog not configured, invocation failures are not reported. "
                "Set LAMBDA_WARMER_POSTHOG_API_KEY to enable."
            )
            cls._enabled = False
            return

        try:
            cls._instance = Posthog(
                project_api_key=api_key,
                host=api_host,
                on_error=cls._on_error,
            )
            cls._enabled = True
            logger.info(f"PostHog error tracking enabled (host: {api_host})")
        except Exception as e:
            logger.error(f"Failed to initialize PostHog client: {e}")
            cls._enabled = False

    @classmethod
    def is_enabled(cls) -> bool:
        return cls._enabled and cls._instance is not None

    @classmethod
    def _on_error(cls, error: Exception, items: Any) -> None:
        """Error handler for PostHog client itself"""
        logger.error(f"PostHog client error: {error}")

    @classmethod
    def capture_exception(
        cls,
        exception: BaseException,
        distinct_id: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Send one $exception event and flush it.

        Blocks on the network; failures of PostHog itself are only logged.
        """
        if not cls.is_enabled():
            return

        event_properties = {
            "error_type": type(exception).__name__,
            "error_message": str(exception),
            "error_module": exception.__class__.__module__,
            "service": SERVICE_NAME,
        }
        event_properties.update(properties or {})

        try:
            cls._instance.capture(
                distinct_id=distinct_id or ANONYMOUS_ID,
                event="$exception",
                properties=event_properties,
            )
            # Environment may freeze right after the invocation
            cls._instance.flush()
        except Exception as e:
            logger.error(f"Failed to capture exception to PostHog: {e}")


def invocation_properties(context: Any, path: str, warm: bool) -> Dict[str, Any]:
    """Event properties describing the failed invocation"""
    return {
        "function": getattr(context, "invoked_function_arn", None),
        "function_version": getattr(context, "function_version", None),
        "path": path,
        "warm": warm,
    }


def capture_invocation_failure(
    error: BaseException,
    context: Any,
    path: str,
    warm: bool,
) -> None:
    """
    Report an exception escaping a warmer invocation.

    Args:
        error: The exception about to propagate
        context: Lambda context of the failed invocation
        path: Stage that failed: decode, warmer or request
        warm: Warm flag of the environment when it failed
    """
    PostHogClient.capture_exception(
        error,
        distinct_id=getattr(context, "aws_request_id", None),
        properties=invocation_properties(context, path, warm),
    )
