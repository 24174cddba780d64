"""
Pytest configuration and fixtures for lambda-warmer tests
"""

import asyncio
import json
import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from lambda_warmer.core.config import WarmerSettings  # noqa: E402
from lambda_warmer.warmer.exceptions import InvocationError  # noqa: E402
from lambda_warmer.warmer.interface import (  # noqa: E402
    FunctionHandler,
    FunctionInvoker,
    InvocationType,
)
from lambda_warmer.warmer.invokers.local import LocalContext  # noqa: E402
from lambda_warmer.warmer.models import InvocationResult  # noqa: E402

FUNCTION_ARN = "arn:aws:lambda:us-east-1:123456789012:function:greeter"


class RecordingHandler(FunctionHandler):
    """Handler that records its calls."""

    def __init__(self, timeline=None):
        self.timeline = timeline if timeline is not None else []
        self.warm_up_calls = []
        self.handle_calls = []
        self.warm_up_error = None
        self.handle_error = None
        self.response = {"message": "Hello, World!"}

    async def warm_up(self, context):
        self.timeline.append("local")
        self.warm_up_calls.append(context)
        await asyncio.sleep(0)
        if self.warm_up_error is not None:
            raise self.warm_up_error

    async def handle(self, request, context):
        self.handle_calls.append((request, context))
        if self.handle_error is not None:
            raise self.handle_error
        return self.response


class RecordingInvoker(FunctionInvoker):
    """Invoker that records calls instead of reaching AWS."""

    def __init__(self, timeline=None):
        self.timeline = timeline if timeline is not None else []
        self.calls = []
        self.fail_on = set()
        self.delay = 0.0

    async def invoke(self, function_name, payload, invocation_type):
        event = json.loads(payload)
        number = event.get("invocationNumber")
        self.timeline.append(f"remote-{number}")
        self.calls.append((function_name, event, invocation_type))
        await asyncio.sleep(self.delay)

        if number in self.fail_on:
            raise InvocationError(
                f"invocation {number} rejected",
                function_name=function_name,
                invocation_type=invocation_type,
            )

        status = 202 if invocation_type == InvocationType.EVENT else 200
        return InvocationResult(status_code=status, request_id=f"remote-{number}")

    def calls_by_number(self):
        return {event["invocationNumber"]: (event, mode) for _, event, mode in self.calls}


@pytest.fixture
def timeline():
    """Shared ordering log for handler and invoker."""
    return []


@pytest.fixture
def settings():
    """Settings without delay and without .env lookups."""
    return WarmerSettings(_env_file=None, delay_ms=0, log_enabled=True)


@pytest.fixture
def lambda_context():
    """Lambda context of the root invocation."""
    return LocalContext(invoked_function_arn=FUNCTION_ARN, aws_request_id="req-1")


@pytest.fixture
def handler(timeline):
    """Recording user handler."""
    return RecordingHandler(timeline)


@pytest.fixture
def invoker(timeline):
    """Recording function invoker."""
    return RecordingInvoker(timeline)


@pytest.fixture
def reset_posthog():
    """Reset PostHog client before and after each test."""
    from lambda_warmer.core.posthog_client import PostHogClient

    PostHogClient._instance = None
    PostHogClient._enabled = False
    yield
    PostHogClient._instance = None
    PostHogClient._enabled = False
