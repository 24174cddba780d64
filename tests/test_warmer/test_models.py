"""
Tests for warmer models.
"""

from dataclasses import fields
from datetime import datetime, timedelta, timezone

from lambda_warmer.warmer.interface import InvocationType, NamingConvention
from lambda_warmer.warmer.models import InstanceState, InvocationResult, WarmerEvent


class TestNamingConvention:
    """Test NamingConvention enum."""

    def test_camel(self):
        assert NamingConvention.CAMEL.alias("invocation_number") == "invocationNumber"
        assert NamingConvention.CAMEL.alias("warmer") == "warmer"

    def test_pascal(self):
        assert NamingConvention.PASCAL.alias("correlation_id") == "CorrelationId"
        assert NamingConvention.PASCAL.alias("warmer") == "Warmer"

    def test_snake(self):
        assert NamingConvention.SNAKE.alias("total_invocation") == "total_invocation"

    def test_from_string(self):
        assert NamingConvention("pascal") == NamingConvention.PASCAL


class TestInvocationType:
    """Test InvocationType enum."""

    def test_values(self):
        """Test values match the Lambda API."""
        assert InvocationType.EVENT.value == "Event"
        assert InvocationType.REQUEST_RESPONSE.value == "RequestResponse"


class TestWarmerEvent:
    """Test WarmerEvent."""

    def test_defaults(self):
        event = WarmerEvent()

        assert event.warmer is False
        assert event.concurrency is None
        assert event.request is None

    def test_ping(self):
        event = WarmerEvent.ping(invocation_number=2, total_invocation=3, correlation_id="req-1")

        assert event.warmer is True
        assert event.concurrency is None
        assert event.to_dict() == {
            "warmer": True,
            "invocationNumber": 2,
            "totalInvocation": 3,
            "correlationId": "req-1",
        }

    def test_to_dict_snake(self):
        event = WarmerEvent(warmer=True, concurrency=4)

        assert event.to_dict(NamingConvention.SNAKE) == {"warmer": True, "concurrency": 4}

    def test_to_dict_excludes_request(self):
        event = WarmerEvent(warmer=False, request={"name": "x"})

        assert "request" not in event.to_dict()


class TestInstanceState:
    """Test InstanceState."""

    def test_initial_state(self):
        state = InstanceState()

        assert state.warm is False
        assert state.last_access is None
        assert state.seconds_since_last_access() is None

    def test_mark_warm(self):
        state = InstanceState()
        state.mark_warm()

        assert state.warm is True
        assert state.last_access is None

    def test_mark_accessed(self):
        state = InstanceState()
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        state.mark_accessed(now)

        assert state.warm is True
        assert state.last_access == now

    def test_seconds_since_last_access(self):
        now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        state = InstanceState(warm=True, last_access=now - timedelta(seconds=90, milliseconds=700))

        assert state.seconds_since_last_access(now) == 90



class TestInvocationResult:
    """Test InvocationResult."""

    def test_fields(self):
        """Test it carries only what the Lambda Invoke API returns."""
        assert [f.name for f in fields(InvocationResult)] == [
            "status_code",
            "payload",
            "function_error",
            "request_id",
            "executed_version",
        ]

    def test_defaults(self):
        result = InvocationResult(status_code=202)

        assert result.payload == b""
        assert result.function_error is None
