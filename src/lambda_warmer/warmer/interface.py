"""
Warmer Interfaces

Abstract base classes for user handlers and function invokers, plus the
enums shared across the warm-up protocol.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..core.naming import NamingConvention

if TYPE_CHECKING:
    from .models import InvocationResult

TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")


class InvocationType(str, Enum):
    """Lambda invocation modes used by the fan-out"""

    EVENT = "Event"  # fire-and-forget
    REQUEST_RESPONSE = "RequestResponse"


class FunctionHandler(ABC, Generic[TRequest, TResponse]):
    """
    Business logic behind a warmer function.

    Example:
        class GreetingHandler(FunctionHandler[Greeting, Reply]):
            async def warm_up(self, context):
                await load_model()

            async def handle(self, request, context):
                return Reply(text=f"Hello, {request.name}")
    """

    @abstractmethod
    async def warm_up(self, context: Any) -> None:
        """
        Prepare this execution environment when a warm-up ping arrives.

        Args:
            context: Lambda context object

        Raises:
            Any exception; it fails the whole invocation.
        """
        pass

    @abstractmethod
    async def handle(self, request: TRequest, context: Any) -> TResponse:
        """
        Serve a real request.

        Args:
            request: Decoded request payload
            context: Lambda context object

        Returns:
            Response payload, encoded by the response codec
        """
        pass


class FunctionInvoker(ABC):
    """
    Transport used to re-invoke the running function during fan-out.

    Implementations must raise InvocationError when a call is not accepted
    (EVENT) or does not complete successfully (REQUEST_RESPONSE).
    """

    @abstractmethod
    async def invoke(
        self,
        function_name: str,
        payload: bytes,
        invocation_type: InvocationType,
    ) -> "InvocationResult":
        """
        Invoke a function.

        Args:
            function_name: Function name or ARN
            payload: Encoded event
            invocation_type: EVENT or REQUEST_RESPONSE

        Returns:
            InvocationResult describing the accepted or completed call

        Raises:
            InvocationError: When the call fails
        """
        pass
