"""
Warmer Function

Lambda entrypoint that routes warm-up pings to the orchestrator and real
requests to the user handler.
"""

import asyncio
import functools
import inspect
import json
import logging
from typing import Any, Callable, Generic, Optional

from ..core.config import WarmerSettings, get_settings
from ..core.logging_setup import configure_logging
from ..core.posthog_client import PostHogClient, capture_invocation_failure
from .classifier import decode_event
from .codec import JsonCodec, PayloadCodec, RawPayload
from .dispatcher import FanOutDispatcher
from .interface import (
    FunctionHandler,
    FunctionInvoker,
    NamingConvention,
    TRequest,
    TResponse,
)
from .invokers import create_invoker
from .models import InstanceState
from .orchestrator import WarmUpOrchestrator

logger = logging.getLogger(__name__)


class WarmerFunction(Generic[TRequest, TResponse]):
    """
    A Lambda function with warm-up fan-out support.

    Create one instance at module level so that it lives as long as the
    execution environment; the instance owns the environment's warm state.

    Example:
        function = WarmerFunction(
            GreetingHandler(),
            request_codec=PydanticCodec(Greeting),
            response_codec=PydanticCodec(Reply),
        )

        def lambda_handler(event, context):
            return function(event, context)
    """

    def __init__(
        self,
        handler: FunctionHandler[TRequest, TResponse],
        request_codec: Optional[PayloadCodec[TRequest]] = None,
        response_codec: Optional[PayloadCodec[TResponse]] = None,
        settings: Optional[WarmerSettings] = None,
        invoker: Optional[FunctionInvoker] = None,
        naming: Optional[NamingConvention] = None,
    ):
        """
        Args:
            handler: Business logic and warm-up hook
            request_codec: Request codec (plain JSON if None)
            response_codec: Response codec (plain JSON if None)
            settings: Settings instance (uses default if None)
            invoker: Re-invocation transport (boto3 Lambda client if None)
            naming: Envelope naming convention (from settings if None)
        """
        self.settings = settings or get_settings()
        configure_logging(self.settings)
        PostHogClient.initialize(self.settings.posthog_api_key, self.settings.posthog_host)

        self.handler = handler
        self.request_codec = request_codec or JsonCodec()
        self.response_codec = response_codec or JsonCodec()
        self.naming = naming or self.settings.naming
        self.invoker = invoker or create_invoker(self.settings)

        self.state = InstanceState()
        self.dispatcher = FanOutDispatcher(handler, self.invoker, self.naming)
        self.orchestrator = WarmUpOrchestrator(
            handler,
            self.dispatcher,
            self.state,
            log_enabled=self.settings.log_enabled,
            delay=self.settings.delay,
        )

    async def invoke(self, raw: RawPayload, context: Any) -> bytes:
        """
        Process one invocation.

        Args:
            raw: Event payload (JSON bytes/text or the runtime's parsed event)
            context: Lambda context object

        Returns:
            b"" for warm-up pings, the encoded handler response otherwise

        Raises:
            DecodeError: When the payload cannot be decoded
            Any exception raised by the handler, the codecs or the fan-out
        """
        path = "decode"
        try:
            event = decode_event(raw, self.request_codec, self.naming)

            if event.warmer:
                path = "warmer"
                await self.orchestrator.warm_up(event, context)
                return b""

            path = "request"
            return await self._handle_request(event.request, context)

        except Exception as e:
            # Reporting flushes over the network, keep it off the event loop
            await asyncio.to_thread(capture_invocation_failure, e, context, path, self.state.warm)
            raise

    async def _handle_request(self, request: TRequest, context: Any) -> bytes:
        self.state.mark_accessed()
        response = await self.handler.handle(request, context)
        return self.response_codec.encode(response)

    def __call__(self, event: Any, context: Any) -> Any:
        """
        Synchronous Lambda handler.

        Returns None for warm-up pings and the JSON response otherwise.
        Must not be called from a running event loop; use `invoke` there.
        """
        body = asyncio.run(self.invoke(event, context))
        if not body:
            return None
        return json.loads(body)


async def _call(fn: Callable, *args: Any) -> Any:
    """Await coroutine functions, run plain callables in a worker thread"""
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    result = await asyncio.to_thread(fn, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


class CallableHandler(FunctionHandler[TRequest, TResponse]):
    """FunctionHandler built from plain (sync or async) functions"""

    def __init__(
        self,
        handle: Callable[[TRequest, Any], TResponse],
        warm_up: Optional[Callable[[Any], Any]] = None,
    ):
        self._handle = handle
        self._warm_up = warm_up

    async def warm_up(self, context: Any) -> None:
        if self._warm_up is not None:
            await _call(self._warm_up, context)

    async def handle(self, request: TRequest, context: Any) -> TResponse:
        return await _call(self._handle, request, context)


def warmer(
    func: Optional[Callable] = None,
    *,
    warm_up: Optional[Callable[[Any], Any]] = None,
    request_codec: Optional[PayloadCodec] = None,
    response_codec: Optional[PayloadCodec] = None,
    settings: Optional[WarmerSettings] = None,
    invoker: Optional[FunctionInvoker] = None,
):
    """
    Turn a `handle(request, context)` function into a WarmerFunction.

    Usage:
        @warmer
        def lambda_handler(event, context):
            return {"statusCode": 200}

        @warmer(warm_up=load_model, request_codec=PydanticCodec(Query))
        async def lambda_handler(query, context):
            ...
    """

    def decorator(f: Callable) -> WarmerFunction:
        function = WarmerFunction(
            CallableHandler(f, warm_up),
            request_codec=request_codec,
            response_codec=response_codec,
            settings=settings,
            invoker=invoker,
        )
        functools.update_wrapper(function, f)
        return function

    return decorator(func) if func is not None and callable(func) else decorator
