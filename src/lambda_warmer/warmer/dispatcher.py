"""
Fan-out Dispatcher

Turns one warm-up ping with concurrency N into N concurrently warm
execution environments: the local warm-up hook plus N-1 re-invocations
of the running function.
"""

import asyncio
import logging
from typing import Any, List

from .classifier import encode_event
from .exceptions import FanOutError, InvocationError
from .interface import FunctionHandler, FunctionInvoker, InvocationType, NamingConvention
from .models import InvocationResult, WarmerEvent

logger = logging.getLogger(__name__)


class FanOutDispatcher:
    """
    Issues and joins the legs of a warm-up fan-out.

    The last re-invocation (number N) is request-response so the root
    invocation lasts until at least one fanned-out environment has run;
    the others are fire-and-forget and only awaited for acceptance.

    Example:
        dispatcher = FanOutDispatcher(handler, invoker)
        await dispatcher.dispatch(context, concurrency=5, correlation_id="abc")
    """

    def __init__(
        self,
        handler: FunctionHandler,
        invoker: FunctionInvoker,
        naming: NamingConvention = NamingConvention.CAMEL,
    ):
        self.handler = handler
        self.invoker = invoker
        self.naming = naming

    @staticmethod
    def invocation_type_for(invocation_number: int, concurrency: int) -> InvocationType:
        """Invocation mode of re-invocation `invocation_number` out of `concurrency`"""
        if invocation_number == concurrency:
            return InvocationType.REQUEST_RESPONSE
        return InvocationType.EVENT

    async def dispatch(self, context: Any, concurrency: int, correlation_id: str) -> None:
        """
        Run the local warm-up hook and N-1 re-invocations concurrently.

        All legs settle before this returns or raises; a failing leg never
        cancels the others.

        Args:
            context: Lambda context of the root invocation
            concurrency: Fan-out population N (> 1)
            correlation_id: Correlation id copied into every downstream ping

        Raises:
            The failing leg's exception when exactly one leg failed
            FanOutError: When several legs failed
        """
        function_name = context.invoked_function_arn

        # Local hook first: tasks start in creation order
        tasks: List[asyncio.Task] = [asyncio.ensure_future(self.handler.warm_up(context))]

        for i in range(2, concurrency + 1):
            event = WarmerEvent.ping(
                invocation_number=i,
                total_invocation=concurrency,
                correlation_id=correlation_id,
            )
            tasks.append(
                asyncio.ensure_future(
                    self._invoke(
                        function_name,
                        event,
                        self.invocation_type_for(i, concurrency),
                    )
                )
            )

        logger.debug(
            f"Fan-out {correlation_id}: 1 local warm-up and "
            f"{concurrency - 1} re-invocations of {function_name}"
        )

        results = await asyncio.gather(*tasks, return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]

        if not errors:
            return

        for error in errors:
            logger.warning(f"Fan-out {correlation_id} leg failed: {error}")

        if len(errors) == 1:
            raise errors[0]
        raise FanOutError(errors)

    async def _invoke(
        self,
        function_name: str,
        event: WarmerEvent,
        invocation_type: InvocationType,
    ) -> InvocationResult:
        payload = encode_event(event, self.naming)

        try:
            result = await self.invoker.invoke(function_name, payload, invocation_type)
        except InvocationError as e:
            if e.invocation_number is None:
                e.invocation_number = event.invocation_number
            raise

        logger.debug(
            f"Re-invocation {event.invocation_number}/{event.total_invocation} "
            f"({invocation_type.value}) returned {result.status_code}"
        )
        return result
