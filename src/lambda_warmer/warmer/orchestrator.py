"""
Warm-up Orchestrator

Drives one warm-up ping to completion.
"""

import asyncio
import logging
from typing import Any

from .dispatcher import FanOutDispatcher
from .interface import FunctionHandler
from .models import InstanceState, WarmerEvent, WarmUpParameters
from .normalizer import normalize
from .observability import log_warmer_record

logger = logging.getLogger(__name__)


class WarmUpOrchestrator:
    """
    Handles warm-up pings for one execution environment.

    Steps: normalize, log (state as observed on entry), mark warm, delay,
    then run the local warm-up hook alone or fan out.
    """

    def __init__(
        self,
        handler: FunctionHandler,
        dispatcher: FanOutDispatcher,
        state: InstanceState,
        log_enabled: bool = True,
        delay: float = 0.075,
    ):
        """
        Args:
            handler: User handler providing the warm-up hook
            dispatcher: Fan-out dispatcher for concurrency > 1
            state: Execution environment state
            log_enabled: Emit one record per warm-up ping
            delay: Seconds to wait before warm-up work starts
        """
        self.handler = handler
        self.dispatcher = dispatcher
        self.state = state
        self.log_enabled = log_enabled
        self.delay = delay

    async def warm_up(self, event: WarmerEvent, context: Any) -> WarmUpParameters:
        """
        Handle a warm-up ping.

        Returns:
            The effective parameters this ping ran with
        """
        params = normalize(
            event.concurrency,
            event.invocation_number,
            event.total_invocation,
            event.correlation_id,
            context.aws_request_id,
        )

        if self.log_enabled:
            log_warmer_record(context.invoked_function_arn, params, self.state)

        self.state.mark_warm()

        if self.delay > 0:
            await asyncio.sleep(self.delay)

        if not params.fans_out:
            await self.handler.warm_up(context)
            return params

        await self.dispatcher.dispatch(context, params.concurrency, params.correlation_id)
        return params
