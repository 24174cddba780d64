"""
Local Invoker

Runs fan-out re-invocations in-process against a warmer function, for
development and tests without AWS.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Set
from uuid import uuid4

from ..exceptions import InvocationError
from ..interface import FunctionInvoker, InvocationType
from ..models import InvocationResult

logger = logging.getLogger(__name__)


@dataclass
class LocalContext:
    """Minimal stand-in for the Lambda context object"""

    invoked_function_arn: str = "arn:aws:lambda:local:000000000000:function:local"
    aws_request_id: str = field(default_factory=lambda: str(uuid4()))
    function_name: str = "local"
    function_version: str = "$LATEST"
    memory_limit_in_mb: int = 128

    def get_remaining_time_in_millis(self) -> int:
        return 900000


class LocalInvoker(FunctionInvoker):
    """
    In-process invoker.

    `target` is anything with an async `invoke(payload, context)`, usually a
    WarmerFunction. EVENT calls run as background tasks and return as soon
    as they are scheduled; `drain()` waits for them.

    Example:
        invoker = LocalInvoker()
        function = WarmerFunction(handler, invoker=invoker)
        invoker.target = function
    """

    def __init__(
        self,
        target: Optional[Any] = None,
        context_factory: Optional[Callable[[str], Any]] = None,
    ):
        """
        Args:
            target: Function receiving the invocations
            context_factory: Builds a context for a function name (LocalContext if None)
        """
        self.target = target
        self.context_factory = context_factory or (
            lambda function_name: LocalContext(invoked_function_arn=function_name)
        )
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of EVENT invocations still running"""
        return len(self._pending)

    async def invoke(
        self,
        function_name: str,
        payload: bytes,
        invocation_type: InvocationType,
    ) -> InvocationResult:
        if self.target is None:
            raise InvocationError(
                f"No local target for {function_name}",
                function_name=function_name,
                invocation_type=invocation_type,
            )

        context = self.context_factory(function_name)

        if invocation_type == InvocationType.EVENT:
            task = asyncio.ensure_future(self.target.invoke(payload, context))
            self._pending.add(task)
            task.add_done_callback(self._on_event_done)
            return InvocationResult(status_code=202, request_id=context.aws_request_id)

        try:
            body = await self.target.invoke(payload, context)
        except Exception as e:
            raise InvocationError(
                f"Local function {function_name} failed: {e}",
                function_name=function_name,
                invocation_type=invocation_type,
                status_code=200,
                function_error="Unhandled",
            ) from e

        return InvocationResult(
            status_code=200,
            payload=body or b"",
            request_id=context.aws_request_id,
        )

    def _on_event_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Local EVENT invocation failed: {task.exception()}",
                exc_info=task.exception(),
            )

    async def drain(self) -> None:
        """Wait until every EVENT invocation has finished"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
