"""
AWS Lambda Invoker

Re-invokes Lambda functions through boto3.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import InvocationError
from ..interface import FunctionInvoker, InvocationType
from ..models import InvocationResult

logger = logging.getLogger(__name__)

# Status codes Lambda returns for an accepted call, per invocation type
EXPECTED_STATUS = {
    InvocationType.EVENT: 202,
    InvocationType.REQUEST_RESPONSE: 200,
}


class LambdaInvoker(FunctionInvoker):
    """
    boto3 based function invoker.

    The blocking boto3 call runs in a worker thread so that fan-out legs
    proceed concurrently.

    Prerequisites:
    - IAM permission lambda:InvokeFunction on the function itself
    """

    def __init__(
        self,
        lambda_client: Optional[Any] = None,
        region: Optional[str] = None,
        max_retries: int = 3,
        connect_timeout: Optional[int] = None,
        read_timeout: Optional[int] = None,
        request_response_client: Optional[Any] = None,
    ):
        """
        Initialize Lambda invoker.

        Event calls are retried with adaptive backoff. RequestResponse calls
        are never retried: a retry after a read timeout would run the
        function again and start a second warm-up.

        Args:
            lambda_client: Pre-built boto3 Lambda client (built from the options below if None)
            region: AWS region (environment default if None)
            max_retries: Max retry attempts for throttled or failed calls
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
            request_response_client: Client for RequestResponse calls
                (lambda_client if that was given, otherwise one built without retries)
        """
        if lambda_client is None:
            lambda_client = self._build_client(
                {"max_attempts": max_retries, "mode": "adaptive"},
                region,
                connect_timeout,
                read_timeout,
            )
            if request_response_client is None:
                request_response_client = self._build_client(
                    {"total_max_attempts": 1, "mode": "standard"},
                    region,
                    connect_timeout,
                    read_timeout,
                )

        self.lambda_client = lambda_client
        self.request_response_client = request_response_client or lambda_client

    @staticmethod
    def _build_client(
        retries: Dict[str, Any],
        region: Optional[str],
        connect_timeout: Optional[int],
        read_timeout: Optional[int],
    ) -> Any:
        config_kwargs = {"retries": retries}
        if region:
            config_kwargs["region_name"] = region
        if connect_timeout is not None:
            config_kwargs["connect_timeout"] = connect_timeout
        if read_timeout is not None:
            config_kwargs["read_timeout"] = read_timeout

        return boto3.client("lambda", config=Config(**config_kwargs))

    async def invoke(
        self,
        function_name: str,
        payload: bytes,
        invocation_type: InvocationType,
    ) -> InvocationResult:
        """Invoke a Lambda function"""
        client = (
            self.request_response_client
            if invocation_type == InvocationType.REQUEST_RESPONSE
            else self.lambda_client
        )

        try:
            response = await asyncio.to_thread(
                client.invoke,
                FunctionName=function_name,
                InvocationType=invocation_type.value,
                LogType="None",
                Payload=payload,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))
            logger.error(f"Lambda invocation failed: {error_code} - {error_message}")
            raise InvocationError(
                f"Lambda invocation of {function_name} failed: {error_code} - {error_message}",
                function_name=function_name,
                invocation_type=invocation_type,
            ) from e
        except BotoCoreError as e:
            logger.error(f"Lambda invocation failed: {e}")
            raise InvocationError(
                f"Lambda invocation of {function_name} failed: {e}",
                function_name=function_name,
                invocation_type=invocation_type,
            ) from e

        body = response.get("Payload")
        result = InvocationResult(
            status_code=response.get("StatusCode", 0),
            payload=body.read() if body is not None else b"",
            function_error=response.get("FunctionError"),
            request_id=response.get("ResponseMetadata", {}).get("RequestId"),
            executed_version=response.get("ExecutedVersion"),
        )

        expected = EXPECTED_STATUS[invocation_type]
        if result.status_code != expected:
            raise InvocationError(
                f"Lambda {invocation_type.value} invocation of {function_name} "
                f"returned status {result.status_code}, expected {expected}",
                function_name=function_name,
                invocation_type=invocation_type,
                status_code=result.status_code,
            )

        if result.function_error:
            raise InvocationError(
                f"Lambda function {function_name} failed: {self._error_message(result)}",
                function_name=function_name,
                invocation_type=invocation_type,
                status_code=result.status_code,
                function_error=result.function_error,
            )

        return result

    @staticmethod
    def _error_message(result: InvocationResult) -> str:
        """Extract errorMessage from a failed function's payload"""
        try:
            body = json.loads(result.payload or b"{}")
        except ValueError:
            return result.function_error or "Unknown error"
        if isinstance(body, dict):
            return body.get("errorMessage", result.function_error or "Unknown error")
        return result.function_error or "Unknown error"
