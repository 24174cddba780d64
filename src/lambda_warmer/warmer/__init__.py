"""
Warm-up Protocol

Event classification, parameter normalization, warm-up orchestration and
concurrent fan-out for Lambda functions kept warm by scheduled pings.
"""

from .interface import FunctionHandler, FunctionInvoker, InvocationType, NamingConvention
from .models import InstanceState, InvocationResult, WarmerEvent, WarmUpParameters
from .codec import JsonCodec, PayloadCodec, PydanticCodec
from .classifier import decode_event, encode_event
from .normalizer import normalize
from .observability import build_warmer_record, log_warmer_record
from .dispatcher import FanOutDispatcher
from .orchestrator import WarmUpOrchestrator
from .function import CallableHandler, WarmerFunction, warmer
from .invokers import LambdaInvoker, LocalContext, LocalInvoker, create_invoker
from .exceptions import (
    WarmerError,
    DecodeError,
    InvocationError,
    FanOutError,
)

__all__ = [
    # Interface
    "FunctionHandler",
    "FunctionInvoker",
    "InvocationType",
    "NamingConvention",
    # Models
    "InstanceState",
    "InvocationResult",
    "WarmerEvent",
    "WarmUpParameters",
    # Codecs
    "PayloadCodec",
    "JsonCodec",
    "PydanticCodec",
    # Protocol
    "decode_event",
    "encode_event",
    "normalize",
    "build_warmer_record",
    "log_warmer_record",
    "FanOutDispatcher",
    "WarmUpOrchestrator",
    # Entrypoint
    "WarmerFunction",
    "CallableHandler",
    "warmer",
    # Invokers
    "LambdaInvoker",
    "LocalInvoker",
    "LocalContext",
    "create_invoker",
    # Exceptions
    "WarmerError",
    "DecodeError",
    "InvocationError",
    "FanOutError",
]
