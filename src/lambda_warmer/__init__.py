"""
lambda-warmer - keep AWS Lambda execution environments warm

Wrap a handler in WarmerFunction (or decorate it with @warmer) and schedule
pings such as {"warmer": true, "concurrency": 5} to keep five environments
initialized at once.
"""

from .core.config import WarmerSettings, get_settings
from .warmer import (
    CallableHandler,
    DecodeError,
    FanOutError,
    FunctionHandler,
    FunctionInvoker,
    InvocationError,
    InvocationType,
    JsonCodec,
    LambdaInvoker,
    LocalInvoker,
    NamingConvention,
    PayloadCodec,
    PydanticCodec,
    WarmerError,
    WarmerEvent,
    WarmerFunction,
    warmer,
)

__version__ = "0.1.0"

__all__ = [
    "WarmerSettings",
    "get_settings",
    "CallableHandler",
    "FunctionHandler",
    "FunctionInvoker",
    "InvocationType",
    "NamingConvention",
    "PayloadCodec",
    "JsonCodec",
    "PydanticCodec",
    "WarmerEvent",
    "WarmerFunction",
    "warmer",
    "LambdaInvoker",
    "LocalInvoker",
    "WarmerError",
    "DecodeError",
    "InvocationError",
    "FanOutError",
]
