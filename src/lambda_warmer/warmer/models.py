"""
Warmer Data Models

Envelope, warm-up parameters and per-environment state.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional

from .interface import NamingConvention, TRequest


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)"""
    return datetime.now(timezone.utc)


# Envelope attributes in wire order; `request` is decoded separately
ENVELOPE_FIELDS = (
    "warmer",
    "concurrency",
    "invocation_number",
    "total_invocation",
    "correlation_id",
)


@dataclass
class WarmerEvent(Generic[TRequest]):
    """Inbound envelope: either a warm-up ping or a real request"""

    warmer: bool = False

    # Warm-up parameters (meaningful only when warmer is True)
    concurrency: Optional[int] = None
    invocation_number: Optional[int] = None
    total_invocation: Optional[int] = None
    correlation_id: Optional[str] = None

    # Decoded request (meaningful only when warmer is False)
    request: Optional[TRequest] = None

    @classmethod
    def ping(
        cls,
        invocation_number: int,
        total_invocation: int,
        correlation_id: str,
    ) -> "WarmerEvent":
        """Build a downstream warm-up ping"""
        return cls(
            warmer=True,
            invocation_number=invocation_number,
            total_invocation=total_invocation,
            correlation_id=correlation_id,
        )

    def to_dict(self, naming: NamingConvention = NamingConvention.CAMEL) -> Dict[str, Any]:
        """Envelope fields by wire name, unset fields omitted"""
        data: Dict[str, Any] = {}
        for name in ENVELOPE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[naming.alias(name)] = value
        return data


@dataclass(frozen=True)
class WarmUpParameters:
    """Effective warm-up parameters after normalization"""

    concurrency: int
    invocation_number: int
    total_invocation: int
    correlation_id: str

    @property
    def fans_out(self) -> bool:
        """Whether this ping must populate additional environments"""
        return self.concurrency > 1


@dataclass
class InstanceState:
    """
    State of the current execution environment.

    Lives as long as the WarmerFunction instance, which is created once per
    execution environment. Only one top-level invocation runs at a time, so
    writes never race.
    """

    warm: bool = False
    last_access: Optional[datetime] = None

    def mark_warm(self) -> None:
        """Flag the environment as warm"""
        self.warm = True

    def mark_accessed(self, now: Optional[datetime] = None) -> None:
        """Record a real request"""
        self.warm = True
        self.last_access = now or _utcnow()

    def seconds_since_last_access(self, now: Optional[datetime] = None) -> Optional[int]:
        """Whole seconds since the last real request, None if never served"""
        if self.last_access is None:
            return None
        delta = (now or _utcnow()) - self.last_access
        return int(delta.total_seconds())


@dataclass
class InvocationResult:
    """Outcome of one remote invocation"""

    status_code: int
    payload: bytes = b""
    function_error: Optional[str] = None
    request_id: Optional[str] = None
    executed_version: Optional[str] = None
