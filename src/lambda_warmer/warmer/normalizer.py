"""
Warm-up parameter normalization
"""

from typing import Optional

from .models import WarmUpParameters


def normalize(
    concurrency: Optional[int],
    invocation_number: Optional[int],
    total_invocation: Optional[int],
    correlation_id: Optional[str],
    fallback_correlation_id: str,
) -> WarmUpParameters:
    """
    Derive effective warm-up parameters from a possibly partial ping.

    Unset and non-positive values fall back to safe defaults:
    concurrency and invocation number to 1, total invocation to the
    effective concurrency, correlation id to `fallback_correlation_id`.

    Example:
        >>> normalize(0, 0, 0, "", "fallback")
        WarmUpParameters(concurrency=1, invocation_number=1, total_invocation=1, correlation_id='fallback')
    """
    eff_concurrency = concurrency if concurrency is not None and concurrency > 1 else 1
    eff_invocation_number = (
        invocation_number if invocation_number is not None and invocation_number > 0 else 1
    )
    eff_total_invocation = (
        total_invocation
        if total_invocation is not None and total_invocation > 0
        else eff_concurrency
    )
    eff_correlation_id = correlation_id if correlation_id else fallback_correlation_id

    return WarmUpParameters(
        concurrency=eff_concurrency,
        invocation_number=eff_invocation_number,
        total_invocation=eff_total_invocation,
        correlation_id=eff_correlation_id,
    )
