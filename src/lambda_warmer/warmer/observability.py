"""
Warm-up log records
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .models import InstanceState, WarmUpParameters

logger = logging.getLogger(__name__)


def build_warmer_record(
    function: str,
    params: WarmUpParameters,
    state: InstanceState,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the record describing one warm-up step.

    `state` must be captured before the step marks the environment warm.
    `concurrency` carries the total invocation count of the fan-out.
    """
    return {
        "action": "warmer",
        "function": function,
        "correlationId": params.correlation_id,
        "count": params.invocation_number,
        "concurrency": params.total_invocation,
        "warm": state.warm,
        "lastAccessed": state.last_access.isoformat() if state.last_access else None,
        "lastAccessedSeconds": state.seconds_since_last_access(now),
    }


def log_warmer_record(
    function: str,
    params: WarmUpParameters,
    state: InstanceState,
) -> Dict[str, Any]:
    """Emit the warm-up record as one JSON line"""
    record = build_warmer_record(function, params, state)
    logger.info(json.dumps(record))
    return record
