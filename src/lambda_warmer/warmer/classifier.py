"""
Event Classifier

Decodes inbound payloads into WarmerEvent envelopes and encodes the
downstream pings produced by the fan-out.
"""

import json
import logging
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .codec import PayloadCodec, RawPayload, load_json
from .exceptions import DecodeError
from .interface import NamingConvention
from .models import ENVELOPE_FIELDS, WarmerEvent

logger = logging.getLogger(__name__)


class _Envelope(BaseModel):
    """Validation schema for the envelope fields"""

    model_config = ConfigDict(extra="ignore")

    warmer: bool = False
    concurrency: Optional[int] = None
    invocation_number: Optional[int] = None
    total_invocation: Optional[int] = None
    correlation_id: Optional[str] = None


def decode_event(
    raw: RawPayload,
    request_codec: PayloadCodec,
    naming: NamingConvention = NamingConvention.CAMEL,
) -> WarmerEvent:
    """
    Decode a raw payload into a WarmerEvent.

    The envelope and the request are decoded independently from the same
    payload; the request is only decoded when the event is not a warm-up ping.

    Args:
        raw: JSON bytes, JSON text, or an already-parsed mapping
        request_codec: Codec for the request type
        naming: Wire naming convention of the envelope fields

    Returns:
        WarmerEvent with `request` set on the request path

    Raises:
        DecodeError: When the payload or the request cannot be decoded
    """
    data = load_json(raw)
    if not isinstance(data, Mapping):
        raise DecodeError(f"Payload must be a JSON object, got {type(data).__name__}")

    aliases = {naming.alias(name).lower(): name for name in ENVELOPE_FIELDS}
    fields = {
        aliases[key.lower()]: value
        for key, value in data.items()
        if isinstance(key, str) and key.lower() in aliases
    }

    try:
        envelope = _Envelope.model_validate(fields)
    except ValidationError as e:
        raise DecodeError(f"Invalid warmer envelope: {e}", cause=e) from e

    event: WarmerEvent = WarmerEvent(**envelope.model_dump())

    if not event.warmer:
        event.request = request_codec.decode(raw)

    return event


def encode_event(
    event: WarmerEvent,
    naming: NamingConvention = NamingConvention.CAMEL,
) -> bytes:
    """Encode a warm-up ping for re-invocation"""
    return json.dumps(event.to_dict(naming), separators=(",", ":")).encode("utf-8")
