"""
Payload Codecs

Encode and decode request/response payloads. The warmer core is polymorphic
over payload types: callers pass a codec instead of subclassing.
"""

import base64
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Dict, Generic, Iterable, List, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from .exceptions import DecodeError

T = TypeVar("T")

RawPayload = Union[bytes, bytearray, str, Mapping, list]


def load_json(raw: RawPayload) -> Any:
    """
    Parse a raw payload.

    Bytes and strings are parsed as JSON; anything else is assumed to be
    already parsed (the Python Lambda runtime hands handlers a dict).

    Raises:
        DecodeError: When the payload is not valid JSON
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Payload is not UTF-8: {e}", cause=e) from e

    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Payload is not valid JSON: {e}", cause=e) from e

    return raw


def match_keys(data: Mapping, names: Iterable[str]) -> Dict[str, Any]:
    """
    Rename keys of `data` that match one of `names` case-insensitively.

    Keys that match nothing are kept unchanged.
    """
    canonical = {name.lower(): name for name in names}
    matched: Dict[str, Any] = {}
    for key, value in data.items():
        target = canonical.get(key.lower(), key) if isinstance(key, str) else key
        matched[target] = value
    return matched


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(v) for v in value]
    return value


class PayloadCodec(ABC, Generic[T]):
    """Converts between raw payloads and typed values"""

    @abstractmethod
    def decode(self, raw: RawPayload) -> T:
        """
        Decode a raw payload.

        Raises:
            DecodeError: When the payload cannot be decoded as T
        """
        pass

    @abstractmethod
    def encode(self, value: T) -> bytes:
        """Encode a value as UTF-8 JSON"""
        pass


class JsonCodec(PayloadCodec[Any]):
    """
    Plain JSON values (dicts, lists, scalars).

    Datetimes are written as ISO-8601 strings, bytes as base64 and
    null-valued object fields are omitted.
    """

    def decode(self, raw: RawPayload) -> Any:
        return load_json(raw)

    def encode(self, value: Any) -> bytes:
        return json.dumps(
            _drop_none(value),
            default=_json_default,
            separators=(",", ":"),
        ).encode("utf-8")


class PydanticCodec(PayloadCodec[T]):
    """
    Any type pydantic can validate: models, dataclasses, TypedDicts, lists...

    Top-level keys of model payloads are matched case-insensitively against
    the model's field aliases. Values are written by alias with unset
    optional fields omitted.

    Example:
        codec = PydanticCodec(Greeting)
        greeting = codec.decode(b'{"NAME": "world"}')
    """

    def __init__(self, type_: Type[T]):
        self.type_ = type_
        self._adapter = TypeAdapter(type_)
        self._field_names = self._collect_field_names(type_)

    @staticmethod
    def _collect_field_names(type_: Any) -> List[str]:
        if isinstance(type_, type) and issubclass(type_, BaseModel):
            return [info.alias or name for name, info in type_.model_fields.items()]
        return []

    def decode(self, raw: RawPayload) -> T:
        data = load_json(raw)
        if self._field_names and isinstance(data, Mapping):
            data = match_keys(data, self._field_names)

        try:
            return self._adapter.validate_python(data)
        except ValidationError as e:
            raise DecodeError(
                f"Payload does not match {getattr(self.type_, '__name__', self.type_)}: {e}",
                cause=e,
            ) from e

    def encode(self, value: T) -> bytes:
        return self._adapter.dump_json(value, by_alias=True, exclude_none=True)
