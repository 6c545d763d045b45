"""Shared field types for request/response payloads.

Identifiers never leave or enter the API as raw integers:

- ``IdToken`` is the inbound type. It accepts only an opaque token string and
  validates to the integer key.
- ``EncodedId`` is the outbound type. It holds the integer key and serializes
  as a token. It also accepts a token on validation because FastAPI
  re-validates dumped response payloads.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, PlainSerializer, PlainValidator, WithJsonSchema
from pydantic_core import PydanticCustomError

from taskboard.core.opaque_ids import (
    CORRUPTED_ID,
    INVALID_ID_FORMAT,
    CorruptedIdError,
    InvalidIdFormatError,
    get_id_codec,
)

INVALID_DATE_FORMAT = "Invalid date format"
# UTC timestamps only; numeric offsets are rejected.
_ISO_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?Z$",
)
_TOKEN_JSON_SCHEMA: dict[str, Any] = {
    "type": "string",
    "pattern": "^[A-Za-z0-9]+$",
    "examples": ["jR3kXm9a"],
}


def decode_token(value: object) -> int:
    """Decode an inbound token, mapping codec failures to validation errors."""
    try:
        return get_id_codec().decode_id(value)
    except InvalidIdFormatError as exc:
        raise PydanticCustomError("invalid_id_format", INVALID_ID_FORMAT) from exc
    except CorruptedIdError as exc:
        raise PydanticCustomError("corrupted_id", CORRUPTED_ID) from exc


def encode_id(value: int) -> str:
    """Encode an integer key as its public token."""
    return get_id_codec().encode(value)


def _coerce_encoded_id(value: object) -> object:
    if isinstance(value, str):
        return decode_token(value)
    return value


def _parse_iso_datetime(value: object) -> object:
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATETIME_RE.match(value):
        raise PydanticCustomError("invalid_datetime", INVALID_DATE_FORMAT)
    return value


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


IdToken = Annotated[
    int,
    PlainValidator(decode_token),
    WithJsonSchema(_TOKEN_JSON_SCHEMA),
]
EncodedId = Annotated[
    int,
    BeforeValidator(_coerce_encoded_id),
    PlainSerializer(encode_id, return_type=str),
    WithJsonSchema(_TOKEN_JSON_SCHEMA),
]
IsoDatetime = Annotated[
    datetime,
    BeforeValidator(_parse_iso_datetime),
    AfterValidator(_to_naive_utc),
]
