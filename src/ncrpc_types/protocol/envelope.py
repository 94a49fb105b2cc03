"""Generic JSON-RPC 1.0 envelope.

Requests travel as `{"jsonrpc": "1.0", "id": ..., "method": ..., "params": [...]}`
and responses as `{"result": ..., "error": ..., "id": ...}`. Method-specific
codecs build their parameter arrays and hand them to `new_raw_command`; the
envelope itself knows nothing about individual methods.
"""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import EncodingError, ProtocolError, ValidationError

JSONRPC_VERSION = "1.0"


class RawCommand(BaseModel):
    """A request envelope with positional parameters."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: str
    params: list[Any] = Field(default_factory=list)

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        # A JSON null parameter list is an empty one.
        return [] if value is None else value


class RpcErrorObject(BaseModel):
    """Error object carried by a failed response."""

    code: int
    message: str
    data: Any | None = None


class RawReply(BaseModel):
    """A response envelope. `result` is handed to a method's reply parser."""

    model_config = ConfigDict(frozen=True)

    result: Any = None
    error: RpcErrorObject | None = None
    id: Any = None


def is_valid_id(value: Any) -> bool:
    """Check whether a value may be used as a correlation id.

    Ids are echoed back by the server unexamined, so only JSON scalars that
    survive a round trip unchanged are accepted: null, integers, finite
    floats and strings. Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, str):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def new_raw_command(command_id: Any, method: str, params: list[Any]) -> RawCommand:
    """Build a request envelope.

    Raises:
        ValidationError: If the id has an unsupported type or the method
            name is empty.
    """
    if not is_valid_id(command_id):
        raise ValidationError(f"Unsupported id type: {type(command_id).__name__}")
    if not isinstance(method, str) or not method:
        raise ValidationError("Method name must be a non-empty string")
    return RawCommand(id=command_id, method=method, params=list(params))


def encode_raw_command(raw: RawCommand) -> bytes:
    """Serialize a request envelope to JSON bytes.

    Raises:
        EncodingError: If any parameter cannot be represented as JSON.
    """
    # NaN and infinity have no JSON form; they must fail rather than become null.
    try:
        text = json.dumps(
            raw.model_dump(), allow_nan=False, ensure_ascii=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Cannot encode {raw.method} request: {e}") from e
    return text.encode("utf-8")


def decode_raw_command(data: bytes | str) -> RawCommand:
    """Parse a request envelope from JSON.

    Raises:
        ProtocolError: If the payload is not a well-formed request envelope.
    """
    try:
        return RawCommand.model_validate_json(data)
    except PydanticValidationError as e:
        raise ProtocolError(f"Malformed request envelope: {e}") from e


def decode_raw_reply(data: bytes | str) -> RawReply:
    """Parse a response envelope from JSON.

    Raises:
        ProtocolError: If the payload is not a well-formed response envelope.
    """
    try:
        return RawReply.model_validate_json(data)
    except PydanticValidationError as e:
        raise ProtocolError(f"Malformed response envelope: {e}") from e
