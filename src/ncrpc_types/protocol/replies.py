"""Reply types and parsers for the name-registry RPC methods.

Flat records (name_show, name_scan, name_filter) are decoded leniently:
missing fields and JSON nulls take zero values and unknown fields are
ignored, but a field holding the wrong JSON type is an error.

name_sync replies are arrays of events, each itself a positional array
tagged by its first element:

    ["firstupdate", name, value]
    ["update", name, value]
    ["atblock", block_hash, block_height]

Unknown tags are kept as UnknownSyncEvent so newer servers can add event
kinds without breaking older clients.
"""

from __future__ import annotations

import json
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ProtocolError

MALFORMED_SYNC_EVENT = "malformed name_sync event"


class LenientRecord(BaseModel):
    """Base for flat reply records.

    Keys are matched exactly first, then case-insensitively, and a null
    value leaves the field at its zero value.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        folded = {name.lower(): name for name in cls.model_fields}
        values: dict[str, Any] = {}
        for key, value in data.items():
            target = key if key in cls.model_fields else folded.get(str(key).lower())
            if target is None or value is None:
                continue
            values[target] = value
        return values


class NameShowReply(LenientRecord):
    """Current state of a single name."""

    name: str = ""
    value: str = ""
    height: int = 0
    expires_in: int = 0
    expired: bool = False
    address: str = ""
    txid: str = ""
    vout: int = 0


class NameFilterItem(LenientRecord):
    """One name in a name_scan or name_filter listing."""

    name: str = ""
    value: str = ""
    txid: str = ""
    address: str = ""
    height: int = 0
    expires_in: int = 0
    expired: bool = False


class NameUpdateEvent(BaseModel):
    """A name was registered (firstupdate) or updated (update)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["firstupdate", "update"]
    name: str
    value: str


class AtBlockEvent(BaseModel):
    """Marks the block the preceding events belong to."""

    model_config = ConfigDict(frozen=True)

    type: Literal["atblock"] = "atblock"
    block_hash: str
    block_height: int


class UnknownSyncEvent(BaseModel):
    """An event with a tag this client does not understand."""

    model_config = ConfigDict(frozen=True)

    type: str


SyncEvent = NameUpdateEvent | AtBlockEvent | UnknownSyncEvent
NameSyncReply = tuple[SyncEvent, ...]
NameFilterReply = tuple[NameFilterItem, ...]


def load_json(raw: Any) -> Any:
    """Decode raw JSON text; already-decoded values pass through."""
    if isinstance(raw, (bytes, bytearray, str)):
        try:
            return json.loads(raw)
        except ValueError as e:
            raise ProtocolError(f"Reply is not valid JSON: {e}") from e
    return raw


def _describe(e: PydanticValidationError) -> str:
    error = e.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    if location:
        return f"field '{location}': {error['msg']}"
    return error["msg"]


def _decode_record(model: type[LenientRecord], data: Any, what: str) -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ProtocolError(f"Invalid {what}: {_describe(e)}") from e


def _decode_array(data: Any, what: str) -> list[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ProtocolError(f"Invalid {what}: expected an array, got {type(data).__name__}")
    return data


def decode_sync_event(item: Any) -> SyncEvent:
    """Decode one positional name_sync event.

    Raises:
        ProtocolError: If the element is not a non-empty array led by a
            string tag, or a known tag lacks correctly typed fields.
    """
    if not isinstance(item, list) or not item or not isinstance(item[0], str):
        raise ProtocolError(MALFORMED_SYNC_EVENT)

    match item:
        case [("firstupdate" | "update") as tag, str(name), str(value), *_]:
            return NameUpdateEvent(type=tag, name=name, value=value)
        case ["atblock", str(block_hash), (int() | float()) as height, *_] if (
            not isinstance(height, bool) and math.isfinite(height)
        ):
            return AtBlockEvent(block_hash=block_hash, block_height=int(height))
        case ["firstupdate" | "update" | "atblock", *_]:
            raise ProtocolError(MALFORMED_SYNC_EVENT)
        case [tag, *_]:
            return UnknownSyncEvent(type=tag)

    raise ProtocolError(MALFORMED_SYNC_EVENT)


def parse_name_show_reply(raw: Any) -> NameShowReply:
    """Reply parser for name_show."""
    return _decode_record(NameShowReply, load_json(raw), "name_show reply")


def parse_name_sync_reply(raw: Any) -> NameSyncReply:
    """Reply parser for name_sync. Any malformed event fails the whole reply."""
    items = _decode_array(load_json(raw), "name_sync reply")
    return tuple(decode_sync_event(item) for item in items)


def parse_name_filter_reply(raw: Any) -> NameFilterReply:
    """Reply parser shared by name_scan and name_filter."""
    items = _decode_array(load_json(raw), "name_filter reply")
    return tuple(
        _decode_record(NameFilterItem, item, f"name_filter item {index}")
        for index, item in enumerate(items)
    )
