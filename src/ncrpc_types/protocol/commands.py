"""Request codecs for the name-registry RPC methods.

Each command kind serializes to a positional parameter array in the exact
order the server's parser expects:

    name_show    [name]
    name_sync    [block_hash, count, wait]
    name_scan    [from_name, count]
    name_filter  [regexp, max_age, from_index, count]

Only name_show can also be decoded from an incoming request. The other
three are only ever sent by a client, so they carry no decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, runtime_checkable

from ..errors import ProtocolError, ValidationError
from .envelope import (
    RawCommand,
    decode_raw_command,
    encode_raw_command,
    is_valid_id,
    new_raw_command,
)

NAME_SHOW = "name_show"
NAME_SYNC = "name_sync"
NAME_SCAN = "name_scan"
NAME_FILTER = "name_filter"


@runtime_checkable
class RpcCommand(Protocol):
    """Interface shared by every command kind."""

    id: Any
    method: ClassVar[str]

    def params(self) -> list[Any]:
        """Positional parameters in wire order."""
        ...

    def to_raw(self) -> RawCommand:
        """Build the generic request envelope."""
        ...

    def marshal_json(self) -> bytes:
        """Serialize the request envelope to JSON."""
        ...


def _check_id(command_id: Any) -> None:
    if not is_valid_id(command_id):
        raise ValidationError(f"Unsupported id type: {type(command_id).__name__}")


@dataclass(frozen=True)
class NameShowCmd:
    """Look up the current value of a single name."""

    method: ClassVar[str] = NAME_SHOW

    id: Any
    name: str

    def __post_init__(self) -> None:
        _check_id(self.id)

    def params(self) -> list[Any]:
        """Positional parameters in wire order."""
        return [self.name]

    def to_raw(self) -> RawCommand:
        return new_raw_command(self.id, self.method, self.params())

    def marshal_json(self) -> bytes:
        """Serialize to the JSON-RPC request envelope."""
        return encode_raw_command(self.to_raw())

    @classmethod
    def from_raw(cls, raw: RawCommand) -> NameShowCmd:
        """Build a command from a decoded request envelope.

        Raises:
            ProtocolError: If the parameter list is not exactly one string.
        """
        if len(raw.params) != 1:
            raise ProtocolError(f"{NAME_SHOW} expects 1 parameter, got {len(raw.params)}")

        name = raw.params[0]
        if not isinstance(name, str):
            raise ProtocolError(
                f"first argument 'name' must be a string, got {type(name).__name__}"
            )

        try:
            return cls(id=raw.id, name=name)
        except ValidationError as e:
            raise ProtocolError(str(e)) from e

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> NameShowCmd:
        """Decode a name_show request from its JSON envelope."""
        return cls.from_raw(decode_raw_command(data))


@dataclass(frozen=True)
class NameSyncCmd:
    """Request name events following a block, optionally waiting for new ones."""

    method: ClassVar[str] = NAME_SYNC

    id: Any
    block_hash: str
    count: int
    wait: bool

    def __post_init__(self) -> None:
        _check_id(self.id)

    def params(self) -> list[Any]:
        """Positional parameters in wire order."""
        return [self.block_hash, self.count, self.wait]

    def to_raw(self) -> RawCommand:
        return new_raw_command(self.id, self.method, self.params())

    def marshal_json(self) -> bytes:
        """Serialize to the JSON-RPC request envelope."""
        return encode_raw_command(self.to_raw())


@dataclass(frozen=True)
class NameScanCmd:
    """List names in order, starting at `from_name`."""

    method: ClassVar[str] = NAME_SCAN

    id: Any
    from_name: str
    count: int

    def __post_init__(self) -> None:
        _check_id(self.id)

    def params(self) -> list[Any]:
        """Positional parameters in wire order."""
        return [self.from_name, self.count]

    def to_raw(self) -> RawCommand:
        return new_raw_command(self.id, self.method, self.params())

    def marshal_json(self) -> bytes:
        """Serialize to the JSON-RPC request envelope."""
        return encode_raw_command(self.to_raw())


@dataclass(frozen=True)
class NameFilterCmd:
    """List names matching a regular expression.

    `max_age` limits results to names updated within that many blocks
    (0 means no limit); `from_index` and `count` page through the matches.
    """

    method: ClassVar[str] = NAME_FILTER

    id: Any
    regexp: str
    max_age: int
    from_index: int
    count: int

    def __post_init__(self) -> None:
        _check_id(self.id)

    def params(self) -> list[Any]:
        """Positional parameters in wire order."""
        return [self.regexp, self.max_age, self.from_index, self.count]

    def to_raw(self) -> RawCommand:
        return new_raw_command(self.id, self.method, self.params())

    def marshal_json(self) -> bytes:
        """Serialize to the JSON-RPC request envelope."""
        return encode_raw_command(self.to_raw())


def parse_name_show_command(raw: RawCommand) -> NameShowCmd:
    """Request parser registered for name_show."""
    return NameShowCmd.from_raw(raw)
