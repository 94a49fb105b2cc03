"""Name-registry extensions to a JSON-RPC 1.0 client.

Adds codecs for the non-standard methods of a name-registry node:

- name_show: look up one name (request and reply decodable)
- name_sync: stream name events following a block
- name_scan: list names in order
- name_filter: list names matching a regular expression

Key concepts:
- Commands: typed requests serialized to positional parameter arrays
- Replies: typed values decoded from a response's `result` payload
- Registry: maps method names to codecs so a transport can dispatch
"""

from .commands import (
    NAME_FILTER,
    NAME_SCAN,
    NAME_SHOW,
    NAME_SYNC,
    NameFilterCmd,
    NameScanCmd,
    NameShowCmd,
    NameSyncCmd,
    RpcCommand,
)
from .envelope import RawCommand, RawReply, new_raw_command
from .registry import CommandRegistry, default_registry, register_name_commands
from .replies import (
    AtBlockEvent,
    NameFilterItem,
    NameFilterReply,
    NameShowReply,
    NameSyncReply,
    NameUpdateEvent,
    SyncEvent,
    UnknownSyncEvent,
    parse_name_filter_reply,
    parse_name_show_reply,
    parse_name_sync_reply,
)

__all__ = [
    "NAME_FILTER",
    "NAME_SCAN",
    "NAME_SHOW",
    "NAME_SYNC",
    "AtBlockEvent",
    "CommandRegistry",
    "NameFilterCmd",
    "NameFilterItem",
    "NameFilterReply",
    "NameScanCmd",
    "NameShowCmd",
    "NameShowReply",
    "NameSyncCmd",
    "NameSyncReply",
    "NameUpdateEvent",
    "RawCommand",
    "RawReply",
    "RpcCommand",
    "SyncEvent",
    "UnknownSyncEvent",
    "default_registry",
    "new_raw_command",
    "parse_name_filter_reply",
    "parse_name_show_reply",
    "parse_name_sync_reply",
    "register_name_commands",
]
