"""Command registry - dispatch by method name.

Hosts look up codecs here by method name: an incoming request envelope is
routed to the method's request parser, and a response's `result` payload to
its reply parser. Nothing is registered on import; the host calls
`register_name_commands()` once at startup.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..errors import RegistrationError, RpcServerError, UnsupportedCommandError
from .commands import NAME_FILTER, NAME_SCAN, NAME_SHOW, NAME_SYNC, parse_name_show_command
from .envelope import RawCommand, decode_raw_command, decode_raw_reply
from .replies import parse_name_filter_reply, parse_name_show_reply, parse_name_sync_reply

logger = logging.getLogger(__name__)

RequestParser = Callable[[RawCommand], Any]
ReplyParser = Callable[[Any], Any]


@dataclass(frozen=True)
class CommandCodec:
    """Codecs and usage text registered for one method."""

    method: str
    request_parser: RequestParser | None
    reply_parser: ReplyParser
    usage: str


class CommandRegistry:
    """Maps method names to their request and reply codecs.

    Usage:
        registry = CommandRegistry()
        register_name_commands(registry)

        cmd = registry.parse_command(request_bytes)
        reply = registry.parse_response("name_show", response_bytes)
    """

    def __init__(self) -> None:
        self._codecs: dict[str, CommandCodec] = {}

    def register_custom_command(
        self,
        method: str,
        request_parser: RequestParser | None,
        reply_parser: ReplyParser,
        usage: str,
    ) -> None:
        """Register codecs for a method.

        Args:
            method: RPC method name
            request_parser: Builds a command from a request envelope, or None
                if the method is never received as a request
            reply_parser: Builds a typed reply from the result payload
            usage: Human-readable usage string

        Raises:
            RegistrationError: If the method is already registered
        """
        if method in self._codecs:
            raise RegistrationError(f"Method already registered: {method}")
        self._codecs[method] = CommandCodec(method, request_parser, reply_parser, usage)
        logger.debug(f"Registered custom command: {method}")

    def is_registered(self, method: str) -> bool:
        return method in self._codecs

    def methods(self) -> list[str]:
        """Registered method names in registration order."""
        return list(self._codecs)

    def usage(self, method: str) -> str:
        return self._get(method, "usage").usage

    def parse_command(self, data: bytes | str) -> Any:
        """Decode an incoming request envelope into a typed command.

        Raises:
            ProtocolError: If the envelope or its parameters are malformed
            UnsupportedCommandError: If the method has no request parser
        """
        raw = decode_raw_command(data)
        codec = self._get(raw.method, "request")
        if codec.request_parser is None:
            raise UnsupportedCommandError(raw.method, "request")
        logger.debug(f"Parsing {raw.method} request (id={raw.id})")
        return codec.request_parser(raw)

    def parse_reply(self, method: str, result: Any) -> Any:
        """Decode a `result` payload for a method.

        `result` is raw JSON text (bytes or str) or an already-decoded
        non-string value. A decoded JSON string must be re-encoded first.
        """
        codec = self._get(method, "reply")
        logger.debug(f"Parsing {method} reply")
        return codec.reply_parser(result)

    def parse_response(self, method: str, data: bytes | str) -> Any:
        """Decode a full response envelope for a method.

        Raises:
            RpcServerError: If the server answered with an error object
            ProtocolError: If the envelope or its result is malformed
        """
        reply = decode_raw_reply(data)
        if reply.error is not None:
            raise RpcServerError(reply.error.code, reply.error.message)
        # Re-encode so a JSON string result is not mistaken for raw JSON text.
        return self.parse_reply(method, json.dumps(reply.result))

    def _get(self, method: str, direction: str) -> CommandCodec:
        codec = self._codecs.get(method)
        if codec is None:
            raise UnsupportedCommandError(method, direction)
        return codec


default_registry = CommandRegistry()


def register_name_commands(registry: CommandRegistry | None = None) -> CommandRegistry:
    """Register the name-registry methods. Call once at process startup."""
    registry = registry if registry is not None else default_registry

    registry.register_custom_command(
        NAME_SHOW, parse_name_show_command, parse_name_show_reply, "name_show <name>"
    )
    registry.register_custom_command(
        NAME_SYNC, None, parse_name_sync_reply, "name_sync <block-hash> <count> <wait?>"
    )
    registry.register_custom_command(
        NAME_FILTER,
        None,
        parse_name_filter_reply,
        "name_filter <regexp> <maxage> <from> <count>",
    )
    registry.register_custom_command(
        NAME_SCAN, None, parse_name_filter_reply, "name_scan <from> <count>"
    )

    return registry
