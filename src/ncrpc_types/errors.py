"""Exception hierarchy for the name-registry RPC codecs.

Every error raised by this package derives from NcRpcError so hosts can
catch codec failures in one place:

- ValidationError: a command was built with arguments the envelope rejects
- EncodingError: a command could not be serialized to the wire
- ProtocolError: the peer sent data that does not match the method's shape
- RpcServerError: the peer answered with an error object instead of a result
- RegistrationError: a method was registered with a registry twice
"""

from __future__ import annotations


class NcRpcError(Exception):
    """Base class for all codec errors."""


class ValidationError(NcRpcError, ValueError):
    """Raised when a command's id or method is rejected by the envelope."""


class EncodingError(NcRpcError):
    """Raised when a request envelope cannot be serialized."""


class ProtocolError(NcRpcError):
    """Raised when received JSON does not conform to the expected shape."""


class UnsupportedCommandError(ProtocolError):
    """Raised when no codec exists for a method in the requested direction."""

    def __init__(self, method: str, direction: str) -> None:
        self.method = method
        self.direction = direction
        super().__init__(f"No {direction} codec registered for method: {method}")


class RpcServerError(NcRpcError):
    """Raised when a response envelope carries an error object."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"RPC error {code}: {message}")


class RegistrationError(NcRpcError):
    """Raised when a method name is registered more than once."""
