"""Unit tests for the generic request/response envelope."""

import json

import pytest

from ncrpc_types.errors import ProtocolError, ValidationError
from ncrpc_types.protocol.envelope import (
    decode_raw_command,
    decode_raw_reply,
    encode_raw_command,
    is_valid_id,
    new_raw_command,
)


class TestIdValidation:
    """Test which ids the envelope accepts."""

    @pytest.mark.parametrize("value", [None, 0, -1, 2**70, 1.25, "", "req"])
    def test_valid(self, value):
        assert is_valid_id(value) is True

    @pytest.mark.parametrize("value", [False, True, float("inf"), [], {}, b"id", object()])
    def test_invalid(self, value):
        assert is_valid_id(value) is False


class TestNewRawCommand:
    """Test envelope construction."""

    def test_builds_envelope(self):
        """Envelope should carry id, method and params."""
        raw = new_raw_command(1, "name_show", ["d/x"])

        assert raw.jsonrpc == "1.0"
        assert raw.id == 1
        assert raw.method == "name_show"
        assert raw.params == ["d/x"]

    def test_rejects_bad_id(self):
        """Unsupported ids should raise ValidationError."""
        with pytest.raises(ValidationError):
            new_raw_command({"a": 1}, "name_show", [])

    def test_rejects_empty_method(self):
        """An empty method name should raise ValidationError."""
        with pytest.raises(ValidationError, match="Method name"):
            new_raw_command(1, "", [])

    def test_encode(self):
        """Encoding should produce the JSON-RPC 1.0 wire form."""
        data = json.loads(encode_raw_command(new_raw_command("a", "name_scan", ["", 5])))

        assert data == {"jsonrpc": "1.0", "id": "a", "method": "name_scan", "params": ["", 5]}


class TestDecoding:
    """Test envelope decoding."""

    def test_decode_command_defaults(self):
        """Missing id and params should default to null and empty."""
        raw = decode_raw_command('{"method": "name_show"}')

        assert raw.id is None
        assert raw.params == []

    def test_decode_command_missing_method(self):
        """A request without a method is malformed."""
        with pytest.raises(ProtocolError):
            decode_raw_command('{"id": 1, "params": []}')

    def test_decode_command_object_params(self):
        """Named parameters are not supported."""
        with pytest.raises(ProtocolError):
            decode_raw_command('{"id": 1, "method": "name_show", "params": {"name": "d/x"}}')

    def test_decode_reply(self):
        """Reply envelopes should expose result, error and id."""
        reply = decode_raw_reply('{"result": {"name": "d/x"}, "error": null, "id": 3}')

        assert reply.result == {"name": "d/x"}
        assert reply.error is None
        assert reply.id == 3

    def test_decode_reply_error(self):
        """Error objects should be decoded."""
        reply = decode_raw_reply('{"result": null, "error": {"code": -32601, "message": "Method not found"}, "id": 1}')

        assert reply.error.code == -32601
        assert reply.error.message == "Method not found"
