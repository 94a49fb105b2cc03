"""Pytest configuration and shared fixtures."""

import pytest

from ncrpc_types.protocol.registry import CommandRegistry, register_name_commands


@pytest.fixture
def registry():
    """A fresh registry with the name commands registered."""
    return register_name_commands(CommandRegistry())
