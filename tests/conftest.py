"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipax import create_state, Machine
from chipax.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def quiet_logger():
    """Logger that only prints errors."""
    return ConsoleLogger(log_level="ERROR", use_colors=False, show_timestamps=False)


@pytest.fixture
def machine():
    """Provide a machine whose logger writes plain warnings to stdout."""
    return Machine(logger=ConsoleLogger(log_level="WARNING", use_colors=False, show_timestamps=False))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def assemble(*words):
    """Helper to turn 16-bit instruction words into big-endian ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
