"""Test configuration and fixtures for CHIP-8 engine tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, execute, Display, Keyboard
from chip8vm.logging import RecordingCallback


@pytest.fixture
def fresh_state():
    """Provide a fresh CPU state for each test."""
    return create_state()


@pytest.fixture
def strict_state():
    """Provide a fresh state that rejects unknown instructions."""
    return create_state(strict=True)


@pytest.fixture
def display():
    return Display()


@pytest.fixture
def keyboard():
    return Keyboard()


@pytest.fixture
def recorder():
    return RecordingCallback()


def run_instructions(state, *instructions, display=None, keyboard=None, diagnostics=None):
    """Execute instructions in order; returns (state, display)."""
    display = Display() if display is None else display
    keyboard = Keyboard() if keyboard is None else keyboard
    for instruction in instructions:
        state, display = execute(state, instruction, display, keyboard, diagnostics)
    return state, display


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
