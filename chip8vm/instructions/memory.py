"""CHIP-8 memory and register operations."""

import jax.numpy as jnp
from chip8vm.state import CPUState
from chip8vm.decode import DecodedInstruction


def execute_set(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.nn))


def execute_add(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """7XNN - Add NN to VX, wrapping, VF untouched."""
    total = (jnp.astype(state.V[instruction.x], jnp.int32) + instruction.nn) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(jnp.astype(total, jnp.uint8)))


def execute_set_index(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """CXNN - Set VX = random & NN."""
    rng, random_value = state.random_source(state.rng)
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.nn), rng=rng)
