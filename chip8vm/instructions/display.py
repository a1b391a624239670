"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import CPUState, check_range
from chip8vm.decode import DecodedInstruction
from chip8vm.display import Display
from chip8vm.keyboard import Keyboard

SPRITE_WIDTH = 8
# Bit offsets of columns 0..7, most significant bit first
columns = jnp.arange(SPRITE_WIDTH)


def execute_display(
    state: CPUState, instruction: DecodedInstruction, display: Display, keyboard: Keyboard
) -> tuple[CPUState, Display]:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Every sprite pixel wraps around the screen on its own, so a sprite drawn
    near an edge reappears on the opposite side.
    """
    height = instruction.n
    if height == 0:
        return state.replace(V=state.V.at[FLAG_REGISTER].set(0)), display

    start = check_range(state.I, height, "sprite read")
    sprite_bytes = jnp.astype(state.memory[start:start + height], jnp.int32)
    bits = (sprite_bytes[:, None] >> (SPRITE_WIDTH - 1 - columns)[None, :]) & 1

    rows = jnp.arange(height)
    xs = jnp.astype(state.V[instruction.x], jnp.int32) + columns[None, :]
    ys = jnp.astype(state.V[instruction.y], jnp.int32) + rows[:, None]
    xs, ys = jnp.broadcast_arrays(xs, ys)

    display, collision = display.plot(xs, ys, bits)
    return state.replace(V=state.V.at[FLAG_REGISTER].set(int(collision))), display
