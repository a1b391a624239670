"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE
from chip8vm.state import CPUState, RunState, check_range
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.system import unknown


def execute_get_delay_timer(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX1E - Add VX to I register (16-bit wrap, VF untouched)."""
    new_i = state.I + jnp.astype(state.V[instruction.x], jnp.uint16)
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_wait_for_key(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX0A - Suspend until a key is pressed; the key index lands in VX.

    The engine only records which register to fill. Resuming is handled by
    :func:`chip8vm.emulator.step`.
    """
    return state.replace(run_state=RunState.AWAITING_KEY, key_register=instruction.x)


def execute_font_character(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    start = check_range(state.I, 3, "BCD write")
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[start:start + 3].set(digits))


def execute_store_registers(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX55 - Store V0 through VX in memory starting at I; I is unchanged."""
    count = instruction.x + 1
    start = check_range(state.I, count, "register store")
    return state.replace(memory=state.memory.at[start:start + count].set(state.V[:count]))


def execute_load_registers(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """FX65 - Load V0 through VX from memory starting at I; I is unchanged."""
    count = instruction.x + 1
    start = check_range(state.I, count, "register load")
    return state.replace(V=state.V.at[:count].set(state.memory[start:start + count]))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """Dispatch FXNN instructions on their low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn, unknown)
    return handler(state, instruction)
