"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8vm.state import CPUState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import Display
from chip8vm.keyboard import Keyboard
from chip8vm.stack import push
from chip8vm.instructions.system import unknown


def execute_jump(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def skip_if(state: CPUState, condition) -> CPUState:
    """Advance pc past the next instruction when ``condition`` holds."""
    return state.replace(pc=jnp.where(condition, state.pc + 2, state.pc).astype(jnp.uint16))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: CPUState, instruction: DecodedInstruction) -> CPUState:
        return skip_if(state, condition_fn(state, instruction))
    return skip_instruction


def make_register_skip_instruction(condition_fn):
    """Factory for 5XY0/9XY0, which require a zero low nibble."""
    skip_instruction = make_skip_instruction(condition_fn)

    def register_skip_instruction(state: CPUState, instruction: DecodedInstruction) -> CPUState:
        if instruction.n != 0:
            return unknown(state, instruction)
        return skip_instruction(state, instruction)
    return register_skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_register_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_register_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)


def execute_jump_with_offset(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + jnp.astype(state.V[0], jnp.uint16)
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def execute_skip_if_key(
    state: CPUState, instruction: DecodedInstruction, display: Display, keyboard: Keyboard
) -> tuple[CPUState, Display]:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn not in (0x9E, 0xA1):
        return unknown(state, instruction), display

    key_index = int(state.V[instruction.x]) & 0xF
    key_pressed = keyboard.is_pressed(key_index)
    is_not_instruction = (instruction.nn == 0xA1)
    return skip_if(state, key_pressed ^ is_not_instruction), display
