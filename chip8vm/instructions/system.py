"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8vm.state import CPUState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import Display
from chip8vm.keyboard import Keyboard
from chip8vm.errors import UnknownInstruction
from chip8vm.stack import pop


def unknown(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """Instruction with no handler."""
    raise UnknownInstruction(instruction.raw)


def execute_clear_screen(
    state: CPUState, instruction: DecodedInstruction, display: Display, keyboard: Keyboard
) -> tuple[CPUState, Display]:
    """00E0 - Clear display."""
    return state, display.clear()


def execute_return(state: CPUState, instruction: DecodedInstruction) -> CPUState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack, at=int(state.pc) - 2)
    return state.replace(stack=stack, pc=jnp.astype(address, jnp.uint16))


def execute_system_instruction(
    state: CPUState, instruction: DecodedInstruction, display: Display, keyboard: Keyboard
) -> tuple[CPUState, Display]:
    """Dispatch system instructions."""
    if instruction.raw == 0x00E0:
        return execute_clear_screen(state, instruction, display, keyboard)
    if instruction.raw == 0x00EE:
        return execute_return(state, instruction), display
    # 0NNN machine-code calls are not supported
    return unknown(state, instruction), display
