"""Main CHIP-8 emulator execution engine."""

from typing import NamedTuple, Optional

import jax.numpy as jnp
from tqdm import tqdm

from chip8vm.state import CPUState, RunState
from chip8vm.decode import decode
from chip8vm.display import Display
from chip8vm.keyboard import Keyboard
from chip8vm.constants import MEMORY_SIZE, DEFAULT_INSTRUCTIONS_PER_FRAME
from chip8vm.errors import EngineError, MemoryAccessError, UnknownInstruction
from chip8vm.logging import ConsoleCallback, DiagnosticCallback
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

default_diagnostics = ConsoleCallback()


def cpu_only(handler):
    """Adapt a ``(state, instruction) -> state`` handler to the peripheral signature."""
    def peripheral_handler(state, instruction, display, keyboard):
        return handler(state, instruction), display
    peripheral_handler.__name__ = handler.__name__
    peripheral_handler.__doc__ = handler.__doc__
    return peripheral_handler


# Indexed by the top nibble of the instruction word
HANDLERS = [
    execute_system_instruction,
    cpu_only(execute_jump),
    cpu_only(execute_call),
    cpu_only(execute_skip_if_equal_immediate),
    cpu_only(execute_skip_if_not_equal_immediate),
    cpu_only(execute_skip_if_equal_register),
    cpu_only(execute_set),
    cpu_only(execute_add),
    cpu_only(execute_alu_operation),
    cpu_only(execute_skip_if_not_equal_register),
    cpu_only(execute_set_index),
    cpu_only(execute_jump_with_offset),
    cpu_only(execute_random),
    execute_display,
    execute_skip_if_key,
    cpu_only(execute_misc_instruction),
]


def execute(
    state: CPUState,
    instruction: int,
    display: Display,
    keyboard: Keyboard,
    diagnostics: Optional[DiagnosticCallback] = None,
) -> tuple[CPUState, Display]:
    """Execute single CHIP-8 instruction.

    Unknown instructions are reported to ``diagnostics`` and skipped, unless
    the state is strict, in which case :class:`UnknownInstruction` is raised.
    While FX0A is pending the instruction is ignored; only :func:`step` can
    resume the engine.
    """
    if state.awaiting_key:
        return state, display

    decoded_instruction = decode(instruction)
    handler = HANDLERS[decoded_instruction.opcode]
    try:
        return handler(state, decoded_instruction, display, keyboard)
    except UnknownInstruction:
        address = int(state.pc) - 2
        if state.strict:
            raise UnknownInstruction(decoded_instruction.raw, address) from None
        diagnostics = default_diagnostics if diagnostics is None else diagnostics
        diagnostics.on_unknown_instruction(address, decoded_instruction.raw)
        return state, display


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: CPUState) -> tuple[CPUState, int]:
    """Fetch next big-endian instruction from memory and advance pc by 2."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(pc, 2, "fetch")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.astype(pc + 2, jnp.uint16)), int(instruction)


def resume_with_key(state: CPUState, keyboard: Keyboard) -> CPUState:
    """Complete a pending FX0A once any key is held down."""
    key = keyboard.lowest_pressed()
    if key is None:
        return state
    return state.replace(
        V=state.V.at[state.key_register].set(key),
        run_state=RunState.RUNNING,
    )


def step(
    state: CPUState,
    display: Display,
    keyboard: Keyboard,
    diagnostics: Optional[DiagnosticCallback] = None,
) -> tuple[CPUState, Display]:
    """Run one fetch/execute cycle.

    While waiting on FX0A nothing is fetched: the step either leaves the state
    untouched or stores the lowest pressed key and resumes.
    """
    if state.awaiting_key:
        return resume_with_key(state, keyboard), display

    diagnostics = default_diagnostics if diagnostics is None else diagnostics
    address = int(state.pc)
    state, instruction = fetch(state)
    diagnostics.on_instruction(address, instruction)
    state, display = execute(state, instruction, display, keyboard, diagnostics)
    if state.awaiting_key:
        diagnostics.on_key_wait(state.key_register)
    return state, display


def tick_timers(state: CPUState) -> CPUState:
    """Decrement non-zero timers by one; meant for a 60 Hz host driver."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, 0).astype(jnp.uint8),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, 0).astype(jnp.uint8),
    )


class RunResult(NamedTuple):
    state: CPUState
    display: Display
    executed: int
    error: Optional[EngineError]


def run(
    state: CPUState,
    display: Display,
    keyboard: Keyboard,
    cycles: int,
    instructions_per_frame: int = DEFAULT_INSTRUCTIONS_PER_FRAME,
    diagnostics: Optional[DiagnosticCallback] = None,
    progress: bool = False,
) -> RunResult:
    """Step the engine up to ``cycles`` times, ticking timers once per frame.

    Stops at the first :class:`EngineError` and returns it alongside the last
    good state instead of raising.

    Args:
        state: Starting CPU state
        display: Starting display surface
        keyboard: Key latch held for the whole run
        cycles: Maximum number of steps
        instructions_per_frame: Steps between two timer ticks
        diagnostics: Callback receiving engine events
        progress: Show a tqdm progress bar

    Returns:
        RunResult with the final state, display, number of completed steps
        and the error that stopped the run, if any.
    """
    if instructions_per_frame < 1:
        raise ValueError(f"instructions_per_frame must be positive, got {instructions_per_frame}")

    executed = 0
    error = None
    for _ in tqdm(range(cycles), desc="Executing", unit="step", disable=not progress):
        try:
            state, display = step(state, display, keyboard, diagnostics)
        except EngineError as exc:
            error = exc
            break
        executed += 1
        if executed % instructions_per_frame == 0:
            state = tick_timers(state)
    return RunResult(state, display, executed, error)
