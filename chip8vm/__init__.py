"""CHIP-8 virtual machine package."""

from chip8vm.state import CPUState, RunState, create_state, load_program, load_rom, format_state
from chip8vm.display import Display
from chip8vm.keyboard import Keyboard
from chip8vm.emulator import execute, fetch, step, tick_timers, run, RunResult
from chip8vm.decode import DecodedInstruction, decode, disassemble
from chip8vm.entropy import jax_random_byte, sequence_source
from chip8vm.errors import (
    EngineError, LoadError, MemoryAccessError, StackUnderflow, UnknownInstruction
)
from chip8vm.constants import *
from chip8vm.rendering import display_to_rgb, display_to_text, create_color_scheme, save_frame

__all__ = [
    "CPUState",
    "RunState",
    "create_state",
    "load_program",
    "load_rom",
    "format_state",
    "Display",
    "Keyboard",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "run",
    "RunResult",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "jax_random_byte",
    "sequence_source",
    "EngineError",
    "LoadError",
    "MemoryAccessError",
    "StackUnderflow",
    "UnknownInstruction",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "display_to_text",
    "create_color_scheme",
    "save_frame",
]
