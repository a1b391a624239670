"""CHIP-8 CPU state structures."""

import enum

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, MAX_PROGRAM_SIZE, NUM_REGISTERS
)
from chip8vm.entropy import ByteSource, jax_random_byte
from chip8vm.errors import LoadError, MemoryAccessError


class RunState(enum.Enum):
    """Whether the engine fetches on the next step or waits for a key (FX0A)."""
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"


class CPUState(PyTreeNode):
    """Registers, memory, call stack and timers owned by the engine.

    ``key_register`` is only meaningful while ``run_state`` is
    ``RunState.AWAITING_KEY``.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    stack: tuple = ()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    run_state: RunState = field(pytree_node=False, default=RunState.RUNNING)
    key_register: int = field(pytree_node=False, default=0)
    random_source: ByteSource = field(pytree_node=False, default=jax_random_byte)
    strict: bool = field(pytree_node=False, default=False)

    @property
    def awaiting_key(self) -> bool:
        return self.run_state is RunState.AWAITING_KEY


def create_state(
    rng=None,
    random_source: ByteSource = jax_random_byte,
    strict: bool = False,
) -> CPUState:
    """Create initial CPU state with the font loaded into the reserved area."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = CPUState(rng, random_source=random_source, strict=strict)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def load_program(state: CPUState, rom: bytes) -> CPUState:
    """Copy a raw ROM image into memory starting at 0x200."""
    rom = bytes(rom)
    if len(rom) > MAX_PROGRAM_SIZE:
        raise LoadError(len(rom), MAX_PROGRAM_SIZE)
    if not rom:
        return state
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: CPUState, filename: str) -> CPUState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


def check_range(address: int, length: int, operation: str) -> int:
    """Validate that ``length`` bytes starting at ``address`` lie in memory."""
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length, operation)
    return address


def format_state(state: CPUState) -> str:
    """Human-readable dump of pc, I, timers, stack and registers."""
    registers = " ".join(f"V{i:X}:{int(value):02X}" for i, value in enumerate(state.V))
    stack = " ".join(f"{address:03X}" for address in state.stack) or "-"
    lines = [
        f"pc: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}  "
        f"DT: {int(state.delay_timer)}  ST: {int(state.sound_timer)}  {state.run_state.value}",
        f"stack: {stack}",
        f"registers: {registers}",
    ]
    return "\n".join(lines)
