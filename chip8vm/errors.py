"""Errors raised by the CHIP-8 engine.

Every error derives from :class:`EngineError` so a host loop can stop on any
engine failure with a single ``except`` clause. None of them are fatal to the
process; deciding whether to halt is left to the caller.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class LoadError(EngineError):
    """Program does not fit in the address space above 0x200."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"Program of {size} bytes exceeds the {capacity} bytes available")
        self.size = size
        self.capacity = capacity


class MemoryAccessError(EngineError):
    """Read or write outside the 4096-byte address space."""

    def __init__(self, address: int, length: int = 1, operation: str = "access"):
        super().__init__(
            f"Memory {operation} of {length} byte(s) at 0x{address:04X} is out of range"
        )
        self.address = address
        self.length = length
        self.operation = operation


class StackUnderflow(EngineError):
    """Return executed with an empty call stack."""

    def __init__(self, address: int):
        super().__init__(f"Return at 0x{address:03X} with an empty call stack")
        self.address = address


class UnknownInstruction(EngineError):
    """Instruction word with no matching handler."""

    def __init__(self, instruction: int, address: int = None):
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown instruction 0x{instruction:04X}{where}")
        self.instruction = instruction
        self.address = address
