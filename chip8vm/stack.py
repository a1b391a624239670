"""CHIP-8 call stack operations."""

from chip8vm.errors import StackUnderflow


def push(stack: tuple, address) -> tuple:
    """Push return address onto stack."""
    return stack + (int(address),)


def pop(stack: tuple, at: int = 0) -> tuple[tuple, int]:
    """Pop return address from stack.

    ``at`` is the address of the returning instruction, used in the error.
    """
    if not stack:
        raise StackUnderflow(at)
    return stack[:-1], stack[-1]
