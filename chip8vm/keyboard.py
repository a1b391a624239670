"""CHIP-8 hexadecimal keypad latch."""

from typing import Optional

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import NUM_KEYS


def _check_index(index: int) -> int:
    index = int(index)
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"Key index must be in [0, {NUM_KEYS - 1}], got {index}")
    return index


class Keyboard(PyTreeNode):
    """Pressed/released state of the 16 keys 0x0-0xF."""
    keys: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))

    def set_key(self, index: int, pressed: bool) -> "Keyboard":
        """Return a latch with key ``index`` set to ``pressed``."""
        return self.replace(keys=self.keys.at[_check_index(index)].set(bool(pressed)))

    def is_pressed(self, index: int) -> bool:
        return bool(self.keys[_check_index(index)])

    def lowest_pressed(self) -> Optional[int]:
        """Smallest pressed key index, or None when no key is down."""
        if not jnp.any(self.keys):
            return None
        # argmax returns the first maximal entry
        return int(jnp.argmax(self.keys))

    def pressed_keys(self) -> list[int]:
        return [int(key) for key in jnp.flatnonzero(self.keys)]

    def release_all(self) -> "Keyboard":
        return self.replace(keys=jnp.zeros_like(self.keys))
