"""CHIP-8 monochrome display surface."""

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT


class Display(PyTreeNode):
    """64x32 pixel grid, indexed ``pixels[x, y]``.

    :meth:`plot` is the only way pixels change apart from :meth:`clear`. It
    XORs its input into the grid and reports whether any lit pixel was turned
    off (a collision).
    """
    pixels: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))

    def clear(self) -> "Display":
        """Turn every pixel off."""
        return self.replace(pixels=jnp.zeros_like(self.pixels))

    def plot(self, x, y, bit=True) -> tuple["Display", bool]:
        """XOR ``bit`` into the pixel at ``(x, y)``.

        Coordinates wrap modulo the screen size independently on each axis.
        ``x``, ``y`` and ``bit`` may be arrays of matching shape to plot many
        pixels at once, provided the wrapped coordinates are distinct.

        Returns:
            Tuple of the updated display and the collision flag.
        """
        x = jnp.asarray(x, dtype=jnp.int32) % SCREEN_WIDTH
        y = jnp.asarray(y, dtype=jnp.int32) % SCREEN_HEIGHT
        bit = jnp.asarray(bit, dtype=jnp.bool_)

        current = self.pixels[x, y]
        collision = bool(jnp.any(current & bit))
        return self.replace(pixels=self.pixels.at[x, y].set(current ^ bit)), collision

    def pixel_at(self, x: int, y: int) -> bool:
        return bool(self.pixels[x % SCREEN_WIDTH, y % SCREEN_HEIGHT])

    def pixel_grid(self) -> jnp.ndarray:
        """Read-only (64, 32) boolean view for renderers."""
        return self.pixels

    def lit_count(self) -> int:
        return int(jnp.sum(self.pixels))
