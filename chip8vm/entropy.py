"""Random byte sources for CXNN.

A source is a pure function ``source(rng) -> (next_rng, byte)``. The ``rng``
value is threaded through :class:`chip8vm.state.CPUState`, so the engine stays
deterministic for a given source and starting ``rng``.
"""

from typing import Any, Callable, Sequence

import jax
import jax.numpy as jnp

ByteSource = Callable[[Any], tuple[Any, int]]


def jax_random_byte(rng: jax.Array) -> tuple[jax.Array, int]:
    """Draw a byte from a JAX PRNG key."""
    key, subkey = jax.random.split(rng)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return key, int(value)


def sequence_source(values: Sequence[int]) -> ByteSource:
    """Cycle through ``values``; the rng is the integer position."""
    values = tuple(int(v) & 0xFF for v in values)
    if not values:
        raise ValueError("sequence_source needs at least one value")

    def source(position: int) -> tuple[int, int]:
        position = int(position)
        return position + 1, values[position % len(values)]

    return source
