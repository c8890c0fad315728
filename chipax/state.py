"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode

from chipax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, DISPLAY_SIZE, MEMORY_SIZE,
    NUM_KEYS, NUM_REGISTERS, STACK_SIZE,
)


@dataclass(frozen=True)
class StackState:
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Complete CHIP-8 machine state.

    The display is a flat row-major buffer of 64x32 cells holding 0 or 1.
    ``draw_flag`` is raised by instructions that touch the display and
    cleared by the host once it has rendered a frame.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    draw_flag: jnp.ndarray


def create_state(rng: jax.random.PRNGKey = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return EmulatorState(
        rng=rng,
        memory=memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font),
        pc=jnp.astype(PROGRAM_START, jnp.uint16),
        display=jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8),
        stack=StackState(data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16)),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.uint8),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        draw_flag=jnp.zeros((), dtype=jnp.bool_),
    )
