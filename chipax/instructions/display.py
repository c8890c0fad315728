"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipax.constants import SCREEN_WIDTH, DISPLAY_SIZE, FLAG_REGISTER
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.instructions.memory import check_read
from chipax.instructions.system import next_instruction

SPRITE_WIDTH = 8

# Bit offsets within a sprite row, most significant bit first
columns = jnp.arange(SPRITE_WIDTH)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Cells are addressed as ``(x + col + (y + row) * 64) % 2048`` so a sprite
    running off the right edge continues on the next row and one running off
    the bottom continues at the top.
    """
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    height = instruction.n
    address = int(state.I)
    check_read(address, height)

    rows = jnp.arange(height)[:, None]
    sprite_bytes = state.memory[address:address + height].astype(jnp.int32)[:, None]
    sprite = (sprite_bytes >> (7 - columns[None, :])) & 1

    cells = (sprite_x + columns[None, :] + (sprite_y + rows) * SCREEN_WIDTH) % DISPLAY_SIZE
    current = state.display[cells].astype(jnp.int32)
    collision = jnp.any((current & sprite) == 1)

    state = state.replace(
        display=state.display.at[cells].set(jnp.astype(current ^ sprite, jnp.uint8)),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8)),
        draw_flag=jnp.array(True),
    )
    return next_instruction(state)
