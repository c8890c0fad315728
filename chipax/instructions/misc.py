"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipax.constants import FONT_START, FONT_GLYPH_SIZE, INDEX_LIMIT, FLAG_REGISTER
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.instructions.memory import check_read, check_write
from chipax.instructions.system import next_instruction


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    state = state.replace(V=state.V.at[instruction.x].set(state.delay_timer))
    return next_instruction(state)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    state = state.replace(delay_timer=state.V[instruction.x])
    return next_instruction(state)


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    state = state.replace(sound_timer=state.V[instruction.x])
    return next_instruction(state)


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register.

    I wraps at 16 bits and is not masked to 12; VF reports whether the
    wrapped result lies beyond 0xFFF.
    """
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    state = state.replace(
        I=jnp.astype(new_i, jnp.uint16),
        V=state.V.at[FLAG_REGISTER].set(int(new_i > INDEX_LIMIT))
    )
    return next_instruction(state)


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Never blocks: with no key down pc stays put so the instruction runs
    again next cycle. With several keys down the highest index wins.
    """
    pressed = [key for key, value in enumerate(state.keypad.tolist()) if value]
    if not pressed:
        return state
    state = state.replace(V=state.V.at[instruction.x].set(pressed[-1]))
    return next_instruction(state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * FONT_GLYPH_SIZE
    state = state.replace(I=jnp.astype(font_address, jnp.uint16))
    return next_instruction(state)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    address = int(state.I)
    check_write(address, 3)

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    new_memory = state.memory.at[address:address + 3].set(digits)
    return next_instruction(state.replace(memory=new_memory))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 up to but excluding VX in memory starting at I.

    VX itself is not written, yet I still advances by X + 1 as it does for
    FX65. Programs written for this interpreter rely on the asymmetry.
    """
    count = instruction.x
    address = int(state.I)
    check_write(address, count)
    new_memory = state.memory.at[address:address + count].set(state.V[:count])
    return next_instruction(state.replace(
        memory=new_memory,
        I=jnp.astype((address + count + 1) & 0xFFFF, jnp.uint16),
    ))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    address = int(state.I)
    check_read(address, count)
    new_V = state.V.at[:count].set(state.memory[address:address + count])
    return next_instruction(state.replace(
        V=new_V,
        I=jnp.astype((address + count) & 0xFFFF, jnp.uint16),
    ))
