"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chipax.constants import MEMORY_SIZE, FONT_START, FONT_END
from chipax.errors import MemoryAccessError
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.instructions.system import next_instruction


def check_read(start: int, length: int) -> None:
    """Raise if ``memory[start:start + length]`` leaves addressable memory."""
    if length > 0 and start + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Read of {length} bytes at 0x{start:04X} runs past 0x{MEMORY_SIZE - 1:03X}", start
        )


def check_write(start: int, length: int) -> None:
    """Raise if a write leaves memory or touches the font area."""
    if length <= 0:
        return
    if start + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Write of {length} bytes at 0x{start:04X} runs past 0x{MEMORY_SIZE - 1:03X}", start
        )
    if start < FONT_END and start + length > FONT_START:
        raise MemoryAccessError(f"Write of {length} bytes at 0x{start:04X} overlaps the font set", start)


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    state = state.replace(V=state.V.at[instruction.x].set(instruction.nn))
    return next_instruction(state)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping without touching VF."""
    total = (int(state.V[instruction.x]) + instruction.nn) & 0xFF
    state = state.replace(V=state.V.at[instruction.x].set(total))
    return next_instruction(state)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    state = state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))
    return next_instruction(state)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.bits(subkey, shape=(), dtype=jnp.uint8)
    state = state.replace(V=state.V.at[instruction.x].set(random_value & instruction.nn), rng=key)
    return next_instruction(state)
