"""CHIP-8 system instructions (0x0xxx) and program counter helpers."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.stack import pop

INSTRUCTION_SIZE = 2


def next_instruction(state: EmulatorState) -> EmulatorState:
    """Advance pc past the current instruction."""
    return state.replace(pc=state.pc + INSTRUCTION_SIZE)


def skip_next_instruction(state: EmulatorState) -> EmulatorState:
    """Advance pc past the current and the following instruction."""
    return state.replace(pc=state.pc + 2 * INSTRUCTION_SIZE)


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unrecognized instruction: state and pc are left untouched."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    state = state.replace(
        display=jnp.zeros_like(state.display),
        draw_flag=jnp.array(True),
    )
    return next_instruction(state)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine to the instruction after the call."""
    stack, address = pop(state.stack)
    return next_instruction(state.replace(stack=stack, pc=address))
