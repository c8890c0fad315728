"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chipax.constants import NUM_KEYS
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.stack import push
from chipax.instructions.system import next_instruction, skip_next_instruction


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN.

    The address of the call itself is saved; return adds the instruction
    size when it pops it.
    """
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return skip_next_instruction(state)
        return next_instruction(state)
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def _key_for(state: EmulatorState, instruction: DecodedInstruction) -> int:
    return int(state.keypad[int(state.V[instruction.x]) % NUM_KEYS])


execute_skip_if_key = make_skip_instruction(
    lambda state, inst: _key_for(state, inst) != 0
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: _key_for(state, inst) == 0
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0.

    The sum is not masked; a target past the end of memory is caught when
    the cycle validates the program counter.
    """
    jump_address = instruction.nnn + int(state.V[0])
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))
