"""CHIP-8 ALU operations (8xxx).

Flag ordering matters when VF is also an operand: addition writes VX then
VF, the subtractions and shifts write VF first and compute VX from the
registers as they stand afterwards.
"""

from chipax.constants import FLAG_REGISTER
from chipax.decode import DecodedInstruction, Op
from chipax.state import EmulatorState
from chipax.instructions.system import next_instruction


def _get(state: EmulatorState, register: int) -> int:
    return int(state.V[register])


def _put(state: EmulatorState, register: int, value: int) -> EmulatorState:
    return state.replace(V=state.V.at[register].set(value & 0xFF))


def alu_set(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY0 - Set: VX = VY."""
    return _put(state, x, _get(state, y))


def alu_or(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY1 - Binary OR: VX |= VY."""
    return _put(state, x, _get(state, x) | _get(state, y))


def alu_and(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY2 - Binary AND: VX &= VY."""
    return _put(state, x, _get(state, x) & _get(state, y))


def alu_xor(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY3 - Logical XOR: VX ^= VY."""
    return _put(state, x, _get(state, x) ^ _get(state, y))


def alu_add(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY4 - Add: VX += VY, VF = carry."""
    total = _get(state, x) + _get(state, y)
    state = _put(state, x, total)
    return _put(state, FLAG_REGISTER, int(total > 0xFF))


def alu_sub_xy(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY5 - Subtract: VF = no borrow, VX -= VY."""
    state = _put(state, FLAG_REGISTER, int(_get(state, x) >= _get(state, y)))
    return _put(state, x, _get(state, x) - _get(state, y))


def alu_shift_right(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY6 - Shift right: VF = lsb, VX >>= 1."""
    state = _put(state, FLAG_REGISTER, _get(state, x) & 1)
    return _put(state, x, _get(state, x) >> 1)


def alu_sub_yx(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XY7 - Subtract: VF = no borrow, VX = VY - VX."""
    state = _put(state, FLAG_REGISTER, int(_get(state, y) >= _get(state, x)))
    return _put(state, x, _get(state, y) - _get(state, x))


def alu_shift_left(state: EmulatorState, x: int, y: int) -> EmulatorState:
    """8XYE - Shift left: VF = msb, VX <<= 1."""
    state = _put(state, FLAG_REGISTER, _get(state, x) >> 7)
    return _put(state, x, _get(state, x) << 1)


ALU_OPERATIONS = {
    Op.SET_REG: alu_set,
    Op.OR: alu_or,
    Op.AND: alu_and,
    Op.XOR: alu_xor,
    Op.ADD_REG: alu_add,
    Op.SUB_XY: alu_sub_xy,
    Op.SHIFT_RIGHT: alu_shift_right,
    Op.SUB_YX: alu_sub_yx,
    Op.SHIFT_LEFT: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS[instruction.op]
    return next_instruction(operation(state, instruction.x, instruction.y))
