"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction, Op, decode, disassemble
from chipax.constants import PROGRAM_START, MAX_ROM_SIZE, LAST_FETCH_ADDRESS
from chipax.errors import ProgramCounterError, RomTooLargeError
from chipax.logging import ConsoleLogger, default_logger
from chipax.instructions.system import no_op, execute_clear_screen, execute_return
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chipax.instructions.alu import execute_alu_operation, ALU_OPERATIONS
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

HANDLERS = {
    Op.CLEAR_SCREEN: execute_clear_screen,
    Op.RETURN: execute_return,
    Op.JUMP: execute_jump,
    Op.CALL: execute_call,
    Op.SKIP_EQ_IMM: execute_skip_if_equal_immediate,
    Op.SKIP_NE_IMM: execute_skip_if_not_equal_immediate,
    Op.SKIP_EQ_REG: execute_skip_if_equal_register,
    Op.SET_IMM: execute_set,
    Op.ADD_IMM: execute_add,
    **{op: execute_alu_operation for op in ALU_OPERATIONS},
    Op.SKIP_NE_REG: execute_skip_if_not_equal_register,
    Op.SET_INDEX: execute_set_index,
    Op.JUMP_OFFSET: execute_jump_with_offset,
    Op.RANDOM: execute_random,
    Op.DRAW: execute_display,
    Op.SKIP_KEY: execute_skip_if_key,
    Op.SKIP_NOT_KEY: execute_skip_if_not_key,
    Op.GET_DELAY: execute_get_delay_timer,
    Op.WAIT_KEY: execute_wait_for_key,
    Op.SET_DELAY: execute_set_delay_timer,
    Op.SET_SOUND: execute_set_sound_timer,
    Op.ADD_INDEX: execute_add_to_index,
    Op.FONT_CHAR: execute_font_character,
    Op.BCD: execute_bcd_conversion,
    Op.STORE_REGS: execute_store_registers,
    Op.LOAD_REGS: execute_load_registers,
    Op.UNKNOWN: no_op,
}


def execute(state: EmulatorState, instruction) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Accepts a raw 16-bit word or an already decoded instruction. Timers are
    not touched; see :func:`step` for a full machine cycle.
    """
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    return HANDLERS[instruction.op](state, instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def check_pc(state: EmulatorState) -> int:
    """Return pc, raising if a two-byte fetch from it would leave memory."""
    pc = int(state.pc)
    if pc > LAST_FETCH_ADDRESS:
        raise ProgramCounterError(pc)
    return pc


def fetch(state: EmulatorState) -> int:
    """Fetch the big-endian instruction word at pc."""
    pc = check_pc(state)
    return _pack_u16(state.memory[pc], state.memory[pc + 1])


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement each nonzero timer by one."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def step(state: EmulatorState, logger: ConsoleLogger = None) -> tuple[EmulatorState, DecodedInstruction]:
    """Run one fetch/decode/execute cycle followed by a timer tick.

    Raises a :class:`chipax.errors.Chip8Error` subclass on fatal conditions;
    the input state is never modified, so callers keep the pre-cycle state.
    """
    logger = logger or default_logger
    pc = int(state.pc)
    instruction = decode(fetch(state))

    if instruction.op == Op.UNKNOWN:
        logger.warning(f"Unknown opcode 0x{instruction.raw:04X} at 0x{pc:03X}")
    elif logger.is_enabled_for("DEBUG"):
        logger.debug(f"0x{pc:03X}: {instruction.raw:04X}  {disassemble(instruction)}")

    state = execute(state, instruction)
    check_pc(state)
    return tick_timers(state), instruction


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom_data = bytes(rom_data)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom_data), MAX_ROM_SIZE)
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def read_rom(filename: str) -> bytes:
    """Read a raw ROM image from disk."""
    with open(filename, 'rb') as f:
        return f.read()


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Read a ROM file and load it at 0x200."""
    return load_rom(state, read_rom(filename))
