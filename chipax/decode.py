"""CHIP-8 instruction decoding."""

from enum import IntEnum

from chex import dataclass


class Op(IntEnum):
    """Instruction kinds of the base CHIP-8 set."""
    CLEAR_SCREEN = 0
    RETURN = 1
    JUMP = 2
    CALL = 3
    SKIP_EQ_IMM = 4
    SKIP_NE_IMM = 5
    SKIP_EQ_REG = 6
    SET_IMM = 7
    ADD_IMM = 8
    SET_REG = 9
    OR = 10
    AND = 11
    XOR = 12
    ADD_REG = 13
    SUB_XY = 14
    SHIFT_RIGHT = 15
    SUB_YX = 16
    SHIFT_LEFT = 17
    SKIP_NE_REG = 18
    SET_INDEX = 19
    JUMP_OFFSET = 20
    RANDOM = 21
    DRAW = 22
    SKIP_KEY = 23
    SKIP_NOT_KEY = 24
    GET_DELAY = 25
    WAIT_KEY = 26
    SET_DELAY = 27
    SET_SOUND = 28
    ADD_INDEX = 29
    FONT_CHAR = 30
    BCD = 31
    STORE_REGS = 32
    LOAD_REGS = 33
    UNKNOWN = 34


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


_ALU_OPS = {
    0x0: Op.SET_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB_XY,
    0x6: Op.SHIFT_RIGHT,
    0x7: Op.SUB_YX,
    0xE: Op.SHIFT_LEFT,
}

_KEY_OPS = {
    0x9E: Op.SKIP_KEY,
    0xA1: Op.SKIP_NOT_KEY,
}

_MISC_OPS = {
    0x07: Op.GET_DELAY,
    0x0A: Op.WAIT_KEY,
    0x15: Op.SET_DELAY,
    0x18: Op.SET_SOUND,
    0x1E: Op.ADD_INDEX,
    0x29: Op.FONT_CHAR,
    0x33: Op.BCD,
    0x55: Op.STORE_REGS,
    0x65: Op.LOAD_REGS,
}

_FAMILY_OPS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_EQ_IMM,
    0x4: Op.SKIP_NE_IMM,
    0x6: Op.SET_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_OFFSET,
    0xC: Op.RANDOM,
    0xD: Op.DRAW,
}


def _classify(instruction: int, opcode: int, n: int, nn: int) -> Op:
    if opcode == 0x0:
        if instruction == 0x00E0:
            return Op.CLEAR_SCREEN
        if instruction == 0x00EE:
            return Op.RETURN
        return Op.UNKNOWN
    if opcode == 0x5:
        return Op.SKIP_EQ_REG if n == 0 else Op.UNKNOWN
    if opcode == 0x9:
        return Op.SKIP_NE_REG if n == 0 else Op.UNKNOWN
    if opcode == 0x8:
        return _ALU_OPS.get(n, Op.UNKNOWN)
    if opcode == 0xE:
        return _KEY_OPS.get(nn, Op.UNKNOWN)
    if opcode == 0xF:
        return _MISC_OPS.get(nn, Op.UNKNOWN)
    return _FAMILY_OPS[opcode]


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF
    return DecodedInstruction(
        raw=instruction,
        op=_classify(instruction, opcode, n, nn),
        opcode=opcode,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=n,
        nn=nn,
        nnn=instruction & 0x0FFF
    )


_MNEMONICS = {
    Op.CLEAR_SCREEN: "CLS",
    Op.RETURN: "RET",
    Op.JUMP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SKIP_EQ_IMM: "SE V{x:X}, {nn:02X}",
    Op.SKIP_NE_IMM: "SNE V{x:X}, {nn:02X}",
    Op.SKIP_EQ_REG: "SE V{x:X}, V{y:X}",
    Op.SET_IMM: "LD V{x:X}, {nn:02X}",
    Op.ADD_IMM: "ADD V{x:X}, {nn:02X}",
    Op.SET_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB_XY: "SUB V{x:X}, V{y:X}",
    Op.SHIFT_RIGHT: "SHR V{x:X}",
    Op.SUB_YX: "SUBN V{x:X}, V{y:X}",
    Op.SHIFT_LEFT: "SHL V{x:X}",
    Op.SKIP_NE_REG: "SNE V{x:X}, V{y:X}",
    Op.SET_INDEX: "LD I, {nnn:03X}",
    Op.JUMP_OFFSET: "JP V0, {nnn:03X}",
    Op.RANDOM: "RND V{x:X}, {nn:02X}",
    Op.DRAW: "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKIP_KEY: "SKP V{x:X}",
    Op.SKIP_NOT_KEY: "SKNP V{x:X}",
    Op.GET_DELAY: "LD V{x:X}, DT",
    Op.WAIT_KEY: "LD V{x:X}, K",
    Op.SET_DELAY: "LD DT, V{x:X}",
    Op.SET_SOUND: "LD ST, V{x:X}",
    Op.ADD_INDEX: "ADD I, V{x:X}",
    Op.FONT_CHAR: "LD F, V{x:X}",
    Op.BCD: "LD B, V{x:X}",
    Op.STORE_REGS: "LD [I], V{x:X}",
    Op.LOAD_REGS: "LD V{x:X}, [I]",
    Op.UNKNOWN: "DW {raw:04X}",
}


def disassemble(instruction) -> str:
    """Render an instruction word (or decoded instruction) as a mnemonic."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    return _MNEMONICS[instruction.op].format(
        raw=instruction.raw,
        x=instruction.x,
        y=instruction.y,
        n=instruction.n,
        nn=instruction.nn,
        nnn=instruction.nnn,
    )
