"""Tests for instruction decoding and disassembly."""

import pytest
from chipax import decode, disassemble, Op


class TestDecode:
    """Operand extraction and classification."""

    def test_fields(self):
        instruction = decode(0xD12F)
        assert instruction.raw == 0xD12F
        assert instruction.opcode == 0xD
        assert instruction.x == 0x1
        assert instruction.y == 0x2
        assert instruction.n == 0xF
        assert instruction.nn == 0x2F
        assert instruction.nnn == 0x12F
        assert instruction.op == Op.DRAW

    @pytest.mark.parametrize("word,op", [
        (0x00E0, Op.CLEAR_SCREEN),
        (0x00EE, Op.RETURN),
        (0x1234, Op.JUMP),
        (0x2234, Op.CALL),
        (0x3A01, Op.SKIP_EQ_IMM),
        (0x4A01, Op.SKIP_NE_IMM),
        (0x5AB0, Op.SKIP_EQ_REG),
        (0x6A01, Op.SET_IMM),
        (0x7A01, Op.ADD_IMM),
        (0x8AB0, Op.SET_REG),
        (0x8AB1, Op.OR),
        (0x8AB2, Op.AND),
        (0x8AB3, Op.XOR),
        (0x8AB4, Op.ADD_REG),
        (0x8AB5, Op.SUB_XY),
        (0x8AB6, Op.SHIFT_RIGHT),
        (0x8AB7, Op.SUB_YX),
        (0x8ABE, Op.SHIFT_LEFT),
        (0x9AB0, Op.SKIP_NE_REG),
        (0xA123, Op.SET_INDEX),
        (0xB123, Op.JUMP_OFFSET),
        (0xCA0F, Op.RANDOM),
        (0xDAB5, Op.DRAW),
        (0xEA9E, Op.SKIP_KEY),
        (0xEAA1, Op.SKIP_NOT_KEY),
        (0xFA07, Op.GET_DELAY),
        (0xFA0A, Op.WAIT_KEY),
        (0xFA15, Op.SET_DELAY),
        (0xFA18, Op.SET_SOUND),
        (0xFA1E, Op.ADD_INDEX),
        (0xFA29, Op.FONT_CHAR),
        (0xFA33, Op.BCD),
        (0xFA55, Op.STORE_REGS),
        (0xFA65, Op.LOAD_REGS),
    ])
    def test_classification(self, word, op):
        assert decode(word).op == op

    @pytest.mark.parametrize("word", [0x0000, 0x00E1, 0x0123, 0x5AB1, 0x8AB8, 0x9AB1, 0xEA00, 0xFA00])
    def test_unknown(self, word):
        assert decode(word).op == Op.UNKNOWN


class TestDisassemble:
    """Mnemonic rendering."""

    @pytest.mark.parametrize("word,text", [
        (0x00E0, "CLS"),
        (0x1ABC, "JP ABC"),
        (0x6A0F, "LD VA, 0F"),
        (0x8124, "ADD V1, V2"),
        (0xD125, "DRW V1, V2, 5"),
        (0xF355, "LD [I], V3"),
        (0xFFFF, "DW FFFF"),
    ])
    def test_mnemonics(self, word, text):
        assert disassemble(word) == text

    def test_accepts_decoded(self):
        assert disassemble(decode(0xA123)) == "LD I, 123"
