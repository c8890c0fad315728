"""CHIP-8 interpreter package."""

from chipax.state import EmulatorState, StackState, create_state
from chipax.emulator import execute, fetch, step, tick_timers, load_rom, load_rom_file, read_rom
from chipax.decode import DecodedInstruction, Op, decode, disassemble
from chipax.machine import Machine
from chipax.errors import (
    Chip8Error, RomTooLargeError, StackOverflowError, StackUnderflowError,
    ProgramCounterError, MemoryAccessError, MachineStateError, MachineHaltedError,
)
from chipax.constants import *
from chipax.rendering import framebuffer_to_rgb, create_color_scheme, save_screenshot

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_rom",
    "load_rom_file",
    "read_rom",
    "DecodedInstruction",
    "Op",
    "decode",
    "disassemble",
    "Machine",
    "Chip8Error",
    "RomTooLargeError",
    "StackOverflowError",
    "StackUnderflowError",
    "ProgramCounterError",
    "MemoryAccessError",
    "MachineStateError",
    "MachineHaltedError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DISPLAY_SIZE",
    "MAX_ROM_SIZE",
    "framebuffer_to_rgb",
    "create_color_scheme",
    "save_screenshot",
]
