"""CHIP-8 emulator exceptions."""


class Chip8Error(Exception):
    """Base exception for all emulator errors."""
    pass


class RomTooLargeError(Chip8Error):
    """ROM image does not fit in program memory."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM is {size} bytes, only {capacity} bytes fit above 0x200")
        self.size = size
        self.capacity = capacity


class StackOverflowError(Chip8Error):
    """Subroutine call with a full stack."""
    pass


class StackUnderflowError(Chip8Error):
    """Subroutine return with an empty stack."""
    pass


class ProgramCounterError(Chip8Error):
    """Program counter left the fetchable address range."""

    def __init__(self, pc: int):
        super().__init__(f"Program counter 0x{pc:04X} is outside fetchable memory")
        self.pc = pc


class MemoryAccessError(Chip8Error):
    """Index-register access outside memory or into the font area."""

    def __init__(self, message: str, address: int):
        super().__init__(message)
        self.address = address


class MachineStateError(Chip8Error):
    """Machine used out of lifecycle order."""
    pass


class MachineHaltedError(Chip8Error):
    """Machine was halted by an earlier fatal error."""
    pass
