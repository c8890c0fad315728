"""Stateful CHIP-8 machine driven by a host loop.

The host loads one ROM, then on every tick writes the keypad, calls
:meth:`Machine.step` and renders :meth:`Machine.framebuffer` whenever
:meth:`Machine.consume_redraw` reports a change.

Timers decrement once per executed cycle, so the rate at which the host
calls ``step`` is also the timer rate. Hosts wanting the usual 60 Hz timers
should pace their cycle rate accordingly.
"""

import jax
import jax.numpy as jnp
from tqdm import tqdm

from chipax.constants import NUM_KEYS
from chipax.decode import DecodedInstruction
from chipax.emulator import step, load_rom, read_rom
from chipax.errors import Chip8Error, MachineHaltedError, MachineStateError
from chipax.logging import ConsoleLogger, default_logger
from chipax.state import create_state


class Machine:
    """CHIP-8 interpreter owning its memory, registers, timers and display."""

    def __init__(self, rng: jax.random.PRNGKey = None, logger: ConsoleLogger = None):
        self._rng = rng if rng is not None else jax.random.PRNGKey(0)
        self.logger = logger or default_logger
        self.state = create_state(self._rng)
        self.rom = None
        self.cycles = 0
        self.halt_error = None

    def load(self, rom: bytes):
        """Copy a ROM image into memory at 0x200."""
        if self.rom is not None:
            raise MachineStateError("A ROM is already loaded; reset() the machine first")
        rom = bytes(rom)
        self.state = load_rom(self.state, rom)
        self.rom = rom
        self.logger.info(f"Loaded ROM ({len(rom)} bytes)")

    def load_file(self, filename: str):
        """Read a ROM file and load it."""
        self.load(read_rom(filename))

    def reset(self):
        """Return to power-on state, reloading the current ROM if any."""
        rom = self.rom
        self.state = create_state(self._rng)
        self.rom = None
        self.cycles = 0
        self.halt_error = None
        if rom is not None:
            self.load(rom)

    @property
    def halted(self) -> bool:
        """True once a fatal error has stopped the machine."""
        return self.halt_error is not None

    def step(self) -> DecodedInstruction:
        """Execute exactly one instruction cycle.

        A fatal error halts the machine with its state as it was before the
        failing cycle; the error is re-raised and later calls raise
        :class:`MachineHaltedError`.
        """
        if self.halt_error is not None:
            raise MachineHaltedError(f"Machine halted: {self.halt_error}") from self.halt_error
        try:
            self.state, instruction = step(self.state, self.logger)
        except Chip8Error as e:
            self.halt_error = e
            self.logger.error(f"Halted at 0x{int(self.state.pc):03X}: {e}")
            raise
        self.cycles += 1
        return instruction

    def run(self, cycles: int, progress: bool = False, desc: str = None):
        """Execute ``cycles`` instruction cycles, optionally with a tqdm progress bar."""
        if not progress:
            for _ in range(cycles):
                self.step()
            return
        with tqdm(total=cycles, desc=desc or f"Running ({cycles:,} cycles)", unit="cycle") as bar:
            for _ in range(cycles):
                self.step()
                bar.update(1)

    def set_key(self, index: int, pressed: bool):
        """Mark keypad key ``index`` (0-F) as pressed or released."""
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"Key index must be in 0..{NUM_KEYS - 1}, got {index}")
        self.state = self.state.replace(keypad=self.state.keypad.at[index].set(1 if pressed else 0))

    def framebuffer(self) -> jnp.ndarray:
        """2048 row-major display cells, each 0 or 1."""
        return self.state.display

    @property
    def should_redraw(self) -> bool:
        """True when the display changed since the last consume_redraw()."""
        return bool(self.state.draw_flag)

    def consume_redraw(self) -> bool:
        """Return the redraw flag and clear it."""
        redraw = self.should_redraw
        if redraw:
            self.state = self.state.replace(draw_flag=jnp.array(False))
        return redraw

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is running."""
        return int(self.state.sound_timer) > 0

    @property
    def V(self) -> jnp.ndarray:
        """General registers V0-VF."""
        return self.state.V

    @property
    def I(self) -> int:
        """Index register."""
        return int(self.state.I)

    @property
    def pc(self) -> int:
        """Program counter."""
        return int(self.state.pc)

    @property
    def memory(self) -> jnp.ndarray:
        """All 4096 bytes of memory."""
        return self.state.memory

    @property
    def delay_timer(self) -> int:
        """Current delay timer value."""
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        """Current sound timer value."""
        return int(self.state.sound_timer)

    @property
    def stack(self) -> list[int]:
        """Return addresses currently on the stack, oldest first."""
        return [int(a) for a in self.state.stack.data[:self.state.stack.pointer]]
