"""Tests for the console logger."""

import pytest
from chipax.logging import ConsoleLogger


def test_level_filtering(capsys):
    logger = ConsoleLogger(name="T", log_level="WARNING", use_colors=False, show_timestamps=False)
    logger.info("hidden")
    logger.warning("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[ WARNING][T] shown" in out


def test_debug_enabled_check():
    assert ConsoleLogger(log_level="debug").is_enabled_for("DEBUG")
    assert not ConsoleLogger(log_level="INFO").is_enabled_for("DEBUG")


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="LOUD")


def test_machine_traces_at_debug(capsys):
    """Executed instructions are traced with pc and mnemonic."""
    from chipax import Machine
    logger = ConsoleLogger(log_level="DEBUG", use_colors=False, show_timestamps=False)
    machine = Machine(logger=logger)
    machine.load(b"\x6A\x0F")
    machine.step()
    out = capsys.readouterr().out
    assert "Loaded ROM (2 bytes)" in out
    assert "0x200: 6A0F  LD VA, 0F" in out
