"""CHIP-8 rendering utilities for hosts."""

import numpy as np
from typing import Tuple

from PIL import Image

from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, DISPLAY_SIZE


def framebuffer_to_rgb(
    framebuffer,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert the flat CHIP-8 framebuffer to an RGB array with optional upscaling.

    Args:
        framebuffer: 2048 row-major cells (64 per row, 32 rows), 0 or 1
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    cells = np.asarray(framebuffer)
    if cells.size != DISPLAY_SIZE:
        raise ValueError(f"Expected {DISPLAY_SIZE} framebuffer cells, got {cells.size}")
    pixels = cells.reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(np.bool_)

    rgb_frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbour upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "chipax",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("chipax", "classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "chipax": ((179, 102, 184), (45, 25, 61)),
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def save_screenshot(framebuffer, filename: str, scale: int = 8, color_scheme: str = "chipax") -> None:
    """Write the framebuffer to an image file (format from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    frame = framebuffer_to_rgb(framebuffer, scale, on_color, off_color)
    Image.fromarray(frame).save(filename)
