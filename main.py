"""
Reference CHIP-8 host: pygame window, keypad mapping and frame pacing.

    python main.py rom=path/to/game.ch8
    python main.py rom=path/to/game.ch8 headless.enabled=true headless.cycles=5000
"""

import hydra
import jax
import numpy as np
import pygame
from omegaconf import DictConfig, OmegaConf

from chipax import Machine, Chip8Error, framebuffer_to_rgb, create_color_scheme, save_screenshot
from chipax.logging import ConsoleLogger

# COSMAC VIP hex keypad laid out on the left block of a QWERTY keyboard
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def run_headless(machine: Machine, cfg: dict, logger: ConsoleLogger):
    """Run a fixed number of cycles without a window and save the last frame."""
    headless = cfg["headless"]
    try:
        machine.run(headless["cycles"], progress=True)
    except Chip8Error as e:
        logger.error(f"Stopped after {machine.cycles} cycles: {e}")
    if headless.get("screenshot"):
        save_screenshot(machine.framebuffer(), headless["screenshot"], cfg["scale"], cfg["color_scheme"])
        logger.info(f"Saved {headless['screenshot']}")


def run_window(machine: Machine, cfg: dict, logger: ConsoleLogger):
    """Interactive loop: ESC quits, F5 resets."""
    scale = cfg["scale"]
    on_color, off_color = create_color_scheme(cfg["color_scheme"])

    pygame.init()
    screen = pygame.display.set_mode((64 * scale, 32 * scale))
    pygame.display.set_caption("chipax")
    clock = pygame.time.Clock()

    running = True
    while running:
        clock.tick(cfg["fps"])

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_F5:
                    machine.reset()
                    logger.info("Reset")
                elif event.key in KEY_MAP:
                    machine.set_key(KEY_MAP[event.key], True)
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    machine.set_key(KEY_MAP[event.key], False)

        if not machine.halted:
            try:
                machine.run(cfg["cycles_per_frame"])
            except Chip8Error:
                logger.warning("Emulation stopped, press F5 to reset")

        if machine.consume_redraw():
            frame = framebuffer_to_rgb(machine.framebuffer(), scale, on_color, off_color)
            # pygame surfaces are indexed (x, y)
            pygame.surfarray.blit_array(screen, np.transpose(frame, (1, 0, 2)))
            pygame.display.flip()

    pygame.quit()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    cfg = OmegaConf.to_container(cfg, throw_on_missing=True)

    logger = ConsoleLogger(log_level=cfg["log_level"])
    machine = Machine(jax.random.PRNGKey(cfg["seed"]), logger=logger)
    try:
        machine.load_file(cfg["rom"])
    except (OSError, Chip8Error) as e:
        logger.error(f"Could not load {cfg['rom']}: {e}")
        return

    if cfg["headless"]["enabled"]:
        run_headless(machine, cfg, logger)
    else:
        run_window(machine, cfg, logger)


if __name__ == "__main__":
    main()
