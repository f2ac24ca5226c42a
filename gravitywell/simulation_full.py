import argparse
import logging
from pathlib import Path

import pygame
import pygame_gui
import numpy as np

from gravitywell import constants as C
from gravitywell.simulation import Simulation
from gravitywell.presets import PLACEABLE_KINDS
from gravitywell.analysis import EnergyMonitor, total_momentum
from gravitywell.camera import Camera
from gravitywell.rendering import draw_snapshot
from gravitywell.ui_manager import ControlPanel

logger = logging.getLogger(__name__)

STATUS_EVERY_TICKS = 15
FOCUS_MODES = ("sun", "COM", "off")
THEME_PATH = Path(__file__).with_name("theme.json")


def focus_target(mode, bodies):
    """Camera target for a focus ``mode``: the sun, ``"COM"`` or ``None``."""
    if mode == "sun":
        return bodies[0] if bodies else None
    if mode == "COM":
        return "COM"
    return None


def build_parser():
    parser = argparse.ArgumentParser(description="Gravity well orbital sandbox")
    parser.add_argument("--gravity", type=float, default=C.DEFAULT_G, help="Gravitational constant")
    parser.add_argument(
        "--orbit-rate",
        type=float,
        default=C.DEFAULT_ORBIT_RATE,
        help="Moon angular rate factor (radians per unit time)",
    )
    parser.add_argument("--seed", type=int, help="Seed for explosions and random placement")
    parser.add_argument("--trail-length", type=int, default=C.DEFAULT_TRAIL_LENGTH, help="Body trail length")
    parser.add_argument("--kind", choices=PLACEABLE_KINDS, default="earth", help="Kind placed on click")
    parser.add_argument("--planets", type=int, default=0, help="Random planets placed at start")
    parser.add_argument("--moons", type=int, default=0, help="Random moons placed at start")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--play", action="store_true", help="Start running instead of paused")
    parser.add_argument("--max-frames", type=int, help="Quit after this many frames")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    sim = Simulation(args.gravity, args.orbit_rate, seed=args.seed)
    sim.set_trail_length(args.trail_length)
    sim.populate_random(args.planets, args.moons)

    pygame.init()
    screen = pygame.display.set_mode((C.WIDTH, C.HEIGHT))
    pygame.display.set_caption("Gravity Well")

    manager = pygame_gui.UIManager((C.WIDTH, C.HEIGHT), THEME_PATH)
    control = ControlPanel(
        manager,
        args.kind,
        g_constant=sim.state.g_constant,
        orbit_rate=sim.state.orbit_rate,
        trail_length=sim.state.trail_length,
    )
    camera = Camera()
    font = pygame.font.Font(None, 16)
    screen_center = np.array(
        [(C.WIDTH - C.UI_SIDEBAR_WIDTH) / 2, (C.HEIGHT - C.UI_BOTTOM_HEIGHT) / 2]
    )

    energy_monitor = EnergyMonitor()
    energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
    clock = pygame.time.Clock()

    paused = not args.play
    control.set_playing(not paused)
    single_step = False
    show_trails = C.SHOW_TRAILS
    show_labels = False
    focus_mode = 0
    frames = 0

    running = True
    while running:
        time_delta = clock.tick(C.FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    control.set_playing(not paused)
                elif event.key == pygame.K_r:
                    sim.reset()
                    energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
                elif event.key == pygame.K_t:
                    show_trails = not show_trails
                elif event.key == pygame.K_l:
                    show_labels = not show_labels
                elif event.key == pygame.K_c:
                    sim.clear_trails()
                elif event.key == pygame.K_f:
                    focus_mode = (focus_mode + 1) % len(FOCUS_MODES)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.pos[0] < C.WIDTH - C.UI_SIDEBAR_WIDTH:
                if event.button == 1:
                    x, y = camera.screen_to_world(event.pos)
                    if sim.place_body(control.kind, x, y) is not None:
                        energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
                elif event.button == 4:
                    camera.zoom_at(1.1, event.pos)
                elif event.button == 5:
                    camera.zoom_at(1 / 1.1, event.pos)

            if event.type == pygame_gui.UI_DROP_DOWN_MENU_CHANGED:
                if event.ui_element == control.kind_menu:
                    control.kind = event.text
            elif event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED:
                if event.ui_element == control.gravity_slider:
                    sim.set_gravitational_constant(event.value)
                    control.update_gravity_label(event.value)
                    energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
                elif event.ui_element == control.orbit_slider:
                    sim.set_orbit_rate_factor(event.value)
                    control.update_orbit_label(event.value)
                elif event.ui_element == control.trail_slider:
                    sim.set_trail_length(event.value)
                    control.update_trail_label(event.value)
            elif event.type == pygame_gui.UI_BUTTON_PRESSED:
                if event.ui_element == control.play_button:
                    paused = not paused
                    control.set_playing(not paused)
                elif event.ui_element == control.reset_button:
                    sim.reset()
                    energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
                elif event.ui_element == control.step_button:
                    single_step = True

            manager.process_events(event)

        manager.update(time_delta)

        if not paused or single_step:
            report = sim.advance_tick()
            if report.merged is not None:
                energy_monitor.set_initial_energy(sim.bodies, sim.state.g_constant)
            else:
                energy_monitor.update(sim.bodies, sim.state.g_constant)
            single_step = False

        snapshot = sim.snapshot()
        if frames % STATUS_EVERY_TICKS == 0:
            control.update_status(
                snapshot,
                energy_monitor.latest,
                momentum=float(np.linalg.norm(total_momentum(sim.bodies))),
                focus=FOCUS_MODES[focus_mode],
            )

        camera.update_focus(
            focus_target(FOCUS_MODES[focus_mode], sim.bodies), sim.bodies, screen_center
        )
        screen.fill(C.BLACK)
        draw_snapshot(screen, snapshot, camera, show_trails, font if show_labels else None)
        manager.draw_ui(screen)
        pygame.display.flip()

        frames += 1
        if args.max_frames is not None and frames >= args.max_frames:
            running = False

    pygame.quit()
    logger.info("Stopped after %d ticks (%s bodies)", sim.tick, len(sim.bodies))


if __name__ == "__main__":
    main()
