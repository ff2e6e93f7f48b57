#!/usr/bin/env python3
"""
Gravity Simulator entry point and viewer.

What this module does
- Builds a Simulation from a built-in scene or a JSON template.
- Runs the physics in a background SimulationLoop thread, free-running as fast
  as the steps can be computed.
- Draws the bodies with Pygame on the main thread: trajectory segments are
  green while a body is bound to its primary and red while it is escaping,
  the camera zooms out to keep every body in view, and a HUD shows the
  simulated time and physics timings. The frame rate is capped at FRAME_RATE.

The viewer only reads telemetry snapshots; it never drives the numerics.

Controls
- Space: pause / resume physics
- T / S: top or side camera
- Mouse wheel: manual zoom (turns dynamic zoom off, T / S turn it back on)

Running
1) Install dependencies: `pip install -e .`
2) Run: `gravity-sim --scene earth_moon` or `python gravity_sim.py --headless 1000`
"""

import argparse
import logging
import time
from collections import deque
from typing import Deque, Dict, Optional, Tuple

import pygame

from simcore.camera import Camera2D
from simcore.config import TIMESTEP_MODES
from simcore.constants import (
    BACKGROUND_COLOR,
    ESCAPE_COLOR,
    FRAME_RATE,
    HUD_COLOR,
    MAX_SEGMENTS,
    ORBIT_COLOR,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from simcore.presets import BUILTIN_SCENES, get_scene
from simcore.simulation import Simulation, SimulationLoop
from simcore.telemetry import TelemetrySnapshot
from simcore.vector_utils import Vec3, is_finite

logger = logging.getLogger("gravity_sim")

Segment = Tuple[Vec3, Vec3, bool]


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameRenderer:
    """
    Pygame loop: draws bodies, trajectory segments and the HUD.
    """

    def __init__(self, sim: Simulation, loop: SimulationLoop, frame_rate: int = FRAME_RATE):
        self.sim = sim
        self.loop = loop
        self.frame_rate = frame_rate
        self.camera = Camera2D()
        self.surface = None
        self.font = None
        self.clock = None
        self.running = True
        self.segments: Dict[str, Deque[Segment]] = {}
        self.last_positions: Dict[str, Vec3] = {}
        self.graphics_time = 0.0

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Simulator")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.font = pygame.font.Font(None, 20)
        self.clock = pygame.time.Clock()

        while self.running:
            started = time.perf_counter()
            self.handle_events()
            telemetry = self.sim.telemetry()
            self.update_segments(telemetry)
            if self.camera.dynamic_zoom:
                self.camera.fit(b.position for b in telemetry.bodies)
            self.draw(telemetry)
            self.graphics_time = time.perf_counter() - started
            self.clock.tick(self.frame_rate)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.1 if event.y > 0 else 1.0 / 1.1)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    playing = self.loop.toggle_pause()
                    logger.info("Physics %s", "resumed" if playing else "paused")
                elif event.key in (pygame.K_t, pygame.K_s):
                    self.camera.set_projection("top" if event.key == pygame.K_t else "side")
                    self.camera.dynamic_zoom = True

    def update_segments(self, telemetry: TelemetrySnapshot):
        for b in telemetry.bodies:
            if b.frozen or not is_finite(b.position):
                continue
            last = self.last_positions.get(b.name)
            self.last_positions[b.name] = b.position
            if last is None or last == b.position:
                continue
            trail = self.segments.setdefault(b.name, deque(maxlen=MAX_SEGMENTS))
            trail.append((last, b.position, b.escaping))

    def draw(self, telemetry: TelemetrySnapshot):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        for trail in self.segments.values():
            for start, end, escaping in trail:
                a = _safe_point(self.camera.world_to_screen(start))
                b = _safe_point(self.camera.world_to_screen(end))
                if a and b:
                    pygame.draw.line(surf, ESCAPE_COLOR if escaping else ORBIT_COLOR, a, b, 1)

        for b in telemetry.bodies:
            if not is_finite(b.position):
                continue
            screen_pos = _safe_point(self.camera.world_to_screen(b.position))
            if screen_pos is None:
                continue
            vis_r = int(min(50, max(2, b.size / self.camera.mpp)))
            pygame.draw.circle(surf, b.color, screen_pos, vis_r)
            self.draw_text(b.name, screen_pos[0] + vis_r + 4, screen_pos[1] - 8)

        y = 10
        for line in telemetry.hud_lines() + [f"Graphics took {self.graphics_time * 1000:.1f} ms"]:
            self.draw_text(line, 10, y)
            y += 20

        pygame.display.flip()

    def draw_text(self, text, x, y, color=HUD_COLOR):
        img = self.font.render(text, True, color)
        self.surface.blit(img, (x, y))


def build_simulation(scene_name: str, mode: Optional[str] = None) -> Simulation:
    scene = get_scene(scene_name)
    settings = scene.make_settings()
    if mode is not None:
        settings = settings.copy(timestep_mode=mode)
    sim = Simulation(settings)
    sim.add_bodies(scene.bodies)
    logger.info("Loaded scene %r with %d bodies", scene.name, len(sim.registry))
    return sim


def run_headless(sim: Simulation, steps: int) -> TelemetrySnapshot:
    sim.run(steps)
    telemetry = sim.telemetry()
    for line in telemetry.hud_lines():
        logger.info(line)
    for b in telemetry.bodies:
        logger.info("%s: position=(%.4g, %.4g, %.4g) primary=%s %s", b.name, *b.position,
                    b.primary_body, "escaping" if b.escaping else "bound")
    if not all(is_finite(b.position) for b in telemetry.bodies):
        logger.warning("Some bodies have non-finite coordinates (coincident bodies?)")
    return telemetry


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Real-time N-body gravity simulator")
    parser.add_argument("--scene", default="earth_moon",
                        help=f"built-in scene ({', '.join(BUILTIN_SCENES)}) or template JSON")
    parser.add_argument("--mode", choices=TIMESTEP_MODES, default=None, help="time step mode")
    parser.add_argument("--headless", type=int, metavar="STEPS", default=None,
                        help="run this many steps without a window and log the result")
    parser.add_argument("--log-level", type=str.upper, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = build_simulation(args.scene, args.mode)

    if args.headless is not None:
        run_headless(sim, args.headless)
        return

    loop = SimulationLoop(sim)
    loop.start()
    try:
        PygameRenderer(sim, loop).run()
    finally:
        loop.stop()


if __name__ == "__main__":
    main()
