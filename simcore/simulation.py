#!/usr/bin/env python3
"""
Simulation context: owns the registry, the force evaluator, the integrator and
the clock for one run.

Threading model
- All public methods take the re-entrant lock, so steps are serialized and a
  reader never sees a step half applied.
- SimulationLoop runs steps back to back in a background thread. Stopping it
  is safe at any time: the loop only checks its flag between steps.
- Snapshots returned by telemetry() are copies; consecutive calls may observe
  different steps.

External commands
- Setters accept loosely typed input (numbers or strings from a UI). A value
  that cannot be parsed as a number falls back to the default and is reported
  once through the log.
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, Optional, Set

from .config import SimulationSettings
from .constants import DEFAULT_BODY_COLOR, DEFAULT_BODY_MASS, DEFAULT_BODY_SIZE
from .data_models import Body
from .errors import InvalidParameterError
from .integrator import Integrator
from .physics import ForceEvaluator
from .registry import BodyRegistry
from .telemetry import TelemetrySnapshot, snapshot
from .timestep import SimulationClock
from .utils import try_float
from .vector_utils import Vec3

logger = logging.getLogger(__name__)

_DEFAULTS = SimulationSettings()


class Simulation:
    def __init__(self, settings: Optional[SimulationSettings] = None,
                 wall_clock: Callable[[], float] = time.perf_counter):
        self.lock = threading.RLock()
        self.settings = settings.copy() if settings is not None else SimulationSettings()
        self.registry = BodyRegistry()
        self.clock = SimulationClock()
        self.evaluator = ForceEvaluator(
            self.registry,
            min_force=self.settings.min_force,
            guard_degenerate=self.settings.guard_degenerate,
        )
        self.integrator = Integrator(self.registry, self.evaluator, self.settings,
                                     clock=self.clock, wall_clock=wall_clock)
        self._reported: Set[str] = set()

    # Bodies

    def create_body(self, name: Optional[str] = None, size: Any = None, mass: Any = None,
                    position: Optional[Iterable[Any]] = None, velocity: Optional[Iterable[Any]] = None,
                    color=DEFAULT_BODY_COLOR, frozen: bool = False) -> str:
        """
        Add a body from loosely typed input and return its final name.

        Unparsable numbers count as omitted and take their default.
        """
        with self.lock:
            return self.registry.create_body(
                name=name,
                size=self._number("size", size, DEFAULT_BODY_SIZE),
                mass=self._number("mass", mass, DEFAULT_BODY_MASS),
                position=self._vector("position", position),
                velocity=self._vector("velocity", velocity),
                color=color,
                frozen=frozen,
            )

    def add_bodies(self, specs: Iterable[Dict[str, Any]]) -> list:
        with self.lock:
            return [self.create_body(**spec) for spec in specs]

    def get_body(self, name: str) -> Body:
        with self.lock:
            return self.registry.get(name)

    def acceleration_of(self, name: str) -> Vec3:
        with self.lock:
            return self.evaluator.acceleration_of(name)

    # Stepping

    def step(self) -> float:
        with self.lock:
            return self.integrator.step()

    def run(self, steps: int) -> None:
        """Run a fixed number of steps; used by tests and headless runs."""
        for _ in range(int(steps)):
            self.step()

    def restart_clock(self) -> None:
        with self.lock:
            self.clock.reset()
            logger.info("Simulation clock restarted")

    # Tunables

    def set_speed_multiplier(self, value: Any) -> float:
        with self.lock:
            self.settings.speed_multiplier = max(
                0.0, self._number("speed_multiplier", value, _DEFAULTS.speed_multiplier))
            return self.settings.speed_multiplier

    def set_min_force(self, value: Any) -> float:
        with self.lock:
            self.settings.min_force = max(0.0, self._number("min_force", value, _DEFAULTS.min_force))
            self.evaluator.set_min_force(self.settings.min_force)
            return self.settings.min_force

    def set_target_time_step(self, value: Any) -> float:
        with self.lock:
            self.settings.target_time_step = max(
                0.0, self._number("target_time_step", value, _DEFAULTS.target_time_step))
            return self.settings.target_time_step

    def set_timestep_mode(self, mode: str) -> None:
        with self.lock:
            self.settings.copy(timestep_mode=mode)  # validates
            self.settings.timestep_mode = mode

    def set_adaptive_time(self, enabled: bool) -> None:
        with self.lock:
            self.settings.adaptive_time = bool(enabled)

    # Queries

    def telemetry(self) -> TelemetrySnapshot:
        with self.lock:
            return snapshot(self.registry, self.clock)

    # Input parsing

    def _report_once(self, key: str, message: str, *args) -> None:
        if key in self._reported:
            return
        self._reported.add(key)
        logger.warning(message, *args)

    def _number(self, field_name: str, raw: Any, default: float) -> float:
        if raw is None:
            return default
        value = try_float(raw)
        if value is None:
            self._report_once(field_name, "Could not read %s from %r, using %g", field_name, raw, default)
            return default
        return value

    def _vector(self, field_name: str, raw: Optional[Iterable[Any]]) -> Vec3:
        if raw is None:
            return (0.0, 0.0, 0.0)
        try:
            x, y, z = raw
        except (TypeError, ValueError):
            raise InvalidParameterError(f"{field_name} must have three components, got {raw!r}") from None
        return (
            self._number(f"{field_name}_x", x, 0.0),
            self._number(f"{field_name}_y", y, 0.0),
            self._number(f"{field_name}_z", z, 0.0),
        )


class SimulationLoop(threading.Thread):
    """
    Free-running physics loop.

    Steps follow each other with no fixed tick; between steps the thread yields
    for settings.update_interval seconds (0 still yields the GIL).
    """

    def __init__(self, sim: Simulation):
        super().__init__(daemon=True, name="physics")
        self.sim = sim
        self.running = True
        self.playing = threading.Event()
        self.playing.set()

    def run(self):
        logger.info("Physics loop started")
        while self.running:
            if not self.playing.wait(timeout=0.1):
                continue
            self.sim.step()
            time.sleep(self.sim.settings.update_interval)
        logger.info("Physics loop stopped after %d steps", self.sim.clock.steps)

    def toggle_pause(self) -> bool:
        if self.playing.is_set():
            self.playing.clear()
        else:
            self.playing.set()
        return self.playing.is_set()

    def stop(self, timeout: float = 2.0) -> None:
        self.running = False
        self.playing.set()
        self.join(timeout=timeout)
