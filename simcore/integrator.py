#!/usr/bin/env python3
"""
Semi-implicit Euler integrator.

One step runs three phases:
1) ComputeStep: pick dt and evaluate every non-frozen body's acceleration from
   the same snapshot of positions.
2) ApplyStep: for each non-frozen body
       v = v + a * dt
       x = x + v * dt + 1/2 * a * q
   using the updated velocity, where q is dt in "reference" mode and dt^2 in
   "exact" mode.
3) MeasureAndAdapt: record the wall-clock compute time, advance the elapsed
   simulated time and note the fastest body speed for the next step.

Non-finite values coming out of the force evaluator are written into the state
as is; a body that hits a degenerate configuration keeps NaN coordinates from
then on.
"""
import logging
import time
from typing import Callable, Dict, Optional

from .config import SimulationSettings
from .physics import ForceEvaluator
from .registry import BodyRegistry
from .timestep import SimulationClock, TimestepController
from .vector_utils import Vec3

logger = logging.getLogger(__name__)


class Integrator:
    def __init__(self, registry: BodyRegistry, evaluator: ForceEvaluator,
                 settings: SimulationSettings, clock: Optional[SimulationClock] = None,
                 wall_clock: Callable[[], float] = time.perf_counter):
        self.registry = registry
        self.evaluator = evaluator
        self.settings = settings
        self.controller = TimestepController(settings)
        self.clock = clock if clock is not None else SimulationClock()
        self.clock.set_history_limit(settings.history_limit)
        self.wall_clock = wall_clock

    def quadratic_factor(self, dt: float) -> float:
        if self.settings.position_update == "exact":
            return dt * dt
        return dt

    def apply(self, accelerations: Dict[str, Vec3], dt: float) -> None:
        """Advance every body in accelerations by dt."""
        q = 0.5 * self.quadratic_factor(dt)
        for name, (ax, ay, az) in accelerations.items():
            body = self.registry.get(name)
            vx = body.velocity[0] + ax * dt
            vy = body.velocity[1] + ay * dt
            vz = body.velocity[2] + az * dt
            body.velocity = (vx, vy, vz)
            body.position = (
                body.position[0] + vx * dt + ax * q,
                body.position[1] + vy * dt + ay * q,
                body.position[2] + vz * dt + az * q,
            )

    def step(self) -> float:
        """Run one full step and return the dt that was used."""
        started = self.wall_clock()

        dt, adaptive = self.controller.next_time_step(self.registry, self.clock)
        accelerations = self.evaluator.compute_accelerations()
        self.apply(accelerations, dt)

        fastest = max((body.speed for _, body in self.registry.items()), default=0.0)
        duration = self.wall_clock() - started
        self.clock.adaptive_active = adaptive
        self.clock.record_step(dt, duration, fastest)
        logger.debug("Step %d: dt=%g s, took %.6f s, fastest %.1f m/s",
                     self.clock.steps, dt, duration, fastest)
        return dt
