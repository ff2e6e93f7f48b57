#!/usr/bin/env python3
"""
Simulation clock state and time step selection.

SimulationClock holds everything that changes once per step: elapsed simulated
time, the step size just used, a bounded window of measured step durations and
the fastest body speed seen in the last step.

TimestepController picks the next step size from that state and the current
body positions, in one of two modes (see SimulationSettings):

- fixed: dt = target. With adaptive_time on, while the closest pair is nearer
  than adaptive_time_range, dt = round(max(d / range * target, target / max_factor)),
  never less than target / max_factor.
- realtime: dt = mean(step durations) * speed_multiplier, multiplied by
  (1 - reduction) where reduction rises linearly from 0 at
  speed_limit_threshold to speed_limit_max_reduction at speed_limit_cap and
  stays there for faster bodies.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from .config import SimulationSettings
from .constants import DEFAULT_HISTORY_LIMIT
from .registry import BodyRegistry
from .vector_utils import vec_len_sq, vec_sub


@dataclass
class SimulationClock:
    elapsed: float = 0.0
    time_step: float = 0.0
    steps: int = 0
    last_step_duration: float = 0.0
    fastest_speed: float = 0.0
    adaptive_active: bool = False
    step_durations: Deque[float] = field(default_factory=lambda: deque(maxlen=DEFAULT_HISTORY_LIMIT))

    def set_history_limit(self, limit: int) -> None:
        self.step_durations = deque(self.step_durations, maxlen=max(1, int(limit)))

    def record_step(self, time_step: float, duration: float, fastest_speed: float) -> None:
        self.time_step = time_step
        self.elapsed += time_step
        self.steps += 1
        self.last_step_duration = duration
        # deque(maxlen=...) evicts the oldest entry once the window is full
        self.step_durations.append(duration)
        self.fastest_speed = fastest_speed

    def average_step_duration(self) -> float:
        if not self.step_durations:
            return 0.0
        return sum(self.step_durations) / len(self.step_durations)

    def reset(self) -> None:
        limit = self.step_durations.maxlen
        self.elapsed = 0.0
        self.time_step = 0.0
        self.steps = 0
        self.last_step_duration = 0.0
        self.fastest_speed = 0.0
        self.adaptive_active = False
        self.step_durations = deque(maxlen=limit)


def min_separation(registry: BodyRegistry) -> float:
    """Distance between the closest pair of bodies (inf for fewer than two)."""
    bodies = registry.bodies()
    best_sq = math.inf
    for i in range(len(bodies)):
        pi = bodies[i].position
        for j in range(i + 1, len(bodies)):
            d_sq = vec_len_sq(vec_sub(bodies[j].position, pi))
            if d_sq < best_sq:
                best_sq = d_sq
    return math.sqrt(best_sq)


class TimestepController:
    def __init__(self, settings: SimulationSettings):
        self.settings = settings

    def next_time_step(self, registry: BodyRegistry, clock: SimulationClock) -> Tuple[float, bool]:
        """
        Returns:
            (dt, adaptive_active): the step in simulated seconds, and whether
            an adaptive slow-down shortened it.
        """
        if self.settings.timestep_mode == "realtime":
            return self.realtime_time_step(clock)
        return self.fixed_time_step(registry)

    def fixed_time_step(self, registry: BodyRegistry) -> Tuple[float, bool]:
        s = self.settings
        target = s.target_time_step
        if not s.adaptive_time or s.adaptive_time_range <= 0:
            return target, False
        closest = min_separation(registry)
        if closest >= s.adaptive_time_range:
            return target, False
        floor = target / s.adaptive_time_max_factor
        scaled = closest / s.adaptive_time_range * target
        # Whole seconds, never below the floor
        return max(float(round(max(scaled, floor))), floor), True

    def speed_reduction(self, speed: float) -> float:
        """Fraction by which the step is shortened for a body moving at speed."""
        s = self.settings
        if speed <= s.speed_limit_threshold:
            return 0.0
        span = s.speed_limit_cap - s.speed_limit_threshold
        if span <= 0 or speed >= s.speed_limit_cap:
            return s.speed_limit_max_reduction
        return (speed - s.speed_limit_threshold) / span * s.speed_limit_max_reduction

    def realtime_time_step(self, clock: SimulationClock) -> Tuple[float, bool]:
        s = self.settings
        if clock.step_durations:
            duration = clock.average_step_duration()
        else:
            duration = s.initial_step_duration
        dt = duration * s.speed_multiplier
        reduction = self.speed_reduction(clock.fastest_speed)
        return dt * (1.0 - reduction), reduction > 0.0
