#!/usr/bin/env python3
"""
Read-only views of the simulation for the viewer and HUD.

Nothing here writes to bodies or the clock. Values are copied into plain
dataclasses so a reader can keep them after the simulation has moved on.

Time conventions
- The years/days/hours/minutes/seconds breakdown uses 1 day = 86400 s and
  1 year = 365 days.
- calendar_years is a separate coarse counter based on a 365.2422-day year
  (31556926 s). It drifts slightly from the 365-day breakdown; this is an
  accepted approximation.
"""
from dataclasses import dataclass
from typing import List, Tuple

from .constants import CALENDAR_YEAR, DAY, HOUR, MINUTE, YEAR, G
from .data_models import Body
from .registry import BodyRegistry
from .timestep import SimulationClock
from .vector_utils import Vec3, is_finite, vec_len, vec_len_sq, vec_sub


@dataclass(frozen=True)
class ElapsedTime:
    years: int
    days: int
    hours: int
    minutes: int
    seconds: float
    calendar_years: float

    def __str__(self) -> str:
        return (f"{self.years} a {self.days:03d} d {self.hours:02d} h "
                f"{self.minutes:02d} m {int(self.seconds):02d} s")


def parse_time(total_seconds: float) -> ElapsedTime:
    """Break a number of seconds into years, days, hours, minutes and seconds."""
    total = max(0.0, float(total_seconds))
    years, rest = divmod(total, YEAR)
    days, rest = divmod(rest, DAY)
    hours, rest = divmod(rest, HOUR)
    minutes, seconds = divmod(rest, MINUTE)
    return ElapsedTime(
        years=int(years),
        days=int(days),
        hours=int(hours),
        minutes=int(minutes),
        seconds=seconds,
        calendar_years=total / CALENDAR_YEAR,
    )


def is_escaping(body: Body, primary: Body) -> bool:
    """
    Whether body moves faster than escape velocity relative to its primary.

    Uses |v_rel|^2 > 2 * G * M_primary / |d|, with |d| the scalar distance.
    Frozen bodies are never escaping. Zero distance (including a body that is
    its own primary because no force passed the cutoff) makes the threshold
    infinite, so such a body is bound.
    """
    if body.frozen:
        return False
    distance = vec_len(vec_sub(primary.position, body.position))
    if distance == 0:
        return False
    v_rel_sq = vec_len_sq(vec_sub(body.velocity, primary.velocity))
    return v_rel_sq > 2 * G * primary.mass / distance


@dataclass(frozen=True)
class BodyView:
    name: str
    position: Vec3
    velocity: Vec3
    size: float
    color: Tuple[int, int, int]
    frozen: bool
    primary_body: str
    escaping: bool


@dataclass(frozen=True)
class TelemetrySnapshot:
    elapsed: float
    elapsed_time: ElapsedTime
    time_step: float
    steps: int
    last_step_duration: float
    average_step_duration: float
    fastest_speed: float
    adaptive_active: bool
    bodies: List[BodyView]

    def hud_lines(self) -> List[str]:
        lines = [
            f"Simulated time elapsed: {self.elapsed_time}",
            f"Time step is {self.time_step:g} s" + (" (adaptive)" if self.adaptive_active else ""),
            f"Physics took {self.last_step_duration * 1000:.3f} ms",
            f"Physics average time: {self.average_step_duration * 1000:.3f} ms",
        ]
        return lines


def body_views(registry: BodyRegistry) -> List[BodyView]:
    views = []
    for name, body in registry.items():
        primary = registry.get(body.primary_body) if body.primary_body in registry else body
        views.append(BodyView(
            name=name,
            position=body.position,
            velocity=body.velocity,
            size=body.size,
            color=body.color,
            frozen=body.frozen,
            primary_body=primary.name,
            escaping=is_escaping(body, primary),
        ))
    return views


def snapshot(registry: BodyRegistry, clock: SimulationClock) -> TelemetrySnapshot:
    return TelemetrySnapshot(
        elapsed=clock.elapsed,
        elapsed_time=parse_time(clock.elapsed),
        time_step=clock.time_step,
        steps=clock.steps,
        last_step_duration=clock.last_step_duration,
        average_step_duration=clock.average_step_duration(),
        fastest_speed=clock.fastest_speed,
        adaptive_active=clock.adaptive_active,
        bodies=body_views(registry),
    )


def total_momentum(registry: BodyRegistry) -> Vec3:
    """Mass-weighted velocity sum over all bodies."""
    px = py = pz = 0.0
    for _, body in registry.items():
        mx, my, mz = body.momentum
        px += mx
        py += my
        pz += mz
    return (px, py, pz)


def all_finite(registry: BodyRegistry) -> bool:
    """False once any body has picked up a NaN or infinite coordinate."""
    return all(is_finite(body.position) and is_finite(body.velocity) for _, body in registry.items())
