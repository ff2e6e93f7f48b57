#!/usr/bin/env python3
"""
Simulation-wide tunables.

SimulationSettings is the single source of truth for how the integrator picks
its time step and how forces are evaluated. Numeric fields are coerced on
construction; unknown mode names are rejected.

Time step modes
- "fixed": every step advances target_time_step seconds, optionally shortened
  while two bodies are within adaptive_time_range of each other.
- "realtime": the step is the measured average compute time multiplied by
  speed_multiplier, shortened while the fastest body exceeds
  speed_limit_threshold.

Position update modes
- "reference": x += v*dt + a*dt/2. The quadratic term is linear in dt,
  which keeps output compatible with earlier runs of the simulator.
- "exact": x += v*dt + a*dt^2/2.
"""
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .constants import (
    DEFAULT_ADAPTIVE_TIME_MAX_FACTOR,
    DEFAULT_ADAPTIVE_TIME_RANGE,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_INITIAL_STEP_DURATION,
    DEFAULT_MIN_FORCE,
    DEFAULT_SPEED_LIMIT_CAP,
    DEFAULT_SPEED_LIMIT_MAX_REDUCTION,
    DEFAULT_SPEED_LIMIT_THRESHOLD,
    DEFAULT_SPEED_MULTIPLIER,
    DEFAULT_TARGET_TIME_STEP,
    DEFAULT_UPDATE_INTERVAL,
)
from .errors import InvalidParameterError
from .utils import try_bool, try_float
from .vector_utils import clamp

logger = logging.getLogger(__name__)

TIMESTEP_MODES = ("fixed", "realtime")
POSITION_UPDATE_MODES = ("reference", "exact")

_BOOL_FIELDS = {"adaptive_time", "guard_degenerate"}
_STR_FIELDS = {"timestep_mode", "position_update"}
_INT_FIELDS = {"history_limit"}


@dataclass
class SimulationSettings:
    timestep_mode: str = "fixed"
    target_time_step: float = DEFAULT_TARGET_TIME_STEP
    adaptive_time: bool = False
    adaptive_time_range: float = DEFAULT_ADAPTIVE_TIME_RANGE
    adaptive_time_max_factor: float = DEFAULT_ADAPTIVE_TIME_MAX_FACTOR
    speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER
    speed_limit_threshold: float = DEFAULT_SPEED_LIMIT_THRESHOLD
    speed_limit_cap: float = DEFAULT_SPEED_LIMIT_CAP
    speed_limit_max_reduction: float = DEFAULT_SPEED_LIMIT_MAX_REDUCTION
    min_force: float = DEFAULT_MIN_FORCE
    position_update: str = "reference"
    history_limit: int = DEFAULT_HISTORY_LIMIT
    update_interval: float = DEFAULT_UPDATE_INTERVAL
    initial_step_duration: float = DEFAULT_INITIAL_STEP_DURATION
    guard_degenerate: bool = False

    def __post_init__(self):
        if self.timestep_mode not in TIMESTEP_MODES:
            raise InvalidParameterError(f"Unknown time step mode: {self.timestep_mode!r}")
        if self.position_update not in POSITION_UPDATE_MODES:
            raise InvalidParameterError(f"Unknown position update mode: {self.position_update!r}")
        self.target_time_step = max(0.0, float(self.target_time_step))
        self.adaptive_time = bool(self.adaptive_time)
        self.adaptive_time_range = max(0.0, float(self.adaptive_time_range))
        self.adaptive_time_max_factor = max(1.0, float(self.adaptive_time_max_factor))
        self.speed_multiplier = max(0.0, float(self.speed_multiplier))
        self.speed_limit_threshold = max(0.0, float(self.speed_limit_threshold))
        self.speed_limit_cap = max(self.speed_limit_threshold, float(self.speed_limit_cap))
        self.speed_limit_max_reduction = clamp(float(self.speed_limit_max_reduction), 0.0, 1.0)
        self.min_force = max(0.0, float(self.min_force))
        self.history_limit = max(1, int(self.history_limit))
        self.update_interval = max(0.0, float(self.update_interval))
        self.initial_step_duration = max(0.0, float(self.initial_step_duration))
        self.guard_degenerate = bool(self.guard_degenerate)

    def copy(self, **changes) -> "SimulationSettings":
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationSettings":
        """
        Build settings from loosely typed input (template JSON, command line).

        Unknown keys are ignored and numbers that cannot be parsed fall back to
        the default, each with a warning. Flags accept true/false, yes/no,
        on/off and 1/0. Unknown mode names still raise.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, raw in data.items():
            if key not in known:
                logger.warning("Ignoring unknown setting %r", key)
                continue
            if key in _STR_FIELDS:
                kwargs[key] = str(raw)
            elif key in _BOOL_FIELDS:
                flag = try_bool(raw)
                if flag is None:
                    logger.warning("Setting %r has non-boolean value %r, using default", key, raw)
                    continue
                kwargs[key] = flag
            else:
                value = try_float(raw)
                if value is None:
                    logger.warning("Setting %r has non-numeric value %r, using default", key, raw)
                    continue
                kwargs[key] = int(value) if key in _INT_FIELDS else value
        return cls(**kwargs)
