#!/usr/bin/env python3
"""
Force/acceleration evaluator for the gravity simulator.

Responsibilities
- Sum the Newtonian pull of every other body on a subject body.
- Ignore pairwise forces weaker than a configurable cutoff.
- Record which body pulls hardest on the subject (its primary body).
- Provide small helpers for common orbital computations (circular and escape velocity).

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg], forces in newtons [N].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- Cutoff: the minimum-force test runs separately for each direction of a
  pair, while evaluating each subject. The magnitudes are equal, so both
  directions drop out together. A cutoff of 0 gives the full O(N^2) direct sum.
- No softening: two coincident bodies produce an infinite force with no
  direction, and the resulting NaN acceleration propagates into the state.
  Enable guard_degenerate to raise NumericDegeneracyError instead.

Threading
- The evaluator reads positions and masses and writes only primary_body. It is
  driven by the integrator, which Simulation serializes with a lock.
"""

import logging
import math
from typing import Dict

from .constants import DEFAULT_MIN_FORCE, G
from .errors import NumericDegeneracyError
from .registry import BodyRegistry
from .vector_utils import Vec3

logger = logging.getLogger(__name__)

_NAN_VECTOR: Vec3 = (math.nan, math.nan, math.nan)


class ForceEvaluator:
    """
    Direct-summation gravity with a minimum-force cutoff.

    The force between subject s and target t is

        F = G * m_s * m_t / |r|^2

    applied along the unit vector from s to t.
    """

    def __init__(self, registry: BodyRegistry, min_force: float = DEFAULT_MIN_FORCE,
                 guard_degenerate: bool = False):
        self.registry = registry
        self.min_force = max(0.0, float(min_force))
        self.guard_degenerate = guard_degenerate

    def set_min_force(self, min_force: float) -> None:
        """Update the cutoff in newtons (0 disables it)."""
        self.min_force = max(0.0, float(min_force))

    def acceleration_of(self, name: str) -> Vec3:
        """
        Compute the gravitational acceleration on one body.

        Also updates the body's primary_body: the target with the strictly
        largest force above the cutoff, or the body itself when none qualifies.

        Args:
            name: Registry name of the subject body.

        Returns:
            (ax, ay, az) in m/s^2.
        """
        body = self.registry.get(name)
        px, py, pz = body.position
        m_subject = body.mass
        min_force = self.min_force

        fx = fy = fz = 0.0
        primary = name
        primary_force = 0.0

        for target_name, target in self.registry.items():
            if target_name == name:
                continue

            dx = target.position[0] - px
            dy = target.position[1] - py
            dz = target.position[2] - pz
            dist_sq = dx * dx + dy * dy + dz * dz

            if dist_sq == 0.0:
                if self.guard_degenerate:
                    raise NumericDegeneracyError(name, target_name)
                logger.debug("Bodies %r and %r are coincident", name, target_name)
                force = math.inf
                if force > primary_force:
                    primary = target_name
                    primary_force = force
                fx, fy, fz = _NAN_VECTOR
                continue

            force = G * (m_subject * target.mass / dist_sq)
            if force < min_force:
                continue

            if force > primary_force:
                primary = target_name
                primary_force = force

            # Scale the separation so its length equals the force
            scale = force / math.sqrt(dist_sq)
            fx += dx * scale
            fy += dy * scale
            fz += dz * scale

        body.primary_body = primary
        return (fx / m_subject, fy / m_subject, fz / m_subject)

    def compute_accelerations(self) -> Dict[str, Vec3]:
        """
        Evaluate every non-frozen body against the current positions.

        Callers must not move any body until this returns, so that all
        accelerations come from the same snapshot.
        """
        return {
            name: self.acceleration_of(name)
            for name, body in self.registry.items()
            if not body.frozen
        }


def circular_orbit_velocity(central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the velocity needed for a circular orbit.

    For a circular orbit, the gravitational force provides exactly the
    centripetal force needed: v = sqrt(G * M / r)

    Args:
        central_mass: Mass of the central body in kg
        orbital_radius: Orbital radius in meters

    Returns:
        Orbital velocity in m/s for a circular orbit
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def escape_velocity(mass: float, distance: float) -> float:
    """
    Calculate the escape velocity at a given distance: v = sqrt(2 * G * M / r)

    Args:
        mass: Mass of the attracting body in kg
        distance: Distance from its center in meters

    Returns:
        Escape velocity in m/s, or 0 for non-positive inputs
    """
    if distance <= 0 or mass <= 0:
        return 0.0

    return math.sqrt(2.0 * G * mass / distance)
