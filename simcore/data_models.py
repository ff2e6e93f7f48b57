#!/usr/bin/env python3
"""
Data models for the gravity simulator.

This module defines the Body dataclass shared between the registry, the force
evaluator, the integrator and the viewer.

Units and usage
- position is in meters [m], velocity in meters per second [m/s], size (radius)
  in meters [m], mass in kg.
- size is only used by the viewer; the physics treats bodies as point masses.
- Only the integrator writes position and velocity, and only the force
  evaluator writes primary_body. Access is coordinated by Simulation using a lock.
"""
from dataclasses import dataclass, field
from typing import Tuple

from .constants import DEFAULT_BODY_COLOR, DEFAULT_BODY_MASS, DEFAULT_BODY_SIZE
from .vector_utils import Vec3, ZERO, vec_len


@dataclass
class Body:
    """
    A simulated point mass.

    Fields:
    - name: Unique identifier within a registry
    - mass: Mass in kilograms
    - size: Visual radius in meters
    - position: 3D position (x, y, z) in meters
    - velocity: 3D velocity (vx, vy, vz) in meters/second
    - color: RGB tuple used for rendering
    - frozen: Frozen bodies never move but still attract others
    - primary_body: Name of the body pulling hardest on this one
    """
    name: str
    mass: float = DEFAULT_BODY_MASS
    size: float = DEFAULT_BODY_SIZE
    position: Vec3 = ZERO
    velocity: Vec3 = ZERO
    color: Tuple[int, int, int] = DEFAULT_BODY_COLOR
    frozen: bool = False
    primary_body: str = field(default="")

    def __post_init__(self):
        if not self.primary_body:
            self.primary_body = self.name

    @property
    def speed(self) -> float:
        return vec_len(self.velocity)

    @property
    def momentum(self) -> Vec3:
        m = self.mass
        return (self.velocity[0] * m, self.velocity[1] * m, self.velocity[2] * m)
