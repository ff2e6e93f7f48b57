#!/usr/bin/env python3
"""
Vector helper functions for 3D operations.

These are small, fast functions on plain (x, y, z) tuples used throughout
the engine.
"""
import math
from typing import Iterable, Tuple

Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_len_sq(a: Vec3) -> float:
    return a[0] * a[0] + a[1] * a[1] + a[2] * a[2]


def vec_len(a: Vec3) -> float:
    return math.sqrt(vec_len_sq(a))


def vec3(values: Iterable[float]) -> Vec3:
    """Build a float triple from any three-item iterable."""
    x, y, z = values
    return (float(x), float(y), float(z))


def is_finite(a: Vec3) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1]) and math.isfinite(a[2])
