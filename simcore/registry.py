#!/usr/bin/env python3
"""
Body registry: the insertion-ordered set of bodies taking part in a run.

Names are unique. When a requested name is missing or already taken the body is
silently given a generated "Body N" name (N = current count + 1, increased
until free) rather than overwriting the existing body. create_body returns the
name actually used, so callers must not assume their requested name stuck.

There is no removal: bodies live for the whole run.
"""
import logging
import math
from typing import Dict, Iterator, List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, DEFAULT_BODY_MASS, DEFAULT_BODY_SIZE
from .data_models import Body
from .errors import BodyNotFoundError, InvalidParameterError
from .vector_utils import Vec3, ZERO, vec3

logger = logging.getLogger(__name__)


class BodyRegistry:
    def __init__(self):
        self._bodies: Dict[str, Body] = {}

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, name) -> bool:
        return name in self._bodies

    def __iter__(self) -> Iterator[Tuple[str, Body]]:
        return self.items()

    def items(self) -> Iterator[Tuple[str, Body]]:
        """Yield (name, body) pairs in insertion order."""
        for name, body in self._bodies.items():
            yield name, body

    def bodies(self) -> List[Body]:
        return list(self._bodies.values())

    def names(self) -> List[str]:
        return list(self._bodies)

    def get(self, name: str) -> Body:
        try:
            return self._bodies[name]
        except KeyError:
            raise BodyNotFoundError(name) from None

    def _generated_name(self) -> str:
        n = len(self._bodies) + 1
        name = f"Body {n}"
        while name in self._bodies:
            n += 1
            name = f"Body {n}"
        return name

    def create_body(
        self,
        name: Optional[str] = None,
        size: float = DEFAULT_BODY_SIZE,
        mass: float = DEFAULT_BODY_MASS,
        position: Vec3 = ZERO,
        velocity: Vec3 = ZERO,
        color: Tuple[int, int, int] = DEFAULT_BODY_COLOR,
        frozen: bool = False,
    ) -> str:
        """
        Insert a new body and return the name it was stored under.

        Raises InvalidParameterError when mass or size is not a finite,
        positive number, or position or velocity is not three numbers.
        """
        mass = _positive("mass", mass)
        size = _positive("size", size)
        position = _vector("position", position)
        velocity = _vector("velocity", velocity)

        if not name or name in self._bodies:
            generated = self._generated_name()
            if name:
                logger.info("Body name %r already taken, using %r", name, generated)
            name = generated

        self._bodies[name] = Body(
            name=name,
            mass=mass,
            size=size,
            position=position,
            velocity=velocity,
            color=tuple(color),
            frozen=bool(frozen),
        )
        logger.debug("Created body %r (mass=%g kg, frozen=%s)", name, mass, frozen)
        return name


def _positive(label: str, value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Body {label} must be a number, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidParameterError(f"Body {label} must be finite and positive, got {number}")
    return number


def _vector(label: str, value) -> Vec3:
    try:
        return vec3(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Body {label} must be three numbers, got {value!r}") from None
