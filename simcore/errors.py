#!/usr/bin/env python3
"""
Exception types raised by the simulation engine.

- BodyNotFoundError: a body name was queried that the registry does not hold.
- InvalidParameterError: a body or setting was given a value the engine rejects
  (non-finite or non-positive mass/size, unknown mode names).
- NumericDegeneracyError: two bodies share a position. Only raised when the
  degenerate-pair guard is enabled; otherwise the non-finite values flow into
  the simulation state.
"""


class SimulationError(Exception):
    """Base class for all engine errors."""


class BodyNotFoundError(SimulationError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No body named {self.name!r}"


class InvalidParameterError(SimulationError, ValueError):
    pass


class NumericDegeneracyError(SimulationError, ArithmeticError):
    def __init__(self, subject: str, other: str):
        super().__init__(f"Bodies {subject!r} and {other!r} are coincident")
        self.subject = subject
        self.other = other
