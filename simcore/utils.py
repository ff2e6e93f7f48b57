#!/usr/bin/env python3
"""
General utilities for the gravity simulator.
"""
import math
from typing import Optional


def try_float(val) -> Optional[float]:
    """Parse a number from user input; None when it cannot be read."""
    if val is None or isinstance(val, bool):
        return None
    try:
        result = float(val)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def try_bool(val) -> Optional[bool]:
    """Parse a flag from user input; None when it cannot be read."""
    if isinstance(val, bool):
        return val
    if isinstance(val, (int, float)) and val in (0, 1):
        return bool(val)
    if isinstance(val, str):
        word = val.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None
