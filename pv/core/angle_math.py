"""Angle utility functions for wrap-around, clamping and unit conversion."""
from __future__ import annotations

import math

_DEG_PER_RAD = 180.0 / math.pi
_RAD_PER_DEG = math.pi / 180.0


def wrap_degrees_180(delta: float) -> float:
    """
    Normalize a difference of angles into (-180, 180].

    Compass headings wrap at 0/360, so a plain subtraction jumps by 360
    when the device crosses north.

    :param delta: Angle difference in degrees
    :return: Equivalent difference in (-180, 180]
    """
    delta = math.fmod(delta, 360.0)
    if delta > 180.0:
        delta -= 360.0
    elif delta <= -180.0:
        delta += 360.0
    return delta


def clamp(value: float, min_value: float, max_value: float) -> float:
    """
    Clamp a value to the closed range [min_value, max_value].

    :param value: Value to clamp
    :param min_value: Lower bound
    :param max_value: Upper bound
    :return: Clamped value
    """
    return max(min_value, min(max_value, value))


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * _RAD_PER_DEG


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * _DEG_PER_RAD
