"""Viewer configuration consumed by the view-state controller."""
from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from pv.core.angle_math import deg_to_rad

# Radians of yaw/pitch per pixel of drag at drag_sensitivity == 1.0
BASE_DRAG_SENSITIVITY = 0.003
# Degrees of fov per unit of wheel delta
WHEEL_FOV_STEP = 0.05
# Zoom responsiveness is fixed, independent of the configured smoothness.
FOV_SMOOTHING = 0.3
# Yaw/pitch smoothing while the gyroscope drives the view.
GYRO_SMOOTHING = 0.2

SWIPE_MIN_DISTANCE_PX = 100.0
SWIPE_MAX_DURATION_MS = 300.0


class ConfigError(ValueError):
    """Raised when a configuration value is out of its valid range."""


@dataclass(frozen=True)
class ViewerConfig:
    """
    Immutable configuration of the panorama view controller.

    Attributes:
        drag_sensitivity: Multiplier on the base drag sensitivity
        gyro_sensitivity: Multiplier on device orientation deltas
        smoothness: Yaw/pitch smoothing in percent, (0, 100]
        pitch_limit: Maximum absolute pitch in degrees, (0, 90]
        fov: Default field of view in degrees
        invert_drag: Invert drag direction
        invert_gyro: Invert gyroscope direction
        min_fov: Lower fov bound for pinch/wheel zoom
        max_fov: Upper fov bound for pinch/wheel zoom
    """
    drag_sensitivity: float = 1.0
    gyro_sensitivity: float = 1.0
    smoothness: float = 50
    pitch_limit: float = 80
    fov: float = 75
    invert_drag: bool = False
    invert_gyro: bool = False
    min_fov: float = 40
    max_fov: float = 100

    def __post_init__(self) -> None:
        """Validate values after initialization."""
        for name in ("drag_sensitivity", "gyro_sensitivity", "smoothness",
                     "pitch_limit", "fov", "min_fov", "max_fov"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) \
                    or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}.")

        if self.drag_sensitivity <= 0:
            raise ConfigError(f"drag_sensitivity must be > 0, got {self.drag_sensitivity}.")
        if self.gyro_sensitivity <= 0:
            raise ConfigError(f"gyro_sensitivity must be > 0, got {self.gyro_sensitivity}.")
        if not 0 < self.smoothness <= 100:
            raise ConfigError(f"smoothness must be in (0, 100], got {self.smoothness}.")
        if not 0 < self.pitch_limit <= 90:
            raise ConfigError(f"pitch_limit must be in (0, 90], got {self.pitch_limit}.")
        if not 0 < self.min_fov < self.max_fov < 180:
            raise ConfigError(
                f"fov bounds must satisfy 0 < min_fov < max_fov < 180, "
                f"got {self.min_fov}, {self.max_fov}.")
        if not self.min_fov <= self.fov <= self.max_fov:
            raise ConfigError(
                f"fov must be in [{self.min_fov}, {self.max_fov}], got {self.fov}.")

    def __str__(self) -> str:
        return (f"Drag: {self.drag_sensitivity:.1f}x, Gyro: {self.gyro_sensitivity:.1f}x, "
                f"Smoothness: {self.smoothness:.0f}%, Pitch limit: {self.pitch_limit:.0f}, "
                f"FOV: {self.fov:.0f}")

    @property
    def smoothing_factor(self) -> float:
        """Per-frame yaw/pitch interpolation factor in (0, 1]."""
        return self.smoothness / 100.0

    @property
    def pitch_limit_rad(self) -> float:
        """Pitch limit in radians."""
        return deg_to_rad(self.pitch_limit)

    @property
    def drag_invert(self) -> int:
        return -1 if self.invert_drag else 1

    @property
    def gyro_invert(self) -> int:
        return -1 if self.invert_gyro else 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ViewerConfig:
        """
        Create a ViewerConfig from a mapping.

        Unknown keys are ignored and missing keys take their defaults.

        :param data: Mapping of field name to value
        :return: New validated ViewerConfig
        :raises ConfigError: If any value is out of range
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})
