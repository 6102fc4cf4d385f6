"""View state management separated from input and rendering concerns."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pv.core.angle_math import clamp
from pv.core.viewer_config import FOV_SMOOTHING, GYRO_SMOOTHING, ViewerConfig

logger = logging.getLogger(__name__)


@dataclass
class Orientation:
    "Look direction in radians."
    yaw: float = 0.0
    pitch: float = 0.0

    def __str__(self) -> str:
        return f"Yaw: {self.yaw:.3f}, Pitch: {self.pitch:.3f}"


@dataclass
class ViewParams:
    "Camera parameters: yaw/pitch in radians, fov in degrees."
    yaw: float = 0.0
    pitch: float = 0.0
    fov: float = 75.0

    @property
    def orientation(self) -> Orientation:
        return Orientation(self.yaw, self.pitch)

    def copy(self) -> ViewParams:
        return ViewParams(self.yaw, self.pitch, self.fov)

    def __str__(self) -> str:
        return f"Yaw: {self.yaw:.3f}, Pitch: {self.pitch:.3f}, FOV: {self.fov:.1f}"


class ViewStateManager:
    """
    Manages the current and target view independently.

    Responsible for:
    - Holding the rendered (current) and goal (target) view.
    - Clamping pitch and fov when the target is written.
    - Converging current toward target once per frame.
    - Callbacks for view resets.
    """

    def __init__(self, config: ViewerConfig | None = None):
        self._config = config or ViewerConfig()
        self._current = ViewParams(fov=self._config.fov)
        self._target = ViewParams(fov=self._config.fov)
        self._on_reset_callbacks: list[Callable[[ViewParams], None]] = []

    @property
    def config(self) -> ViewerConfig:
        return self._config

    @config.setter
    def config(self, config: ViewerConfig) -> None:
        """Replace the configuration and re-clamp current and target to its limits."""
        self._config = config
        self.set_target_orientation(self._target.yaw, self._target.pitch)
        self.set_target_fov(self._target.fov)
        self._current.pitch = self._clamp_pitch(self._current.pitch)
        self._current.fov = clamp(self._current.fov, config.min_fov, config.max_fov)

    @property
    def current(self) -> ViewParams:
        """Get a copy of the current (rendered) view."""
        return self._current.copy()

    @property
    def target(self) -> ViewParams:
        """Get a copy of the target view."""
        return self._target.copy()

    def add_target_yaw(self, delta: float) -> None:
        self._target.yaw += delta

    def add_target_pitch(self, delta: float) -> None:
        self._target.pitch = self._clamp_pitch(self._target.pitch + delta)

    def set_target_orientation(self, yaw: float, pitch: float) -> None:
        """
        Set the target look direction.

        :param yaw: Yaw in radians, unbounded
        :param pitch: Pitch in radians, clamped to the pitch limit
        """
        self._target.yaw = yaw
        self._target.pitch = self._clamp_pitch(pitch)

    def set_target_fov(self, fov: float) -> None:
        """Set the target fov, clamped to [min_fov, max_fov]."""
        self._target.fov = clamp(fov, self._config.min_fov, self._config.max_fov)

    def smoothing_step(self, config: ViewerConfig | None = None,
                       gyro_active: bool = False) -> ViewParams:
        """
        Move the current view one step toward the target.

        Yaw and pitch use the configured smoothness while dragging and a
        fixed factor while the gyroscope is active. Fov always uses a fixed
        factor.

        :param config: Configuration to read smoothness from (default: own)
        :param gyro_active: Whether the gyroscope drives the view
        :return: The new current view
        """
        config = config or self._config
        factor = GYRO_SMOOTHING if gyro_active else config.smoothing_factor

        self._current.yaw += (self._target.yaw - self._current.yaw) * factor
        self._current.pitch += (self._target.pitch - self._current.pitch) * factor
        self._current.fov += (self._target.fov - self._current.fov) * FOV_SMOOTHING

        return self._current.copy()

    def reset_view(self, default_fov: float | None = None) -> None:
        """
        Set current and target to the centre with the given fov.

        :param default_fov: Fov in degrees (default: configured fov)
        """
        fov = self._config.fov if default_fov is None else default_fov
        self._current = ViewParams(0.0, 0.0, fov)
        self._target = ViewParams(0.0, 0.0, fov)
        logger.debug(f"View reset: fov={fov}")
        self._notify_reset()

    def add_reset_callback(self, callback: Callable[[ViewParams], None]) -> None:
        """
        Add a callback for view resets.

        Callback signature: callback(view: ViewParams) -> None
        """
        self._on_reset_callbacks.append(callback)

    def remove_reset_callback(self, callback: Callable[[ViewParams], None]) -> None:
        """Remove a callback for view resets."""
        self._on_reset_callbacks.remove(callback)

    def _clamp_pitch(self, pitch: float) -> float:
        limit = self._config.pitch_limit_rad
        return clamp(pitch, -limit, limit)

    def _notify_reset(self) -> None:
        """Notify callbacks of view resets."""
        for callback in self._on_reset_callbacks:
            try:
                callback(self._current.copy())
            except Exception as e:
                logging.exception(f"Error in reset callback: {e}")
