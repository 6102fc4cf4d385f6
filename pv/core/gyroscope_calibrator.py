"""Device orientation (gyroscope) to view orientation mapping."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from pv.core.angle_math import clamp, deg_to_rad, wrap_degrees_180
from pv.core.view_state import Orientation
from pv.core.viewer_config import ViewerConfig

logger = logging.getLogger(__name__)


class GyroState(Enum):
    """Lifecycle of gyroscope tracking."""
    DISABLED = auto()
    ENABLING = auto()  # Baseline view captured, waiting for the first sample
    CALIBRATED = auto()  # First sample stored as the device baseline
    ACTIVE = auto()


@dataclass
class GyroCalibration:
    """
    Device reading and view orientation captured when tracking starts.

    Attributes:
        calibrated: True once the first valid sample has been stored
        base_alpha: Compass heading of the baseline sample in degrees
        base_beta: Front/back tilt of the baseline sample in degrees
        base_yaw: View yaw in radians when tracking started
        base_pitch: View pitch in radians when tracking started
    """
    calibrated: bool = False
    base_alpha: float = 0.0
    base_beta: float = 0.0
    base_yaw: float = 0.0
    base_pitch: float = 0.0


class GyroscopeCalibrator:
    """
    Converts device orientation samples into a target view orientation.

    Samples are interpreted relative to the first sample received after
    enable() or recalibrate(). alpha (compass heading) drives yaw and beta
    (front/back tilt) drives pitch; gamma is unused.

    Usage:
        gyro = GyroscopeCalibrator()
        gyro.enable(view_state.current.orientation)
        target = gyro.on_sample(alpha, beta, gamma, config)
        if target is not None:
            view_state.set_target_orientation(target.yaw, target.pitch)
    """

    def __init__(self):
        self._state = GyroState.DISABLED
        self._calibration = GyroCalibration()

    @property
    def state(self) -> GyroState:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._state is not GyroState.DISABLED

    @property
    def calibrated(self) -> bool:
        return self._calibration.calibrated

    @property
    def calibration(self) -> GyroCalibration:
        """Get a copy of the calibration data."""
        c = self._calibration
        return GyroCalibration(c.calibrated, c.base_alpha, c.base_beta, c.base_yaw, c.base_pitch)

    def enable(self, current_orientation: Orientation) -> None:
        """
        Start tracking from the given view orientation.

        :param current_orientation: View orientation to use as baseline
        """
        self._calibration.base_yaw = current_orientation.yaw
        self._calibration.base_pitch = current_orientation.pitch
        self._calibration.calibrated = False
        self._state = GyroState.ENABLING
        logger.info(f"Gyroscope enabled, baseline view: {current_orientation}")

    def disable(self) -> None:
        """Stop tracking. Calling it again has no further effect."""
        if self._state is not GyroState.DISABLED:
            logger.info("Gyroscope disabled")
        self._state = GyroState.DISABLED
        self._calibration.calibrated = False

    def recalibrate(self) -> None:
        """
        Forget the device baseline and centre the view baseline.

        The next valid sample becomes the new device baseline.
        """
        self._calibration.calibrated = False
        self._calibration.base_yaw = 0.0
        self._calibration.base_pitch = 0.0
        if self._state is not GyroState.DISABLED:
            self._state = GyroState.ENABLING
        logger.info("Gyroscope recalibration requested")

    def on_sample(self,
                  alpha: Optional[float],
                  beta: Optional[float],
                  gamma: Optional[float],
                  config: ViewerConfig) -> Optional[Orientation]:
        """
        Process one device orientation sample.

        :param alpha: Compass heading in degrees [0, 360), or None
        :param beta: Front/back tilt in degrees [-180, 180), or None
        :param gamma: Side tilt in degrees, unused
        :param config: Sensitivity, inversion and pitch limit
        :return: New target orientation, or None if the sample was ignored
        """
        if self._state is GyroState.DISABLED:
            return None
        if alpha is None or beta is None:
            logger.debug("Orientation sample ignored: no data yet")
            return None

        calibration = self._calibration
        if not calibration.calibrated:
            calibration.base_alpha = alpha
            calibration.base_beta = beta
            calibration.calibrated = True
            self._state = GyroState.CALIBRATED
            logger.info(f"Gyroscope calibrated: alpha={alpha:.1f}, beta={beta:.1f}, gamma={gamma}")
        else:
            self._state = GyroState.ACTIVE

        alpha_delta = wrap_degrees_180(alpha - calibration.base_alpha)
        beta_delta = beta - calibration.base_beta

        sensitivity = config.gyro_sensitivity
        invert = config.gyro_invert

        yaw_delta = deg_to_rad(alpha_delta) * sensitivity * invert
        pitch_delta = deg_to_rad(beta_delta) * sensitivity * invert

        # Tilting the device forward (beta up) looks down.
        limit = config.pitch_limit_rad
        return Orientation(
            yaw=calibration.base_yaw + yaw_delta,
            pitch=clamp(calibration.base_pitch - pitch_delta, -limit, limit),
        )
