"""Core components layer - shared, view-independent functionality."""

from pv.core.angle_math import clamp, deg_to_rad, rad_to_deg, wrap_degrees_180
from pv.core.gesture_classifier import GestureClassifier, SwipeDirection
from pv.core.gyroscope_calibrator import GyroCalibration, GyroscopeCalibrator, GyroState
from pv.core.image_navigator import ImageNavigator
from pv.core.view_state import Orientation, ViewParams, ViewStateManager
from pv.core.viewer_config import ConfigError, ViewerConfig

__all__ = [
    "clamp",
    "deg_to_rad",
    "rad_to_deg",
    "wrap_degrees_180",
    "GestureClassifier",
    "SwipeDirection",
    "GyroCalibration",
    "GyroscopeCalibrator",
    "GyroState",
    "ImageNavigator",
    "Orientation",
    "ViewParams",
    "ViewStateManager",
    "ConfigError",
    "ViewerConfig",
]
