"""View controller - turns user input into the camera view of a panorama."""
from __future__ import annotations

import logging
import math
import numbers
from enum import Enum, auto
from typing import Callable, Optional, TYPE_CHECKING

from pv.core.gesture_classifier import GestureClassifier, Point
from pv.core.gyroscope_calibrator import GyroscopeCalibrator
from pv.core.view_state import ViewParams, ViewStateManager
from pv.core.viewer_config import ViewerConfig
from pv.utils.log_util import log_io

if TYPE_CHECKING:
    from pv.core.image_navigator import ImageNavigator


logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    """Enum for what drives the look direction."""
    DRAG = auto()
    GYROSCOPE = auto()


class GyroPermission(Enum):
    """Result of the platform orientation capability query."""
    GRANTED = auto()
    DENIED = auto()
    UNAVAILABLE = auto()


GyroCapability = Callable[[], GyroPermission]


def _finite(*values) -> bool:
    for v in values:
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v):
            return False
    return True


def _finite_point(p) -> bool:
    try:
        return len(p) == 2 and _finite(p[0], p[1])
    except TypeError:
        return False


class ViewController:
    """
    Central coordinator between input sources and the renderer.

    This class owns the view state and its input handlers, managing:
    - Pointer, pinch and wheel input via the gesture classifier
    - Device orientation input via the gyroscope calibrator
    - The per-frame smoothing step
    - Callbacks for swipes and interaction mode changes

    Input methods never raise: malformed input is dropped and the previous
    state is kept.

    Usage:
        controller = ViewController(config)
        controller.add_swipe_callback(navigator.on_swipe)
        controller.feed_pointer_down(x, y, t)
        params = controller.tick()  # once per frame
    """

    def __init__(self, config: ViewerConfig | None = None):
        """Initialize the view controller."""
        self._config: ViewerConfig = config or ViewerConfig()
        self._view_state = ViewStateManager(self._config)
        self._gestures = GestureClassifier(self._view_state)
        self._gyro = GyroscopeCalibrator()

        self._on_swipe_callbacks: list[Callable[[str], None]] = []
        self._on_mode_changed_callbacks: list[Callable[[InteractionMode, InteractionMode], None]] = []

    @property
    def config(self) -> ViewerConfig:
        return self._config

    @property
    def view_state(self) -> ViewStateManager:
        return self._view_state

    @property
    def gestures(self) -> GestureClassifier:
        return self._gestures

    @property
    def gyro(self) -> GyroscopeCalibrator:
        return self._gyro

    @property
    def gyro_enabled(self) -> bool:
        return self._gyro.enabled

    @property
    def interaction_mode(self) -> InteractionMode:
        """Get current interaction mode."""
        return InteractionMode.GYROSCOPE if self._gyro.enabled else InteractionMode.DRAG

    # ---------- Pointer input ----------

    def feed_pointer_down(self, x: float, y: float, t: float) -> None:
        if not _finite(x, y, t):
            logger.debug(f"Pointer down dropped: {x}, {y}, {t}")
            return
        self._gestures.on_pointer_down(x, y, t)

    def feed_pointer_move(self, x: float, y: float) -> None:
        if not _finite(x, y):
            logger.debug(f"Pointer move dropped: {x}, {y}")
            return
        self._gestures.on_pointer_move(x, y, self._config)

    def feed_pointer_up(self, x: float, t: float) -> None:
        """Close the drag and notify swipe callbacks if it was a swipe."""
        if not _finite(x, t):
            logger.debug(f"Pointer up dropped, closing drag: {x}, {t}")
            self._gestures.on_pointer_leave()
            return
        direction = self._gestures.on_pointer_up(x, t)
        if direction is not None:
            self._notify_swipe(direction.value)

    def feed_pointer_leave(self) -> None:
        """Pointer left the surface: close the drag without swipe evaluation."""
        self._gestures.on_pointer_leave()

    # ---------- Touch / wheel input ----------

    def feed_pinch_start(self, p1: Point, p2: Point) -> None:
        if not (_finite_point(p1) and _finite_point(p2)):
            logger.debug(f"Pinch start dropped: {p1}, {p2}")
            return
        self._gestures.on_pinch_start(p1, p2, self._view_state.current.fov)

    def feed_pinch_move(self, p1: Point, p2: Point) -> None:
        if not (_finite_point(p1) and _finite_point(p2)):
            logger.debug(f"Pinch move dropped: {p1}, {p2}")
            return
        self._gestures.on_pinch_move(p1, p2)

    def feed_pinch_end(self) -> None:
        """Fewer than two touch points remain."""
        self._gestures.on_pinch_end()

    def feed_wheel(self, delta_y: float) -> None:
        if not _finite(delta_y):
            logger.debug(f"Wheel dropped: {delta_y}")
            return
        self._gestures.on_wheel(delta_y)

    # ---------- Gyroscope ----------

    def feed_orientation_sample(self,
                                alpha: Optional[float],
                                beta: Optional[float],
                                gamma: Optional[float] = None) -> None:
        """Apply a device orientation sample while the gyroscope is enabled."""
        if not self._gyro.enabled:
            return
        if alpha is not None and beta is not None and not _finite(alpha, beta):
            logger.debug(f"Orientation sample dropped: {alpha}, {beta}")
            return
        target = self._gyro.on_sample(alpha, beta, gamma, self._config)
        if target is not None:
            self._view_state.set_target_orientation(target.yaw, target.pitch)

    @log_io()
    def enable_gyro(self) -> None:
        """
        Start gyroscope tracking from the current view.

        Call only after the platform granted orientation access, see request_gyro().
        """
        old_mode = self.interaction_mode
        self._gyro.enable(self._view_state.current.orientation)
        self._notify_mode_changed(old_mode, self.interaction_mode)

    @log_io()
    def disable_gyro(self) -> None:
        """Stop gyroscope tracking; the view stays where it is."""
        old_mode = self.interaction_mode
        self._gyro.disable()
        self._notify_mode_changed(old_mode, self.interaction_mode)

    @log_io()
    def recalibrate_gyro(self) -> None:
        """Centre the view and take the next sample as the device baseline."""
        self._gyro.recalibrate()
        self._view_state.reset_view(self._config.fov)

    def request_gyro(self, capability: GyroCapability) -> GyroPermission:
        """
        Ask the platform for orientation access and enable the gyroscope if granted.

        :param capability: Collaborator that queries/requests the permission
        :return: The permission result
        """
        try:
            permission = capability()
        except Exception as e:
            logger.exception(f"Gyroscope permission request failed: {e}")
            return GyroPermission.DENIED

        if permission is GyroPermission.GRANTED:
            self.enable_gyro()
        elif permission is GyroPermission.DENIED:
            logger.warning("Gyroscope permission denied")
        else:
            logger.warning("Gyroscope not available on this device")
        return permission

    def toggle_gyro(self, capability: GyroCapability) -> bool:
        """
        Disable the gyroscope if enabled, otherwise request and enable it.

        :return: True if the gyroscope is enabled afterwards
        """
        if self._gyro.enabled:
            self.disable_gyro()
        else:
            self.request_gyro(capability)
        return self._gyro.enabled

    # ---------- Frame / state ----------

    def tick(self) -> ViewParams:
        """
        Advance smoothing by one frame.

        :return: Current yaw, pitch (radians) and fov (degrees) for the camera
        """
        return self._view_state.smoothing_step(self._config, gyro_active=self._gyro.enabled)

    @log_io()
    def reset_view(self) -> None:
        """Centre the view with the configured fov, e.g. after loading a panorama."""
        self._gestures.reset()
        self._view_state.reset_view(self._config.fov)

    @log_io()
    def apply_config(self, config: ViewerConfig) -> None:
        """
        Replace the configuration.

        The target fov follows the new default fov unless the gyroscope is active.
        """
        self._config = config
        self._view_state.config = config
        if not self._gyro.enabled:
            self._view_state.set_target_fov(config.fov)
        logger.info(f"Configuration applied: {config}")

    def attach_navigator(self, navigator: ImageNavigator) -> None:
        """Route swipes to the navigator and reset the view when the image changes."""
        self.add_swipe_callback(navigator.on_swipe)
        navigator.add_image_changed_callback(lambda index, source: self.reset_view())

    # ---------- Callbacks ----------

    def add_swipe_callback(self, callback: Callable[[str], None]) -> None:
        """
        Add a callback for swipe gestures.

        Callback signature: callback(direction: str) -> None, direction is 'prev' or 'next'
        """
        self._on_swipe_callbacks.append(callback)

    def remove_swipe_callback(self, callback: Callable[[str], None]) -> None:
        self._on_swipe_callbacks.remove(callback)

    def add_mode_changed_callback(
            self,
            callback: Callable[[InteractionMode, InteractionMode], None]
    ) -> None:
        """
        Add a callback for interaction mode changes.

        Callback signature: callback(old_mode: InteractionMode, new_mode: InteractionMode) -> None
        """
        self._on_mode_changed_callbacks.append(callback)

    def _notify_swipe(self, direction: str) -> None:
        logger.info(f"Swipe: {direction}")
        for callback in self._on_swipe_callbacks:
            try:
                callback(direction)
            except Exception as e:
                logging.exception(f"Error in swipe callback: {e}")

    def _notify_mode_changed(self,
                             old_mode: InteractionMode,
                             new_mode: InteractionMode) -> None:
        """Notify callbacks of mode changes."""
        if old_mode == new_mode:
            return
        logger.info(f"Interaction mode changed from {old_mode} -> {new_mode}")
        for callback in self._on_mode_changed_callbacks:
            try:
                callback(old_mode, new_mode)
            except Exception as e:
                logging.exception(f"Error in mode changed callback: {e}")


__all__ = [
    "GyroCapability",
    "GyroPermission",
    "InteractionMode",
    "ViewController",
]
