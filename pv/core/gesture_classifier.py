"""Gesture classification for pointer, touch and wheel input."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pv.core.viewer_config import (
    BASE_DRAG_SENSITIVITY,
    SWIPE_MAX_DURATION_MS,
    SWIPE_MIN_DISTANCE_PX,
    WHEEL_FOV_STEP,
    ViewerConfig,
)
from pv.core.view_state import ViewStateManager

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class SwipeDirection(str, Enum):
    """Image navigation requested by a horizontal swipe."""
    PREV = "prev"
    NEXT = "next"

    # Pointer moving right shows the previous image.
    SWIPE_LEFT = "prev"
    SWIPE_RIGHT = "next"

    def __str__(self):
        return self.value


@dataclass
class PointerSession:
    """Single-pointer drag, alive between pointer down and pointer up."""
    last_x: float
    last_y: float
    start_x: float
    start_time_ms: float


@dataclass
class PinchSession:
    """Two-finger zoom, alive while two touch points are down."""
    initial_distance: float
    initial_fov: float


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two touch points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


class GestureClassifier:
    """
    Turns raw pointer/touch/wheel input into target view changes.

    - Drag: pointer deltas rotate the target yaw/pitch.
    - Swipe: a fast, long horizontal drag requests the previous/next image.
    - Pinch: the ratio of finger distances scales the fov.
    - Wheel: wheel delta shifts the fov.

    Pointer and pinch sessions are mutually exclusive. Handlers called
    without the matching session do nothing.
    """

    def __init__(self, view_state: ViewStateManager):
        self._view_state = view_state
        self._pointer: Optional[PointerSession] = None
        self._pinch: Optional[PinchSession] = None

    @property
    def pointer_session(self) -> Optional[PointerSession]:
        return self._pointer

    @property
    def pinch_session(self) -> Optional[PinchSession]:
        return self._pinch

    @property
    def is_dragging(self) -> bool:
        return self._pointer is not None

    @property
    def is_pinching(self) -> bool:
        return self._pinch is not None

    def on_pointer_down(self, x: float, y: float, timestamp_ms: float) -> None:
        if self._pinch is not None:
            logger.debug("Pointer down cancels pinch")
            self._pinch = None
        self._pointer = PointerSession(x, y, x, timestamp_ms)

    def on_pointer_move(self, x: float, y: float,
                        config: ViewerConfig | None = None) -> None:
        """
        Rotate the target view by the pointer delta since the last event.

        :param x: Pointer x in pixels
        :param y: Pointer y in pixels
        :param config: Configuration (default: the view state's)
        """
        session = self._pointer
        if session is None:
            return
        config = config or self._view_state.config

        delta_x = x - session.last_x
        delta_y = y - session.last_y

        sensitivity = BASE_DRAG_SENSITIVITY * config.drag_sensitivity
        invert = config.drag_invert

        self._view_state.add_target_yaw(delta_x * sensitivity * invert)
        self._view_state.add_target_pitch(delta_y * sensitivity * invert)

        session.last_x = x
        session.last_y = y

    def on_pointer_up(self, x: float, timestamp_ms: float) -> Optional[SwipeDirection]:
        """
        Close the drag and check for a swipe.

        A swipe is a horizontal displacement of more than 100 px within
        less than 300 ms.

        :param x: Pointer x in pixels at release
        :param timestamp_ms: Release time in milliseconds
        :return: Requested navigation, or None
        """
        session = self._pointer
        if session is None:
            return None
        self._pointer = None

        swipe_distance = x - session.start_x
        swipe_duration = timestamp_ms - session.start_time_ms

        if abs(swipe_distance) > SWIPE_MIN_DISTANCE_PX and swipe_duration < SWIPE_MAX_DURATION_MS:
            direction = SwipeDirection.PREV if swipe_distance > 0 else SwipeDirection.NEXT
            logger.debug(f"Swipe detected: {direction} "
                         f"(distance={swipe_distance:.0f}px, duration={swipe_duration:.0f}ms)")
            return direction
        return None

    def on_pointer_leave(self) -> None:
        """Close the drag without swipe evaluation."""
        self._pointer = None

    def on_pinch_start(self, touch_a: Point, touch_b: Point,
                       current_fov: float | None = None) -> None:
        """
        Start a pinch and cancel any drag.

        :param touch_a: First touch point (x, y)
        :param touch_b: Second touch point (x, y)
        :param current_fov: Fov in effect now (default: the rendered fov)
        """
        self._pointer = None

        initial_distance = distance(touch_a, touch_b)
        if initial_distance <= 0:
            logger.debug("Pinch start ignored: touch points coincide")
            self._pinch = None
            return

        if current_fov is None:
            current_fov = self._view_state.current.fov
        self._pinch = PinchSession(initial_distance, current_fov)

    def on_pinch_move(self, touch_a: Point, touch_b: Point) -> None:
        """
        Scale the fov by the ratio of initial to current finger distance.

        Spreading the fingers shrinks the fov (zoom in).
        """
        session = self._pinch
        if session is None:
            return

        current_distance = distance(touch_a, touch_b)
        if current_distance <= 0:
            return

        scale = session.initial_distance / current_distance
        self._view_state.set_target_fov(session.initial_fov * scale)

    def on_pinch_end(self) -> None:
        self._pinch = None

    def on_wheel(self, delta_y: float) -> None:
        """Shift the target fov by the wheel delta."""
        self._view_state.set_target_fov(self._view_state.target.fov + delta_y * WHEEL_FOV_STEP)

    def reset(self) -> None:
        """Drop any open session."""
        self._pointer = None
        self._pinch = None

