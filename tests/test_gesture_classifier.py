import math

import pytest

from pv.core.gesture_classifier import GestureClassifier, SwipeDirection
from pv.core.view_state import ViewStateManager
from pv.core.viewer_config import BASE_DRAG_SENSITIVITY, ViewerConfig


@pytest.fixture
def config():
    return ViewerConfig()


@pytest.fixture
def state(config):
    return ViewStateManager(config)


@pytest.fixture
def gestures(state):
    return GestureClassifier(state)


def test_drag_rotates_target(gestures, state, config):
    gestures.on_pointer_down(100, 100, 0)
    gestures.on_pointer_move(110, 95, config)

    assert state.target.yaw == pytest.approx(10 * BASE_DRAG_SENSITIVITY)
    assert state.target.pitch == pytest.approx(-5 * BASE_DRAG_SENSITIVITY)


def test_drag_uses_last_position(gestures, state, config):
    gestures.on_pointer_down(0, 0, 0)
    gestures.on_pointer_move(10, 0, config)
    gestures.on_pointer_move(30, 0, config)
    assert state.target.yaw == pytest.approx(30 * BASE_DRAG_SENSITIVITY)


def test_drag_sensitivity_and_invert(state):
    config = ViewerConfig(drag_sensitivity=2.0, invert_drag=True)
    gestures = GestureClassifier(state)
    gestures.on_pointer_down(0, 0, 0)
    gestures.on_pointer_move(10, 10, config)

    assert state.target.yaw == pytest.approx(-20 * BASE_DRAG_SENSITIVITY)
    assert state.target.pitch == pytest.approx(-20 * BASE_DRAG_SENSITIVITY)


def test_drag_pitch_stays_within_limit(gestures, state, config):
    limit = math.radians(config.pitch_limit)
    gestures.on_pointer_down(0, 0, 0)
    y = 0
    for step in (300, 300, 300, -2000, 50, -50):
        y += step
        gestures.on_pointer_move(0, y, config)
        assert abs(state.target.pitch) <= limit
        assert abs(state.smoothing_step().pitch) <= limit


def test_move_without_session_is_ignored(gestures, state, config):
    gestures.on_pointer_move(50, 50, config)
    assert state.target.yaw == 0.0
    assert gestures.on_pointer_up(500, 10) is None


def test_fast_long_swipe_requests_next(gestures):
    gestures.on_pointer_down(500, 200, 0)
    assert gestures.on_pointer_up(380, 150) is SwipeDirection.SWIPE_RIGHT
    assert not gestures.is_dragging


def test_swipe_right_means_next():
    assert SwipeDirection.SWIPE_RIGHT is SwipeDirection.NEXT
    assert SwipeDirection.SWIPE_LEFT is SwipeDirection.PREV
    assert SwipeDirection.NEXT == "next"
    assert str(SwipeDirection.PREV) == "prev"


def test_swipe_toward_right_requests_prev(gestures):
    gestures.on_pointer_down(100, 200, 0)
    assert gestures.on_pointer_up(250, 100) is SwipeDirection.PREV


def test_slow_swipe_is_not_a_swipe(gestures):
    gestures.on_pointer_down(500, 200, 0)
    assert gestures.on_pointer_up(380, 400) is None


@pytest.mark.parametrize("end_x, end_t", [
    (400, 100),  # exactly 100px is not enough
    (380, 300),  # exactly 300ms is too slow
    (450, 50),
])
def test_swipe_thresholds_are_strict(gestures, end_x, end_t):
    gestures.on_pointer_down(500, 0, 0)
    assert gestures.on_pointer_up(end_x, end_t) is None


def test_pointer_leave_closes_without_swipe(gestures):
    gestures.on_pointer_down(500, 0, 0)
    gestures.on_pointer_leave()
    assert not gestures.is_dragging
    assert gestures.on_pointer_up(100, 10) is None


def test_pinch_inverse_relation_is_clamped(gestures, state):
    gestures.on_pinch_start((0, 0), (200, 0), current_fov=75)
    gestures.on_pinch_move((0, 0), (100, 0))
    # 75 * 200 / 100 = 150, clamped to max_fov
    assert state.target.fov == 100


def test_pinch_spread_zooms_in(gestures, state):
    gestures.on_pinch_start((0, 0), (100, 0), current_fov=80)
    gestures.on_pinch_move((0, 0), (0, 160))
    assert state.target.fov == pytest.approx(50)

    gestures.on_pinch_move((0, 0), (1000, 0))
    assert state.target.fov == 40


def test_pinch_start_defaults_to_rendered_fov(gestures, state):
    gestures.on_pinch_start((0, 0), (3, 4))
    assert gestures.pinch_session.initial_distance == pytest.approx(5)
    assert gestures.pinch_session.initial_fov == state.current.fov


def test_pinch_start_cancels_drag(gestures):
    gestures.on_pointer_down(0, 0, 0)
    gestures.on_pinch_start((0, 0), (100, 0))
    assert not gestures.is_dragging
    assert gestures.is_pinching


def test_pointer_down_cancels_pinch(gestures, state, config):
    """a drag works again even if the pinch end was never reported"""
    gestures.on_pinch_start((0, 0), (100, 0))
    gestures.on_pointer_down(0, 0, 0)
    assert gestures.is_dragging
    assert not gestures.is_pinching

    gestures.on_pointer_move(100, 0, config)
    assert state.target.yaw != 0.0

    gestures.on_pinch_move((0, 0), (50, 0))
    assert state.target.fov == 75


def test_pinch_move_without_session_is_ignored(gestures, state):
    gestures.on_pinch_move((0, 0), (10, 0))
    assert state.target.fov == 75


def test_degenerate_pinch_is_ignored(gestures, state):
    gestures.on_pinch_start((5, 5), (5, 5))
    assert not gestures.is_pinching

    gestures.on_pinch_start((0, 0), (100, 0))
    gestures.on_pinch_move((1, 1), (1, 1))
    assert state.target.fov == 75


def test_wheel_changes_fov_within_bounds(gestures, state):
    gestures.on_wheel(100)
    assert state.target.fov == pytest.approx(80)

    for _ in range(50):
        gestures.on_wheel(100)
        assert 40 <= state.target.fov <= 100
    assert state.target.fov == 100

    gestures.on_wheel(-10000)
    assert state.target.fov == 40
