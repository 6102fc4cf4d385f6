import math

import pytest

from pv.core.view_state import ViewParams, ViewStateManager
from pv.core.viewer_config import FOV_SMOOTHING, GYRO_SMOOTHING, ViewerConfig


def test_initial_state_uses_configured_fov():
    state = ViewStateManager(ViewerConfig(fov=90))
    assert state.current == ViewParams(0.0, 0.0, 90)
    assert state.target == ViewParams(0.0, 0.0, 90)


def test_smoothing_step_half_way():
    """smoothness 50 moves half the remaining distance per step"""
    state = ViewStateManager(ViewerConfig(smoothness=50))
    state.set_target_orientation(1.0, 0.0)

    current = state.smoothing_step()
    assert current.yaw == pytest.approx(0.5)


def test_smoothing_converges_monotonically_without_overshoot():
    state = ViewStateManager(ViewerConfig(smoothness=50))
    state.set_target_orientation(1.0, 0.0)

    previous = 0.0
    for _ in range(60):
        yaw = state.smoothing_step().yaw
        assert previous <= yaw <= 1.0
        previous = yaw
    assert previous == pytest.approx(1.0)


def test_smoothness_100_jumps_to_target():
    state = ViewStateManager(ViewerConfig(smoothness=100))
    state.set_target_orientation(0.7, -0.3)
    current = state.smoothing_step()
    assert current.yaw == pytest.approx(0.7)
    assert current.pitch == pytest.approx(-0.3)


def test_fov_uses_fixed_factor():
    for smoothness in (10, 90):
        state = ViewStateManager(ViewerConfig(smoothness=smoothness, fov=75))
        state.set_target_fov(95)
        current = state.smoothing_step()
        assert current.fov == pytest.approx(75 + 20 * FOV_SMOOTHING)


def test_gyro_mode_uses_fixed_factor():
    state = ViewStateManager(ViewerConfig(smoothness=90))
    state.set_target_orientation(1.0, 0.0)
    current = state.smoothing_step(gyro_active=True)
    assert current.yaw == pytest.approx(GYRO_SMOOTHING)


def test_target_pitch_is_clamped_when_set():
    config = ViewerConfig(pitch_limit=45)
    state = ViewStateManager(config)
    limit = math.radians(45)

    state.set_target_orientation(0.0, 3.0)
    assert state.target.pitch == pytest.approx(limit)

    state.add_target_pitch(-10.0)
    assert state.target.pitch == pytest.approx(-limit)

    for _ in range(100):
        assert abs(state.smoothing_step().pitch) <= limit + 1e-12


def test_target_yaw_is_unbounded():
    state = ViewStateManager()
    state.add_target_yaw(10.0)
    state.add_target_yaw(10.0)
    assert state.target.yaw == pytest.approx(20.0)


def test_target_fov_is_clamped():
    state = ViewStateManager(ViewerConfig(min_fov=40, max_fov=100))
    state.set_target_fov(500)
    assert state.target.fov == 100
    state.set_target_fov(-5)
    assert state.target.fov == 40


def test_reset_view_sets_current_and_target():
    state = ViewStateManager(ViewerConfig(fov=75))
    state.set_target_orientation(1.0, 0.5)
    state.set_target_fov(60)
    state.smoothing_step()

    state.reset_view(80)

    assert state.current == ViewParams(0.0, 0.0, 80)
    assert state.target == ViewParams(0.0, 0.0, 80)


def test_reset_callback_errors_are_logged(caplog):
    state = ViewStateManager()
    seen = []

    def bad(view):
        raise RuntimeError("boom")

    state.add_reset_callback(bad)
    state.add_reset_callback(seen.append)
    state.reset_view()

    assert seen == [ViewParams(0.0, 0.0, 75)]
    assert "Error in reset callback" in caplog.text


def test_replacing_config_reclamps_target():
    state = ViewStateManager(ViewerConfig(pitch_limit=80, max_fov=120, fov=75))
    state.set_target_orientation(0.0, math.radians(70))
    state.set_target_fov(110)

    state.config = ViewerConfig(pitch_limit=30, max_fov=100)

    assert state.target.pitch == pytest.approx(math.radians(30))
    assert state.target.fov == 100


def test_returned_params_are_copies():
    state = ViewStateManager()
    current = state.current
    current.yaw = 5.0
    assert state.current.yaw == 0.0


def test_replacing_config_clamps_current_view():
    """current pitch and fov respect shrunken limits before the next step"""
    state = ViewStateManager(ViewerConfig(smoothness=100, pitch_limit=80, max_fov=120))
    state.set_target_orientation(0.0, math.radians(70))
    state.set_target_fov(110)
    for _ in range(100):
        state.smoothing_step()
    assert state.current.fov > 100

    state.config = ViewerConfig(smoothness=10, pitch_limit=10, max_fov=100)

    assert state.current.pitch == pytest.approx(math.radians(10))
    assert state.current.fov == 100
    current = state.smoothing_step()
    assert abs(current.pitch) <= math.radians(10) + 1e-12
