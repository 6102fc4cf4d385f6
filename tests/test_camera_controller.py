import math

import numpy as np
import pytest
import vtk

from pv.core.view_state import ViewParams
from pv.viewers.camera.camera_controller import (
    CameraController,
    direction_from_view,
    view_from_direction,
)


def test_direction_at_rest_looks_forward():
    np.testing.assert_allclose(direction_from_view(0.0, 0.0), (0.0, 0.0, -1.0), atol=1e-12)


def test_positive_pitch_looks_up():
    d = direction_from_view(0.0, math.radians(30))
    assert d[1] == pytest.approx(0.5)
    assert np.linalg.norm(d) == pytest.approx(1.0)


def test_direction_round_trip():
    yaw, pitch = view_from_direction(direction_from_view(1.2, -0.4))
    assert yaw == pytest.approx(1.2)
    assert pitch == pytest.approx(-0.4)


def test_zero_direction():
    assert view_from_direction((0.0, 0.0, 0.0)) == (0.0, 0.0)


def test_apply_sets_vtk_camera():
    camera = vtk.vtkCamera()
    renderer = vtk.vtkRenderer()
    renderer.SetActiveCamera(camera)
    controller = CameraController(camera, renderer)

    controller.apply(ViewParams(yaw=0.5, pitch=0.2, fov=60))

    assert camera.GetPosition() == pytest.approx((0.0, 0.0, 0.0))
    assert camera.GetViewAngle() == pytest.approx(60)
    view = controller.get_view()
    assert view.yaw == pytest.approx(0.5)
    assert view.pitch == pytest.approx(0.2)
    assert view.fov == pytest.approx(60)
