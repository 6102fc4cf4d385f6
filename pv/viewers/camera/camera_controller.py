from __future__ import annotations

import math
import logging

import numpy as np
import vtk

from pv.core.view_state import ViewParams

logger = logging.getLogger(__name__)

# Camera sits at the centre of the panorama sphere.
SPHERE_CENTER = (0.0, 0.0, 0.0)
VIEW_UP = (0.0, 1.0, 0.0)


def direction_from_view(yaw: float, pitch: float) -> np.ndarray:
    """
    Unit look direction for a yaw/pitch pair.

    Rotation order is yaw about +Y, then pitch about the rotated X axis,
    starting from the -Z forward axis. Positive pitch looks up.

    :param yaw: Yaw in radians
    :param pitch: Pitch in radians
    :return: Direction (x, y, z)
    """
    cp = math.cos(pitch)
    return np.array([
        -math.sin(yaw) * cp,
        math.sin(pitch),
        -math.cos(yaw) * cp,
    ])


def view_from_direction(direction) -> tuple[float, float]:
    """
    Yaw/pitch for a look direction (inverse of direction_from_view).

    :return: yaw, pitch in radians
    """
    v = np.asarray(direction, dtype=float)
    r = np.linalg.norm(v)
    if r == 0:
        return 0.0, 0.0
    v = v / r
    pitch = math.asin(max(-1.0, min(1.0, v[1])))
    yaw = math.atan2(-v[0], -v[2])
    return yaw, pitch


class CameraController:
    """Applies the controller's view parameters to a VTK camera."""

    def __init__(self, camera: vtk.vtkCamera, renderer: vtk.vtkRenderer | None = None) -> None:
        self.camera = camera
        self.renderer = renderer
        # Focal point first so position and focal point never coincide.
        self.camera.SetFocalPoint(*direction_from_view(0.0, 0.0))
        self.camera.SetPosition(*SPHERE_CENTER)

    def apply(self, params: ViewParams) -> None:
        """
        Point the camera along yaw/pitch and set the vertical view angle.

        :param params: View from ViewController.tick()
        """
        direction = direction_from_view(params.yaw, params.pitch)
        focal_point = tuple(float(c) for c in np.asarray(SPHERE_CENTER) + direction)

        self.camera.SetFocalPoint(*focal_point)
        self.camera.SetViewUp(*VIEW_UP)
        self.camera.SetViewAngle(params.fov)

        if self.renderer is not None:
            self.renderer.ResetCameraClippingRange()

        logger.debug(f"Camera applied: {params}")

    def get_view(self) -> ViewParams:
        """Read yaw/pitch/fov back from the camera."""
        fp = np.array(self.camera.GetFocalPoint())
        pos = np.array(self.camera.GetPosition())
        yaw, pitch = view_from_direction(fp - pos)
        return ViewParams(yaw, pitch, self.camera.GetViewAngle())

    def get_focal_point(self) -> tuple[float, float, float]:
        """Get the current camera focal point."""
        return tuple(self.camera.GetFocalPoint())
