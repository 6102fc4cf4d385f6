from __future__ import annotations

import logging
from typing import Sequence

import vtk
from PySide6 import QtCore, QtWidgets
from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor

from pv.app.app_settings_manager import AppSettingsManager
from pv.core.image_navigator import ImageNavigator
from pv.viewers.camera.camera_controller import CameraController
from pv.viewers.controllers.view_controller import GyroPermission, ViewController

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16


def desktop_gyro_capability() -> GyroPermission:
    """Desktop hosts have no orientation sensor."""
    return GyroPermission.UNAVAILABLE


def wheel_delta(angle_delta_y: int) -> float:
    """
    Convert a Qt wheel angle delta to a scroll delta.

    Qt reports +120 per notch away from the user; a positive scroll delta
    zooms out, so the sign is flipped.
    """
    return -float(angle_delta_y)


class PanoramaWindow(QtWidgets.QMainWindow):
    """
    Main window: a VTK view driven by ViewController.

    Qt mouse and wheel events on the VTK widget are fed to the controller;
    a frame timer applies controller.tick() to the camera.
    """

    def __init__(self, settings_mgr: AppSettingsManager, sources: Sequence[str] = ()) -> None:
        super().__init__()
        self.settings_mgr = settings_mgr

        self.vtk_widget = QVTKRenderWindowInteractor(self)
        self.setCentralWidget(self.vtk_widget)

        self.renderer = vtk.vtkRenderer()
        self.vtk_widget.GetRenderWindow().AddRenderer(self.renderer)
        self.interactor = self.vtk_widget.GetRenderWindow().GetInteractor()

        self.controller = ViewController(settings_mgr.viewer_config())
        self.camera = CameraController(self.renderer.GetActiveCamera(), self.renderer)
        self.navigator: ImageNavigator[str] = ImageNavigator(sources)
        self.controller.attach_navigator(self.navigator)
        self.navigator.add_image_changed_callback(lambda index, source: self._update_title())
        self._update_title()

        self.vtk_widget.installEventFilter(self)

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_frame)

        self.show()
        self.interactor.Initialize()
        self._timer.start()

    def _update_title(self) -> None:
        source = self.navigator.current
        if source is None:
            self.setWindowTitle("pv - Panorama Viewer")
        else:
            self.setWindowTitle(
                f"pv - {source} ({self.navigator.index + 1}/{self.navigator.count})")

    def _on_frame(self) -> None:
        self.camera.apply(self.controller.tick())
        self.vtk_widget.GetRenderWindow().Render()

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self.vtk_widget:
            etype = event.type()
            if etype == QtCore.QEvent.MouseButtonPress and event.button() == QtCore.Qt.LeftButton:
                pos = event.position()
                self.controller.feed_pointer_down(pos.x(), pos.y(), event.timestamp())
                return True
            if etype == QtCore.QEvent.MouseMove:
                pos = event.position()
                self.controller.feed_pointer_move(pos.x(), pos.y())
                return True
            if etype == QtCore.QEvent.MouseButtonRelease and event.button() == QtCore.Qt.LeftButton:
                self.controller.feed_pointer_up(event.position().x(), event.timestamp())
                return True
            if etype == QtCore.QEvent.Leave:
                self.controller.feed_pointer_leave()
                return False
            if etype == QtCore.QEvent.Wheel:
                self.controller.feed_wheel(wheel_delta(event.angleDelta().y()))
                return True
            if etype == QtCore.QEvent.KeyPress:
                return self._on_key(event.key())
        return super().eventFilter(obj, event)

    def _on_key(self, key: int) -> bool:
        if key == QtCore.Qt.Key_R:
            self.controller.reset_view()
        elif key == QtCore.Qt.Key_G:
            self.controller.toggle_gyro(desktop_gyro_capability)
        elif key == QtCore.Qt.Key_Left:
            self.navigator.prev()
        elif key == QtCore.Qt.Key_Right:
            self.navigator.next()
        else:
            return False
        return True

    def closeEvent(self, event) -> None:
        self._timer.stop()
        self.vtk_widget.Finalize()
        super().closeEvent(event)
