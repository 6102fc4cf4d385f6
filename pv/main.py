import logging
import sys

from PySide6 import QtWidgets

from pv.app.app_settings_manager import AppSettingsManager
from pv.app.logging_setup import LogSystem, apply_logging_policy
from pv.ui.panorama_window import PanoramaWindow

logger = logging.getLogger(__name__)


def main():
    logs = LogSystem("pv")

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv)

    logger.info("App start")
    settings_mgr = AppSettingsManager()
    apply_logging_policy(logs, settings_mgr)

    # Image paths from the command line; decoding is left to the host.
    main_window = PanoramaWindow(settings_mgr, sys.argv[1:])

    # Stop logging when Qt quits
    app.aboutToQuit.connect(logs.stop)
    try:
        rc = app.exec()
        logger.info("App exit (rc=%s)", rc)
        sys.exit(rc)
    finally:
        logs.stop()


if __name__ == "__main__":
    main()
