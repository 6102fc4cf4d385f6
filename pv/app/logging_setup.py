from __future__ import annotations

import logging
import logging.config
import os
import queue
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from pv.app.app_settings_manager import AppSettingsManager, RunMode
from pv.utils.log_util import level_from_name


def default_log_dir(app_name: str) -> Path:
    base = Path.home() / f".{app_name.lower()}" / "logs"
    base.mkdir(parents=True, exist_ok=True)
    return base


def build_config(app_name: str,
                 root_level: int | str | None = None,
                 console_level: int | str = logging.INFO,
                 log_dir: Path | None = None) -> dict:
    """Build a logging config dict."""
    root_level = level_from_name(root_level or os.getenv("PV_LOG_LEVEL", "INFO"))
    console_level = level_from_name(console_level)
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    fmt = "%(asctime)s.%(msecs)03dZ %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt, "datefmt": datefmt,
            },
        },
        "handlers": {
            # Records go through a queue, the file is written by the listener.
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {"class": "logging.StreamHandler", "formatter": "standard",
                        "level": console_level},
        },
        "root": {"level": root_level, "handlers": ["queue", "console"]},
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("PV_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": fmt,
            "datefmt": datefmt
        },
    }


class LogSystem:
    """Thin wrapper owning the QueueListener that writes the log file."""
    def __init__(self, app_name: str, level: int | str | None = None,
                 console_level: int | str = logging.INFO):
        cfg = build_config(app_name, level, console_level)
        cfg_for_dict = {k: v for k, v in cfg.items() if not k.startswith("_")}
        logging.config.dictConfig(cfg_for_dict)

        qh: QueueHandler | None = None
        for h in logging.getLogger().handlers:
            if isinstance(h, QueueHandler):
                qh = h
                break
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        self._console_handler: logging.Handler | None = None
        for h in logging.getLogger().handlers:
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
                self._console_handler = h
                break

        file_settings = cfg["_file_settings"]
        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(
            logging.Formatter(file_settings["format"], file_settings["datefmt"]))

        self.log_file = Path(file_settings["filename"])
        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()
        self._stopped = False

    @classmethod
    def from_levels(cls, app_name: str, root_level: int, console_level: int) -> LogSystem:
        return cls(app_name, level=root_level, console_level=console_level)

    def apply_levels(self, root_level: int, console_level: int | None = None, file_level: int | None = None) -> None:
        """Update log levels after startup."""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self):
        """Flush the queue and close the log file. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        self.listener.stop()
        self._file_handler.close()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Switch log levels by run mode and the configured logging level."""
    mode = getattr(settings, "run_mode", RunMode.PRODUCTION)

    if mode == RunMode.DEVELOPMENT or mode == RunMode.VERBOSE:
        root = logging.DEBUG
        console = logging.DEBUG
        file = logging.DEBUG
    else:
        root = logging.DEBUG
        console = level_from_name(getattr(settings, "logging_level", "INFO"))
        file = logging.DEBUG

    logs.apply_levels(root_level=root, console_level=console, file_level=file)
