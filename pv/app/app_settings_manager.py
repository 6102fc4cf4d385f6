from __future__ import annotations
from dataclasses import dataclass, asdict, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict
from PySide6.QtCore import QSettings
import logging

from pv.core.viewer_config import ConfigError, ViewerConfig

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value
    def __repr__(self):
        return self.value


# ----------------------
# Defaults
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "view": ViewerConfig().to_dict(),
}

SECTIONS = ("general", "view")

# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"

@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    view: ViewerConfig = field(default_factory=ViewerConfig)

# ----------------------
# Utility
# ----------------------
def _truthy(s: str) -> bool:
    return s.strip().lower() in ("1", "true", "yes", "on")


def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    mode = str(v).strip().lower()
    try:
        return RunMode(mode)
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])

def _validate_logging_level(v: str) -> str:
    v = str(v).upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

def _to_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    return _truthy(str(v))

def _to_float(v: Any) -> float:
    if isinstance(v, bool):
        raise ValueError(f"Not a number: {v!r}")
    return float(v)


# QSettings (INI) returns strings, so every view value is converted on load.
_VIEW_CONVERTERS: Dict[str, Callable[[Any], Any]] = {
    "drag_sensitivity": _to_float,
    "gyro_sensitivity": _to_float,
    "smoothness": _to_float,
    "pitch_limit": _to_float,
    "fov": _to_float,
    "invert_drag": _to_bool,
    "invert_gyro": _to_bool,
    "min_fov": _to_float,
    "max_fov": _to_float,
}


# ---------------------
# AppSettingManager
# ---------------------
class AppSettingsManager:
    """
    Manages general application settings and the viewer configuration.
    Code-side DEFAULTS are the base, user values in QSettings override them.
    Stored values are validated on load; invalid ones fall back to defaults.
    set_* validate, reject invalid values with ConfigError and persist
    accepted values to QSettings immediately.
    """
    def __init__(self, org_domain: str = "PanoView.org", app_name: str = "PV"):
        self._settings = QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # Read
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    def viewer_config(self) -> ViewerConfig:
        """Get the validated, immutable viewer configuration."""
        return self._data.view

    # Write
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_viewer_config(self, config: ViewerConfig) -> None:
        """Persist a whole viewer configuration."""
        for key, value in config.to_dict().items():
            self._settings.setValue(f"view/{key}", value)
        self._data.view = config
        logger.info(f"Viewer settings saved: {config}")

    def update_view(self, **changes: Any) -> ViewerConfig:
        """
        Change some viewer settings and persist the result.

        :param changes: ViewerConfig field names and new values
        :return: The new configuration
        :raises ConfigError: If a name is unknown or a value is out of range
        """
        names = {f.name for f in fields(ViewerConfig)}
        unknown = set(changes) - names
        if unknown:
            raise ConfigError(f"Unknown view settings: {sorted(unknown)}")
        try:
            converted = {k: _VIEW_CONVERTERS[k](v) for k, v in changes.items()}
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid view setting: {e}") from e
        config = replace(self._data.view, **converted)
        self.set_viewer_config(config)
        return config

    # Reset
    def reset_all_to_default(self) -> None:
        """Remove all user settings."""
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()
        logger.info("Settings reset to defaults")

    def reset_section(self, section: str) -> None:
        """Reset one section to defaults."""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "view": self._data.view.to_dict(),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- Internal ---------------
    def _load_effective(self) -> AppSettingsData:
        """Apply QSettings overrides on DEFAULTS, validate and build the model."""
        merged = self._apply_qsettings_overrides(DEFAULTS)
        return self._make_model_from(merged)

    def _apply_qsettings_overrides(self, base: dict[str, Any]) -> dict[str, Any]:
        """
        Read the dict based settings and apply QSettings overrides.
        :param base:
        :return: apply QSettings overrides
        """
        # general
        g = dict(base.get("general", {}))
        v = self._settings.value("general/run_mode", None)
        if v is not None:
            g["run_mode"] = _validate_run_mode(v).value
        v = self._settings.value("general/logging_level", None)
        if v is not None:
            g["logging_level"] = _validate_logging_level(v)

        # view
        vw = dict(base.get("view", {}))
        for key, convert in _VIEW_CONVERTERS.items():
            v = self._settings.value(f"view/{key}", None)
            if v is None:
                continue
            try:
                vw[key] = convert(v)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid stored value view/{key}={v!r}")

        return {"general": g, "view": vw}

    def _make_model_from(self, merged: dict[str, Any]) -> AppSettingsData:
        """
        making model from merged dict and returning merged AppSettingsData
        :param merged:
        :return: merged AppSettingsData
        """
        g = merged.get("general", {})
        vw = merged.get("view", {})
        try:
            view = ViewerConfig.from_dict(vw)
        except ConfigError as e:
            logger.warning(f"Stored viewer settings rejected, using defaults: {e}")
            view = ViewerConfig()
        return AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g.get("run_mode", DEFAULTS["general"]["run_mode"])),
                logging_level=_validate_logging_level(g.get("logging_level", DEFAULTS["general"]["logging_level"])),
            ),
            view=view,
        )
