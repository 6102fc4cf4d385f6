import math

import pytest

from pv.core.viewer_config import ConfigError, ViewerConfig


def test_defaults():
    config = ViewerConfig()
    assert config.drag_sensitivity == 1.0
    assert config.gyro_sensitivity == 1.0
    assert config.smoothness == 50
    assert config.pitch_limit == 80
    assert config.fov == 75
    assert config.invert_drag is False
    assert config.invert_gyro is False
    assert (config.min_fov, config.max_fov) == (40, 100)


def test_derived_values():
    config = ViewerConfig(smoothness=25, pitch_limit=90, invert_drag=True)
    assert config.smoothing_factor == pytest.approx(0.25)
    assert config.pitch_limit_rad == pytest.approx(math.pi / 2)
    assert config.drag_invert == -1
    assert config.gyro_invert == 1


@pytest.mark.parametrize("kwargs", [
    {"smoothness": 0},
    {"smoothness": 101},
    {"pitch_limit": 0},
    {"pitch_limit": -10},
    {"pitch_limit": 91},
    {"drag_sensitivity": 0},
    {"gyro_sensitivity": -1},
    {"fov": 30},
    {"fov": 130},
    {"min_fov": 100, "max_fov": 40},
    {"fov": float("nan")},
    {"smoothness": "50"},
])
def test_out_of_range_is_rejected(kwargs):
    with pytest.raises(ConfigError):
        ViewerConfig(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        ViewerConfig(smoothness=0)


def test_is_immutable():
    config = ViewerConfig()
    with pytest.raises(AttributeError):
        config.fov = 90


def test_from_dict_ignores_unknown_keys():
    config = ViewerConfig.from_dict({"fov": 90, "max_fov": 120, "unknown": 1})
    assert config.fov == 90
    assert config.max_fov == 120
    assert config.smoothness == 50


def test_to_dict_round_trip():
    config = ViewerConfig(drag_sensitivity=2.0, invert_gyro=True)
    assert ViewerConfig.from_dict(config.to_dict()) == config
