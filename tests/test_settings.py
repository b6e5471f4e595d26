import json

import pytest

from supersorter.errors import ConfigError
from supersorter.settings import ANIMATION_SPEED_DEFAULT, Settings, load_settings


def write(tmp_path, data):
    p = tmp_path / "settings.json"
    p.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(p)


def test_missing_file_gives_defaults(tmp_path):
    s = load_settings(str(tmp_path / "nope.json"))
    assert s == Settings()
    assert s.delay_ms == ANIMATION_SPEED_DEFAULT
    assert s.value_range == (5, 500)


def test_overrides_are_applied(tmp_path):
    s = load_settings(write(tmp_path, {"array_size": 32, "delay_ms": 2, "max_value": 99.0}))
    assert s.array_size == 32
    assert s.delay_ms == 2.0
    assert s.max_value == 99 and isinstance(s.max_value, int)


def test_malformed_file_is_ignored(tmp_path, caplog):
    s = load_settings(write(tmp_path, "{not json"))
    assert s == Settings()
    assert "Ignoring" in caplog.text


def test_unknown_keys_are_ignored(tmp_path, caplog):
    s = load_settings(write(tmp_path, {"colour": "red"}))
    assert s == Settings()
    assert "colour" in caplog.text


@pytest.mark.parametrize("data", [{"array_size": "big"}, {"array_size": 2.5}, {"fps": True},
                                  {"min_value": 10, "max_value": 1}, {"fps": 0}])
def test_bad_values_raise(tmp_path, data):
    with pytest.raises(ConfigError):
        load_settings(write(tmp_path, data))


def test_fps_override_sets_frame_interval(tmp_path):
    s = load_settings(write(tmp_path, {"fps": 20}))
    assert s.frame_interval == pytest.approx(0.05)
