import json

import pytest

from air_alert_notifier import config
from air_alert_notifier.models.alerts import EventKind, Severity

BASE = {
    "region": "kyiv",
    "alert_on": "/sounds/on.mp3",
    "alert_off": "/sounds/off.mp3",
    "data_url": "https://example.com/alerts.json",
    "update_interval": 15,
}


def _write(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


def test_load_settings_defaults(tmp_path):
    settings = config.load_settings(_write(tmp_path, BASE), env={})

    assert settings.region == "kyiv"
    assert settings.data_url == "https://example.com/alerts.json"
    assert settings.update_interval == 15
    assert settings.request_timeout == 10.0
    assert settings.raise_profile.sound == "/sounds/on.mp3"
    assert settings.raise_profile.severity is Severity.WARNING
    assert settings.raise_profile.title == config.DEFAULT_RAISE_TITLE
    assert settings.clear_profile.sound == "/sounds/off.mp3"
    assert settings.clear_profile.severity is Severity.INFO
    assert settings.profile_for(EventKind.CLEAR) is settings.clear_profile


def test_default_body_mentions_region(tmp_path):
    settings = config.load_settings(_write(tmp_path, BASE), env={})

    body = settings.raise_profile.render_body("kyiv")
    assert body == "Увага! Повітряна тривога в регіоні: kyiv!"


def test_request_timeout_capped_by_short_interval(tmp_path):
    data = {**BASE, "update_interval": 3}
    settings = config.load_settings(_write(tmp_path, data), env={})
    assert settings.request_timeout == 3.0


def test_custom_profiles(tmp_path):
    data = {
        **BASE,
        "raise_title": "Alert",
        "raise_body": "Alert in {region}",
        "clear_title": "Clear",
        "clear_body": "Clear in {region}",
        "request_timeout": 4,
    }
    settings = config.load_settings(_write(tmp_path, data), env={})

    assert settings.raise_profile.title == "Alert"
    assert settings.clear_profile.render_body("lviv") == "Clear in lviv"
    assert settings.request_timeout == 4.0


def test_env_overrides(tmp_path):
    env = {
        "ALERT_REGION": "lviv",
        "ALERT_DATA_URL": "https://other.example/feed",
        "ALERT_UPDATE_INTERVAL": "30",
        "ALERT_REQUEST_TIMEOUT": "7.5",
    }
    settings = config.load_settings(_write(tmp_path, BASE), env=env)

    assert settings.region == "lviv"
    assert settings.data_url == "https://other.example/feed"
    assert settings.update_interval == 30
    assert settings.request_timeout == 7.5


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"update_interval": 0}, "update_interval"),
        ({"update_interval": -5}, "update_interval"),
        ({"update_interval": "abc"}, "update_interval"),
        ({"update_interval": True}, "update_interval"),
        ({"update_interval": 1.5}, "update_interval"),
        ({"region": ""}, "region"),
        ({"region": "   "}, "region"),
        ({"region": 42}, "region"),
        ({"data_url": ""}, "data_url"),
        ({"request_timeout": 0}, "request_timeout"),
        ({"request_timeout": "soon"}, "request_timeout"),
        ({"request_timeout": float("nan")}, "request_timeout"),
        ({"request_timeout": float("inf")}, "request_timeout"),
        ({"request_timeout": "nan"}, "request_timeout"),
        ({"request_timeout": "-inf"}, "request_timeout"),
        ({"raise_title": 5}, "raise_title"),
    ],
)
def test_invalid_field_reported(tmp_path, overrides, field):
    with pytest.raises(config.ConfigError) as excinfo:
        config.load_settings(_write(tmp_path, {**BASE, **overrides}), env={})
    assert excinfo.value.field == field


@pytest.mark.parametrize("missing", ["region", "alert_on", "alert_off", "data_url", "update_interval"])
def test_missing_required_field(tmp_path, missing):
    data = {k: v for k, v in BASE.items() if k != missing}
    with pytest.raises(config.ConfigError, match=f"{missing}: is required"):
        config.load_settings(_write(tmp_path, data), env={})


def test_invalid_env_interval_reported(tmp_path):
    with pytest.raises(config.ConfigError) as excinfo:
        config.load_settings(_write(tmp_path, BASE), env={"ALERT_UPDATE_INTERVAL": "0"})
    assert excinfo.value.field == "update_interval"


def test_missing_file(tmp_path):
    with pytest.raises(config.ConfigError) as excinfo:
        config.load_settings(str(tmp_path / "nope.json"), env={})
    assert excinfo.value.field == "config"


def test_file_not_json_object(tmp_path):
    with pytest.raises(config.ConfigError, match="JSON object"):
        config.load_settings(_write(tmp_path, ["kyiv"]), env={})


def test_file_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(config.ConfigError, match="not valid JSON"):
        config.load_settings(str(path), env={})


def test_resolve_config_path():
    assert config.resolve_config_path("a.json", env={"ALERT_CONFIG": "b.json"}) == "a.json"
    assert config.resolve_config_path(None, env={"ALERT_CONFIG": "b.json"}) == "b.json"
    assert config.resolve_config_path(None, env={}) is None


def test_json_nan_timeout_rejected(tmp_path):
    path = tmp_path / "config.json"
    body = json.dumps(BASE)[:-1] + ', "request_timeout": NaN}'
    path.write_text(body, encoding="utf-8")

    with pytest.raises(config.ConfigError, match="finite"):
        config.load_settings(str(path), env={})


@pytest.mark.parametrize("raw", ["nan", "inf", "Infinity"])
def test_env_non_finite_timeout_rejected(tmp_path, raw):
    with pytest.raises(config.ConfigError) as excinfo:
        config.load_settings(_write(tmp_path, BASE), env={"ALERT_REQUEST_TIMEOUT": raw})
    assert excinfo.value.field == "request_timeout"


def test_region_used_verbatim(tmp_path):
    settings = config.load_settings(
        _write(tmp_path, {**BASE, "region": "Kyiv City ", "data_url": " https://example.com/a.json "}),
        env={},
    )
    assert settings.region == "Kyiv City "
    assert settings.data_url == "https://example.com/a.json"
