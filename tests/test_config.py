import json

import pytest

from putting_analyzer.config import ConfigManager
from putting_analyzer.models import Period
from putting_analyzer.utils import ConfigError


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.setattr("putting_analyzer.config.load_dotenv", lambda: None)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def _write_config(tmp_path, payload) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_missing_file_uses_defaults(tmp_path):
    cfg = ConfigManager(str(tmp_path / "absent.json"))

    assert cfg.openai.model == "gpt-4o"
    assert cfg.openai.image_detail == "high"
    assert cfg.stride_length == pytest.approx(0.7)
    assert cfg.default_period is Period.ALL
    assert cfg.api.openai_api_key is None


def test_sections_are_read_and_normalized(tmp_path):
    path = _write_config(
        tmp_path,
        {
            "api": {"openai_api_key": "sk-json-key"},
            "openai": {"model": "gpt-4o-mini", "image_detail": "AUTO", "max_tokens": 800},
            "analytics": {"stride_length": 0.75, "default_period": "Month"},
        },
    )

    cfg = ConfigManager(path)
    assert cfg.openai.model == "gpt-4o-mini"
    assert cfg.openai.image_detail == "auto"
    assert cfg.openai.max_tokens == 800
    assert cfg.stride_length == pytest.approx(0.75)
    assert cfg.default_period is Period.MONTH
    assert cfg.openai_api_key == "sk-json-key"


def test_environment_key_wins_over_file(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env-key")
    path = _write_config(tmp_path, {"api": {"openai_api_key": "sk-json-key"}})

    assert ConfigManager(path).openai_api_key == "sk-env-key"


def test_placeholder_key_is_ignored(tmp_path):
    path = _write_config(tmp_path, {"api": {"openai_api_key": "YOUR_OPENAI_KEY"}})
    cfg = ConfigManager(path)

    assert cfg.api.openai_api_key is None
    with pytest.raises(ConfigError):
        _ = cfg.openai_api_key


def test_scan_mode_requires_key(tmp_path):
    cfg = ConfigManager(_write_config(tmp_path, {}))

    cfg.validate_for_mode("summary")
    with pytest.raises(ConfigError, match="scan"):
        cfg.validate_for_mode("scan")


@pytest.mark.parametrize(
    "payload,section",
    [
        ({"analytics": {"stride_length": 0}}, "analytics"),
        ({"analytics": {"default_period": "fortnight"}}, "analytics"),
        ({"openai": {"temperature": 3}}, "openai"),
        ({"openai": {"image_detail": "ultra"}}, "openai"),
    ],
)
def test_invalid_sections_raise_config_error(tmp_path, payload, section):
    with pytest.raises(ConfigError) as exc_info:
        ConfigManager(_write_config(tmp_path, payload))
    assert exc_info.value.config_key == section


def test_top_level_must_be_object(tmp_path):
    with pytest.raises(ConfigError):
        ConfigManager(_write_config(tmp_path, ["not", "an", "object"]))


def test_to_dict_redacts_key(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abcdef123456")
    data = ConfigManager(_write_config(tmp_path, {})).to_dict()

    assert data["api"]["openai_api_key"] == "sk-abc..."
    assert data["analytics"]["default_period"] == "all"
