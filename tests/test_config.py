import os

from action_engine.config import DEFAULTS, EngineConfig, load_config


def test_defaults_when_nothing_configured(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("ACTION_ENGINE_"):
            monkeypatch.delenv(key)
    config = load_config(tmp_path / "missing.toml")
    assert config == EngineConfig()
    assert config.max_wait_ms == DEFAULTS["max_wait_ms"] == 30000
    assert config.default_wait_until == "networkidle2"
    assert config.stop_on_error is True


def test_toml_file_then_environment(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[engine]\nmax_wait_ms = 5000\nlog_prefix = "Tests"\nstop_on_error = false\n')
    monkeypatch.setenv("ACTION_ENGINE_MAX_WAIT_MS", "2000")

    config = load_config(path)

    assert config.max_wait_ms == 2000
    assert config.log_prefix == "Tests"
    assert config.stop_on_error is False


def test_from_mapping_coerces_strings():
    config = EngineConfig.from_mapping({"stop_on_error": "yes", "max_wait_ms": "100"})
    assert config.stop_on_error is True
    assert config.max_wait_ms == 100
