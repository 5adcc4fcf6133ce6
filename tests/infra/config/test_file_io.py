import json
from pathlib import Path

import pytest

from omnisearch.infra.config.file_io import (
    _load_by_extension,
    copy_default_config,
    load_config,
    save_config,
    save_config_file,
)

SETTINGS_TOML = """
[general]
site = "myanimelist"
request_delay = 0.3

[general.cache]
backend = "memory"
"""

SETTINGS = {
    "general": {
        "site": "myanimelist",
        "request_delay": 0.3,
        "cache": {"backend": "memory"},
    }
}


@pytest.fixture
def no_user_settings(tmp_path, monkeypatch):
    """Point the per-user settings file at a path that does not exist."""
    missing = tmp_path / "user" / "settings.json"
    monkeypatch.setattr("omnisearch.infra.config.file_io.SETTING_PATH", missing)
    return missing


# ================================================================
# load_config() lookup order
# ================================================================


def test_explicit_path_wins(tmp_path, monkeypatch, no_user_settings):
    explicit = tmp_path / "custom.toml"
    explicit.write_text(SETTINGS_TOML, encoding="utf-8")
    (tmp_path / "settings.json").write_text('{"general": {}}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config(config_path=explicit) == SETTINGS


def test_missing_explicit_path_falls_through(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.toml").write_text(SETTINGS_TOML, encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config(config_path=tmp_path / "nope.toml") == SETTINGS


def test_local_toml_before_json(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.toml").write_text(SETTINGS_TOML, encoding="utf-8")
    (tmp_path / "settings.json").write_text('{"general": {}}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == SETTINGS


def test_local_json(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.json").write_text(json.dumps(SETTINGS), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == SETTINGS


def test_user_settings_fallback(tmp_path, monkeypatch):
    user_file = tmp_path / "user.json"
    user_file.write_text(json.dumps(SETTINGS), encoding="utf-8")
    monkeypatch.setattr("omnisearch.infra.config.file_io.SETTING_PATH", user_file)
    monkeypatch.chdir(tmp_path)

    assert load_config() == SETTINGS


def test_nothing_found(tmp_path, monkeypatch, no_user_settings):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config()


# ================================================================
# _load_by_extension
# ================================================================


@pytest.mark.parametrize(
    "name, content, message",
    [
        ("broken.json", "{ invalid json", "Invalid JSON in"),
        ("broken.toml", "a = [1,2,,3]", "Invalid TOML in"),
        ("settings.yaml", "general: {}", "Unsupported config file extension"),
        ("list.json", "[1, 2, 3]", "Config root must be a dict"),
    ],
)
def test_load_by_extension_errors(tmp_path, name, content, message):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert message in str(exc.value)


def test_load_by_extension_is_case_insensitive(tmp_path):
    path = tmp_path / "SETTINGS.TOML"
    path.write_text(SETTINGS_TOML, encoding="utf-8")

    assert _load_by_extension(path) == SETTINGS


# ================================================================
# copy_default_config
# ================================================================


def test_copy_default_config_uses_bundled_file(tmp_path, monkeypatch):
    sample = tmp_path / "sample.toml"
    sample.write_text(SETTINGS_TOML, encoding="utf-8")
    monkeypatch.setattr("omnisearch.infra.config.file_io.DEFAULT_CONFIG_FILE", sample)

    target = tmp_path / "out" / "settings.toml"
    copy_default_config(target)

    assert target.read_text(encoding="utf-8") == SETTINGS_TOML


def test_bundled_sample_config_is_valid(tmp_path):
    """The shipped sample parses and names the default site."""
    target = tmp_path / "settings.toml"
    copy_default_config(target)

    cfg = load_config(target)
    assert cfg["general"]["site"] == "myanimelist"
    assert cfg["general"]["cache"]["key_prefix"] == "input:"
    assert "myanimelist" in cfg["sites"]


# ================================================================
# save_config / save_config_file
# ================================================================


def test_save_config_writes_json(tmp_path):
    out = tmp_path / "nested" / "settings.json"

    save_config(SETTINGS, out)

    assert json.loads(out.read_text(encoding="utf-8")) == SETTINGS


def test_save_config_failure_propagates(tmp_path, monkeypatch):
    def fail_open(*args, **kwargs):
        raise OSError("read-only")

    monkeypatch.setattr(Path, "open", fail_open)

    with pytest.raises(OSError):
        save_config(SETTINGS, tmp_path / "settings.json")


def test_save_config_file_converts_toml(tmp_path):
    source = tmp_path / "in.toml"
    source.write_text(SETTINGS_TOML, encoding="utf-8")
    out = tmp_path / "out.json"

    save_config_file(source, out)

    assert json.loads(out.read_text(encoding="utf-8")) == SETTINGS


def test_save_config_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        save_config_file(tmp_path / "missing.toml", tmp_path / "out.json")

    bad = tmp_path / "bad.toml"
    bad.write_text("invalid = [1,,2]", encoding="utf-8")
    with pytest.raises(ValueError):
        save_config_file(bad, tmp_path / "out.json")
