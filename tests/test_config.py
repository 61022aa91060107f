from __future__ import annotations

import json

import pytest

from cloud_policies.loader import DEFAULT_NAMESPACE
from cloud_policies.utils.config import LoaderSettings, load_config, save_config


def test_defaults():
    settings = LoaderSettings()
    assert settings.namespace == DEFAULT_NAMESPACE
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_load_yaml_section(tmp_path):
    path = tmp_path / "loader.yaml"
    path.write_text("policy_loader:\n  namespace: org.sim\n  log_level: debug\n")

    settings = load_config(path)

    assert settings.namespace == "org.sim"
    assert settings.log_level == "DEBUG"


def test_load_json_top_level(tmp_path):
    path = tmp_path / "loader.json"
    path.write_text(json.dumps({"namespace": "sim", "log_file": "logs/loader.log"}))

    settings = load_config(path)

    assert settings.namespace == "sim"
    assert settings.log_file == "logs/loader.log"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")

    assert load_config(path) == LoaderSettings()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_unsupported_format(tmp_path):
    path = tmp_path / "loader.toml"
    path.write_text("namespace = 'x'")

    with pytest.raises(ValueError, match="Unsupported"):
        load_config(path)


@pytest.mark.parametrize("content", ["namespace: 'not a namespace'", "log_level: LOUD", "- a\n- b"])
def test_invalid_content(tmp_path, content):
    path = tmp_path / "loader.yaml"
    path.write_text(content)

    with pytest.raises(ValueError):
        load_config(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "loader.yaml"
    path.write_text("namespace: [unclosed")

    with pytest.raises(ValueError, match="Failed to parse"):
        load_config(path)


@pytest.mark.parametrize("name", ["saved.yaml", "saved.json"])
def test_save_then_load(tmp_path, name):
    settings = LoaderSettings(namespace="org.sim", log_level="WARNING")
    path = tmp_path / "nested" / name

    save_config(settings, path)

    assert load_config(path) == settings


def test_save_rejects_unsupported_format_without_touching_the_file(tmp_path):
    path = tmp_path / "nested" / "loader.toml"

    with pytest.raises(ValueError, match="Unsupported"):
        save_config(LoaderSettings(), path)

    assert not path.exists()
    assert not path.parent.exists()


def test_save_does_not_truncate_existing_file_on_bad_format(tmp_path):
    path = tmp_path / "loader.toml"
    path.write_text("namespace = 'x'")

    with pytest.raises(ValueError):
        save_config(LoaderSettings(), path)

    assert path.read_text() == "namespace = 'x'"
