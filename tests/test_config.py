import pytest
import toml
import yaml

from pathwatcher import config


def test_load_config(tmp_path):
    # Create a temporary config file.
    config_data = {
        "logging": {"level": "DEBUG"},
        "watcher": {"paths": ["/tmp"]},
    }
    config_file = tmp_path / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(config_data, f)

    loaded_config = config.load_config(str(config_file))
    assert loaded_config["logging"]["level"] == "DEBUG"
    assert loaded_config["watcher"]["paths"] == ["/tmp"]
    # Untouched keys keep their defaults.
    assert loaded_config["watcher"]["stop_timeout"] == 5.0
    assert loaded_config["logging"]["log_file"] == "pathwatcher.log"


def test_load_config_from_env_dir(tmp_path, monkeypatch):
    with open(tmp_path / "config.toml", "w") as f:
        toml.dump({"watcher": {"stop_timeout": 1.0}}, f)
    monkeypatch.setenv(config.ENV_CONFIG_DIR_VAR, str(tmp_path))

    loaded_config = config.load_config()
    assert loaded_config["watcher"]["stop_timeout"] == 1.0


def test_load_config_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.delenv(config.ENV_CONFIG_DIR_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    loaded_config = config.load_config()
    assert loaded_config == config.DEFAULT_CONFIG
    assert loaded_config is not config.DEFAULT_CONFIG


def test_load_config_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        config.load_config(str(tmp_path / "missing.toml"))


def test_load_watch_list(tmp_path):
    yaml_file = tmp_path / "watch.yaml"
    with open(yaml_file, "w") as f:
        yaml.dump({"watch_targets": ["/var/log/syslog", "/etc"]}, f)

    assert config.load_watch_list(str(yaml_file)) == ["/var/log/syslog", "/etc"]


def test_load_watch_lists_from_directory(tmp_path):
    with open(tmp_path / "a.yaml", "w") as f:
        yaml.dump({"watch_targets": ["/one"]}, f)
    with open(tmp_path / "b.yml", "w") as f:
        yaml.dump({"watch_targets": ["/two"]}, f)
    (tmp_path / "notes.txt").write_text("ignored")

    assert config.load_watch_lists(str(tmp_path)) == ["/one", "/two"]


def test_load_watch_list_empty_file(tmp_path):
    yaml_file = tmp_path / "empty.yaml"
    yaml_file.write_text("")
    assert config.load_watch_list(str(yaml_file)) == []
