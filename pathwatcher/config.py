import copy
import os

import toml
import yaml

DEFAULT_CONFIG_PATH = "./config.toml"
ENV_CONFIG_DIR_VAR = "PATHWATCHER_CONFIG_DIR"

DEFAULT_CONFIG = {
    "logging": {
        "level": "INFO",
        "log_dir": None,
        "log_file": "pathwatcher.log",
        "console": True,
    },
    "watcher": {
        "stop_timeout": 5.0,
        "paths": [],
    },
}


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(cli_config_path=None):
    """
    Load configuration from a TOML file, merged over the built-in defaults.

    Precedence:
      1. cli_config_path if provided.
      2. Environment variable PATHWATCHER_CONFIG_DIR (looking for config.toml).
      3. Default to ./config.toml.

    A missing file is an error for 1. and 2.; when the implicit default
    ./config.toml does not exist the defaults are returned.

    Returns:
        dict: The configuration settings.
    """
    if cli_config_path:
        config_path = cli_config_path
    elif os.environ.get(ENV_CONFIG_DIR_VAR):
        config_path = os.path.join(os.environ[ENV_CONFIG_DIR_VAR], "config.toml")
    else:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return copy.deepcopy(DEFAULT_CONFIG)
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        config_data = toml.load(f)

    return _merge(DEFAULT_CONFIG, config_data)


def load_watch_list(watch_list_path):
    """
    Load the list of paths to watch from a YAML file.

    The file holds a ``watch_targets`` list of paths.

    Args:
        watch_list_path (str): Path to the YAML file.

    Returns:
        list: Paths to watch.
    """
    if not os.path.exists(watch_list_path):
        raise FileNotFoundError(f"Watch list file not found: {watch_list_path}")
    with open(watch_list_path, "r") as f:
        data = yaml.safe_load(f) or {}
    return list(data.get("watch_targets", []))


def load_watch_lists(path):
    """
    Load watch targets from a YAML file or a directory containing YAML files.
    If a directory is provided, all .yaml/.yml files are loaded in name order
    and their targets concatenated.

    Args:
        path (str): Path to a YAML file or directory.

    Returns:
        list: Paths to watch.
    """
    if os.path.isdir(path):
        targets = []
        for filename in sorted(os.listdir(path)):
            if filename.endswith((".yaml", ".yml")):
                targets.extend(load_watch_list(os.path.join(path, filename)))
        return targets
    return load_watch_list(path)
