# File: config.py

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError

CONFIG_PATH = Path("configs/app.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "app": {"name": "Air Bersih – Water Safety Engine"},
    "database": {"path": None},
    "logging": {"file": "logs/water_safety.log", "level": "INFO"},
    "reports": {"output_dir": "reports"},
    "history": {"file": "data/history/area_safety.json"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load config YAML di atas nilai default.

    File yang tidak ada bukan error; default dipakai apa adanya.

    Raises:
        ConfigurationError: Jika YAML tidak valid atau bukan mapping.
    """
    config_path = Path(path) if path else CONFIG_PATH
    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return _merge(DEFAULT_CONFIG, data)
