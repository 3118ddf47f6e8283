# -------------------------------------
# configuration
# -------------------------------------
"""
Optional YAML configuration.

Example snippetgen.yml:

    store: user_keywords.db
    indent: 4
    core_include: <iostream>
    using_namespace: true
    entry_point: "int main("
    block_terminator: "."
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .fragments import CORE_INCLUDE
from .placeholders import ENTRY_POINT
from .store import DEFAULT_STORE

DEFAULT_CONFIG = "snippetgen.yml"


@dataclass(frozen=True)
class Config:
    store: str = DEFAULT_STORE
    indent: int = 4
    core_include: str = CORE_INCLUDE
    using_namespace: bool = True
    entry_point: str = ENTRY_POINT
    block_terminator: str = "."


def _check(key: str, value: Any, expected: type) -> Any:
    # bool is an int subclass; keep them apart
    if expected is int and isinstance(value, bool):
        raise ConfigError(f"config key '{key}' must be an integer")
    if not isinstance(value, expected):
        raise ConfigError(f"config key '{key}' must be {expected.__name__}, got {type(value).__name__}")
    if expected is int and value < 0:
        raise ConfigError(f"config key '{key}' must be >= 0")
    if expected is str and not value and key != "store":
        raise ConfigError(f"config key '{key}' must not be empty")
    return value


def config_from_dict(data: dict[str, Any]) -> Config:
    """Build a Config from a mapping; unknown keys are ignored."""
    known = {f.name: f.type for f in fields(Config)}
    types = {"str": str, "int": int, "bool": bool}
    values = {}
    for key, value in data.items():
        if key in known:
            values[key] = _check(key, value, types[known[key]])
    return replace(Config(), **values)


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file. None means snippetgen.yml in the working
              directory, used only if it exists.

    Raises:
        FileNotFoundError: if an explicit path does not exist
        ConfigError: if the file is not valid YAML or has wrong types
    """
    if path is None:
        path = Path(DEFAULT_CONFIG)
        if not path.is_file():
            return Config()

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in '{path}': {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"config file '{path}' must contain a mapping")
    return config_from_dict(data)
