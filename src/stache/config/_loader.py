# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

import json
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stache.exceptions import ConfigError, ConfigLoadError

from ._models import EngineConfig

ENV_PREFIX = "STACHE_"
PYPROJECT_NAME = "pyproject.toml"


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
    """
    result: dict[str, Any] = dict(base)  # pyright: ignore[reportExplicitAny]
    for key, override_val in override.items():
        base_val = result.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = override_val
    return result


def set_nested_key(
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    dotted_key: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path, creating tables as needed.

    Args:
        data: Dictionary to modify in place.
        dotted_key: Key path such as "logging.level".
        value: Value to store.
    """
    *parents, leaf = dotted_key.split(".")
    current = data
    for part in parents:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[leaf] = value


def _parse_env_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse environment variable value with type inference.

    Order of type inference:
        1. Boolean: true/false (case-insensitive)
        2. Integer: parseable as int
        3. JSON array: starts with [ ends with ]
        4. String: anything else
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    try:
        return int(value)
    except ValueError:
        pass

    if value.startswith("[") and value.endswith("]"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def parse_env_vars(prefix: str = ENV_PREFIX) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into config dictionary.

    Environment variable naming:
        - Add prefix (STACHE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> STACHE_LOGGING__LEVEL

    Args:
        prefix: Environment variable prefix.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if not config_key:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, _parse_env_value(value))

    return result


def _read_config_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read the stache settings from a config file.

    A `pyproject.toml` contributes its `[tool.stache]` table; any other file
    is a stache config in its entirety. Relative search paths are anchored at
    the file's directory.
    """
    try:
        data = read_toml_file(path)
    except OSError as e:
        msg = f"Config file could not be read: {path}"
        raise ConfigLoadError(msg, path=path) from e

    if path.name == PYPROJECT_NAME:
        data = data.get("tool", {}).get("stache", {})

    search_path = data.get("search_path")
    if isinstance(search_path, str):
        search_path = [search_path]
    if isinstance(search_path, list):
        data["search_path"] = [str(path.parent / entry) for entry in search_path]

    return data


def load_config(path: Path | None = None, *, env: bool = True) -> EngineConfig:
    """Load engine configuration.

    Sources are merged in precedence order (later wins): defaults, the
    config file at `path`, then `STACHE_*` environment variables.

    Args:
        path: Optional path to a `stache.toml` or `pyproject.toml`.
        env: Whether to apply environment variable overrides.

    Returns:
        The validated configuration.

    Raises:
        ConfigLoadError: If the config file cannot be read or parsed.
        ConfigError: If the merged settings fail validation.
    """
    data: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    if path is not None:
        data = deep_merge(data, _read_config_file(path))
    if env:
        data = deep_merge(data, parse_env_vars())

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e
