"""Loading render data files for the CLI."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

import orjson
import yaml

if TYPE_CHECKING:
    from pathlib import Path

SUPPORTED_SUFFIXES = (".json", ".toml", ".yaml", ".yml")


def load_data(path: Path) -> object:
    """Load render data from a JSON, TOML or YAML file.

    The format is chosen by file suffix.

    Args:
        path: Path to the data file.

    Returns:
        The parsed data.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the suffix is unsupported or the content is invalid.
        yaml.YAMLError: If YAML content is invalid.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        return orjson.loads(path.read_bytes())
    if suffix == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(path.read_text(encoding="utf-8"))

    msg = f"Unsupported data format '{suffix}', expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
    raise ValueError(msg)
