"""Engine configuration.

Settings are read from a TOML file and `STACHE_*` environment variables:

    from stache.config import load_config

    config = load_config(Path("stache.toml"))
    config.max_depth  # 100
"""

from ._loader import (
    deep_merge,
    load_config,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import MAX_DEPTH_LIMIT, EngineConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "MAX_DEPTH_LIMIT",
    "EngineConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "load_config",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
