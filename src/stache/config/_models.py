"""Configuration models.

This module provides the Pydantic models for engine settings.
"""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stache._loaders import DEFAULT_MAX_SOURCE_BYTES
from stache.parser import DEFAULT_MAX_DEPTH

# Parsing and rendering recurse once per nesting level
MAX_DEPTH_LIMIT = 200


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class EngineConfig(BaseModel):
    """Top-level engine configuration.

    Attributes:
        search_path: Directories searched for template files, highest
            precedence first.
        extension: Suffix appended to identifiers when loading files.
        encoding: Encoding of template sources.
        max_source_bytes: Maximum size of a single template source.
        max_depth: Maximum nesting of sections, partials and callable
            sections, at most `MAX_DEPTH_LIMIT`.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    search_path: tuple[Path, ...] = (Path(),)
    extension: str = ""
    encoding: str = "utf-8"
    max_source_bytes: int = Field(default=DEFAULT_MAX_SOURCE_BYTES, gt=0)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0, le=MAX_DEPTH_LIMIT)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("search_path", mode="before")
    @classmethod
    def _coerce_search_path(cls, value: object) -> object:
        """Accept a single directory where a list is expected."""
        if isinstance(value, (str, Path)):
            return (value,)
        return value
