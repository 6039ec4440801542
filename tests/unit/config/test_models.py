"""Unit tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from stache import DEFAULT_MAX_SOURCE_BYTES, DictLoader, Engine
from stache.config import MAX_DEPTH_LIMIT, EngineConfig, LoggingConfig, LogLevel
from stache.parser import DEFAULT_MAX_DEPTH
from stache.utils import create_null_logger


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()

        assert config.extension == ""
        assert config.encoding == "utf-8"
        assert config.max_source_bytes == DEFAULT_MAX_SOURCE_BYTES
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.logging == LoggingConfig()

    def test_single_search_path_is_wrapped(self) -> None:
        config = EngineConfig.model_validate({"search_path": "templates"})

        assert config.search_path == (Path("templates"),)

    def test_search_path_list(self) -> None:
        config = EngineConfig.model_validate({"search_path": ["a", "b"]})

        assert config.search_path == (Path("a"), Path("b"))

    @pytest.mark.parametrize("field", ["max_depth", "max_source_bytes"])
    def test_limits_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            _ = EngineConfig.model_validate({field: 0})

    def test_max_depth_is_bounded(self) -> None:
        assert EngineConfig(max_depth=MAX_DEPTH_LIMIT).max_depth == MAX_DEPTH_LIMIT

        with pytest.raises(ValidationError):
            _ = EngineConfig(max_depth=MAX_DEPTH_LIMIT + 1)

    def test_deepest_allowed_nesting_renders(self) -> None:
        depth = MAX_DEPTH_LIMIT
        source = "{{#a}}" * depth + "x" + "{{/a}}" * depth
        engine = Engine(
            DictLoader({"deep": source}),
            config=EngineConfig(max_depth=depth),
            logger=create_null_logger(),
        )

        assert engine.render_to_string("deep", {"a": True}) == "x"

    def test_is_frozen(self) -> None:
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.max_depth = 3  # pyright: ignore[reportAttributeAccessIssue]

    def test_log_level_from_string(self) -> None:
        config = EngineConfig.model_validate({"logging": {"level": "debug"}})

        assert config.logging.level is LogLevel.DEBUG
