"""Shared test fixtures for stache tests."""

import os
from collections.abc import Callable, Mapping
from io import StringIO

import pytest
from rich.console import Console

from stache import DictLoader, Engine
from stache.utils import create_null_logger


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep STACHE_* variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith("STACHE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_engine() -> Callable[..., Engine]:
    """Build an engine over in-memory templates with logging disabled."""

    def _make(sources: Mapping[str, str | bytes], **loader_kwargs: int) -> Engine:
        return Engine(DictLoader(sources, **loader_kwargs), logger=create_null_logger())

    return _make


@pytest.fixture
def render(make_engine: Callable[..., Engine]) -> Callable[..., str]:
    """Render a single template source against a context."""

    def _render(source: str, context: object = None, **partials: str) -> str:
        engine = make_engine({"main": source, **partials})
        return engine.render_to_string("main", {} if context is None else context)

    return _render


class FailingSink:
    """A sink that accepts a number of writes and then raises OSError."""

    def __init__(self, accept: int) -> None:
        self.accept: int = accept
        self.buffer: StringIO = StringIO()

    def write(self, text: str, /) -> int:
        if self.accept <= 0:
            msg = "disk full"
            raise OSError(msg)
        self.accept -= 1
        return self.buffer.write(text)


@pytest.fixture
def failing_sink() -> Callable[[int], FailingSink]:
    return FailingSink
