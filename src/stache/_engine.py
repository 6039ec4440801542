"""The template engine facade."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from stache._cache import TemplateCache
from stache._loaders import FileSystemLoader
from stache.config import EngineConfig, load_config
from stache.exceptions import InvalidBindingShapeError, TemplateError, format_error
from stache.render import Record, Renderer, bind
from stache.utils import create_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from stache._loaders import TemplateLoader
    from stache.render import OutputSink


class Engine:
    """Compiles templates once and renders them repeatedly.

    The engine owns its template cache; every compiled template lives until
    the engine is discarded.

    Example:
        engine = Engine(DictLoader({"greeting": "Hello {{name}}!"}))
        engine.render_to_string("greeting", {"name": "World"})
        # 'Hello World!'
    """

    def __init__(
        self,
        loader: TemplateLoader | None = None,
        *,
        config: EngineConfig | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            loader: Source loader. Defaults to a FileSystemLoader over the
                configured search path.
            config: Engine settings. Defaults to `EngineConfig()`.
            logger: Structured logger. Defaults to one built from
                `config.logging`.
        """
        self.config: EngineConfig = config if config is not None else EngineConfig()
        if loader is None:
            loader = FileSystemLoader(
                self.config.search_path,
                max_size=self.config.max_source_bytes,
                extension=self.config.extension,
            )
        self.loader: TemplateLoader = loader
        self.logger: FilteringBoundLogger = (
            logger
            if logger is not None
            else create_logger(
                level=self.config.logging.level.value,
                log_format=self.config.logging.format.value,  # type: ignore[arg-type]
                log_file=self.config.logging.file,
            )
        )
        self._cache: TemplateCache = TemplateCache(
            loader,
            encoding=self.config.encoding,
            max_depth=self.config.max_depth,
            logger=self.logger,
        )
        self._renderer: Renderer = Renderer(self._cache, max_depth=self.config.max_depth)

    @classmethod
    def from_config_file(cls, path: Path, *, loader: TemplateLoader | None = None) -> Engine:
        """Create an engine from a `stache.toml` or `pyproject.toml` file.

        Args:
            path: Path to the config file.
            loader: Optional loader overriding the configured search path.

        Returns:
            A new engine.
        """
        return cls(loader, config=load_config(path))

    @property
    def cache(self) -> TemplateCache:
        """The engine's compiled template cache."""
        return self._cache

    def compile_all(self, identifiers: Iterable[str]) -> None:
        """Compile a set of templates before rendering.

        Args:
            identifiers: Identifiers to compile.

        Raises:
            TemplateError: The first failure, with `identifier`, `kind` and
                `position` describing where it occurred.
        """
        self._cache.batch_compile(identifiers)

    def render(self, identifier: str, context: object, sink: OutputSink) -> None:
        """Render a template to a sink.

        Args:
            identifier: The template identifier.
            context: Record-shaped data: a mapping, pydantic model, dataclass
                instance or bound `Record`.
            sink: Receiver for the rendered text. Text written before a
                failure stays in the sink.

        Raises:
            InvalidBindingShapeError: If `context` is not record-shaped.
            TemplateError: If compiling or writing fails.
        """
        value = bind(context)
        if not isinstance(value, Record):
            msg = f"context must be record-shaped, got {type(context).__name__}"
            raise InvalidBindingShapeError(msg, identifier=identifier)

        log = self.logger.bind(identifier=identifier)
        log.debug("render_started")
        try:
            self._renderer.render(identifier, value, sink)
        except TemplateError as e:
            log.info("render_failed", kind=e.kind.value, error=e.message)
            raise

    def render_to_string(self, identifier: str, context: object) -> str:
        """Render a template and return the output.

        Args:
            identifier: The template identifier.
            context: Record-shaped data.

        Returns:
            The rendered text.
        """
        buffer = StringIO()
        self.render(identifier, context, buffer)
        return buffer.getvalue()

    def print_error(self, error: TemplateError, out: OutputSink) -> None:
        """Write a one-line ``[line:column] message`` report for `error`."""
        out.write(format_error(error))
