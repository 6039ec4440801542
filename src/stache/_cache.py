"""Compiled template cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stache.exceptions import SourceReadError, TemplateError
from stache.parser import DEFAULT_MAX_DEPTH, parse
from stache.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from structlog.typing import FilteringBoundLogger

    from stache._loaders import TemplateLoader
    from stache.parser import Node


@dataclass(frozen=True, slots=True)
class Template:
    """A compiled template.

    Attributes:
        identifier: The identifier the template was loaded under.
        source: The decoded template source.
        nodes: The compiled node tree.
    """

    identifier: str
    source: str
    nodes: tuple[Node, ...]


class TemplateCache:
    """Maps template identifiers to compiled templates.

    Templates are compiled on first request and kept for the lifetime of the
    cache. There is no invalidation: a changed source is only picked up by a
    new cache. The cache does no locking of its own.
    """

    __slots__ = ("_logger", "_templates", "encoding", "loader", "max_depth")

    def __init__(
        self,
        loader: TemplateLoader,
        *,
        encoding: str = "utf-8",
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.loader: TemplateLoader = loader
        self.encoding: str = encoding
        self.max_depth: int = max_depth
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_null_logger()
        )
        self._templates: dict[str, Template] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def get(self, identifier: str) -> Template | None:
        """Return the cached template for `identifier` without compiling it."""
        return self._templates.get(identifier)

    def fetch_or_compile(self, identifier: str) -> Template:
        """Return the compiled template for `identifier`, compiling it if needed.

        Args:
            identifier: The template identifier.

        Returns:
            The cached template.

        Raises:
            TemplateError: If the source cannot be loaded, decoded or parsed.
                The error's `identifier` is set.
        """
        cached = self._templates.get(identifier)
        if cached is not None:
            self._logger.debug("template_cache_hit", identifier=identifier)
            return cached

        try:
            template = self._compile(identifier)
        except TemplateError as e:
            if e.identifier is None:
                e.identifier = identifier
            self._logger.info(
                "template_compile_failed",
                identifier=identifier,
                kind=e.kind.value,
                line=e.position.line,
                column=e.position.column,
            )
            raise

        self._templates[identifier] = template
        self._logger.debug(
            "template_compiled", identifier=identifier, nodes=len(template.nodes)
        )
        return template

    def batch_compile(self, identifiers: Iterable[str]) -> None:
        """Compile templates ahead of rendering.

        Useful to validate a template set before it is used. Templates that
        are already cached are not compiled again.

        Args:
            identifiers: Identifiers to compile, in order.

        Raises:
            TemplateError: The first failure encountered.
        """
        for identifier in identifiers:
            self.fetch_or_compile(identifier)

    def _compile(self, identifier: str) -> Template:
        data = self.loader.load(identifier)
        try:
            source = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            msg = f"could not decode template source as {self.encoding}"
            raise SourceReadError(msg, identifier=identifier, cause=e) from e
        except LookupError as e:
            msg = f"unknown template encoding {self.encoding!r}"
            raise SourceReadError(msg, identifier=identifier, cause=e) from e

        nodes = parse(source, max_depth=self.max_depth)
        return Template(identifier=identifier, source=source, nodes=nodes)
