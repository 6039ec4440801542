"""Template rendering engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from stache.exceptions import NestingTooDeepError, RenderIOError
from stache.parser import DEFAULT_MAX_DEPTH, Partial, Section, Text, Variable, parse

from ._values import Absent, Bool, Lambda, Record, Seq, String

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stache._cache import TemplateCache
    from stache.parser import Node

    from ._values import Value


class OutputSink(Protocol):
    """An append-only text receiver, such as an open text file or StringIO."""

    def write(self, text: str, /) -> object: ...


class Renderer:
    """Walks compiled node trees against bound values.

    Each walk tracks the current context and, for lookups that miss in a
    record, one enclosing outer context. Partials are fetched through the
    template cache and rendered with the context of the including template.
    """

    __slots__ = ("cache", "max_depth")

    def __init__(self, cache: TemplateCache, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.cache: TemplateCache = cache
        self.max_depth: int = max_depth

    def render(self, identifier: str, context: Value, sink: OutputSink) -> None:
        """Render a cached (or newly compiled) template to a sink.

        Args:
            identifier: The template identifier.
            context: The bound context value.
            sink: Receiver for the rendered text.

        Raises:
            TemplateError: If the template or a partial cannot be compiled.
            RenderIOError: If writing to the sink fails.
        """
        template = self.cache.fetch_or_compile(identifier)
        self.render_nodes(template.nodes, context, None, sink)

    def render_nodes(
        self,
        nodes: Sequence[Node],
        current: Value,
        outer: Value | None,
        sink: OutputSink,
        depth: int = 0,
    ) -> None:
        """Render a node sequence.

        Args:
            nodes: Nodes to render, in order.
            current: The context lookups resolve against.
            outer: The enclosing context, or None at the top level.
            sink: Receiver for the rendered text.
            depth: Number of sections, partials and callable sections enclosing
                `nodes`. Nesting past `max_depth` raises `NestingTooDeepError`.
        """
        for node in nodes:
            if isinstance(node, Text):
                _write(sink, node.content)
            elif isinstance(node, Variable):
                _write(sink, _lookup_text(node.name, current, outer))
            elif isinstance(node, Section):
                self._section(node, current, outer, sink, depth)
            elif isinstance(node, Partial):
                self._partial(node, current, outer, sink, depth)

    def _partial(
        self,
        node: Partial,
        current: Value,
        outer: Value | None,
        sink: OutputSink,
        depth: int,
    ) -> None:
        if depth >= self.max_depth:
            raise NestingTooDeepError(limit=self.max_depth, identifier=node.name)
        template = self.cache.fetch_or_compile(node.name)
        self.render_nodes(template.nodes, current, outer, sink, depth + 1)

    def _section(
        self,
        node: Section,
        current: Value,
        outer: Value | None,
        sink: OutputSink,
        depth: int,
    ) -> None:
        if depth >= self.max_depth:
            raise NestingTooDeepError(limit=self.max_depth, identifier=node.name)

        value: Value | None = None
        if isinstance(current, Record) and current.has(node.name):
            value = current.get(node.name)

        if not node.exists:
            if value is None or value == Bool(False):
                self.render_nodes(node.children, current, outer, sink, depth + 1)
            return

        if value is not None:
            self._dispatch(node, value, current, outer, sink, depth + 1)

    def _dispatch(
        self,
        node: Section,
        value: Value,
        current: Value,
        outer: Value | None,
        sink: OutputSink,
        depth: int,
    ) -> None:
        """Render a section body according to the shape of its bound value.

        `depth` is the depth of the body, one below the section itself.
        """
        if isinstance(value, Absent):
            return
        if isinstance(value, Bool):
            if value.value:
                self.render_nodes(node.children, current, outer, sink, depth)
        elif isinstance(value, Seq):
            records = [item for item in value.items if isinstance(item, Record)]
            if records:
                for record in records:
                    self.render_nodes(node.children, record, current, sink, depth)
            elif value.items:
                # Elements that are not records are never bound
                self.render_nodes(node.children, current, outer, sink, depth)
        elif isinstance(value, String):
            self.render_nodes(node.children, current, outer, sink, depth)
        elif isinstance(value, Lambda):
            # Sections in the expansion share the remaining depth
            expanded = parse(value(node.body), max_depth=max(self.max_depth - depth, 1))
            self.render_nodes(expanded, current, outer, sink, depth)
        else:
            # Records and scalars both become the new current context
            self.render_nodes(node.children, value, current, sink, depth)


def _lookup_text(name: str, current: Value, outer: Value | None) -> str:
    """Resolve a variable to the text it renders as."""
    if not isinstance(current, Record):
        return current.text()
    if current.has(name):
        return current.get(name).text()
    if isinstance(outer, Record) and outer.has(name):
        return outer.get(name).text()
    return ""


def _write(sink: OutputSink, text: str) -> None:
    if not text:
        return
    try:
        sink.write(text)
    except (OSError, ValueError) as e:
        raise RenderIOError(cause=e) from e
