"""Recursive-descent tree builder."""

from stache._position import LineIndex
from stache.exceptions import (
    ExpectedCloseDelimiterError,
    ExpectedOpenDelimiterError,
    NestingTooDeepError,
    OutOfMemoryError,
    TemplateSyntaxError,
    UnexpectedEndSectionError,
    UnexpectedEOFError,
)

from ._matcher import (
    CLOSE_SIGIL,
    CLOSE_TAG,
    COMMENT_SIGIL,
    OPEN_DELIMITER,
    OPEN_TAG,
    SECTION_SIGILS,
    find_section_end,
)
from ._nodes import Node, Partial, Section, Text, Variable
from ._scanner import scan_tag

DEFAULT_MAX_DEPTH = 100

PARTIAL_SIGIL = ">"
EXISTS_SIGIL = "#"


def _skip_line_end(source: str, offset: int, end: int) -> int:
    """Return the offset past one `\\n` or `\\r\\n` at `offset`, if present."""
    if source.startswith("\r\n", offset, end):
        return offset + 2
    if source.startswith("\n", offset, end):
        return offset + 1
    return offset


class TreeBuilder:
    """Builds node trees for spans of a single template source.

    All offsets are absolute positions in `source`, so errors raised at any
    nesting depth carry offsets that resolve to the right line and column.
    """

    __slots__ = ("max_depth", "source")

    def __init__(self, source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.source: str = source
        self.max_depth: int = max_depth

    def build(self, start: int = 0, end: int | None = None, depth: int = 0) -> tuple[Node, ...]:
        """Parse `source[start:end]` into a node tuple.

        Args:
            start: Offset where the span begins.
            end: Offset where the span ends; defaults to the end of source.
            depth: Number of sections enclosing this span.

        Returns:
            The nodes of the span in source order.

        Raises:
            TemplateSyntaxError: If the span is malformed. The error carries
                the absolute offset of the failure.
        """
        source = self.source
        if end is None:
            end = len(source)

        nodes: list[Node] = []
        text_start = cursor = start
        while True:
            tag_start = source.find(OPEN_DELIMITER, cursor, end)
            if tag_start == -1:
                break
            if tag_start + 1 >= end or source[tag_start + 1] != OPEN_DELIMITER:
                raise ExpectedOpenDelimiterError(offset=tag_start)

            if tag_start > text_start:
                nodes.append(Text(source[text_start:tag_start]))

            sigil_at = tag_start + len(OPEN_TAG)
            if sigil_at >= end:
                raise UnexpectedEOFError(offset=end)

            sigil = source[sigil_at]
            if sigil in SECTION_SIGILS:
                section, cursor = self._section(tag_start, sigil_at, end, depth)
                nodes.append(section)
            elif sigil == COMMENT_SIGIL:
                comment_end = source.find(CLOSE_TAG, sigil_at + 1, end)
                if comment_end == -1:
                    raise ExpectedCloseDelimiterError(offset=end)
                cursor = _skip_line_end(source, comment_end + len(CLOSE_TAG), end)
            elif sigil == CLOSE_SIGIL:
                raise UnexpectedEndSectionError(offset=tag_start)
            elif sigil == PARTIAL_SIGIL:
                tag = scan_tag(source, sigil_at + 1, end)
                nodes.append(Partial(tag.identifier))
                cursor = _skip_line_end(source, tag.end, end)
            else:
                tag = scan_tag(source, sigil_at, end)
                nodes.append(Variable(tag.identifier))
                cursor = tag.end
            text_start = cursor

        if text_start < end:
            nodes.append(Text(source[text_start:end]))
        return tuple(nodes)

    def _section(
        self, tag_start: int, sigil_at: int, end: int, depth: int
    ) -> tuple[Section, int]:
        """Parse a section from its open tag through its matching close tag.

        Returns:
            The section node and the offset where parsing resumes.
        """
        if depth >= self.max_depth:
            raise NestingTooDeepError(limit=self.max_depth, offset=tag_start)

        source = self.source
        tag = scan_tag(source, sigil_at + 1, end)
        body_start = _skip_line_end(source, tag.end, end)
        bounds = find_section_end(source, tag.identifier, body_start, end)

        section = Section(
            name=tag.identifier,
            exists=source[sigil_at] == EXISTS_SIGIL,
            body=source[body_start : bounds.close_start],
            children=self.build(body_start, bounds.close_start, depth + 1),
        )
        return section, _skip_line_end(source, bounds.close_end, end)


def parse(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Node, ...]:
    """Compile template source into a node tree.

    Args:
        source: The template text.
        max_depth: Maximum number of nested sections.

    Returns:
        The top-level nodes in source order.

    Raises:
        TemplateSyntaxError: If the source is malformed. `position` is set to
            the line and column of the failure.
        OutOfMemoryError: If the tree cannot be allocated.
    """
    try:
        return TreeBuilder(source, max_depth=max_depth).build()
    except TemplateSyntaxError as e:
        if e.offset is not None:
            e.position = LineIndex(source).position(e.offset)
        raise
    except MemoryError as e:
        raise OutOfMemoryError(cause=e) from e
