"""Section boundary matching."""

from dataclasses import dataclass

from stache.exceptions import (
    ExpectedCloseDelimiterError,
    ExpectedEndSectionError,
    ExpectedOpenDelimiterError,
    UnexpectedEOFError,
)

from ._scanner import scan_tag

OPEN_DELIMITER = "{"
OPEN_TAG = "{{"
CLOSE_TAG = "}}"

SECTION_SIGILS = frozenset("#^")
CLOSE_SIGIL = "/"
COMMENT_SIGIL = "!"


@dataclass(frozen=True, slots=True)
class SectionBounds:
    """Where a section's close tag sits in the source.

    Attributes:
        close_start: Offset of the close tag's `{{`, which is also where the
            section body ends.
        close_end: Offset just past the close tag.
    """

    close_start: int
    close_end: int


def find_section_end(source: str, name: str, start: int, end: int) -> SectionBounds:
    """Locate the close tag matching a just-opened section.

    Depth starts at one for the section already opened. Nested open tags (`#`
    or `^`) with the same name increase it and close tags with the same name
    decrease it. Tags with other names are scanned over without affecting
    depth; they are parsed properly once the builder recurses into the body.

    Args:
        source: The full template source.
        name: Name of the opened section.
        start: Offset where the section body starts.
        end: Offset where the enclosing span ends.

    Returns:
        The bounds of the matching close tag.

    Raises:
        ExpectedEndSectionError: If the span ends before depth reaches zero.
        ExpectedOpenDelimiterError: If a bare `{` appears in the body.
        UnexpectedEOFError: If `{{` ends the span.
        ExpectedCloseDelimiterError: If a comment in the body is unterminated.
    """
    depth = 1
    cursor = start
    while True:
        tag_start = source.find(OPEN_DELIMITER, cursor, end)
        if tag_start == -1:
            raise ExpectedEndSectionError(name=name, offset=end)
        if tag_start + 1 >= end or source[tag_start + 1] != OPEN_DELIMITER:
            raise ExpectedOpenDelimiterError(offset=tag_start)

        sigil_at = tag_start + len(OPEN_TAG)
        if sigil_at >= end:
            raise UnexpectedEOFError(offset=end)

        sigil = source[sigil_at]
        if sigil == COMMENT_SIGIL:
            comment_end = source.find(CLOSE_TAG, sigil_at + 1, end)
            if comment_end == -1:
                raise ExpectedCloseDelimiterError(offset=end)
            cursor = comment_end + len(CLOSE_TAG)
            continue

        if sigil in SECTION_SIGILS or sigil == CLOSE_SIGIL:
            tag = scan_tag(source, sigil_at + 1, end)
            if tag.identifier == name:
                depth += -1 if sigil == CLOSE_SIGIL else 1
                if depth == 0:
                    return SectionBounds(close_start=tag_start, close_end=tag.end)
        else:
            tag = scan_tag(source, sigil_at, end)
        cursor = tag.end
