"""Tag scanning."""

import re
from dataclasses import dataclass

from stache.exceptions import ExpectedCloseDelimiterError, UnexpectedNewlineError

CLOSE_DELIMITER = "}"

_TAG_STOP = re.compile(r"[}\n]")


@dataclass(frozen=True, slots=True)
class TagSpan:
    """The result of scanning one tag.

    Attributes:
        identifier: The tag content with surrounding spaces removed.
        end: Offset just past the tag's closing delimiters.
    """

    identifier: str
    end: int


def scan_tag(source: str, start: int, end: int, closing: int = 2) -> TagSpan:
    """Scan a tag's identifier up to its closing delimiters.

    `start` points just past the opening delimiters (and the sigil, if any).
    Scanning stops at the first `}`, which must be followed by the rest of a
    run of `closing` close delimiters.

    Args:
        source: The full template source.
        start: Offset of the first identifier character.
        end: Offset where the enclosing span ends; the tag may not extend
            past it.
        closing: Number of consecutive `}` characters that close the tag.

    Returns:
        The trimmed identifier and the offset past the closing delimiters.

    Raises:
        UnexpectedNewlineError: If a newline appears before the tag closes.
        ExpectedCloseDelimiterError: If the span ends before the tag closes,
            or the run of closing delimiters is too short.
    """
    match = _TAG_STOP.search(source, start, end)
    if match is None:
        raise ExpectedCloseDelimiterError(offset=end)

    stop = match.start()
    if source[stop] == "\n":
        raise UnexpectedNewlineError(offset=stop)

    close_end = stop + closing
    for offset in range(stop, close_end):
        if offset >= end or source[offset] != CLOSE_DELIMITER:
            raise ExpectedCloseDelimiterError(offset=offset)

    return TagSpan(identifier=source[start:stop].strip(" "), end=close_end)
