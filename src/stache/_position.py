"""Source positions for diagnostics."""

from bisect import bisect_left
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Position:
    """A 1-based line and column in a template source.

    `Position.UNKNOWN` (0:0) marks errors that are not tied to a location in
    the source, such as load and render failures.
    """

    line: int
    column: int

    UNKNOWN: ClassVar["Position"]

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


Position.UNKNOWN = Position(0, 0)


class LineIndex:
    """Maps absolute offsets in one source string to positions.

    The newline offsets are computed once, so each lookup is a binary search.
    """

    __slots__ = ("_newlines",)

    def __init__(self, source: str) -> None:
        self._newlines: list[int] = [
            i for i, char in enumerate(source) if char == "\n"
        ]

    def position(self, offset: int) -> Position:
        """Return the position of the character at `offset`.

        Args:
            offset: Absolute offset into the indexed source. Offsets at or past
                the end resolve to the position just after the last character.

        Returns:
            The 1-based line and column.
        """
        line_index = bisect_left(self._newlines, offset)
        line_start = self._newlines[line_index - 1] + 1 if line_index else 0
        return Position(line=line_index + 1, column=offset - line_start + 1)
