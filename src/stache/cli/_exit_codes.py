"""Exit codes for stache commands."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standard exit codes for stache CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    SYNTAX_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    RENDER_ERROR = 5
