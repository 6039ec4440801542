"""The stache command-line interface."""

from ._app import app, create_app, main
from ._commands import exit_code_for
from ._exit_codes import ExitCode

__all__ = ["ExitCode", "app", "create_app", "exit_code_for", "main"]
