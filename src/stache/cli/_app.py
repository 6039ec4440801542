"""The command-line interface for stache."""

from cyclopts import App
from rich.console import Console

from ._commands import register_commands

APP_NAME = "stache"
APP_HELP = "Compile and render Mustache-style templates."

app = App(name=APP_NAME, help=APP_HELP, help_on_error=True)
register_commands(app)


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create a stache CLI application.

    Args:
        console: Console for help and regular output of cyclopts.
        error_console: Console for cyclopts parse errors.
        exit_on_error: Whether cyclopts exits on argument errors.

    Returns:
        A new App with all commands registered.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    new_app = App(
        name=APP_NAME,
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )
    register_commands(new_app)
    return new_app


def main() -> None:
    """Default entrypoint for the `stache` CLI."""
    create_app()()


if __name__ == "__main__":
    main()
