# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Commands of the stache CLI."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Never

import yaml
from cyclopts import Parameter

from stache._engine import Engine
from stache.config import load_config
from stache.exceptions import (
    ConfigError,
    InvalidBindingShapeError,
    OversizedSourceError,
    RenderIOError,
    SourceNotFoundError,
    SourceReadError,
    TemplateError,
    TemplateSyntaxError,
    format_error,
)

from ._data import load_data
from ._exit_codes import ExitCode

if TYPE_CHECKING:
    from cyclopts import App

ConfigOption = Annotated[
    Path | None, Parameter(name="--config", help="Path to stache.toml or pyproject.toml")
]
SearchPathOption = Annotated[
    list[Path] | None,
    Parameter(name=["--search-path", "-I"], help="Template directory (repeatable)"),
]
ExtensionOption = Annotated[
    str | None, Parameter(name="--extension", help="Suffix appended to identifiers")
]


def exit_code_for(error: TemplateError) -> ExitCode:
    """Map a template error to the exit code reported for it."""
    if isinstance(error, SourceNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, (SourceReadError, OversizedSourceError, RenderIOError)):
        return ExitCode.IO_ERROR
    if isinstance(error, TemplateSyntaxError):
        return ExitCode.SYNTAX_ERROR
    return ExitCode.RENDER_ERROR


def _fail(message: str, code: ExitCode) -> Never:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(code)


def _build_engine(
    config_path: Path | None,
    search_path: list[Path] | None,
    extension: str | None,
) -> Engine:
    """Create an engine from the config file and command-line overrides."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _fail(str(e), ExitCode.LOAD_ERROR)

    updates: dict[str, object] = {}
    if search_path:
        updates["search_path"] = tuple(search_path)
    if extension is not None:
        updates["extension"] = extension
    if updates:
        config = config.model_copy(update=updates)

    return Engine(config=config)


def check(
    *templates: Annotated[str, Parameter(help="Template identifiers to compile")],
    config: ConfigOption = None,
    search_path: SearchPathOption = None,
    extension: ExtensionOption = None,
) -> None:
    """Compile templates and report syntax errors

    Every template is compiled; each failure is reported as
    ``identifier: [line:column] message``. The exit code is that of the first
    failure.

    Args:
        templates: Template identifiers to compile.
        config: Path to a config file.
        search_path: Directories searched for templates.
        extension: Suffix appended to identifiers when loading files.
    """
    engine = _build_engine(config, search_path, extension)

    first_failure: ExitCode | None = None
    for identifier in templates:
        try:
            engine.compile_all([identifier])
        except TemplateError as e:
            print(f"{identifier}: {format_error(e)}", end="")
            if first_failure is None:
                first_failure = exit_code_for(e)
        else:
            print(f"{identifier}: ok")

    if first_failure is not None:
        raise SystemExit(first_failure)


def render(
    template: Annotated[str, Parameter(help="Template identifier to render")],
    *,
    data: Annotated[
        Path | None,
        Parameter(name=["--data", "-d"], help="JSON, TOML or YAML file with render data"),
    ] = None,
    config: ConfigOption = None,
    search_path: SearchPathOption = None,
    extension: ExtensionOption = None,
) -> None:
    """Render a template to standard output

    Args:
        template: Template identifier to render.
        data: Data file providing the render context.
        config: Path to a config file.
        search_path: Directories searched for templates.
        extension: Suffix appended to identifiers when loading files.
    """
    context: object = {}
    if data is not None:
        try:
            context = load_data(data)
        except (OSError, ValueError, yaml.YAMLError) as e:
            _fail(f"Failed to load data file {data}: {e}", ExitCode.LOAD_ERROR)

    engine = _build_engine(config, search_path, extension)

    try:
        engine.render(template, context, sys.stdout)
    except InvalidBindingShapeError as e:
        _fail(e.message, ExitCode.RENDER_ERROR)
    except TemplateError as e:
        print(f"{template}: {format_error(e)}", end="", file=sys.stderr)
        raise SystemExit(exit_code_for(e)) from None


def register_commands(app: App) -> None:
    """Register all stache commands on `app`."""
    app.command(check, name="check")
    app.command(render, name="render")
