r"""stache: a compiled Mustache-style template engine.

Templates are parsed once into an immutable node tree, cached by identifier,
and rendered against arbitrary structured data.

Basic usage:
    from stache import DictLoader, Engine

    engine = Engine(DictLoader({"page": "Hello {{name}}!\n"}))
    engine.render_to_string("page", {"name": "World"})
    # 'Hello World!\n'

Validating a template set up front:
    engine = Engine(FileSystemLoader("templates", extension=".mustache"))
    try:
        engine.compile_all(["index", "header", "footer"])
    except TemplateError as e:
        print(e.identifier, format_error(e), end="")

Supported tags: ``{{name}}``, ``{{#name}}...{{/name}}``,
``{{^name}}...{{/name}}``, ``{{! comment }}`` and ``{{>partial}}``.
"""

from ._cache import Template, TemplateCache
from ._engine import Engine
from ._loaders import (
    DEFAULT_MAX_SOURCE_BYTES,
    DictLoader,
    FileSystemLoader,
    TemplateLoader,
)
from ._position import Position
from .config import EngineConfig, load_config
from .enums import ErrorKind
from .exceptions import (
    StacheError,
    TemplateError,
    TemplateSyntaxError,
    format_error,
)
from .parser import parse
from .render import OutputSink, bind

__all__ = [
    "DEFAULT_MAX_SOURCE_BYTES",
    "DictLoader",
    "Engine",
    "EngineConfig",
    "ErrorKind",
    "FileSystemLoader",
    "OutputSink",
    "Position",
    "StacheError",
    "Template",
    "TemplateCache",
    "TemplateError",
    "TemplateLoader",
    "TemplateSyntaxError",
    "bind",
    "format_error",
    "load_config",
    "parse",
]
