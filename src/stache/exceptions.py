"""stache exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from stache._position import Position
from stache.enums import ErrorKind

if TYPE_CHECKING:
    from pathlib import Path


class StacheError(Exception):
    """Base exception for stache errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(StacheError):
    """Base exception for loading, compiling and rendering templates.

    Attributes:
        kind: The closed error kind for this exception class.
        message: Human-readable message, also used by `format_error`.
        identifier: Identifier of the template being processed, if known.
        offset: Absolute offset in the template source, for syntax errors.
        position: Line and column of the failure, or `Position.UNKNOWN`.
        cause: Lower-level exception this error wraps, if any.
    """

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "template error"

    def __init__(
        self,
        message: str | None = None,
        *,
        identifier: str | None = None,
        offset: int | None = None,
        position: Position = Position.UNKNOWN,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with an optional message and location context."""
        self.message: str = message if message is not None else self.default_message
        super().__init__(self.message)
        self.identifier: str | None = identifier
        self.offset: int | None = offset
        self.position: Position = position
        self.cause: BaseException | None = cause

    def __str__(self) -> str:
        return self.message


class SourceNotFoundError(TemplateError, KeyError):
    """Raised when no source exists for a template identifier."""

    kind = ErrorKind.SOURCE_NOT_FOUND
    default_message = "template not found"


class SourceReadError(TemplateError):
    """Raised when template source exists but cannot be read or decoded."""

    kind = ErrorKind.SOURCE_READ_FAILURE
    default_message = "could not read template source"


class OversizedSourceError(TemplateError):
    """Raised when template source exceeds the loader's byte ceiling."""

    kind = ErrorKind.OVERSIZED_SOURCE
    default_message = "template source exceeds maximum size"

    def __init__(
        self, message: str | None = None, *, limit: int, **kwargs: Any
    ) -> None:
        """Initialize with the byte ceiling that was exceeded."""
        super().__init__(message, **kwargs)
        self.limit: int = limit


class OutOfMemoryError(TemplateError):
    """Raised when building a node tree runs out of memory."""

    kind = ErrorKind.OUT_OF_MEMORY
    default_message = "out of memory"


class InvalidBindingShapeError(TemplateError, TypeError):
    """Raised when the top-level render context is not record-shaped."""

    kind = ErrorKind.INVALID_BINDING_SHAPE
    default_message = "context must be record-shaped"


class RenderIOError(TemplateError):
    """Raised when writing rendered output to the sink fails.

    Output written before the failure stays in the sink.
    """

    kind = ErrorKind.RENDER_IO_FAILURE
    default_message = "failed to write output"


# =============================================================================
# Syntax Exceptions
# =============================================================================


class TemplateSyntaxError(TemplateError):
    """Base exception for malformed template source."""


class ExpectedOpenDelimiterError(TemplateSyntaxError):
    """A single `{` appeared where a tag's `{{` was expected."""

    kind = ErrorKind.EXPECTED_OPEN_DELIMITER
    default_message = "expected open curly brace"


class ExpectedCloseDelimiterError(TemplateSyntaxError):
    """A tag or comment was not closed with `}}`."""

    kind = ErrorKind.EXPECTED_CLOSE_DELIMITER
    default_message = "expected close curly brace"


class ExpectedEndSectionError(TemplateSyntaxError):
    """A section was opened but its close tag was never found."""

    kind = ErrorKind.EXPECTED_END_SECTION
    default_message = "expected end of a section"

    def __init__(
        self, message: str | None = None, *, name: str, **kwargs: Any
    ) -> None:
        """Initialize with the name of the unterminated section."""
        super().__init__(message, **kwargs)
        self.name: str = name


class UnexpectedEndSectionError(TemplateSyntaxError):
    """A close tag appeared with no matching open tag in scope."""

    kind = ErrorKind.UNEXPECTED_END_SECTION
    default_message = "unexpected end of a section"


class UnexpectedNewlineError(TemplateSyntaxError):
    """A raw newline appeared inside a tag before it was closed."""

    kind = ErrorKind.UNEXPECTED_NEWLINE
    default_message = "unexpected newline"


class UnexpectedEOFError(TemplateSyntaxError):
    """The source ended right after a tag's opening delimiters."""

    kind = ErrorKind.UNEXPECTED_EOF
    default_message = "unexpected end of file"


class NestingTooDeepError(TemplateSyntaxError):
    """Sections or partials nest deeper than the configured limit."""

    kind = ErrorKind.NESTING_TOO_DEEP
    default_message = "nesting too deep"

    def __init__(
        self, message: str | None = None, *, limit: int, **kwargs: Any
    ) -> None:
        """Initialize with the nesting limit that was exceeded."""
        super().__init__(message, **kwargs)
        self.limit: int = limit


def format_error(error: TemplateError) -> str:
    """Format an error as a one-line diagnostic report.

    Args:
        error: The template error to report.

    Returns:
        The report in the form ``[line:column] message`` with a trailing newline.
    """
    return f"[{error.position.line}:{error.position.column}] {error.message}\n"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(StacheError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
