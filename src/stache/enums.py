"""Enumeration types for stache."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of failure kinds reported by the template engine.

    Every `TemplateError` carries exactly one of these, so callers can branch
    on the kind without matching exception classes.
    """

    SOURCE_NOT_FOUND = "source_not_found"
    SOURCE_READ_FAILURE = "source_read_failure"
    OVERSIZED_SOURCE = "oversized_source"
    OUT_OF_MEMORY = "out_of_memory"
    EXPECTED_OPEN_DELIMITER = "expected_open_delimiter"
    EXPECTED_CLOSE_DELIMITER = "expected_close_delimiter"
    EXPECTED_END_SECTION = "expected_end_section"
    UNEXPECTED_END_SECTION = "unexpected_end_section"
    UNEXPECTED_NEWLINE = "unexpected_newline"
    UNEXPECTED_EOF = "unexpected_eof"
    NESTING_TOO_DEEP = "nesting_too_deep"
    INVALID_BINDING_SHAPE = "invalid_binding_shape"
    RENDER_IO_FAILURE = "render_io_failure"
