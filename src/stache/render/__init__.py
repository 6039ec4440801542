"""Rendering of compiled templates against bound values."""

from ._renderer import OutputSink, Renderer
from ._values import (
    ABSENT,
    Absent,
    Bool,
    Lambda,
    Record,
    Scalar,
    Seq,
    String,
    Value,
    bind,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Bool",
    "Lambda",
    "OutputSink",
    "Record",
    "Renderer",
    "Scalar",
    "Seq",
    "String",
    "Value",
    "bind",
]
