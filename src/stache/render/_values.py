"""Render-time values.

Rendering never inspects arbitrary Python objects directly. Data is first
converted by `bind()` into one of a closed set of value types, and the renderer
dispatches on those:

    Record  - named fields (mappings, pydantic models, dataclasses)
    Bool    - true / false
    Seq     - an ordered sequence of values
    String  - text, including decoded bytes; never iterated
    Scalar  - any other single value, such as a number
    Lambda  - a callable receiving a section's raw body text
    Absent  - a missing optional value (None)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypeAlias

from pydantic import BaseModel


@dataclass(frozen=True, slots=True)
class Record:
    """A value with named fields."""

    fields: Mapping[str, Value] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str) -> Value:
        return self.fields[name]

    def text(self) -> str:
        inner = ", ".join(f"{name}: {value.text()}" for name, value in self.fields.items())
        return f"{{{inner}}}"


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool

    def text(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Seq:
    items: tuple[Value, ...] = ()

    def text(self) -> str:
        return ",".join(item.text() for item in self.items)


@dataclass(frozen=True, slots=True)
class String:
    value: str

    def text(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Scalar:
    value: object

    def text(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Lambda:
    """A callable section value.

    The function receives the raw, unrendered body of the section it is bound
    to and returns template text that is then parsed and rendered.
    """

    function: Callable[[str], object]

    def __call__(self, body: str) -> str:
        return str(self.function(body))

    def text(self) -> str:
        return self("")


@dataclass(frozen=True, slots=True)
class Absent:
    def text(self) -> str:
        return ""


ABSENT = Absent()

Value: TypeAlias = Record | Bool | Seq | String | Scalar | Lambda | Absent

VALUE_TYPES = (Record, Bool, Seq, String, Scalar, Lambda, Absent)


def _dataclass_record(obj: object) -> Record:
    return Record({f.name: bind(getattr(obj, f.name)) for f in dataclasses.fields(obj)})  # pyright: ignore[reportArgumentType]


def bind(obj: object) -> Value:
    """Convert Python data into a render value.

    Conversion is recursive: mapping values, model fields and sequence items
    are bound as well. Strings and bytes are single values and are never
    treated as sequences of characters.

    Args:
        obj: Any Python object, or an already bound value.

    Returns:
        The corresponding value.
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return ABSENT
    # bool before everything numeric; bool is an int subclass
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (bytes, bytearray)):
        return String(bytes(obj).decode("utf-8", errors="replace"))
    if isinstance(obj, Mapping):
        return Record({str(key): bind(value) for key, value in obj.items()})  # pyright: ignore[reportUnknownVariableType]
    if isinstance(obj, BaseModel):
        return Record({name: bind(getattr(obj, name)) for name in type(obj).model_fields})
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _dataclass_record(obj)
    if callable(obj):
        return Lambda(obj)
    if isinstance(obj, Iterable):
        return Seq(tuple(bind(item) for item in obj))  # pyright: ignore[reportUnknownVariableType]
    return Scalar(obj)
