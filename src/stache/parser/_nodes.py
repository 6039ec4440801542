"""Compiled template nodes.

A compiled template is a tuple of nodes in source order. `Section` nodes own
their children, so a tree is released as a whole with its root tuple. Nodes
are frozen and never mutated after a parse completes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Text:
    """A literal run of source text, written verbatim."""

    content: str


@dataclass(frozen=True, slots=True)
class Variable:
    """A `{{name}}` interpolation."""

    name: str


@dataclass(frozen=True, slots=True)
class Section:
    """A `{{#name}}...{{/name}}` or `{{^name}}...{{/name}}` block.

    Attributes:
        name: The section's field name.
        exists: True for `#` sections, False for inverted `^` sections.
        body: The raw body text between the open and close tags, passed to
            callable values.
        children: The parsed body.
    """

    name: str
    exists: bool
    body: str
    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Partial:
    """A `{{>name}}` include of another template."""

    name: str


Node: TypeAlias = Text | Variable | Section | Partial
