"""Template parsing.

Compiles template source into an immutable node tree:

    from stache.parser import parse

    nodes = parse("Hello {{name}}!")
    # (Text('Hello '), Variable('name'), Text('!'))
"""

from stache._position import LineIndex, Position

from ._builder import DEFAULT_MAX_DEPTH, TreeBuilder, parse
from ._matcher import SectionBounds, find_section_end
from ._nodes import Node, Partial, Section, Text, Variable
from ._scanner import TagSpan, scan_tag

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "LineIndex",
    "Node",
    "Partial",
    "Position",
    "Section",
    "SectionBounds",
    "TagSpan",
    "Text",
    "TreeBuilder",
    "Variable",
    "find_section_end",
    "parse",
    "scan_tag",
]
