"""Line scanner for ``.tree`` files.

The scanner turns the raw text into one :class:`LineToken` per meaningful
line. It strips the tree-drawing characters and records the column of the
``├``/``└`` connector; the parser derives the tree structure from those
columns.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import re
from dataclasses import dataclass

from ..exceptions import MultipleRootsError, UnexpectedTokenError

BRANCH = "├"
CORNER = "└"
PIPE = "│"
DASH = "─"

_TREE_CHARS = frozenset(BRANCH + CORNER + PIPE + DASH)

# Indentation made of spaces and pipes, then a connector and its dashes.
_NODE_LINE = re.compile(rf"^(?P<prefix>[ {PIPE}]*)(?P<connector>[{BRANCH}{CORNER}])(?P<dashes>{DASH}*)(?P<rest>.*)$")
_FILLER_LINE = re.compile(rf"^[ \t{PIPE}]*$")


@dataclass(frozen=True)
class LineToken:
    """One node line of a tree.

    Attributes:
        line: 1-based line number in the source text.
        column: Column of the connector character; ``-1`` for the root line.
        text: Node text without drawing characters or surrounding whitespace.
    """

    line: int
    column: int
    text: str


def scan(text: str) -> list[LineToken]:
    """Split ``text`` into line tokens.

    Blank lines and lines holding only vertical pipes are skipped. The first
    remaining line is the root; every other line must be a connector line.

    Raises:
        UnexpectedTokenError: If a line does not follow the tree grammar.
        MultipleRootsError: If a second unindented text line is found.
    """
    tokens: list[LineToken] = []

    for line_number, raw_line in enumerate(text.removeprefix("\ufeff").splitlines(), start=1):
        line = raw_line.rstrip()
        if _FILLER_LINE.match(line):
            continue

        if not tokens:
            tokens.append(_scan_root(line, line_number))
        else:
            tokens.append(_scan_node(line, line_number))

    return tokens


def _scan_root(line: str, line_number: int) -> LineToken:
    stripped = line.strip()
    if stripped[0] in _TREE_CHARS:
        column = line.index(stripped[0])
        raise UnexpectedTokenError(f"Expected a root identifier, found '{stripped[0]}'", line_number, column)
    return LineToken(line=line_number, column=-1, text=stripped)


def _scan_node(line: str, line_number: int) -> LineToken:
    match = _NODE_LINE.match(line)
    if match is None:
        stripped = line.lstrip(f" {PIPE}")
        column = len(line) - len(stripped)
        if column == 0 and not stripped[0].isspace() and stripped[0] not in _TREE_CHARS:
            raise MultipleRootsError(f"Found a second root '{line.strip()}'", line_number, column)
        raise UnexpectedTokenError(f"Expected '{BRANCH}' or '{CORNER}' before '{stripped}'", line_number, column)

    column = len(match.group("prefix"))
    if not match.group("dashes"):
        raise UnexpectedTokenError(f"Expected '{DASH}' after the connector", line_number, column + 1)

    rest = match.group("rest")
    text = rest.strip()
    if not text:
        raise UnexpectedTokenError("Expected node text after the connector", line_number, column)
    if not rest[0].isspace():
        offset = column + 1 + len(match.group("dashes"))
        raise UnexpectedTokenError(f"Expected a space before '{text}'", line_number, offset)

    return LineToken(line=line_number, column=column, text=text)
