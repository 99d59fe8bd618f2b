"""Tree parser: line tokens to a :class:`SyntaxTree`.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging

from ..exceptions import EmptyInputError, InconsistentIndentationError
from .nodes import ROOT_INDEX, SyntaxTree
from .scanner import LineToken, scan

_logger = logging.getLogger(__name__)


def parse(text: str) -> SyntaxTree:
    """Parse the text of a ``.tree`` file.

    The parent of each node is the closest preceding open node whose
    connector sits in a smaller column. All children of one parent must
    use the same column, which keeps every depth step at exactly one level.

    Args:
        text: Contents of the tree file.

    Returns:
        The parsed :class:`SyntaxTree`.

    Raises:
        EmptyInputError: If ``text`` contains no tree.
        UnexpectedTokenError: If a line does not follow the tree grammar.
        MultipleRootsError: If more than one root line is present.
        InconsistentIndentationError: If a line does not line up with its
            siblings.
    """
    tokens = scan(text)
    if not tokens:
        raise EmptyInputError()

    root_token, *node_tokens = tokens
    tree = SyntaxTree(root_token.text, root_token.line)

    # Open nodes from the root down to the most recent line.
    open_nodes: list[int] = [ROOT_INDEX]
    for token in node_tokens:
        while tree.node(open_nodes[-1]).column >= token.column:
            open_nodes.pop()

        parent = open_nodes[-1]
        _check_alignment(tree, parent, token)
        node = tree.add_child(parent, token.text, token.line, token.column)
        open_nodes.append(node.index)

    _logger.debug(f"Parsed tree '{tree.root.text}' with {len(tree) - 1} nodes")
    return tree


def _check_alignment(tree: SyntaxTree, parent: int, token: LineToken) -> None:
    siblings = tree.node(parent).children
    if not siblings:
        return

    expected = tree.node(siblings[0]).column
    if token.column != expected:
        raise InconsistentIndentationError(
            f"'{token.text}' starts at column {token.column}, but its siblings start at column {expected}",
            token.line,
            token.column,
        )
