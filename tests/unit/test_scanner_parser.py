"""Tests for the tree scanner and parser."""

import pytest

from splurge_tree_scaffold.exceptions import (
    EmptyInputError,
    InconsistentIndentationError,
    MultipleRootsError,
    ParseError,
    UnexpectedTokenError,
)
from splurge_tree_scaffold.syntax import LineToken, parse, scan


class TestScan:
    def test_root_and_nodes(self):
        tokens = scan("FileTest\n├── when a\n│  └── it should x\n└── it should y")

        assert tokens == [
            LineToken(line=1, column=-1, text="FileTest"),
            LineToken(line=2, column=0, text="when a"),
            LineToken(line=3, column=3, text="it should x"),
            LineToken(line=4, column=0, text="it should y"),
        ]
        assert tokens[0].column == -1
        assert tokens[1].column == 0

    def test_skips_blank_and_pipe_only_lines(self):
        tokens = scan("\n\nFileTest\n│\n├── when a\n│   \n└── when b\n\n")

        assert [token.line for token in tokens] == [3, 5, 7]

    def test_strips_byte_order_mark(self):
        tokens = scan("\ufeffFileTest\n└── it should work")

        assert tokens[0].text == "FileTest"

    def test_trailing_whitespace_is_ignored(self):
        tokens = scan("FileTest   \n└── it should work   ")

        assert tokens[1].text == "it should work"

    def test_windows_line_endings(self):
        tokens = scan("FileTest\r\n└── it should work\r\n")

        assert [token.text for token in tokens] == ["FileTest", "it should work"]

    def test_root_with_connector_is_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            scan("└── FileTest")

        assert exc_info.value.line == 1

    def test_second_root(self):
        with pytest.raises(MultipleRootsError) as exc_info:
            scan("FileTest\n└── it should work\nOtherTest")

        assert exc_info.value.line == 3
        assert exc_info.value.details["kind"] == "multiple_roots"

    def test_indented_text_without_connector(self):
        with pytest.raises(UnexpectedTokenError):
            scan("FileTest\n└── when a\n    it should work")

    def test_connector_without_dashes(self):
        with pytest.raises(UnexpectedTokenError, match="after the connector"):
            scan("FileTest\n└ it should work")

    def test_connector_without_text(self):
        with pytest.raises(UnexpectedTokenError, match="node text"):
            scan("FileTest\n└──   ")

    def test_connector_without_space(self):
        with pytest.raises(UnexpectedTokenError, match="space"):
            scan("FileTest\n└──it should work")

    def test_tab_indentation(self):
        with pytest.raises(UnexpectedTokenError):
            scan("FileTest\n├── when a\n\t└── it should work")


class TestParse:
    def test_builds_nested_tree(self):
        tree = parse("FileTest\n├── when a\n│  ├── it should x\n│  └── when b\n│     └── it should y\n└── it should z")

        assert len(tree) == 6
        assert tree.root.text == "FileTest"
        assert [child.text for child in tree.children(0)] == ["when a", "it should z"]

        when_a = tree.children(0)[0]
        assert [child.text for child in tree.children(when_a.index)] == ["it should x", "when b"]
        assert [node.depth for node in tree] == [0, 1, 2, 2, 3, 1]

    def test_parent_links(self):
        tree = parse("FileTest\n└── when a\n   └── it should x")

        action = tree.node(2)
        assert action.parent == 1
        assert tree.node(1).parent == 0
        assert tree.root.parent is None

    def test_descendants_in_document_order(self):
        tree = parse("T\n└── it should x\n   ├── one\n   │  └── two\n   └── three")

        assert [node.text for node in tree.descendants(1)] == ["one", "two", "three"]

    def test_line_numbers_are_kept(self):
        tree = parse("\nFileTest\n\n└── it should work")

        assert tree.root.line == 2
        assert tree.node(1).line == 4

    def test_root_only(self):
        tree = parse("FileTest")

        assert len(tree) == 1
        assert tree.children(0) == []

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", "│\n│"])
    def test_empty_input(self, text):
        with pytest.raises(EmptyInputError):
            parse(text)

    def test_misaligned_sibling(self):
        text = "FileTest\n├── when a\n│  └── it should x\n  └── it should y"

        with pytest.raises(InconsistentIndentationError) as exc_info:
            parse(text)

        assert exc_info.value.line == 4

    def test_parse_errors_share_a_base(self):
        for text in ("", "FileTest\n└──x", "A\n└── it\nB"):
            with pytest.raises(ParseError):
                parse(text)

    def test_deeper_indent_after_dedent(self):
        text = "T\n├── when a\n│     └── it should x\n└── when b\n   └── it should y"

        tree = parse(text)

        assert [node.depth for node in tree] == [0, 1, 2, 1, 2]
