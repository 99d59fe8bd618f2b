"""Identifier helpers for generated Solidity code.

These functions turn free-form tree text into Solidity identifiers. Names
are built from *segments*: one segment per condition, holding the
condition keyword and its phrase in PascalCase.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..syntax.nodes import ConditionKeyword

IDENTIFIER_FILLER = "_"
TEST_PREFIX = "test_"
REVERT_PREFIX = "test_RevertWhen_"

_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")
_REVERT_ACTION = "it should revert"


def sanitize(identifier: str) -> str:
    """Turn ``identifier`` into a valid Solidity identifier.

    ``-`` becomes ``_``; any other character outside ``[A-Za-z0-9_]`` is
    removed.

    >>> sanitize("ERC-20 {value}")
    'ERC_20value'
    """
    return _DISALLOWED.sub("", identifier.replace("-", IDENTIFIER_FILLER))


def capitalize_first_letter(word: str) -> str:
    """Upper-case the first character of ``word`` and keep the rest as-is."""
    return word[:1].upper() + word[1:]


def lower_first_letter(word: str) -> str:
    return word[:1].lower() + word[1:]


def to_pascal_case(phrase: str) -> str:
    """Capitalize every whitespace-separated word and join them.

    >>> to_pascal_case("the deposit amount is zero")
    'TheDepositAmountIsZero'
    """
    return "".join(capitalize_first_letter(word) for word in phrase.split())


def is_revert_action(text: str) -> bool:
    """Return True when ``text`` starts with "it should revert", ignoring case only."""
    return text.lower().startswith(_REVERT_ACTION)


@dataclass(frozen=True)
class NameSegment:
    """One condition's contribution to a generated name."""

    keyword: ConditionKeyword
    phrase: str

    @classmethod
    def from_condition(cls, keyword: ConditionKeyword, phrase: str) -> "NameSegment":
        return cls(keyword=keyword, phrase=to_pascal_case(phrase))

    @property
    def folded(self) -> str:
        """``WhenTheDepositAmountIsZero``"""
        return self.keyword.folded + self.phrase


def fold_segments(segments: Sequence[NameSegment]) -> str:
    """Concatenate segments into a function-name fragment such as ``WhenAGivenB``."""
    return "".join(segment.folded for segment in segments)


def modifier_identifier(segments: Sequence[NameSegment]) -> str:
    """Return the modifier name for a chain, with a lower-case keyword first.

    >>> modifier_identifier([NameSegment(ConditionKeyword.GIVEN, "TheAssetIsAContract")])
    'givenTheAssetIsAContract'
    """
    if not segments:
        raise ValueError("A modifier needs at least one condition")
    return sanitize(lower_first_letter(fold_segments(segments)))


def build_test_identifier(segments: Sequence[NameSegment], reverts: bool) -> str:
    """Return the test name for a chain of folded conditions.

    Reverting tests drop the keyword of the first segment, since the
    ``RevertWhen_`` prefix already carries it.
    """
    if not segments:
        raise ValueError("A test needs at least one condition")
    if reverts:
        first, *rest = segments
        return sanitize(REVERT_PREFIX + first.phrase + fold_segments(rest))
    return sanitize(TEST_PREFIX + fold_segments(segments))


def action_test_identifier(action: str) -> str:
    """Return the test name for an action that sits directly under the root.

    The first word (normally ``it``) is dropped: ``it should do stuff``
    becomes ``test_ShouldDoStuff``. A single-word action keeps its word.
    """
    words = action.split()
    name = to_pascal_case(" ".join(words[1:] or words))
    if is_revert_action(action):
        return sanitize(REVERT_PREFIX + name)
    return sanitize(TEST_PREFIX + name)
