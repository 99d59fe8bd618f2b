"""Hypothesis strategies for property-based testing.

Trees are generated as small model objects first and rendered to ``.tree``
text afterwards, so tests can compare the generated Solidity with what the
model says it must contain. Every condition and action carries a unique
token (``c3``, ``a7``) which keeps generated identifiers collision free.
"""

import itertools
from dataclasses import dataclass, field

from hypothesis import strategies as st

PHRASE_WORDS = ["the", "caller", "amount", "is", "not", "zero", "paused", "ERC-20", "{owner}", "balance.of", "$fee"]
DESCRIPTION_WORDS = ["because", "the", "value", "is", "> 0", "- note", "_bad_", "{MultipleChildren}"]
ACTION_PREFIXES = ["it should", "It should", "IT SHOULD"]
VERBS = ["emit", "mint", "burn", "transfer", "update"]
KEYWORDS = ["when", "When", "WHEN", "given", "Given"]


@dataclass
class DescriptionSpec:
    text: str
    nested: list["DescriptionSpec"] = field(default_factory=list)


@dataclass
class ActionSpec:
    text: str
    nested: list[DescriptionSpec] = field(default_factory=list)

    @property
    def reverts(self) -> bool:
        return self.text.lower().startswith("it should revert")


@dataclass
class ConditionSpec:
    keyword: str
    phrase: str
    nested: list["ConditionSpec | ActionSpec"] = field(default_factory=list)

    @property
    def text(self) -> str:
        return f"{self.keyword} {self.phrase}"

    @property
    def actions(self) -> list[ActionSpec]:
        return [child for child in self.nested if isinstance(child, ActionSpec)]

    @property
    def conditions(self) -> list["ConditionSpec"]:
        return [child for child in self.nested if isinstance(child, ConditionSpec)]

    def test_count(self) -> int:
        return (1 if self.actions else 0) + sum(child.test_count() for child in self.conditions)

    def walk(self):
        yield self
        for child in self.conditions:
            yield from child.walk()


@dataclass
class TreeSpec:
    contract: str
    nested: list[ConditionSpec | ActionSpec]

    def render(self) -> str:
        lines = [self.contract]
        _render(self.nested, "", lines)
        return "\n".join(lines)

    def conditions(self):
        for child in self.nested:
            if isinstance(child, ConditionSpec):
                yield from child.walk()

    def root_actions(self) -> list[ActionSpec]:
        return [child for child in self.nested if isinstance(child, ActionSpec)]


def _render(children, prefix: str, lines: list[str]) -> None:
    for i, child in enumerate(children):
        last = i == len(children) - 1
        lines.append(f"{prefix}{'└' if last else '├'}── {child.text}")
        _render(child.nested, prefix + ("    " if last else "│   "), lines)


def _draw_descriptions(draw, depth: int) -> list[DescriptionSpec]:
    if depth > 2:
        return []
    count = draw(st.integers(min_value=0, max_value=2))
    return [
        DescriptionSpec(
            text=" ".join(draw(st.lists(st.sampled_from(DESCRIPTION_WORDS), min_size=1, max_size=3))),
            nested=_draw_descriptions(draw, depth + 1),
        )
        for _ in range(count)
    ]


def _draw_action(draw, counter) -> ActionSpec:
    prefix = draw(st.sampled_from(ACTION_PREFIXES))
    verb = draw(st.sampled_from(VERBS + ["revert"]))
    return ActionSpec(text=f"{prefix} {verb} a{next(counter)}", nested=_draw_descriptions(draw, 1))


def _draw_condition(draw, counter, depth: int) -> ConditionSpec:
    keyword = draw(st.sampled_from(KEYWORDS))
    words = draw(st.lists(st.sampled_from(PHRASE_WORDS), min_size=0, max_size=3))
    phrase = " ".join(words + [f"c{next(counter)}"])

    min_actions = 1 if depth >= 3 else 0
    action_count = draw(st.integers(min_value=min_actions, max_value=2))
    condition_count = 0 if depth >= 3 else draw(st.integers(min_value=0 if action_count else 1, max_value=2))

    children: list[ConditionSpec | ActionSpec] = [_draw_action(draw, counter) for _ in range(action_count)]
    children += [_draw_condition(draw, counter, depth + 1) for _ in range(condition_count)]
    return ConditionSpec(keyword=keyword, phrase=phrase, nested=draw(st.permutations(children)))


@st.composite
def tree_specs(draw) -> TreeSpec:
    """Generate well-formed trees that translate without errors."""
    counter = itertools.count()
    contract = draw(st.from_regex(r"[A-Z][A-Za-z0-9_-]{0,12}Test", fullmatch=True))
    root_actions = [_draw_action(draw, counter) for _ in range(draw(st.integers(min_value=0, max_value=2)))]
    conditions = [_draw_condition(draw, counter, 1) for _ in range(draw(st.integers(min_value=0, max_value=3)))]
    return TreeSpec(contract=contract, nested=draw(st.permutations(root_actions + conditions)))


identifier_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\n\r"), min_size=0, max_size=30
)
