"""
Stylesheet structures: declarations, rules and the ordered rule list.
"""

from typing import Any, Iterable, Iterator, List

from .selector import Selector, SortedSelectors
from .values import Value


class Declaration:
    """A single ``name: value`` pair."""

    def __init__(self, name: str, value: Value):
        self.name = name
        self.value = value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Declaration):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __repr__(self):
        return f"Declaration({self.name}: {self.value})"


class Rule:
    """
    A style rule: selectors sorted by descending specificity plus the
    declarations they apply, in source order.
    """

    def __init__(self, selectors: Iterable[Selector], declarations: Iterable[Declaration]):
        """
        Initialize a rule.

        Args:
            selectors: Selectors of the rule; sorted here unless already a SortedSelectors
            declarations: Declarations of the rule
        """
        if not isinstance(selectors, SortedSelectors):
            selectors = SortedSelectors(selectors)
        self.selectors = selectors
        self.declarations: List[Declaration] = list(declarations)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.selectors == other.selectors and self.declarations == other.declarations

    def __repr__(self):
        return f"Rule({self.selectors!r}, {self.declarations!r})"


class Stylesheet:
    """An ordered list of rules. Order breaks specificity ties in the cascade."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self.rules: List[Rule] = list(rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Stylesheet):
            return NotImplemented
        return self.rules == other.rules

    def __repr__(self):
        return f"Stylesheet({len(self.rules)} rules)"
