"""
CSS Selector model.
This module handles simple selectors, their specificity and the pre-sorted
selector lists stored on each rule.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple

from ..errors import ParseError

# (id count, class count, tag count), compared lexicographically
Specificity = Tuple[int, int, int]

IDENTIFIER_EXTRA_CHARS = '-_'


class Selector:
    """
    Base class for a CSS selector.

    Simple selectors are the only variant the engine understands.
    """

    def specificity(self) -> Specificity:
        """
        Get the precedence weight of the selector.

        Returns:
            Specificity tuple, higher wins
        """
        raise NotImplementedError


class SimpleSelector(Selector):
    """
    A compound of an optional tag name, an optional id and a set of classes.

    A selector with none of the three is the universal selector and matches
    every element.
    """

    def __init__(self, tag_name: Optional[str] = None, id: Optional[str] = None,
                 classes: Iterable[str] = ()):
        """
        Initialize a simple selector.

        Args:
            tag_name: Element tag the selector requires, if any
            id: Element id the selector requires, if any
            classes: Class names the element must all carry
        """
        self.tag_name = tag_name
        self.id = id
        self.classes = frozenset(classes)

    @classmethod
    def universal(cls) -> 'SimpleSelector':
        return cls()

    @property
    def is_universal(self) -> bool:
        return self.tag_name is None and self.id is None and not self.classes

    def specificity(self) -> Specificity:
        a = 1 if self.id is not None else 0
        b = len(self.classes)
        c = 1 if self.tag_name is not None else 0
        return (a, b, c)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SimpleSelector):
            return NotImplemented
        return (self.tag_name, self.id, self.classes) == (other.tag_name, other.id, other.classes)

    def __hash__(self) -> int:
        return hash((self.tag_name, self.id, self.classes))

    def __str__(self):
        text = self.tag_name or ''
        if self.id is not None:
            text += f"#{self.id}"
        text += ''.join(f".{name}" for name in sorted(self.classes))
        return text or '*'

    def __repr__(self):
        return f"SimpleSelector({str(self)!r}, specificity={self.specificity()})"


class SortedSelectors:
    """
    The selector list of a rule, sorted once by descending specificity.

    The cascade relies on this order to stop at the first matching selector.
    Selectors of equal specificity keep their source order.
    """

    def __init__(self, selectors: Iterable[Selector]):
        self.selectors: List[Selector] = sorted(
            selectors, key=lambda selector: selector.specificity(), reverse=True)

    def __iter__(self) -> Iterator[Selector]:
        return iter(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SortedSelectors):
            return NotImplemented
        return self.selectors == other.selectors

    def __repr__(self):
        return f"SortedSelectors({', '.join(str(s) for s in self.selectors)})"


class SelectorParser:
    """
    Parser for selector lists such as ``div, #foo, p.note.warning``.

    Only simple selectors are accepted; combinators, attribute selectors and
    pseudo-classes raise ``ParseError``.
    """

    def parse(self, selector_text: str) -> SortedSelectors:
        """
        Parse a comma separated selector list.

        Args:
            selector_text: The selector text to parse

        Returns:
            The parsed selectors, sorted by specificity

        Raises:
            ParseError: If any selector in the list is empty or unsupported
        """
        selectors = []
        offset = 0
        for selector_string in selector_text.split(','):
            stripped = selector_string.strip()
            start = offset + (len(selector_string) - len(selector_string.lstrip()))
            offset += len(selector_string) + 1
            if not stripped:
                raise ParseError("Empty selector in selector list", start)
            selectors.append(self.parse_simple_selector(stripped, start))
        return SortedSelectors(selectors)

    def parse_simple_selector(self, selector_string: str, base: int = 0) -> SimpleSelector:
        """
        Parse a single compound such as ``div#main.wide``.

        Args:
            selector_string: The selector text, without surrounding whitespace
            base: Offset of the selector in the enclosing source, for errors

        Returns:
            Parsed SimpleSelector
        """
        tag_name = None
        selector_id = None
        classes = []

        current_pos = 0
        length = len(selector_string)

        while current_pos < length:
            char = selector_string[current_pos]

            # Universal selector, only meaningful in first position
            if char == '*':
                if current_pos != 0:
                    raise ParseError("Unexpected '*' in selector", base + current_pos)
                current_pos += 1

            # Tag name
            elif char.isalpha():
                if current_pos != 0:
                    raise ParseError("Tag name must start the selector", base + current_pos)
                tag_name, current_pos = self._identifier(selector_string, current_pos, base)

            # Class
            elif char == '.':
                class_name, current_pos = self._identifier(selector_string, current_pos + 1, base)
                classes.append(class_name)

            # ID
            elif char == '#':
                if selector_id is not None:
                    raise ParseError("Selector has more than one id", base + current_pos)
                selector_id, current_pos = self._identifier(selector_string, current_pos + 1, base)

            elif char.isspace() or char in '>+~':
                raise ParseError("Combinators are not supported", base + current_pos)

            elif char in '[:':
                raise ParseError("Attribute selectors and pseudo-classes are not supported",
                                 base + current_pos)

            else:
                raise ParseError(f"Unexpected character {char!r} in selector", base + current_pos)

        return SimpleSelector(tag_name, selector_id, classes)

    def _identifier(self, text: str, start: int, base: int) -> Tuple[str, int]:
        current_pos = start
        while current_pos < len(text) and (text[current_pos].isalnum()
                                           or text[current_pos] in IDENTIFIER_EXTRA_CHARS):
            current_pos += 1
        if current_pos == start or text[start].isdigit():
            raise ParseError("Expected identifier", base + start)
        return text[start:current_pos], current_pos
