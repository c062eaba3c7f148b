"""
Document parsers.
This module builds Element/Text trees either from the compact
parenthesized notation, e.g. ``(div class=note (p "hello"))``, or from real
HTML through BeautifulSoup and html5lib.
"""

import logging
from typing import Dict, List, Tuple

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from ..errors import ParseError
from .element import Element
from .node import Node
from .text import Text

logger = logging.getLogger(__name__)

SYNTAX_AUTO = 'auto'
SYNTAX_SEXPR = 'sexpr'
SYNTAX_HTML = 'html'
SYNTAXES = (SYNTAX_AUTO, SYNTAX_SEXPR, SYNTAX_HTML)

ATTRIBUTE_VALUE_STOP_CHARS = '()"='


class DocumentParser:
    """
    Parser producing the engine's document tree.

    The compact notation grammar is::

        node      := text | "(" tag attribute* node* ")"
        text      := '"' (any character but '"' or '\\' | '\\' any character)* '"'
        attribute := name "=" value

    Attributes must come before child nodes.
    """

    def __init__(self):
        """Initialize the document parser."""
        self._text = ""
        self._pos = 0

    def parse(self, source: str, syntax: str = SYNTAX_AUTO) -> Node:
        """
        Parse a document.

        Args:
            source: Document source text
            syntax: 'sexpr', 'html' or 'auto' to pick from the first character

        Returns:
            The root node

        Raises:
            ParseError: If the source is malformed
            ValueError: If the syntax name is unknown
        """
        if syntax not in SYNTAXES:
            raise ValueError(f"Unknown document syntax: {syntax}")

        if syntax == SYNTAX_AUTO:
            syntax = SYNTAX_SEXPR if source.lstrip()[:1] in ('(', '"') else SYNTAX_HTML
            logger.debug(f"Detected document syntax: {syntax}")

        if syntax == SYNTAX_SEXPR:
            return self.parse_sexpr(source)
        return self.parse_html(source)

    # Compact notation

    def parse_sexpr(self, source: str) -> Node:
        """
        Parse the compact parenthesized notation.

        Args:
            source: Document source text

        Returns:
            The root node
        """
        self._text = source.strip()
        self._pos = 0

        node = self._node()
        if self._pos != len(self._text):
            raise ParseError("Unexpected content after root node", self._pos)
        return node

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ''

    def _skip_whitespace(self) -> int:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1
        return self._pos - start

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek() or 'end of input'
            raise ParseError(f"Expected {char!r}, found {found!r}", self._pos)
        self._pos += 1

    def _node(self) -> Node:
        char = self._peek()
        if char == '"':
            return self._text_node()
        if char == '(':
            return self._element()
        raise ParseError("Expected '(' or '\"'", self._pos)

    def _text_node(self) -> Text:
        start = self._pos
        self._expect('"')
        chars = []
        while self._pos < len(self._text):
            char = self._text[self._pos]
            if char == '"':
                self._pos += 1
                return Text(''.join(chars))
            # Backslash escapes the next character, e.g. \" or \\
            if char == '\\' and self._pos + 1 < len(self._text):
                self._pos += 1
                char = self._text[self._pos]
            chars.append(char)
            self._pos += 1
        raise ParseError("Unterminated text node", start)

    def _element(self) -> Element:
        self._expect('(')

        tag_name = self._name(letters_only=True)
        separated = self._skip_whitespace() > 0

        attributes: Dict[str, str] = {}
        while self._peek() not in ('(', '"', ')', ''):
            if not separated:
                raise ParseError("Expected whitespace", self._pos)
            start = self._pos
            key, value = self._attribute()
            if key in attributes:
                raise ParseError(f"Duplicate attribute {key!r}", start)
            attributes[key] = value
            separated = self._skip_whitespace() > 0

        children: List[Node] = []
        while self._peek() in ('(', '"'):
            children.append(self._node())
            self._skip_whitespace()

        self._expect(')')
        return Element(tag_name, attributes, children)

    def _attribute(self) -> Tuple[str, str]:
        key = self._name(letters_only=False)
        self._expect('=')
        start = self._pos
        while (self._pos < len(self._text) and not self._text[self._pos].isspace()
               and self._text[self._pos] not in ATTRIBUTE_VALUE_STOP_CHARS):
            self._pos += 1
        if self._pos == start:
            raise ParseError(f"Expected value for attribute {key!r}", start)
        return key, self._text[start:self._pos]

    def _name(self, letters_only: bool) -> str:
        start = self._pos
        while self._pos < len(self._text):
            char = self._text[self._pos]
            if not (char.isalpha() or (not letters_only and self._pos > start
                                       and (char.isalnum() or char in '-_'))):
                break
            self._pos += 1
        if self._pos == start:
            raise ParseError("Expected name", start)
        return self._text[start:self._pos]

    # HTML

    def parse_html(self, html_content: str) -> Element:
        """
        Parse HTML into the engine's document tree.

        Uses BeautifulSoup with the html5lib tree builder, so the result is
        always rooted at an ``html`` element. Comments, doctypes and
        whitespace-only text are dropped.

        Args:
            html_content: HTML source

        Returns:
            The ``html`` element
        """
        soup = BeautifulSoup(html_content, 'html5lib')
        root = soup.find('html')
        if root is None:
            raise ParseError("HTML document has no root element")
        return self._convert_tag(root)

    def _convert_tag(self, tag: Tag) -> Element:
        attributes = {}
        for key, value in tag.attrs.items():
            # bs4 returns multi-valued attributes such as class as lists
            if isinstance(value, list):
                value = ' '.join(value)
            attributes[key] = value

        children: List[Node] = []
        for child in tag.children:
            if isinstance(child, Tag):
                children.append(self._convert_tag(child))
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                if str(child).strip():
                    children.append(Text(str(child)))

        return Element(tag.name, attributes, children)


def parse_document(source: str, syntax: str = SYNTAX_AUTO) -> Node:
    """
    Parse a document with a fresh DocumentParser.

    Args:
        source: Document source text
        syntax: 'sexpr', 'html' or 'auto'

    Returns:
        The root node
    """
    return DocumentParser().parse(source, syntax)
