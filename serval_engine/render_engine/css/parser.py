"""
CSS Parser implementation.
This module turns stylesheet source into the engine's Stylesheet structure,
using tinycss2 for tokenization and rule splitting.
"""

import logging
from typing import List, Optional

import tinycss2
import tinycss2.color3

from ..errors import ParseError
from .selector import SelectorParser
from .stylesheet import Declaration, Rule, Stylesheet
from .values import ColorValue, Keyword, Length, Unit, Value

logger = logging.getLogger(__name__)

# Properties whose identifier values are tried as named colors
COLOR_PROPERTIES = {'color', 'background', 'background-color', 'border-color'}


class CSSParser:
    """
    CSS Parser for the engine's stylesheet subset.

    Rules are made of simple selector lists and single-valued declarations.
    Values become keywords, pixel lengths or colors.
    """

    def __init__(self):
        """Initialize the CSS parser."""
        self.selector_parser = SelectorParser()
        logger.debug("CSS Parser initialized")

    def parse(self, css_content: str) -> Stylesheet:
        """
        Parse CSS content into a stylesheet.

        Args:
            css_content: CSS content to parse

        Returns:
            Parsed Stylesheet, rules in source order

        Raises:
            ParseError: If a rule or selector cannot be parsed
        """
        nodes = tinycss2.parse_stylesheet(css_content, skip_comments=True, skip_whitespace=True)

        rules = []
        for node in nodes:
            if node.type == 'error':
                raise ParseError(self._describe_error(node))
            if node.type == 'at-rule':
                logger.warning(f"Skipping unsupported at-rule @{node.at_keyword} "
                               f"(line {node.source_line})")
                continue
            rules.append(self._parse_rule(node))

        logger.debug(f"Parsed stylesheet with {len(rules)} rules")
        return Stylesheet(rules)

    def _parse_rule(self, node) -> Rule:
        """
        Convert a tinycss2 qualified rule.

        Args:
            node: tinycss2 QualifiedRule

        Returns:
            Parsed Rule
        """
        selector_text = tinycss2.serialize(node.prelude).strip()
        try:
            selectors = self.selector_parser.parse(selector_text)
        except ParseError as e:
            raise ParseError(f"Invalid selector {selector_text!r} on line {node.source_line}: "
                             f"{e.message}", e.position) from e

        declarations = self.parse_declarations(node.content)
        return Rule(selectors, declarations)

    def parse_declarations(self, content) -> List[Declaration]:
        """
        Parse the body of a rule.

        Args:
            content: Declaration block source, or tinycss2 component values

        Returns:
            Declarations in source order
        """
        declarations = []
        for item in tinycss2.parse_declaration_list(content, skip_comments=True,
                                                    skip_whitespace=True):
            if item.type == 'error':
                raise ParseError(self._describe_error(item))
            if item.type != 'declaration':
                logger.warning(f"Skipping nested at-rule in declaration block "
                               f"(line {item.source_line})")
                continue
            if item.important:
                logger.debug(f"Ignoring !important on {item.lower_name}")
            declarations.append(Declaration(item.lower_name,
                                            self.parse_value(item.lower_name, item.value)))
        return declarations

    def parse_value(self, name: str, tokens) -> Value:
        """
        Convert declaration value tokens into a Value.

        Args:
            name: Property name the value belongs to
            tokens: tinycss2 component values of the declaration

        Returns:
            The parsed value; anything that is not a single keyword, length
            or color is kept as a keyword holding its source text
        """
        significant = [token for token in tokens if token.type not in ('whitespace', 'comment')]

        if len(significant) == 1:
            token = significant[0]

            if token.type == 'dimension' and token.lower_unit == Unit.PX.value:
                return Length(token.value, Unit.PX)

            if token.type == 'number' and token.value == 0:
                return Length(0.0, Unit.PX)

            if token.type in ('hash', 'function') or (token.type == 'ident'
                                                       and name in COLOR_PROPERTIES):
                color = self._parse_color(token)
                if color is not None:
                    return color

            if token.type == 'ident':
                return Keyword(token.lower_value)

        return Keyword(tinycss2.serialize(tokens).strip())

    def _parse_color(self, token) -> Optional[ColorValue]:
        rgba = tinycss2.color3.parse_color(token)
        if rgba is None or isinstance(rgba, str):
            # Unknown color or 'currentColor'
            return None
        return ColorValue.rgb(*(int(round(channel * 255)) for channel in rgba[:3]))

    @staticmethod
    def _describe_error(node) -> str:
        return f"{node.message} (line {node.source_line}, column {node.source_column})"


def parse_stylesheet(css_content: str) -> Stylesheet:
    """
    Parse stylesheet source with a default CSSParser.

    Args:
        css_content: CSS source text

    Returns:
        Parsed Stylesheet
    """
    return CSSParser().parse(css_content)
