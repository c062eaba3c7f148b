"""
CSS Implementation for the rendering engine.
This package provides CSS values, simple selectors, stylesheets and the
stylesheet parser.
"""

from .values import AUTO, LENGTH_ZERO, Color, ColorValue, Keyword, Length, Unit, Value, px
from .selector import Selector, SimpleSelector, SortedSelectors, SelectorParser, Specificity
from .stylesheet import Declaration, Rule, Stylesheet
from .parser import CSSParser, parse_stylesheet

__all__ = [
    'AUTO', 'LENGTH_ZERO', 'Color', 'ColorValue', 'Keyword', 'Length', 'Unit', 'Value', 'px',
    'Selector', 'SimpleSelector', 'SortedSelectors', 'SelectorParser', 'Specificity',
    'Declaration', 'Rule', 'Stylesheet', 'CSSParser', 'parse_stylesheet',
]
