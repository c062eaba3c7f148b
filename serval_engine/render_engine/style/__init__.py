"""
Style resolution for the rendering engine.
This package provides the cascade resolver and the style tree builder.
"""

from .cascade import (PropertyMap, matches_simple_selector, match_selectors, matching_rules,
                      specified_values)
from .styled_node import DisplayType, StyledNode, style_tree

__all__ = [
    'PropertyMap', 'matches_simple_selector', 'match_selectors', 'matching_rules',
    'specified_values', 'DisplayType', 'StyledNode', 'style_tree',
]
