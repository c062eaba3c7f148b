"""
Cascade resolver.
This module matches stylesheet rules against an element and merges their
declarations into one specified value per property.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..css import Rule, Selector, SimpleSelector, SortedSelectors, Specificity, Stylesheet, Value
from ..dom import Element

logger = logging.getLogger(__name__)

PropertyMap = Dict[str, Value]
MatchedRule = Tuple[Specificity, Rule]


def matches_simple_selector(element: Element, selector: SimpleSelector) -> bool:
    """
    Check if an element matches a simple selector.

    Every constraint the selector carries must hold; absent constraints
    impose nothing.

    Args:
        element: The element to match against
        selector: The selector to check

    Returns:
        True if the element matches the selector, False otherwise
    """
    if selector.tag_name is not None and element.tag_name != selector.tag_name:
        return False

    if selector.id is not None and element.id != selector.id:
        return False

    if selector.classes and not selector.classes <= element.classes():
        return False

    return True


def matches(element: Element, selector: Selector) -> bool:
    if isinstance(selector, SimpleSelector):
        return matches_simple_selector(element, selector)
    raise TypeError(f"Unsupported selector type: {type(selector).__name__}")


def match_selectors(element: Element, sorted_selectors: SortedSelectors) -> Optional[Selector]:
    """
    Find the most specific selector of a rule that matches the element.

    Args:
        element: The element to check
        sorted_selectors: Selectors sorted by descending specificity

    Returns:
        The first matching selector, or None if no match
    """
    for selector in sorted_selectors:
        if matches(element, selector):
            return selector
    return None


def match_rule(element: Element, rule: Rule) -> Optional[MatchedRule]:
    selector = match_selectors(element, rule.selectors)
    if selector is None:
        return None
    return (selector.specificity(), rule)


def matching_rules(element: Element, stylesheet: Stylesheet) -> List[MatchedRule]:
    """
    Collect the rules matching an element, in stylesheet order.

    Args:
        element: The element to match
        stylesheet: The stylesheet to search

    Returns:
        (specificity of the winning selector, rule) pairs
    """
    matched = []
    for rule in stylesheet:
        matched_rule = match_rule(element, rule)
        if matched_rule is not None:
            matched.append(matched_rule)
    return matched


def specified_values(element: Element, stylesheet: Stylesheet) -> PropertyMap:
    """
    Resolve the specified value of every property set on an element.

    Rules are applied from lowest to highest specificity, so later
    declarations overwrite earlier ones. The sort is stable, which leaves
    rules of equal specificity in stylesheet order.

    Args:
        element: The element to style
        stylesheet: The stylesheet to apply

    Returns:
        Mapping of property name to value; empty when nothing matches
    """
    values: PropertyMap = {}
    rules = matching_rules(element, stylesheet)

    rules.sort(key=lambda matched_rule: matched_rule[0])
    for _, rule in rules:
        for declaration in rule.declarations:
            values[declaration.name] = declaration.value

    logger.debug(f"{element.to_sexpr(recursive=False)}: {len(rules)} matching rules, "
                 f"{len(values)} properties")
    return values
