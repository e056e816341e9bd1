# src/sanitizer/services/regexp_service.py
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from sanitizer.model import RuleRecord, TextRule
from sanitizer.services.fragment_select_service import PARSER, css_select

logger = logging.getLogger(__name__)


def build_text_rules(records: Iterable[RuleRecord]) -> List[TextRule]:
    return [TextRule.from_record(record) for record in records]


def partition_text_rules(rules: Iterable[TextRule]) -> Tuple[List[TextRule], List[TextRule]]:
    """Splits rules into (selector-scoped, global), keeping the relative order of each."""
    scoped: List[TextRule] = []
    global_rules: List[TextRule] = []
    for rule in rules:
        (scoped if rule.is_selector_scoped else global_rules).append(rule)
    return scoped, global_rules


def apply_to_string(rule: TextRule, html: str) -> str:
    return rule.pattern.sub(rule.substitute, html)


def apply_to_tree(rule: TextRule, node: Tag) -> int:
    """
    Runs the substitution over the outer HTML of every element matching the
    rule's selector and swaps the element for the re-parsed result.
    Returns the number of replaced elements.
    """
    replaced = 0
    for element in css_select(node, rule.selector):
        if element.parent is None:
            continue
        html = str(element)
        new_html = apply_to_string(rule, html)
        if new_html == html:
            continue

        fragment = BeautifulSoup(new_html, PARSER)
        element.replace_with(*list(fragment.contents))
        replaced += 1

    logger.debug("Pattern %r replaced %d element(s) under '%s'.", rule.pattern.pattern, replaced, rule.selector)
    return replaced
