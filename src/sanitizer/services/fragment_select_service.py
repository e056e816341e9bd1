# src/sanitizer/services/fragment_select_service.py
from __future__ import annotations

import logging
from typing import List, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from sanitizer.exceptions import InvalidSanitizationError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def domify(html: str) -> BeautifulSoup:
    """
    Parses HTML into a mutable tree.
    html.parser never synthesizes <html>/<body>, so a snippet stays a fragment
    and a full page keeps its DOCTYPE.
    """
    return BeautifulSoup(html, PARSER)


def new_fragment() -> BeautifulSoup:
    """An empty, document-less container to move selected nodes into."""
    return BeautifulSoup("", PARSER)


def css_select(node: Tag, selector: str) -> List[Tag]:
    """Tag.select with selector syntax errors reported as rule errors."""
    try:
        return node.select(selector)
    except SelectorSyntaxError as e:
        raise InvalidSanitizationError(f"Invalid CSS selector '{selector}': {e}") from e


def select_fragments(node: Tag, selector: Union[str, List[str]]) -> BeautifulSoup:
    """
    Returns a fragment made of the elements matching the selector(s), in
    document order. Everything else, DOCTYPE included, is dropped.
    """
    if isinstance(selector, (list, tuple)):
        selector = ", ".join(selector)

    matches = css_select(node, selector)
    logger.debug("Selector '%s' matched %d element(s).", selector, len(matches))

    fragment = new_fragment()
    for match in matches:
        fragment.append(match)
    return fragment
