# src/sanitizer/services/spacing_service.py
import logging
import re

from bs4.element import NavigableString, PreformattedString, Tag

logger = logging.getLogger(__name__)

_DOUBLE_SPACE = re.compile(r"  +")


def remove_node_spacing(node: Tag) -> int:
    """
    Collapses runs of two or more spaces into one, inside text nodes only
    (attribute values, comments and doctypes are left alone).
    Returns the number of text nodes that changed.
    """
    changed = 0
    for text in list(node.descendants):
        if not isinstance(text, NavigableString) or isinstance(text, PreformattedString):
            continue
        collapsed = _DOUBLE_SPACE.sub(" ", text)
        if collapsed != text:
            # Keep the string class (Script, Stylesheet, ...) so output escaping is unchanged
            text.replace_with(type(text)(collapsed))
            changed += 1

    logger.debug("remove_spacing rewrote %d text node(s).", changed)
    return changed
