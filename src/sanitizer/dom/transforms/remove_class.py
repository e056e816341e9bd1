# src/sanitizer/dom/transforms/remove_class.py
import logging

from bs4.element import Tag

from sanitizer.model import DomTransformKind
from ..core import DomTransform, TransformDefinition

logger = logging.getLogger(__name__)


class RemoveClassTransform(DomTransform):
    """Removes class tokens from matching elements; an emptied class attribute is dropped."""

    def apply(self, node: Tag) -> None:
        if not self.spec.selector:
            logger.warning("remove_class for %s has no selector; nothing to do.", self.spec.extra)
            return

        for element in self.targets(node):
            classes = element.get("class")
            if classes is None:
                continue
            if isinstance(classes, str):
                classes = classes.split()

            remaining = [c for c in classes if c not in self.spec.extra]
            if remaining:
                element["class"] = remaining
            else:
                del element["class"]


DEFINITION = TransformDefinition(kinds=[DomTransformKind.REMOVE_CLASS], transform=RemoveClassTransform)
