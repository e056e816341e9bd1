# src/sanitizer/dom/transforms/remove.py
from bs4.element import Tag

from sanitizer.model import DomTransformKind
from ..core import DomTransform, TransformDefinition


class RemoveTransform(DomTransform):
    """Detaches and discards every matching element."""

    def apply(self, node: Tag) -> None:
        for element in list(self.targets(node)):
            element.extract()


DEFINITION = TransformDefinition(kinds=[DomTransformKind.REMOVE], transform=RemoveTransform)
