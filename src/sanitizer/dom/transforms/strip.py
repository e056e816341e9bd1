# src/sanitizer/dom/transforms/strip.py
from bs4.element import Tag

from sanitizer.model import DomTransformKind
from ..core import DomTransform, TransformDefinition


class StripTransform(DomTransform):
    """
    Replaces every matching element with its children.
    'unwrap' is the same edit under another name.
    """

    def apply(self, node: Tag) -> None:
        for element in list(self.targets(node)):
            if element.parent is None:
                continue
            element.unwrap()


DEFINITION = TransformDefinition(
    kinds=[DomTransformKind.STRIP, DomTransformKind.UNWRAP],
    transform=StripTransform,
)
