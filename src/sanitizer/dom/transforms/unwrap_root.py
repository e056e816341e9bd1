# src/sanitizer/dom/transforms/unwrap_root.py
from bs4.element import Tag

from sanitizer.exceptions import InvalidSanitizationError
from sanitizer.model import DomTransformKind
from ..core import DomTransform, TransformDefinition


class UnwrapRootTransform(DomTransform):
    """
    Replaces the whole tree with the children of its single root element.
    With a selector, the root is the single element matching it.
    """

    def apply(self, node: Tag) -> None:
        if self.spec.selector:
            roots = list(self.targets(node))
        else:
            roots = [child for child in node.contents if isinstance(child, Tag)]

        if not roots:
            raise InvalidSanitizationError("No root element in unwrap_root")
        if len(roots) > 1:
            raise InvalidSanitizationError("Multiple root elements in unwrap_root")

        children = [child.extract() for child in list(roots[0].contents)]
        node.clear()
        for child in children:
            node.append(child)


DEFINITION = TransformDefinition(kinds=[DomTransformKind.UNWRAP_ROOT], transform=UnwrapRootTransform)
