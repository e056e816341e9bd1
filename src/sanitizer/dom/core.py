# src/sanitizer/dom/core.py
from abc import ABC, abstractmethod
from typing import Iterator, List, Type

from bs4.element import Tag

from sanitizer.model import DomTransformKind, DomTransformSpec
from sanitizer.services.fragment_select_service import css_select


class DomTransform(ABC):
    """Interface for all structural edits applied to the working tree."""

    def __init__(self, spec: DomTransformSpec):
        self.spec = spec

    def targets(self, node: Tag) -> Iterator[Tag]:
        """Every element matching any of the spec's selectors, selector by selector."""
        for selector in self.spec.selector:
            yield from css_select(node, selector)

    @abstractmethod
    def apply(self, node: Tag) -> None:
        """Mutates the tree in place."""
        raise NotImplementedError


class TransformDefinition:
    """
    Binds one or more transform kinds to the class implementing them.
    Modules in 'sanitizer.dom.transforms' expose one as DEFINITION.
    """

    def __init__(self, kinds: List[DomTransformKind], transform: Type[DomTransform]):
        self.kinds = list(kinds)
        self.transform = transform
