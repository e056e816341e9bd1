# src/sanitizer/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, Type

from sanitizer.exceptions import UnknownTransformKindError
from sanitizer.model import DomTransformKind, DomTransformSpec, RuleRecord
from .core import DomTransform, TransformDefinition

logger = logging.getLogger(__name__)


class DomTransformRegistry:
    """
    Central registry mapping DomTransformKind to its implementation.

    Discovers TransformDefinition objects in the 'sanitizer.dom.transforms'
    package the first time a transform is requested.
    """

    _transforms: Dict[DomTransformKind, Type[DomTransform]] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        if cls._loaded:
            return

        import sanitizer.dom.transforms as transforms_pkg

        for _, name, _ in pkgutil.iter_modules(transforms_pkg.__path__):
            module = importlib.import_module(f"sanitizer.dom.transforms.{name}")
            defn = getattr(module, "DEFINITION", None)
            if not isinstance(defn, TransformDefinition):
                continue
            for kind in defn.kinds:
                cls._transforms[kind] = defn.transform
                logger.debug("DOM transform loaded: %s -> %s", kind.value, defn.transform.__name__)

        missing = [kind.value for kind in DomTransformKind if kind not in cls._transforms]
        if missing:
            logger.warning("No implementation registered for DOM transform(s): %s", ", ".join(missing))

        cls._loaded = True

    @classmethod
    def get(cls, kind: DomTransformKind) -> Type[DomTransform]:
        cls.discover()
        transform = cls._transforms.get(kind)
        if transform is None:
            raise UnknownTransformKindError(kind.value)
        return transform

    @classmethod
    def registered_kinds(cls):
        cls.discover()
        return sorted(kind.value for kind in cls._transforms)

    @classmethod
    def create(cls, record: RuleRecord) -> DomTransform:
        """Builds the transform described by a dom_transform record."""
        spec = DomTransformSpec.from_record(record)
        return cls.get(spec.kind)(spec)
