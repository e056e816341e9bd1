# ============================================
# file: src/sanitizer/model.py
# ============================================
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sanitizer.exceptions import InvalidSanitizationError, UnknownTransformKindError

Configuration = Dict[str, Any]


class RuleRecord(BaseModel):
    """
    One canonicalized configuration entry.
    Kind-specific keys (selector, type, pattern, ...) are kept as extras.
    """
    model_config = ConfigDict(extra="allow")

    value: Any = None
    path: Optional[str] = None
    disabled: Optional[bool] = None

    def get(self, key: str, default: Any = None) -> Any:
        """Dict-style access covering both declared fields and extras."""
        if key in type(self).model_fields:
            value = getattr(self, key)
        else:
            value = (self.model_extra or {}).get(key)
        return default if value is None else value


class Region(BaseModel):
    name: str
    selector: str


class RunOptions(BaseModel):
    """
    Per-invocation options. 'output' is kept as given; region validation
    decides whether it is usable.
    """
    path: Optional[str] = None
    output: Optional[Any] = None


class DomTransformKind(str, Enum):
    REMOVE = "remove"
    STRIP = "strip"
    UNWRAP_ROOT = "unwrap_root"
    UNWRAP = "unwrap"
    REMOVE_CLASS = "remove_class"


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class DomTransformSpec(BaseModel):
    kind: DomTransformKind
    selector: List[str] = Field(default_factory=list)
    extra: List[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: RuleRecord) -> "DomTransformSpec":
        """
        Builds a transform spec from a dom_transform record.
        The kind is read from 'type', 'kind' or a string 'value'; class names
        for remove_class from 'class' or 'extra'.
        """
        kind = record.get("type") or record.get("kind")
        if kind is None and isinstance(record.value, str):
            kind = record.value
        if not kind:
            raise InvalidSanitizationError("DOM transform needs a type")

        kind = str(kind)
        if kind not in {k.value for k in DomTransformKind}:
            raise UnknownTransformKindError(kind)

        return cls(
            kind=DomTransformKind(kind),
            selector=_as_list(record.get("selector")),
            extra=_as_list(record.get("class", record.get("extra"))),
        )


class TextRule(BaseModel):
    """A regular-expression substitution, optionally bound to a CSS selector."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    pattern: re.Pattern
    substitute: str = ""
    selector: Optional[str] = None

    @field_validator("pattern", mode="before")
    @classmethod
    def compile_pattern(cls, v):
        if isinstance(v, re.Pattern):
            return v
        try:
            return re.compile(str(v))
        except re.error as e:
            raise ValueError(f"invalid regular expression '{v}': {e}") from e

    @property
    def is_selector_scoped(self) -> bool:
        return bool(self.selector)

    @classmethod
    def from_record(cls, record: RuleRecord) -> "TextRule":
        """
        Accepts {pattern, substitute|replacement}, {value: [pattern, replacement]}
        or {value: {pattern, substitute}}.
        """
        pattern = record.get("pattern")
        substitute = record.get("substitute", record.get("replacement"))

        value = record.value
        if pattern is None and isinstance(value, (list, tuple)) and value:
            pattern = value[0]
            if substitute is None and len(value) > 1:
                substitute = value[1]
        elif pattern is None and isinstance(value, dict):
            pattern = value.get("pattern")
            if substitute is None:
                substitute = value.get("substitute", value.get("replacement"))
        elif pattern is None and value is not None:
            pattern = value

        if pattern is None:
            raise InvalidSanitizationError("Sanitization rule needs a pattern")

        try:
            return cls(
                pattern=pattern,
                substitute="" if substitute is None else str(substitute),
                selector=record.get("selector"),
            )
        except ValidationError as e:
            raise InvalidSanitizationError(str(e)) from e
