# src/sanitizer/services/rule_select_service.py
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import ValidationError

from sanitizer.exceptions import ConfigurationAmbiguityError, InvalidSanitizationError
from sanitizer.model import Configuration, RuleRecord, RunOptions

logger = logging.getLogger(__name__)

# Rule kinds by cardinality: 'scalar' kinds allow at most one applicable rule.
TOOLS = {
    "array": ("dom_transform", "sanitization"),
    "scalar": ("selector", "remove_spacing"),
}


class RuleSelectService:
    """
    Canonicalizes configuration entries into RuleRecords and filters them
    against the options of the current run.
    Records are rebuilt on every lookup since options differ between runs.
    """

    def __init__(self, config: Optional[Configuration], options: Optional[RunOptions] = None):
        self.config = config or {}
        self.options = options or RunOptions()

    def canonicalize(self, name: str) -> Optional[List[RuleRecord]]:
        """
        Turns a simple value, a single record or a list of records into a
        list of RuleRecords. Returns None when the kind is not configured.
        """
        raw = self.config.get(name)
        if raw is None:
            return None

        if isinstance(raw, (list, tuple)) and raw and self._is_record(raw[0], name):
            rules = list(raw)
        elif self._is_record(raw, name):
            rules = [raw]
        else:
            rules = [{"value": raw}]

        records: List[RuleRecord] = []
        for rule in rules:
            if isinstance(rule, RuleRecord):
                records.append(rule)
            elif isinstance(rule, Mapping):
                try:
                    records.append(RuleRecord.model_validate(dict(rule)))
                except ValidationError as e:
                    raise InvalidSanitizationError(f"Malformed '{name}' rule {dict(rule)!r}: {e}") from e
            else:
                raise InvalidSanitizationError(f"Malformed '{name}' rule: {rule!r}")
        return records

    def want(self, rule: Optional[RuleRecord]) -> bool:
        """Whether a rule applies: not disabled and, if it has one, its path regex matches."""
        if rule is None:
            return False
        if rule.disabled:
            return False

        # Filter out if path regexp doesn't match
        if rule.path and self.options.path:
            try:
                return re.search(rule.path, self.options.path) is not None
            except re.error as e:
                raise InvalidSanitizationError(f"Invalid path pattern '{rule.path}': {e}") from e

        return True

    def applicable(self, name: str) -> List[RuleRecord]:
        """All wanted rules of a kind, in configuration order."""
        return [r for r in self.canonicalize(name) or [] if self.want(r)]

    def select(self, name: str) -> Optional[RuleRecord]:
        """The single wanted rule of a kind; more than one is a configuration error."""
        wanted = self.applicable(name)
        if not wanted:
            return None
        if len(wanted) > 1:
            raise ConfigurationAmbiguityError(name)

        logger.debug("Selected '%s' rule: %r", name, wanted[0].value)
        return wanted[0]

    @staticmethod
    def _is_record(item: Any, name: str) -> bool:
        if isinstance(item, RuleRecord):
            return True
        if not isinstance(item, Mapping):
            return False
        return "value" in item or name in TOOLS["array"]
