# src/sanitizer/controllers/sanitize_controller.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from bs4.element import Tag
from pydantic import ValidationError

from sanitizer.dom.registry import DomTransformRegistry
from sanitizer.exceptions import ConfigurationError, InvalidRegionConfigurationError
from sanitizer.model import Configuration, RunOptions
from sanitizer.services.fragment_select_service import domify, select_fragments
from sanitizer.services.prettify_service import prettify, repair_encoding
from sanitizer.services.regexp_service import (
    apply_to_string,
    apply_to_tree,
    build_text_rules,
    partition_text_rules,
)
from sanitizer.services.region_compose_service import select_regions, validate_regions
from sanitizer.services.rule_select_service import RuleSelectService
from sanitizer.services.spacing_service import remove_node_spacing

logger = logging.getLogger(__name__)


class Sanitizer:
    """
    Runs one sanitization of one document.

    Stages run in a fixed order: remove_spacing, regions or selector,
    dom_transform, selector-bound sanitization, prettify, global sanitization.
    The working state is a tree until it is serialized, then a string.
    """

    def __init__(
            self,
            html: Union[str, bytes],
            config: Optional[Configuration],
            options: Union[RunOptions, Mapping[str, Any], None] = None,
    ):
        self.html: Optional[str] = repair_encoding(html) if html else ""
        self.config: Configuration = dict(config or {})
        if not isinstance(options, RunOptions):
            try:
                options = RunOptions.model_validate(dict(options or {}))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid run options: {e}") from e
        self.options = options
        self.rules = RuleSelectService(self.config, self.options)
        self.node: Optional[Tag] = None

    def sanitize(self) -> str:
        if self.html == "":  # Quick return on empty input
            return ""

        self.node = domify(self.html)
        self.html = None

        self.remove_spacing()
        if not self.regions():
            self.selector()
        self.dom_transforms()
        self.regexps()

        return self.html

    def remove_spacing(self) -> None:
        rule = self.rules.select("remove_spacing")
        if rule and rule.value:
            remove_node_spacing(self.node)

    def regions(self) -> bool:
        """Rebuilds the tree from named regions; False when regions can't be used."""
        if "regions" not in self.config:
            return False
        try:
            regions = validate_regions(self.config.get("regions"), self.options.output)
        except InvalidRegionConfigurationError as e:
            logger.debug("Regions skipped, falling back to selector: %s", e)
            return False

        self.node = select_regions(self.node, regions, self.options.output)
        return True

    def selector(self) -> None:
        """Chooses a new root from the 'selector' rule."""
        rule = self.rules.select("selector")
        if rule and rule.value:
            self.node = select_fragments(self.node, rule.value)

    def dom_transforms(self) -> None:
        for rule in self.rules.applicable("dom_transform"):
            transform = DomTransformRegistry.create(rule)
            logger.debug("Applying DOM transform %s on %s", transform.spec.kind.value, transform.spec.selector)
            transform.apply(self.node)

    def regexps(self) -> None:
        """
        Applies selector-bound rules to the tree, serializes it, then applies
        the global rules to the resulting string.
        """
        rules = build_text_rules(self.rules.applicable("sanitization"))
        scoped, global_rules = partition_text_rules(rules)

        for rule in scoped:
            apply_to_tree(rule, self.node)

        html = prettify(self.node)
        self.node = None
        # Global patterns expect valid text
        html = repair_encoding(html)

        for rule in global_rules:
            html = apply_to_string(rule, html)
        self.html = html


def sanitize(
        html: Union[str, bytes],
        config: Optional[Configuration],
        options: Union[RunOptions, Mapping[str, Any], None] = None,
) -> str:
    """Normalizes an HTML document according to a sanitization rule set."""
    return Sanitizer(html, config, options).sanitize()
