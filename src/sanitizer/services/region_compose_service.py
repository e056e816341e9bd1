# src/sanitizer/services/region_compose_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from bs4 import BeautifulSoup
from bs4.element import Tag
from pydantic import ValidationError

from sanitizer.exceptions import InvalidRegionConfigurationError
from sanitizer.model import Region
from sanitizer.services.fragment_select_service import css_select, new_fragment

logger = logging.getLogger(__name__)


def validate_regions(regions: Any, output: Any) -> List[Region]:
    """
    Checks 'regions' from the config against the requested 'output' names.
    Every region needs a name and a selector, and every output name needs a
    region.
    """
    if not isinstance(regions, list):
        raise InvalidRegionConfigurationError("'regions' must be a list")
    if not isinstance(output, list):
        raise InvalidRegionConfigurationError("'output' must be a list")

    try:
        parsed = [Region.model_validate(region) for region in regions]
    except ValidationError as e:
        raise InvalidRegionConfigurationError(f"Malformed region: {e}") from e

    names = {region.name for region in parsed}
    missing = [name for name in output if name not in names]
    if missing:
        raise InvalidRegionConfigurationError(f"No region named {', '.join(map(str, missing))}")

    return parsed


def select_regions(node: Tag, regions: List[Region], output: List[str]) -> BeautifulSoup:
    """
    Rebuilds the tree as one <region id="NAME"> wrapper per output name, in
    output order. Matches are collected before anything moves, so an element
    claimed by several regions ends up in the last one.
    """
    by_name: Dict[str, Region] = {}
    for region in regions:
        by_name.setdefault(region.name, region)

    claims = [(name, css_select(node, by_name[name].selector)) for name in output]

    root = new_fragment()
    for name, matches in claims:
        wrapper = root.new_tag("region", attrs={"id": name})
        for match in matches:
            wrapper.append(match)
        root.append(wrapper)
        logger.debug("Region '%s' collected %d element(s).", name, len(matches))

    return root
