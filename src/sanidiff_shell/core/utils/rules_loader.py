# src/sanidiff_shell/core/utils/rules_loader.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from sanitizer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_rules(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads a sanitization rule set (selector, remove_spacing, regions,
    dom_transform, sanitization) from a JSON file.
    """
    rules_path = Path(path)
    if not rules_path.exists():
        raise ConfigurationError(f"Rules file not found: {rules_path}")

    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            rules = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Rules file {rules_path} is not valid JSON: {e}") from e

    if not isinstance(rules, dict):
        raise ConfigurationError(f"Rules file {rules_path} must hold a JSON object.")

    logger.debug("Loaded %d rule kind(s) from %s", len(rules), rules_path)
    return rules
