# src/sanidiff_shell/core/handlers/config_handler.py
import json
import logging
from typing import List, Optional

from sanidiff_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

USAGE = """
Usage:
  config list         Show the current settings as JSON.
  config get <key>    Show one setting (e.g., sanitizer.workers).
  config path         Show where settings.json lives; edit it to change settings.
"""


def handle_config(args: List[str], _stdin: Optional[str] = None) -> int:
    """Handles the read-only 'config' command."""
    if not args:
        print(USAGE)
        return 1

    command = args[0]

    if command == "list":
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    if command == "get":
        if len(args) != 2:
            print("Usage: config get <key>")
            return 1
        value = config_manager.get_nested(args[1])
        if value is None:
            print(f"❌ Error: No setting named '{args[1]}'.")
            return 1
        print(json.dumps(value, indent=2) if isinstance(value, (dict, list)) else value)
        return 0

    if command == "path":
        print(config_manager.settings_file)
        return 0

    print(f"Unknown command: 'config {command}'.")
    return 1
