# src/sanidiff_shell/app.py
from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List, Optional

from sanidiff_shell.core.handlers.config_handler import handle_config
from sanidiff_shell.core.handlers.sanitize_handler import handle_sanitize, sanitize_help_text
from sanidiff_shell.core.managers.config_manager import config_manager
from sanidiff_shell.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[..., int]] = {
    "sanitize": handle_sanitize,
    "config": handle_config,
}

USAGE = f"""
Usage: sanidiff <command> [args]

{sanitize_help_text}
  config list|get|path
      Show settings (edit settings.json to change them).
"""


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for the sanidiff command line."""
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        config_manager.get_nested("debug.modules"),
        config_manager.get_nested("debug.silenced"),
    )

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE)
        return 0 if args else 1

    handler = COMMANDS.get(args[0])
    if handler is None:
        print(f"Unknown command: {args[0]}")
        print(USAGE)
        return 1

    logger.debug("Running command '%s' with %s", args[0], args[1:])
    return handler(args[1:])


if __name__ == "__main__":
    sys.exit(main())
