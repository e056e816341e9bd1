# src/sanidiff_shell/core/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from sanidiff_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Process-wide, read-only view of settings.json.
    Each sanidiff run is one process, so settings are changed by editing the file.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._settings = {}
            cls._instance.reload()
        return cls._instance

    @property
    def settings_file(self) -> Path:
        return PathUtils.get_settings_file()

    def get_all(self) -> Dict[str, Any]:
        return self._settings

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key such as 'sanitizer.workers'."""
        value = self._settings
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return default if value is None else value

    def reload(self) -> None:
        """Reads settings.json again; a missing or broken file leaves no settings."""
        path = self.settings_file
        if not path.exists():
            logger.warning("settings.json not found at %s. Using built-in defaults.", path)
            self._settings = {}
            return
        try:
            self._settings = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", path, e, exc_info=True)
            self._settings = {}
            return
        logger.debug("Settings loaded from %s", path)


config_manager = ConfigManager()
