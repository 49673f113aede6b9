"""
Persistent settings storage.

Small JSON-file key/value store that survives across sessions. Used for the
board orientation settings.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when settings cannot be persisted."""


class SettingsStore:
    """
    Key/value settings backed by a JSON file.

    A missing or unreadable file counts as empty; the file is rewritten on
    every set(). With no path the store only lives in memory.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._values: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected an object", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Store a value and persist the file.

        Raises:
            SettingsError: If the file cannot be written
        """
        if self.path is None:
            self._values[key] = value
            return
        updated = dict(self._values)
        updated[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(updated, f, indent=2, sort_keys=True)
        except OSError as e:
            # In-memory values stay as they were
            raise SettingsError(f"Failed to save settings to {self.path}: {e}") from e
        self._values = updated
        logger.debug("Saved setting %s=%r", key, value)
