"""
Preference persistence for hosts of the grade report toolkit.

Holds the one externally-owned preference (the notification target) in a
small JSON file. Any malformed data falls back to defaults, never raises
out of the constructor. NotificationDispatcher.from_preferences() reads the
stored target as its default.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Lightweight JSON-backed store for host preferences."""

    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.data: Dict[str, Any] = {}
        self.load_error: Optional[str] = None

        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    self.data = loaded
                else:
                    self.load_error = f"Preferences file is not a JSON object: {type(loaded).__name__}"
            except json.JSONDecodeError as e:
                self.load_error = f"Preferences file is corrupted: {e}"
            except OSError as e:
                self.load_error = f"Failed to read preferences: {e}"

        if self.load_error:
            logger.warning(f"{self.load_error}; using defaults")
            self.data = {}

        if "version" not in self.data:
            self.data["version"] = self.CURRENT_VERSION

    def get_notification_target(self) -> Optional[str]:
        value = self.data.get("notification_target")
        return value if isinstance(value, str) and value.strip() else None

    def set_notification_target(self, value: Optional[str]) -> None:
        if value is None or not value.strip():
            self.data.pop("notification_target", None)
        else:
            self.data["notification_target"] = value.strip()
        self._save()

    def reset(self) -> None:
        """Discard everything and write defaults."""
        self.data = {"version": self.CURRENT_VERSION}
        self.load_error = None
        self._save()

    def _save(self) -> None:
        """Atomic write via a temp file in the same directory."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
            Path(temp_name).replace(self.path)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise
