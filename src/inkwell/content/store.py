"""JSON-backed key-value override store.

Holds the user's working copy of the collections and the theme preference
in a single JSON file, loaded on init and rewritten after every write.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from inkwell.content.models import ContentCollections, Theme
from pydantic import ValidationError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".inkwell-store.json"
CONTENT_KEY = "poemsQuotesData"
THEME_KEY = "theme"


class OverrideStore:
    """Persistent key-value entries, written through on every change."""

    def __init__(self, state_dir: Path) -> None:
        self._path = state_dir / STORE_FILENAME
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            logger.warning("Corrupt override store at %s, starting fresh", self._path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Override store at %s is not an object, starting fresh", self._path)
            return {}
        return raw

    def _save(self, data: dict[str, Any]) -> None:
        """Write ``data`` to disk, then adopt it as the in-memory state."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self._data = data

    # ── Raw entries ──────────────────────────────────────────────

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._save({**self._data, key: value})

    def remove(self, key: str) -> None:
        """Remove an entry. Missing keys are ignored."""
        if key in self._data:
            self._save({k: v for k, v in self._data.items() if k != key})

    # ── Content override ─────────────────────────────────────────

    def load_content(self) -> ContentCollections | None:
        """Return the persisted working set, or None if absent or unreadable."""
        raw = self.get(CONTENT_KEY)
        if raw is None:
            return None
        try:
            return ContentCollections.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable content override in %s", self._path)
            return None

    def save_content(self, collections: ContentCollections) -> None:
        self.set(CONTENT_KEY, collections.model_dump(mode="json"))

    def clear_content(self) -> None:
        self.remove(CONTENT_KEY)

    # ── Theme preference ─────────────────────────────────────────

    def load_theme(self, default: Theme = Theme.LIGHT) -> Theme:
        raw = self.get(THEME_KEY)
        try:
            return Theme(raw) if raw is not None else default
        except ValueError:
            logger.warning("Unknown theme %r in %s, using %s", raw, self._path, default)
            return default

    def save_theme(self, theme: Theme) -> None:
        self.set(THEME_KEY, theme.value)
