"""Content repository — original vs working collections.

The original collections come from the canonical dataset and are never
modified.  The working collections start as a copy of the original (or are
restored from the override store) and are the only thing edit operations
touch.  Any item whose id also appears in the original collection of the
same variant is protected: it can be read but not updated or deleted.

Every successful mutation is written through to the override store before
the call returns.  Changes are staged on a copy and only become the working
set once the store write succeeds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from inkwell.content.dataset import DEFAULT_DATASET, load_dataset
from inkwell.content.models import (
    ContentCollections,
    ContentItem,
    EditSession,
    Variant,
)
from inkwell.content.store import OverrideStore
from inkwell.errors import NotFoundError, ProtectedContentError

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "content.json"


class ContentRepository:
    """Owns the original and working collections and their edit sessions."""

    def __init__(
        self,
        store: OverrideStore,
        dataset: str | Path = DEFAULT_DATASET,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._dataset = dataset
        self._clock = clock
        self._original: ContentCollections | None = None
        self._working: ContentCollections | None = None
        self._sessions: dict[Variant, EditSession] = {v: EditSession() for v in Variant}
        self._last_id = 0

    # ── Private helpers ──────────────────────────────────────────

    def _require_loaded(self) -> ContentCollections:
        if self._working is None:
            raise RuntimeError("ContentRepository.load() must be called first")
        return self._working

    def _persist(self) -> None:
        self._store.save_content(self._require_loaded())

    def _commit(self, working: ContentCollections) -> None:
        """Write ``working`` to the store, then make it the live working set."""
        self._store.save_content(working)
        self._working = working

    def _staged(self) -> ContentCollections:
        return self._require_loaded().deep_copy()

    def _index_of(self, variant: Variant, item_id: int) -> int:
        for i, item in enumerate(self._require_loaded().items(variant)):
            if item.id == item_id:
                return i
        raise NotFoundError(variant.value, item_id)

    def _check_editable(self, variant: Variant, item_id: int) -> None:
        if self.is_protected(variant, item_id):
            self._sessions[variant] = EditSession()
            raise ProtectedContentError(variant.value, item_id)

    def _allocate_id(self, variant: Variant) -> int:
        taken = self._require_loaded().ids(variant)
        candidate = max(int(self._clock() * 1000), self._last_id + 1)
        while candidate in taken:
            candidate += 1
        self._last_id = candidate
        return candidate

    def _build(self, variant: Variant, item_id: int, fields: Mapping[str, Any]) -> ContentItem:
        return variant.model.model_validate({**fields, "id": item_id})

    # ── Loading ──────────────────────────────────────────────────

    def load(self) -> ContentCollections:
        """Build the working set from the override store or the original.

        The canonical dataset is fetched on the first call only.  On first
        run (no usable override) the copy of the original is persisted
        immediately.

        Raises:
            LoadError: If the canonical dataset cannot be loaded.
        """
        if self._original is None:
            self._original = load_dataset(self._dataset)

        restored = self._store.load_content()
        if restored is not None:
            logger.info("Restored working set from %s", self._store.path)
            self._working = restored
        else:
            logger.info("Initializing working set from canonical dataset")
            self._working = self._original.deep_copy()
            self._persist()
        return self._working

    @property
    def is_loaded(self) -> bool:
        return self._working is not None

    @property
    def working_set(self) -> ContentCollections:
        return self._require_loaded()

    @property
    def original_set(self) -> ContentCollections:
        if self._original is None:
            raise RuntimeError("ContentRepository.load() must be called first")
        return self._original

    # ── Read operations ──────────────────────────────────────────

    def is_protected(self, variant: Variant | str, item_id: int) -> bool:
        """True iff the original collection of ``variant`` has this id."""
        return item_id in self.original_set.ids(Variant(variant))

    def items(self, variant: Variant | str) -> list[ContentItem]:
        return list(self._require_loaded().items(Variant(variant)))

    def get(self, variant: Variant | str, item_id: int) -> ContentItem:
        """Return a working item. Raises NotFoundError if absent."""
        variant = Variant(variant)
        return self._require_loaded().items(variant)[self._index_of(variant, item_id)]

    # ── Write operations ─────────────────────────────────────────

    def create(self, variant: Variant | str, fields: Mapping[str, Any]) -> ContentItem:
        """Append a new user-added item and persist it."""
        variant = Variant(variant)
        item = self._build(variant, self._allocate_id(variant), fields)
        working = self._staged()
        working.items(variant).append(item)  # type: ignore[arg-type]
        self._commit(working)
        logger.debug("Created %s %d", variant, item.id)
        return item

    def update(
        self, variant: Variant | str, item_id: int, fields: Mapping[str, Any]
    ) -> ContentItem:
        """Replace a user-added item's fields, keeping its id.

        Raises:
            ProtectedContentError: If the item comes from the original set.
                The variant's edit session is reset to idle.
            NotFoundError: If no working item has this id.
        """
        variant = Variant(variant)
        self._check_editable(variant, item_id)
        index = self._index_of(variant, item_id)
        item = self._build(variant, item_id, fields)
        working = self._staged()
        working.items(variant)[index] = item  # type: ignore[assignment]
        self._commit(working)
        logger.debug("Updated %s %d", variant, item_id)
        return item

    def delete(self, variant: Variant | str, item_id: int) -> None:
        """Remove a user-added item.

        Clears the variant's edit session if it referenced this item.

        Raises:
            ProtectedContentError: If the item comes from the original set.
                The variant's edit session is reset to idle.
            NotFoundError: If no working item has this id.
        """
        variant = Variant(variant)
        self._check_editable(variant, item_id)
        index = self._index_of(variant, item_id)
        working = self._staged()
        del working.items(variant)[index]
        self._commit(working)
        if self._sessions[variant].editing_id == item_id:
            self._sessions[variant] = EditSession()
        logger.debug("Deleted %s %d", variant, item_id)

    def reset_to_original(self) -> None:
        """Discard the override store; the next load() starts from the original."""
        self._store.clear_content()
        self._working = None
        self._sessions = {v: EditSession() for v in Variant}
        logger.info("Discarded content override in %s", self._store.path)

    # ── Edit sessions ────────────────────────────────────────────

    def edit_session(self, variant: Variant | str) -> EditSession:
        return self._sessions[Variant(variant)]

    def begin_edit(self, variant: Variant | str, item_id: int) -> ContentItem:
        """Start editing a user-added item and return its current state.

        A protected id resets the session to idle; a missing id leaves it
        unchanged.
        """
        variant = Variant(variant)
        self._check_editable(variant, item_id)
        item = self.get(variant, item_id)
        self._sessions[variant] = EditSession(editing_id=item_id)
        return item

    def cancel_edit(self, variant: Variant | str) -> None:
        self._sessions[Variant(variant)] = EditSession()

    def save(self, variant: Variant | str, fields: Mapping[str, Any]) -> ContentItem:
        """Create a new item when idle, or update the item being edited.

        The session returns to idle whatever the outcome.
        """
        variant = Variant(variant)
        session = self._sessions[variant]
        if session.is_idle:
            return self.create(variant, fields)
        try:
            return self.update(variant, session.editing_id, fields)  # type: ignore[arg-type]
        finally:
            self._sessions[variant] = EditSession()

    # ── Export ───────────────────────────────────────────────────

    def export_json(self) -> str:
        """Serialize the working set in the canonical two-collection schema."""
        return self._require_loaded().model_dump_json(indent=2)

    def export_to(self, directory: Path) -> Path:
        """Write the working set to ``directory/content.json``."""
        path = directory / EXPORT_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.export_json(), encoding="utf-8")
        logger.info("Exported working set to %s", path)
        return path
