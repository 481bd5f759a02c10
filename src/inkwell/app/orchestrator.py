"""Orchestrator — turns user intents into repository calls and re-renders.

The orchestrator owns the ``AppState``.  Every change to the category, the
search query or the view mode triggers one recomputation: the filter runs
over the repository's working set, colors are looked up for each category
in the result, and the view is handed to the renderer.  Repository failures
are reported to the renderer, never raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, Protocol

from inkwell.app.debounce import Debouncer, Scheduler
from inkwell.content.colors import CategoryColor, ColorAssigner
from inkwell.content.filters import filter_items, has_no_results, list_categories
from inkwell.content.models import (
    AppState,
    ContentItem,
    Poem,
    Quote,
    Theme,
    Variant,
    ViewMode,
)
from inkwell.content.repository import ContentRepository
from inkwell.content.store import OverrideStore
from inkwell.errors import LoadError, NotFoundError, ProtectedContentError
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3

Level = Literal["info", "success", "error"]


class RenderedView(BaseModel):
    """Everything the presentation layer needs for one pass."""

    poems: list[Poem] = Field(default_factory=list)
    quotes: list[Quote] = Field(default_factory=list)
    view_mode: ViewMode = ViewMode.BOTH
    show_empty_state: bool = False
    colors: dict[str, CategoryColor] = Field(default_factory=dict)
    theme: Theme = Theme.LIGHT


class Renderer(Protocol):
    """Presentation collaborator."""

    def render(self, view: RenderedView) -> None: ...

    def notify(self, message: str, level: Level = "info") -> None: ...


class Orchestrator:
    """Coordinates app state, the content repository and the renderer."""

    def __init__(
        self,
        repository: ContentRepository,
        store: OverrideStore,
        renderer: Renderer,
        *,
        colors: ColorAssigner | None = None,
        scheduler: Scheduler | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        state: AppState | None = None,
    ) -> None:
        self.repository = repository
        self.store = store
        self.renderer = renderer
        self.colors = colors or ColorAssigner()
        self.state = state or AppState()
        self.failed = False
        self._search = Debouncer(self.apply_search, debounce_seconds, scheduler)

    # ── Lifecycle ────────────────────────────────────────────────

    def start(self) -> bool:
        """Load content and render the first view.

        Returns False (after reporting the error) if the canonical dataset
        could not be loaded; the orchestrator then stays inert.
        """
        self.state.theme = self.store.load_theme(self.state.theme)
        try:
            self.repository.load()
        except LoadError as exc:
            logger.error("Content load failed: %s", exc)
            self.failed = True
            self.renderer.notify(f"Failed to load content. {exc}", "error")
            return False
        self.recompute()
        return True

    def recompute(self) -> RenderedView | None:
        """Filter the working set against the current state and render it."""
        if self.failed or not self.repository.is_loaded:
            return None
        working = self.repository.working_set
        mode = self.state.view_mode
        poems = filter_items(working.poems, self.state) if mode.shows(Variant.POEM) else []
        quotes = filter_items(working.quotes, self.state) if mode.shows(Variant.QUOTE) else []

        categories = dict.fromkeys(item.category for item in [*poems, *quotes])
        view = RenderedView(
            poems=poems,
            quotes=quotes,
            view_mode=mode,
            show_empty_state=has_no_results(poems, quotes, mode),
            colors={c: self.colors.color_for(c) for c in categories},
            theme=self.state.theme,
        )
        logger.debug(
            "Recomputed view: %d poems, %d quotes (category=%r, query=%r, view=%s)",
            len(poems), len(quotes), self.state.active_category,
            self.state.search_query, mode,
        )
        self.renderer.render(view)
        return view

    # ── Filter intents ───────────────────────────────────────────

    def set_category(self, category: str) -> None:
        self.state.active_category = category
        self.recompute()

    def set_view_mode(self, mode: ViewMode | str) -> None:
        self.state.view_mode = ViewMode(mode)
        self.recompute()

    def apply_search(self, query: str) -> None:
        """Set the search query immediately and recompute."""
        self.state.search_query = query
        self.recompute()

    def update_search(self, raw: str) -> None:
        """Debounced search input; only the last value in a burst is applied."""
        self._search(raw)

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def categories(self) -> list[str]:
        return list_categories(self.repository.working_set)

    def set_theme(self, theme: Theme | str) -> Theme:
        self.state.theme = Theme(theme)
        self.store.save_theme(self.state.theme)
        return self.state.theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(self.state.theme.toggled())

    # ── Edit intents ─────────────────────────────────────────────

    def begin_edit(self, variant: Variant | str, item_id: int) -> ContentItem | None:
        variant = Variant(variant)
        try:
            return self.repository.begin_edit(variant, item_id)
        except ProtectedContentError:
            self.renderer.notify(
                f"This is original content and cannot be edited. "
                f"You can only edit {variant.collection_key} you added!",
                "error",
            )
        except NotFoundError as exc:
            self.renderer.notify(str(exc), "error")
        return None

    def cancel_edit(self, variant: Variant | str) -> None:
        self.repository.cancel_edit(variant)

    def save(self, variant: Variant | str, fields: Mapping[str, Any]) -> ContentItem | None:
        variant = Variant(variant)
        try:
            item = self.repository.save(variant, fields)
        except ProtectedContentError:
            self.renderer.notify(
                f"You cannot edit original content. "
                f"You can only add your own {variant.collection_key}!",
                "error",
            )
            return None
        except NotFoundError as exc:
            self.renderer.notify(str(exc), "error")
            return None
        self.renderer.notify(f"{variant.value.capitalize()} saved successfully!", "success")
        self.recompute()
        return item

    def delete(self, variant: Variant | str, item_id: int) -> bool:
        variant = Variant(variant)
        try:
            self.repository.delete(variant, item_id)
        except ProtectedContentError:
            self.renderer.notify("This is original content and cannot be deleted!", "error")
            return False
        except NotFoundError as exc:
            self.renderer.notify(str(exc), "error")
            return False
        self.renderer.notify(f"{variant.value.capitalize()} deleted successfully!", "success")
        self.recompute()
        return True

    def reset(self) -> bool:
        """Drop all local changes and reload from the original collection."""
        self.repository.reset_to_original()
        try:
            self.repository.load()
        except LoadError as exc:
            self.failed = True
            self.renderer.notify(f"Failed to load content. {exc}", "error")
            return False
        self.renderer.notify("Content reset to the original collection.", "success")
        self.recompute()
        return True

    def export(self, directory: Path) -> Path:
        path = self.repository.export_to(directory)
        self.renderer.notify(f"Exported {path}", "success")
        return path
