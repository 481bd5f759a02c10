"""Content domain models — pure Pydantic v2 data types.

Poems and quotes share a common shape (id, category, author, date) and are
kept in two parallel collections.  ``ContentCollections`` is the on-disk
schema used by the canonical dataset, the override store and the export
file alike.
"""

from __future__ import annotations

import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

ALL_CATEGORIES = "all"


class Variant(StrEnum):
    """Kind of content item."""

    POEM = "poem"
    QUOTE = "quote"

    @property
    def collection_key(self) -> str:
        """Key of this variant's collection in the JSON schema."""
        return f"{self.value}s"

    @property
    def model(self) -> type[Poem] | type[Quote]:
        return Poem if self is Variant.POEM else Quote


class ViewMode(StrEnum):
    """Which collections are displayed."""

    POEMS = "poems"
    QUOTES = "quotes"
    BOTH = "both"

    def shows(self, variant: Variant) -> bool:
        return self is ViewMode.BOTH or self.value == variant.collection_key


class Theme(StrEnum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class Poem(BaseModel):
    """A titled, multi-line poem."""

    id: int
    title: str
    content: str
    category: str = Field(min_length=1)
    author: str
    date: datetime.date


class Quote(BaseModel):
    """A short quotation."""

    id: int
    text: str
    category: str = Field(min_length=1)
    author: str
    date: datetime.date


ContentItem = Poem | Quote


class ContentCollections(BaseModel):
    """The two content collections, in their stored order.

    Ids must be unique within each collection.
    """

    poems: list[Poem] = Field(default_factory=list)
    quotes: list[Quote] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> ContentCollections:
        for key in ("poems", "quotes"):
            seen: set[int] = set()
            for item in getattr(self, key):
                if item.id in seen:
                    raise ValueError(f"Duplicate id {item.id} in {key}")
                seen.add(item.id)
        return self

    def items(self, variant: Variant | str) -> list[Poem] | list[Quote]:
        """Return the live collection for a variant."""
        return self.poems if Variant(variant) is Variant.POEM else self.quotes

    def ids(self, variant: Variant | str) -> set[int]:
        return {item.id for item in self.items(variant)}

    def deep_copy(self) -> ContentCollections:
        return self.model_copy(deep=True)


class EditSession(BaseModel):
    """Edit session of one variant: Idle when ``editing_id`` is None."""

    editing_id: int | None = None

    @property
    def is_idle(self) -> bool:
        return self.editing_id is None


class AppState(BaseModel):
    """Transient UI state owned by the orchestrator."""

    active_category: str = ALL_CATEGORIES
    search_query: str = ""
    view_mode: ViewMode = ViewMode.BOTH
    theme: Theme = Theme.LIGHT
