"""Content domain — models, colors, filtering, persistence and the repository.

The pieces here are pure computation and storage; nothing in this package
knows how items are displayed.
"""

from inkwell.content.colors import CategoryColor, ColorAssigner
from inkwell.content.filters import filter_items, has_no_results, list_categories
from inkwell.content.models import (
    ALL_CATEGORIES,
    AppState,
    ContentCollections,
    ContentItem,
    EditSession,
    Poem,
    Quote,
    Theme,
    Variant,
    ViewMode,
)
from inkwell.content.repository import ContentRepository
from inkwell.content.store import OverrideStore

__all__ = [
    "ALL_CATEGORIES",
    "AppState",
    "CategoryColor",
    "ColorAssigner",
    "ContentCollections",
    "ContentItem",
    "ContentRepository",
    "EditSession",
    "OverrideStore",
    "Poem",
    "Quote",
    "Theme",
    "Variant",
    "ViewMode",
    "filter_items",
    "has_no_results",
    "list_categories",
]
