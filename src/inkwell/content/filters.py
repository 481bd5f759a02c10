"""Category and free-text filtering over content items.

All functions are pure: they never mutate the items or the state, and
filtering keeps the input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from inkwell.content.models import (
    ALL_CATEGORIES,
    AppState,
    ContentCollections,
    ContentItem,
    Poem,
    ViewMode,
)


def searchable_text(item: ContentItem) -> str:
    """Lowercased title, body, author and category joined by single spaces."""
    if isinstance(item, Poem):
        parts = [item.title, item.content]
    else:
        parts = ["", item.text]
    parts.extend([item.author, item.category])
    return " ".join(parts).lower()


def matches_category(item: ContentItem, active_category: str) -> bool:
    return active_category == ALL_CATEGORIES or item.category == active_category


def matches_search(item: ContentItem, query: str) -> bool:
    if not query:
        return True
    return query.lower() in searchable_text(item)


def filter_items(items: Iterable[ContentItem], state: AppState) -> list[ContentItem]:
    """Return the items passing both the category and the search predicate."""
    return [
        item
        for item in items
        if matches_category(item, state.active_category)
        and matches_search(item, state.search_query)
    ]


def has_no_results(
    poems: Sequence[ContentItem],
    quotes: Sequence[ContentItem],
    view_mode: ViewMode,
) -> bool:
    """True when every collection shown under ``view_mode`` is empty."""
    if view_mode is ViewMode.POEMS:
        return not poems
    if view_mode is ViewMode.QUOTES:
        return not quotes
    return not poems and not quotes


def list_categories(collections: ContentCollections) -> list[str]:
    """Sorted unique categories across poems and quotes."""
    return sorted({item.category for item in [*collections.poems, *collections.quotes]})


def display_label(category: str) -> str:
    """Capitalize the first character for display, leaving the rest as stored."""
    return category[:1].upper() + category[1:]
