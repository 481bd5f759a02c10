"""Rich-based terminal renderer for poems and quotes."""

from __future__ import annotations

import datetime

from inkwell.app.orchestrator import Level, RenderedView
from inkwell.content.colors import CategoryColor
from inkwell.content.filters import display_label
from inkwell.content.models import ContentItem, Poem, Variant
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

EMPTY_STATE_MESSAGE = "No results found. Try a different search or category."

_LEVEL_STYLES: dict[str, str] = {
    "info": "",
    "success": "green",
    "error": "red",
}


def format_date(value: datetime.date) -> str:
    """Long US-style date, e.g. ``January 5, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


class ConsoleRenderer:
    """Prints a RenderedView as colored panels.

    With ``show_items=False`` only notifications are printed.
    """

    def __init__(self, console: Console | None = None, *, show_items: bool = True) -> None:
        self.console = console or Console()
        self.show_items = show_items

    def _meta(self, item: ContentItem, color: CategoryColor | None) -> Text:
        meta = Text()
        tag_style = f"bold {color.primary_hex}" if color else "bold"
        meta.append(f" {display_label(item.category)} ", style=tag_style)
        meta.append(f"  by: {item.author}")
        meta.append(f"  · {format_date(item.date)}", style="dim")
        return meta

    def _panel(self, item: ContentItem, color: CategoryColor | None) -> Panel:
        border = color.primary_hex if color else "white"
        if isinstance(item, Poem):
            body = Group(Text(item.content), Text(), self._meta(item, color))
            title = Text(item.title, style="bold")
        else:
            body = Group(Text(f"“{item.text}”", style="italic"), Text(), self._meta(item, color))
            title = None
        return Panel(body, title=title, subtitle=f"#{item.id}", border_style=border, expand=True)

    def _section(self, heading: str, items: list, view: RenderedView) -> None:
        self.console.rule(heading)
        for item in items:
            self.console.print(self._panel(item, view.colors.get(item.category)))

    def render(self, view: RenderedView) -> None:
        if not self.show_items:
            return
        if view.view_mode.shows(Variant.POEM) and view.poems:
            self._section("Poems", view.poems, view)
        if view.view_mode.shows(Variant.QUOTE) and view.quotes:
            self._section("Quotes", view.quotes, view)
        if view.show_empty_state:
            self.console.print(f"[yellow]{EMPTY_STATE_MESSAGE}[/yellow]")

    def notify(self, message: str, level: Level = "info") -> None:
        style = _LEVEL_STYLES.get(level, "")
        self.console.print(Text(message, style=style))
