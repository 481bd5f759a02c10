"""CLI interface for inkwell."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from inkwell.app.orchestrator import Orchestrator
from inkwell.config import InkwellConfig, load_config, merge_cli_overrides
from inkwell.content.colors import ColorAssigner
from inkwell.content.filters import display_label
from inkwell.content.models import ALL_CATEGORIES, AppState, Theme, Variant, ViewMode
from inkwell.content.repository import ContentRepository
from inkwell.content.store import OverrideStore
from inkwell.render.console import ConsoleRenderer

app = typer.Typer(
    name="inkwell",
    help="Browse, search and curate a collection of poems and quotes.",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from inkwell import __version__

        console.print(f"inkwell {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to an inkwell TOML config file."),
    ] = None,
    dataset: Annotated[
        Optional[str],
        typer.Option("--dataset", help="Canonical content.json path or URL."),
    ] = None,
    state_dir: Annotated[
        Optional[Path],
        typer.Option("--state-dir", help="Directory holding the local override store."),
    ] = None,
    debounce_ms: Annotated[
        Optional[int],
        typer.Option("--debounce-ms", min=0, help="Search debounce window in milliseconds."),
    ] = None,
    default_view: Annotated[
        Optional[ViewMode],
        typer.Option("--default-view", help="View used when a command does not pick one."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Inkwell - poems and quotes, filtered and colored by category."""
    _setup_logging(verbose)
    ctx.obj = merge_cli_overrides(
        load_config(config),
        dataset=dataset,
        state_dir=state_dir,
        debounce_ms=debounce_ms,
        default_view=default_view,
    )


def _open(
    ctx: typer.Context,
    *,
    show_items: bool = False,
    state: AppState | None = None,
) -> Orchestrator:
    """Build and start an orchestrator from the resolved config."""
    cfg: InkwellConfig = ctx.obj
    store = OverrideStore(Path(cfg.data.state_dir))
    repository = ContentRepository(store, cfg.data.dataset)
    orchestrator = Orchestrator(
        repository,
        store,
        ConsoleRenderer(console, show_items=show_items),
        debounce_seconds=cfg.search.debounce_seconds,
        state=state or AppState(view_mode=cfg.display.default_view),
    )
    if not orchestrator.start():
        raise typer.Exit(1)
    return orchestrator


def _save(orchestrator: Orchestrator, variant: Variant, fields: dict[str, Any]) -> None:
    try:
        item = orchestrator.save(variant, fields)
    except ValidationError as exc:
        orchestrator.cancel_edit(variant)
        console.print(f"[red]Error:[/red] Invalid {variant.value}:")
        for err in exc.errors():
            loc = ".".join(str(p) for p in err["loc"])
            console.print(f"  - {loc}: {err['msg']}")
        raise typer.Exit(1)
    if item is None:
        raise typer.Exit(1)
    console.print(f"  id: {item.id}")


@app.command(name="list")
def list_cmd(
    ctx: typer.Context,
    category: Annotated[
        str,
        typer.Option("--category", "-k", help="Only show this category ('all' for every one)."),
    ] = ALL_CATEGORIES,
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="Case-insensitive text to look for."),
    ] = "",
    view: Annotated[
        Optional[ViewMode],
        typer.Option("--view", help="Which collections to show."),
    ] = None,
) -> None:
    """Show poems and quotes matching a category and search text."""
    cfg: InkwellConfig = ctx.obj
    state = AppState(
        active_category=category,
        search_query=search,
        view_mode=view or cfg.display.default_view,
    )
    _open(ctx, show_items=True, state=state)


@app.command(name="categories")
def categories_cmd(ctx: typer.Context) -> None:
    """List every category with its color."""
    orchestrator = _open(ctx)
    table = Table("Category", "Color", "Tint")
    for category in orchestrator.categories():
        color = orchestrator.colors.color_for(category)
        table.add_row(
            display_label(category),
            f"[{color.primary_hex}]■[/] {color.primary_hex}",
            color.tint_rgba,
        )
    console.print(table)


@app.command(name="color")
def color_cmd(
    category: Annotated[str, typer.Argument(help="Category label.")],
) -> None:
    """Show the color assigned to a category."""
    color = ColorAssigner().color_for(category)
    console.print(f"[{color.primary_hex}]■[/] {category}")
    console.print(f"  hex:  {color.primary_hex}")
    console.print(f"  tint: {color.tint_rgba}")
    console.print(f"  rgb:  {color.rgb.r}, {color.rgb.g}, {color.rgb.b}")


@app.command(name="add")
def add_cmd(
    ctx: typer.Context,
    variant: Annotated[Variant, typer.Argument(help="poem or quote.")],
    category: Annotated[str, typer.Option("--category", "-k", help="Category label.")],
    author: Annotated[str, typer.Option("--author", "-a", help="Author name.")],
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="Poem title.")
    ] = None,
    content: Annotated[
        Optional[str], typer.Option("--content", help="Poem body.")
    ] = None,
    text: Annotated[
        Optional[str], typer.Option("--text", help="Quote text.")
    ] = None,
    on: Annotated[
        Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD). Defaults to today.")
    ] = None,
) -> None:
    """Add a new poem or quote to the local collection."""
    fields: dict[str, Any] = {
        "category": category,
        "author": author,
        "date": on or date.today().isoformat(),
    }
    if variant is Variant.POEM:
        if title is None or content is None:
            console.print("[red]Error:[/red] A poem needs --title and --content.")
            raise typer.Exit(1)
        fields.update(title=title, content=content)
    else:
        if text is None:
            console.print("[red]Error:[/red] A quote needs --text.")
            raise typer.Exit(1)
        fields["text"] = text

    _save(_open(ctx), variant, fields)


@app.command(name="edit")
def edit_cmd(
    ctx: typer.Context,
    variant: Annotated[Variant, typer.Argument(help="poem or quote.")],
    item_id: Annotated[int, typer.Argument(help="Id of the item to edit.")],
    category: Annotated[Optional[str], typer.Option("--category", "-k")] = None,
    author: Annotated[Optional[str], typer.Option("--author", "-a")] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    content: Annotated[Optional[str], typer.Option("--content")] = None,
    text: Annotated[Optional[str], typer.Option("--text")] = None,
    on: Annotated[Optional[str], typer.Option("--date")] = None,
) -> None:
    """Edit one of your own poems or quotes."""
    orchestrator = _open(ctx)
    item = orchestrator.begin_edit(variant, item_id)
    if item is None:
        raise typer.Exit(1)

    changes = {
        "category": category,
        "author": author,
        "date": on,
        "title": title if variant is Variant.POEM else None,
        "content": content if variant is Variant.POEM else None,
        "text": text if variant is Variant.QUOTE else None,
    }
    fields = item.model_dump(exclude={"id"})
    fields.update({k: v for k, v in changes.items() if v is not None})
    _save(orchestrator, variant, fields)


@app.command(name="delete")
def delete_cmd(
    ctx: typer.Context,
    variant: Annotated[Variant, typer.Argument(help="poem or quote.")],
    item_id: Annotated[int, typer.Argument(help="Id of the item to delete.")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")
    ] = False,
) -> None:
    """Delete one of your own poems or quotes."""
    orchestrator = _open(ctx)
    if not yes:
        typer.confirm(f"Are you sure you want to delete this {variant.value}?", abort=True)
    if not orchestrator.delete(variant, item_id):
        raise typer.Exit(1)


@app.command(name="export")
def export_cmd(
    ctx: typer.Context,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Directory to write content.json into."),
    ] = Path("."),
) -> None:
    """Export the current collection as content.json."""
    _open(ctx).export(output)


@app.command(name="reset")
def reset_cmd(
    ctx: typer.Context,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")
    ] = False,
) -> None:
    """Discard all local changes and return to the original content."""
    orchestrator = _open(ctx)
    if not yes:
        typer.confirm(
            "Are you sure you want to reset to the original content? "
            "This will delete all your changes.",
            abort=True,
        )
    if not orchestrator.reset():
        raise typer.Exit(1)


@app.command(name="theme")
def theme_cmd(
    ctx: typer.Context,
    theme: Annotated[
        Optional[Theme], typer.Argument(help="light or dark. Omit to toggle.")
    ] = None,
) -> None:
    """Show, set or toggle the display theme."""
    orchestrator = _open(ctx)
    chosen = orchestrator.set_theme(theme) if theme else orchestrator.toggle_theme()
    console.print(f"Theme: {chosen.value}")


if __name__ == "__main__":
    app()
