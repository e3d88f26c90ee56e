"""CLI interface for inkwell."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from inkwell.articles.html import render_article_html
from inkwell.articles.page import NotFound, list_known_identifiers, render_article, resolve_metadata
from inkwell.config import InkwellConfig, load_config, merge_cli_overrides
from inkwell.content.store import ContentSource, create_store
from inkwell.errors import InkwellError

app = typer.Typer(
    name="inkwell",
    help="Resolve, render and serve articles for a content-driven site.",
)

console = Console()


class _State:
    config: InkwellConfig = InkwellConfig()


state = _State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from inkwell import __version__

        console.print(f"inkwell {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to an .inkwell.toml file."),
    ] = None,
    content_dir: Annotated[
        Optional[Path],
        typer.Option("--content-dir", help="Directory holding content collections."),
    ] = None,
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", help="Content backend: markdown or json."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress."),
    ] = False,
) -> None:
    """Inkwell - article pages for a content-driven site."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    try:
        config = load_config(config_path)
        state.config = merge_cli_overrides(config, content_dir=content_dir, backend=backend)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(1) from exc


def _open_store() -> ContentSource:
    try:
        return create_store(state.config)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc


@app.command()
def slugs() -> None:
    """List every article slug the site pre-renders."""
    store = _open_store()
    try:
        known = list_known_identifiers(store)
    except InkwellError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
    if not known:
        console.print("[yellow]No articles found.[/yellow]")
        return
    for slug in known:
        console.print(slug, highlight=False)


@app.command()
def render(
    slug: Annotated[str, typer.Argument(help="Article slug.")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the HTML here instead of stdout."),
    ] = None,
) -> None:
    """Render one article page as HTML."""
    store = _open_store()
    site = state.config.site
    try:
        page = render_article(store, slug, tz=site.tz)
        meta = resolve_metadata(store, slug, site=site)
    except InkwellError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if isinstance(page, NotFound):
        console.print(f"[red]Error:[/red] Article not found: {escape(slug)}")
        raise typer.Exit(1)

    html = render_article_html(page, meta)
    if output is None:
        typer.echo(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output}")


@app.command()
def metadata(
    slug: Annotated[str, typer.Argument(help="Article slug.")],
) -> None:
    """Print the metadata descriptor for an article as JSON."""
    store = _open_store()
    try:
        meta = resolve_metadata(store, slug, site=state.config.site)
    except InkwellError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
    typer.echo(meta.model_dump_json(indent=2))


@app.command()
def build(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory for the static site."),
    ] = None,
) -> None:
    """Pre-render every article to static HTML."""
    from inkwell.site import build_site

    config = merge_cli_overrides(state.config, output_directory=output)
    store = _open_store()
    output_dir = Path(config.build.output_directory)
    try:
        result = build_site(store, output_dir, site=config.site)
    except InkwellError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    table = Table(title="Build")
    table.add_column("Articles", justify="right")
    table.add_column("Upcoming", justify="right")
    table.add_column("Output")
    table.add_row(str(result.article_count), str(len(result.upcoming)), str(output_dir))
    console.print(table)


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port.")] = None,
) -> None:
    """Serve article pages over HTTP."""
    import uvicorn

    from inkwell.web.app import create_app

    config = merge_cli_overrides(state.config, host=host, port=port)
    store = _open_store()
    uvicorn.run(create_app(store, config), host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    app()
