#!/usr/bin/env python3
"""
hypernote: build browsable HTML from a JSON note store

Usage:
    hypernote build                  # Render data/notes.json into public/
    hypernote render "Title"         # Print one note's HTML fragment
    hypernote graph "Title" --json   # Show a note's links and backlinks
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from click.exceptions import ClickException

from . import __version__ as HYPERNOTE_VERSION

NOTES_OPTION_HELP = "Note store JSON (default: $HYPERNOTE_NOTES_PATH or data/notes.json)"


def _load_corpus(notes_path: str | None):
    from .config import get_notes_path
    from .store import NoteStoreError, load_notes

    path = Path(notes_path) if notes_path else get_notes_path()
    try:
        return load_notes(path)
    except NoteStoreError as e:
        raise ClickException(str(e)) from e


def _find_note(notes, title: str):
    from .parser.title_index import TitleIndex

    note = TitleIndex.from_notes(notes).resolve(title)
    if note is None:
        raise ClickException(f"No note titled {title!r}")
    return note


@click.group()
@click.version_option(version=HYPERNOTE_VERSION, prog_name="hypernote")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="HYPERNOTE_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
def cli(quiet: bool):
    """hypernote: render interlinked notes into a static site.

    \b
    Quick start:
      hypernote build                      # data/notes.json -> public/
      hypernote build -o docs --base-url /wiki/
      hypernote graph "Some Note"          # Outgoing, backlinks, related
    """
    from ._logging import set_quiet_mode

    if quiet:
        set_quiet_mode(True)


@cli.command()
@click.option("--notes", "notes_path", type=click.Path(dir_okay=False), help=NOTES_OPTION_HELP)
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    help="Output directory (default: $HYPERNOTE_OUTPUT_DIR or public/)",
)
@click.option("--base-url", default="", help="Prefix for page links, e.g. /wiki/")
@click.option("--title", "site_title", default="Notes", help="Index page title")
@click.option("--no-clean", is_flag=True, help="Keep existing files in the output directory")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def build(
    notes_path: str | None,
    output_dir: str | None,
    base_url: str,
    site_title: str,
    no_clean: bool,
    as_json: bool,
):
    """Render every note into an HTML page.

    \b
    Examples:
      hypernote build
      hypernote build --notes notes.json -o site
    """
    from .config import ConfigurationError, get_output_dir
    from .publisher import PublishConfig, SiteGenerator

    notes = _load_corpus(notes_path)
    if not notes:
        click.echo("No notes found, nothing to build.")
        return

    try:
        resolved_output = Path(output_dir) if output_dir else get_output_dir()
    except ConfigurationError as e:
        raise ClickException(str(e)) from e

    config = PublishConfig(
        output_dir=resolved_output,
        base_url=base_url,
        site_title=site_title,
        clean=not no_clean,
    )
    result = SiteGenerator(config, notes).generate()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "notes_published": result.notes_published,
                    "broken_links": result.broken_links,
                    "output_dir": result.output_dir,
                },
                indent=2,
            )
        )
        return

    click.echo(f"Built {result.notes_published} pages in {result.output_dir}")
    if result.broken_links:
        click.echo(f"\nUnresolved links ({len(result.broken_links)}):")
        for bl in result.broken_links[:10]:
            click.echo(f"  - {bl['source']} -> {bl['target']}")
        if len(result.broken_links) > 10:
            click.echo(f"  ... and {len(result.broken_links) - 10} more")


@cli.command()
@click.argument("title")
@click.option("--notes", "notes_path", type=click.Path(dir_okay=False), help=NOTES_OPTION_HELP)
@click.option("--base-url", default="", help="Prefix for page links")
def render(title: str, notes_path: str | None, base_url: str):
    """Print the HTML fragment of the note with this TITLE."""
    from .config import RenderOptions
    from .parser.markdown import render_markdown

    notes = _load_corpus(notes_path)
    note = _find_note(notes, title)
    result = render_markdown(note.content, notes, RenderOptions(base_url=base_url))
    click.echo(result.html)


@cli.command()
@click.argument("title")
@click.option("--notes", "notes_path", type=click.Path(dir_okay=False), help=NOTES_OPTION_HELP)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def graph(title: str, notes_path: str | None, as_json: bool):
    """Show outgoing links, backlinks and related notes for TITLE."""
    from .link_graph import build_link_graph

    notes = _load_corpus(notes_path)
    note = _find_note(notes, title)
    result = build_link_graph(note, notes)

    if as_json:
        payload = {
            "outgoing": [n.title for n in result.outgoing],
            "backlinks": [n.title for n in result.backlinks],
            "two_hop": result.two_hop_titles(),
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    click.echo(f"Outgoing ({len(result.outgoing)}):")
    for n in result.outgoing:
        click.echo(f"  - {n.title}")
    click.echo(f"Backlinks ({len(result.backlinks)}):")
    for n in result.backlinks:
        click.echo(f"  - {n.title}")
    if result.two_hop:
        click.echo("Related:")
        for hub, related in result.two_hop_titles().items():
            click.echo(f"  via {hub}: {', '.join(related)}")


def main():
    """Entry point for hypernote CLI."""
    from ._logging import configure_logging

    configure_logging()
    cli()


if __name__ == "__main__":
    main()
