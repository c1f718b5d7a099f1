"""Core operations: render notes and compute their link graphs.

These functions take the corpus explicitly and perform no I/O. The
publisher and CLI are thin wrappers around them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import RenderOptions
from .link_graph import LinkGraphBuilder
from .models import Note, RenderedNote
from .parser.markdown import render_markdown
from .parser.title_index import TitleIndex

log = logging.getLogger(__name__)


def render_note(
    note: Note,
    corpus: Sequence[Note],
    options: RenderOptions | None = None,
    builder: LinkGraphBuilder | None = None,
) -> RenderedNote:
    """Render one note and build its link graph.

    Args:
        note: The note to render.
        corpus: All notes; wiki links and backlinks resolve against it.
        options: URL settings for resolved wiki links.
        builder: A builder for the same corpus, reused across notes.

    Returns:
        RenderedNote with the HTML fragment and the link graph.
    """
    builder = builder or LinkGraphBuilder(corpus)
    result = render_markdown(note.content, builder.title_index, options)

    if result.broken_links:
        log.debug("%s: %d unresolved link(s)", note.title, len(result.broken_links))

    return RenderedNote(
        note=note,
        html=result.html,
        graph=builder.build(note),
        broken_links=result.broken_links,
    )


def render_corpus(
    notes: Sequence[Note],
    options: RenderOptions | None = None,
) -> list[RenderedNote]:
    """Render every note of a corpus, in corpus order."""
    builder = LinkGraphBuilder(notes, TitleIndex.from_notes(notes))
    return [render_note(note, notes, options, builder) for note in notes]
