"""Markdown to HTML rendering with wiki-link resolution.

Pipeline, in order:
1. protect fenced and inline code (spans)
2. escape + headings, rules and emphasis (inline)
3. tables and blockquotes (blocks)
4. nested lists (lists)
5. images, links, bare URLs and [[wiki links]] (references)
6. remaining newlines to <br>
7. restore code
"""

from __future__ import annotations

from collections.abc import Iterable

from ..config import RenderOptions
from ..models import MarkdownResult, Note
from .blocks import classify_blocks
from .inline import format_inline
from .lists import render_lists
from .references import ReferenceLog, resolve_references
from .spans import protect_spans, restore_spans
from .title_index import TitleIndex


def render_markdown(
    content: str,
    corpus: TitleIndex | Iterable[Note],
    options: RenderOptions | None = None,
) -> MarkdownResult:
    """Render note content to an HTML fragment.

    Args:
        content: Raw markdown.
        corpus: The notes wiki links resolve against, or a prebuilt TitleIndex.
        options: URL settings for resolved wiki links.

    Returns:
        MarkdownResult with the HTML plus resolved and ghost link titles.
    """
    title_index = corpus if isinstance(corpus, TitleIndex) else TitleIndex.from_notes(corpus)

    protected = protect_spans(content.replace("\r\n", "\n"))

    html = format_inline(protected.text)
    html = classify_blocks(html)
    html = render_lists(html)

    references = ReferenceLog()
    html = resolve_references(html, title_index, options, references)

    html = html.replace("\n", "<br>")
    html = restore_spans(html, protected)

    return MarkdownResult(
        html=html,
        links=references.resolved,
        broken_links=references.ghosts,
    )
