"""Markdown rendering and wiki-link extraction."""

from ..models import MarkdownResult
from .links import contains_link_to, extract_links
from .markdown import render_markdown
from .title_index import TitleIndex

__all__ = [
    "render_markdown",
    "MarkdownResult",
    "extract_links",
    "contains_link_to",
    "TitleIndex",
]
