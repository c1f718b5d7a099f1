"""Images, links, bare URLs and wiki-link resolution.

The rewrites run in a fixed order: images, links, bare URLs, then
[[Title]] references. Bare URLs are only linked in text between tags, so
attribute values and the contents of inserted anchors are left alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..config import RenderOptions
from .inline import unescape_html
from .links import LINK_PATTERN
from .title_index import TitleIndex

log = logging.getLogger(__name__)

IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)")
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
# URLs stop at code placeholders
AUTOLINK_PATTERN = re.compile(
    r'(https?://[^\s<"\ue000\ue001]*[^\s<".,;:!?)\ue000\ue001])'
)
# Whole anchors first so their text is skipped, then any single tag
TAG_PATTERN = re.compile(r"(<a\b[^>]*>.*?</a>|<[^>]*>)", re.DOTALL)

EXTERNAL_LINK = '<a href="{url}" target="_blank" rel="noopener noreferrer">{text}</a>'


@dataclass
class ReferenceLog:
    """Wiki-link titles seen while resolving one note."""

    resolved: list[str] = field(default_factory=list)
    ghosts: list[str] = field(default_factory=list)

    def add(self, title: str, found: bool) -> None:
        bucket = self.resolved if found else self.ghosts
        if title not in bucket:
            bucket.append(title)


def _quote(value: str) -> str:
    """Make already-escaped text safe inside a double-quoted attribute."""
    return value.replace('"', "&quot;")


def _image(match: re.Match[str]) -> str:
    alt, url = _quote(match.group(1)), _quote(match.group(2))
    return f'<img src="{url}" alt="{alt}">'


def _link(match: re.Match[str]) -> str:
    return EXTERNAL_LINK.format(url=_quote(match.group(2)), text=match.group(1))


def _autolink(match: re.Match[str]) -> str:
    url = match.group(1)
    return EXTERNAL_LINK.format(url=url, text=url)


def autolink_text(html: str) -> str:
    """Link bare URLs that sit in text, outside tags and existing anchors."""
    pieces = TAG_PATTERN.split(html)
    # split() with one group alternates text and tag pieces
    for i in range(0, len(pieces), 2):
        pieces[i] = AUTOLINK_PATTERN.sub(_autolink, pieces[i])
    return "".join(pieces)


def resolve_references(
    html: str,
    title_index: TitleIndex,
    options: RenderOptions | None = None,
    references: ReferenceLog | None = None,
) -> str:
    """Rewrite images, links, bare URLs and wiki links in rendered text.

    Args:
        html: Text after block and list rendering.
        title_index: Lookup for [[Title]] resolution.
        options: URL settings for resolved wiki links.
        references: Collects resolved and ghost titles when given.

    Returns:
        Text with every reference rewritten.
    """
    options = options or RenderOptions()

    html = IMAGE_PATTERN.sub(_image, html)
    html = MARKDOWN_LINK_PATTERN.sub(_link, html)
    html = autolink_text(html)

    def _wikilink(match: re.Match[str]) -> str:
        shown = match.group(1)
        # The captured title was escaped with the rest of the text
        target = title_index.resolve(unescape_html(shown))
        if references is not None:
            references.add(unescape_html(shown), target is not None)
        if target is None:
            log.debug("Ghost link [[%s]] rendered as text", shown)
            return shown
        return f'<a href="{options.note_url(target.id)}" class="wiki-link">[[{shown}]]</a>'

    return LINK_PATTERN.sub(_wikilink, html)
