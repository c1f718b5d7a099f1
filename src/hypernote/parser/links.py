"""Bidirectional link extraction."""

import re

# Pattern for [[Title]] syntax - non-greedy, never spans lines
LINK_PATTERN = re.compile(r"\[\[(.*?)\]\]")


def extract_links(content: str) -> list[str]:
    """Extract wiki-link titles from raw note content.

    Args:
        content: Markdown content to extract links from.

    Returns:
        Unique titles in order of first appearance.
    """
    seen: set[str] = set()
    titles: list[str] = []

    for title in LINK_PATTERN.findall(content):
        if title and title not in seen:
            seen.add(title)
            titles.append(title)

    return titles


def contains_link_to(content: str, title: str) -> bool:
    """Check whether content holds a [[title]] reference."""
    return re.search(r"\[\[" + re.escape(title) + r"\]\]", content) is not None
