"""Escaping, headings, horizontal rules and emphasis."""

import re

# Heading levels 1-3 only; "#### x" is left as text
HEADING_PATTERNS = [
    (re.compile(r"^### (.*)$", re.MULTILINE), "h3"),
    (re.compile(r"^## (.*)$", re.MULTILINE), "h2"),
    (re.compile(r"^# (.*)$", re.MULTILINE), "h1"),
]

HR_PATTERN = re.compile(r"^(?:---|\*\*\*)$", re.MULTILINE)

# One non-greedy pass per marker; bold must run before italic
EMPHASIS_PATTERNS = [
    (re.compile(r"\*\*(.+?)\*\*"), "strong"),
    (re.compile(r"\*(.+?)\*"), "em"),
    (re.compile(r"~~(.+?)~~"), "del"),
]


def escape_html(text: str) -> str:
    """Escape the characters that would otherwise start markup."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def unescape_html(text: str) -> str:
    """Reverse escape_html."""
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def format_inline(text: str) -> str:
    """Escape text, then rewrite headings, rules and emphasis markers.

    Escaping runs first so the tags inserted here survive untouched.
    Rules are rewritten before emphasis so that a "***" line becomes <hr>
    rather than an emphasis span.
    """
    html = escape_html(text)

    for pattern, tag in HEADING_PATTERNS:
        html = pattern.sub(rf"<{tag}>\1</{tag}>", html)

    html = HR_PATTERN.sub("<hr>", html)

    for pattern, tag in EMPHASIS_PATTERNS:
        html = pattern.sub(rf"<{tag}>\1</{tag}>", html)

    return html
