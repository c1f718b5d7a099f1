"""Code span protection.

Fenced code blocks and inline code are pulled out of the text before any
other transform runs and replaced by positional placeholders. Restoration
at the end of the pipeline puts the code back by index, HTML-escaped and
wrapped in <pre><code> / <code>.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import NamedTuple

from .inline import escape_html

log = logging.getLogger(__name__)

FENCE = "```"

# Placeholders are delimited by private-use code points so they cannot collide
# with note text and are never touched by escaping, emphasis or link rules.
_OPEN = "\ue000"
_CLOSE = "\ue001"
BLOCK_KIND = "B"
INLINE_KIND = "I"

INLINE_CODE_PATTERN = re.compile(r"`([^`\n]+)`")
PLACEHOLDER_PATTERN = re.compile(f"{_OPEN}([{BLOCK_KIND}{INLINE_KIND}])(\\d+){_CLOSE}")

# A fence info string: a single word on the opening fence line
_LANGUAGE_PATTERN = re.compile(r"^([\w+#.-]+)\n")


@dataclass(frozen=True)
class ProtectedSpan:
    """A code region held out of the markup transforms."""

    index: int
    raw: str
    language: str | None = None


class ProtectedText(NamedTuple):
    """Text with code replaced by placeholders, plus the side-tables."""

    text: str
    code_blocks: list[ProtectedSpan]
    inline_codes: list[ProtectedSpan]


@dataclass
class _SpanTable:
    kind: str
    spans: list[ProtectedSpan] = field(default_factory=list)

    def add(self, raw: str, language: str | None = None) -> str:
        index = len(self.spans)
        self.spans.append(ProtectedSpan(index=index, raw=raw, language=language))
        return placeholder(self.kind, index)


def placeholder(kind: str, index: int) -> str:
    return f"{_OPEN}{kind}{index}{_CLOSE}"


def _split_fence_body(body: str) -> tuple[str, str | None]:
    """Separate an optional language line and trim the fence newlines."""
    language = None
    match = _LANGUAGE_PATTERN.match(body)
    if match:
        language = match.group(1)
        body = body[match.end() :]
    elif body.startswith("\n"):
        body = body[1:]
    if body.endswith("\n"):
        body = body[:-1]
    return body, language


def _extract_fences(text: str, table: _SpanTable) -> str:
    parts: list[str] = []
    pos = 0
    while True:
        start = text.find(FENCE, pos)
        if start == -1:
            parts.append(text[pos:])
            break

        end = text.find(FENCE, start + len(FENCE))
        if end == -1:
            # No closing fence: the rest of the document is code
            log.debug("Unterminated code fence at offset %d, treating rest as code", start)
            body = text[start + len(FENCE) :]
            next_pos = len(text)
        else:
            body = text[start + len(FENCE) : end]
            next_pos = end + len(FENCE)

        code, language = _split_fence_body(body)
        parts.append(text[pos:start])
        parts.append(table.add(code, language))
        pos = next_pos
        if next_pos >= len(text):
            break

    return "".join(parts)


def protect_spans(text: str) -> ProtectedText:
    """Replace fenced and inline code with placeholders.

    Fences are extracted before inline code so a backtick inside a fence is
    never read as an inline code delimiter.

    Args:
        text: Raw note content.

    Returns:
        ProtectedText with the placeholder text and both side-tables.
    """
    # Sentinels in the source would be mistaken for placeholders
    text = text.replace(_OPEN, "").replace(_CLOSE, "")

    blocks = _SpanTable(BLOCK_KIND)
    inlines = _SpanTable(INLINE_KIND)

    text = _extract_fences(text, blocks)
    text = INLINE_CODE_PATTERN.sub(lambda m: inlines.add(m.group(1)), text)

    return ProtectedText(text, blocks.spans, inlines.spans)


def _render_block(span: ProtectedSpan) -> str:
    css = f' class="language-{escape_html(span.language)}"' if span.language else ""
    return f"<pre><code{css}>{escape_html(span.raw)}</code></pre>"


def _render_inline(span: ProtectedSpan) -> str:
    return f"<code>{escape_html(span.raw)}</code>"


def restore_spans(html: str, protected: ProtectedText) -> str:
    """Put protected code back in place of its placeholders.

    Matching is by (kind, index), so two identical code blocks each get
    their own slot back.
    """

    def _restore(match: re.Match[str]) -> str:
        kind, index = match.group(1), int(match.group(2))
        if kind == BLOCK_KIND:
            return _render_block(protected.code_blocks[index])
        return _render_inline(protected.inline_codes[index])

    return PLACEHOLDER_PATTERN.sub(_restore, html)
