"""Title-to-note index for resolving wiki-style links.

Resolution is by exact title. When two notes share a title the first one in
corpus order wins; the store is expected to keep titles unique.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import Note

log = logging.getLogger(__name__)


class TitleIndex:
    """Exact-title lookup over a fixed corpus."""

    def __init__(self, by_title: dict[str, Note]) -> None:
        self._by_title = by_title

    @classmethod
    def from_notes(cls, notes: Iterable[Note]) -> TitleIndex:
        by_title: dict[str, Note] = {}
        for note in notes:
            existing = by_title.get(note.title)
            if existing is not None:
                log.warning(
                    "Duplicate note title %r (ids %s and %s); links resolve to %s",
                    note.title,
                    existing.id,
                    note.id,
                    existing.id,
                )
                continue
            by_title[note.title] = note
        return cls(by_title)

    def resolve(self, title: str) -> Note | None:
        """Return the note with exactly this title, or None for a ghost."""
        return self._by_title.get(title)
