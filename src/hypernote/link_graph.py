"""Outgoing links, backlinks and two-hop connections built from wikilinks.

Everything here works on the raw note content of one fully loaded corpus.
Ghost links (titles with no note) never enter any result.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import HubConnection, LinkGraphResult, Note
from .parser.links import contains_link_to, extract_links
from .parser.title_index import TitleIndex


def _unique_by_title(notes: Iterable[Note]) -> list[Note]:
    seen: set[str] = set()
    unique: list[Note] = []
    for note in notes:
        if note.title not in seen:
            seen.add(note.title)
            unique.append(note)
    return unique


class LinkGraphBuilder:
    """Computes link graphs for notes of one immutable corpus.

    Outgoing and backlink lists are memoized per note id, so building the
    graph of every note in the corpus reuses the hub lookups.
    """

    def __init__(self, corpus: Sequence[Note], title_index: TitleIndex | None = None):
        self.corpus = list(corpus)
        if title_index is None:
            title_index = TitleIndex.from_notes(self.corpus)
        self.title_index = title_index
        self._outgoing: dict[str, list[Note]] = {}
        self._backlinks: dict[str, list[Note]] = {}

    def outgoing(self, note: Note) -> list[Note]:
        """Notes referenced by ``note``, in order of first reference."""
        cached = self._outgoing.get(note.id)
        if cached is not None:
            return cached

        targets = []
        for title in extract_links(note.content):
            target = self.title_index.resolve(title)
            if target is None or target.id == note.id:
                continue
            targets.append(target)

        result = _unique_by_title(targets)
        self._outgoing[note.id] = result
        return result

    def backlinks(self, note: Note) -> list[Note]:
        """Other notes whose content references ``note`` by title, in corpus order."""
        cached = self._backlinks.get(note.id)
        if cached is not None:
            return cached

        result = [
            other
            for other in self.corpus
            if other.id != note.id and contains_link_to(other.content, note.title)
        ]
        self._backlinks[note.id] = result
        return result

    def two_hop(self, note: Note, direct_ids: set[str]) -> list[HubConnection]:
        """Notes reachable through a directly connected hub.

        Hubs are visited in corpus order. Each hub's candidates exclude the
        origin, the hub itself and anything already in the direct set.
        """
        connections = []
        for hub in self.corpus:
            if hub.id not in direct_ids or hub.id == note.id:
                continue

            excluded = direct_ids | {note.id, hub.id}
            candidates = [
                candidate
                for candidate in self.outgoing(hub) + self.backlinks(hub)
                if candidate.id not in excluded
                and candidate.title not in (note.title, hub.title)
            ]
            related = _unique_by_title(candidates)
            if related:
                connections.append(HubConnection(hub=hub, related=related))
        return connections

    def build(self, note: Note) -> LinkGraphResult:
        outgoing = self.outgoing(note)
        backlinks = self.backlinks(note)
        direct_ids = {n.id for n in outgoing} | {n.id for n in backlinks}

        return LinkGraphResult(
            note_id=note.id,
            outgoing=outgoing,
            backlinks=backlinks,
            two_hop=self.two_hop(note, direct_ids),
        )


def build_link_graph(note: Note, corpus: Sequence[Note]) -> LinkGraphResult:
    """Compute the link graph of a single note against its corpus."""
    return LinkGraphBuilder(corpus).build(note)
