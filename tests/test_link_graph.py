"""Tests for outgoing links, backlinks and two-hop connections."""

import pytest
from conftest import make_note

from hypernote.link_graph import LinkGraphBuilder, build_link_graph
from hypernote.parser.links import contains_link_to, extract_links


def _titles(notes):
    return [n.title for n in notes]


@pytest.fixture
def web():
    """A small corpus with hubs, a ghost and a self reference.

    A -> B, C, Ghost
    B -> C, D
    C -> (nothing)
    D -> A, D
    E -> B
    """
    return [
        make_note("A", "[[B]] then [[C]] and [[Ghost]] and [[B]]"),
        make_note("B", "[[C]] [[D]]"),
        make_note("C", "leaf"),
        make_note("D", "back to [[A]], self [[D]]"),
        make_note("E", "see [[B]]"),
    ]


class TestExtractLinks:
    def test_unique_in_order(self):
        assert extract_links("[[b]] [[a]] [[b]]") == ["b", "a"]

    def test_empty_brackets_ignored(self):
        assert extract_links("[[]] [[x]]") == ["x"]

    def test_contains_link_escapes_title(self):
        assert contains_link_to("see [[a.b (c)]]", "a.b (c)")
        assert not contains_link_to("see [[axb (c)]]", "a.b (c)")


class TestOutgoingAndBacklinks:
    def test_outgoing_dedupes_and_skips_ghosts(self, web):
        graph = build_link_graph(web[0], web)
        assert _titles(graph.outgoing) == ["B", "C"]

    def test_self_reference_excluded(self, web):
        graph = build_link_graph(web[3], web)
        assert _titles(graph.outgoing) == ["A"]
        assert "D" not in _titles(graph.backlinks)

    def test_backlinks_in_corpus_order(self, web):
        graph = build_link_graph(web[1], web)
        assert _titles(graph.backlinks) == ["A", "E"]

    def test_symmetry(self, web):
        builder = LinkGraphBuilder(web)
        for note in web:
            for target in builder.outgoing(note):
                assert note.id in {n.id for n in builder.backlinks(target)}


class TestTwoHop:
    def test_chain(self):
        corpus = [make_note("A", "[[B]]"), make_note("B", "[[C]]"), make_note("C")]
        graph = build_link_graph(corpus[0], corpus)
        assert _titles(graph.outgoing) == ["B"]
        assert graph.two_hop_titles() == {"B": ["C"]}

    def test_direct_notes_excluded(self, web):
        graph = build_link_graph(web[0], web)
        # Direct set of A: B, C (outgoing) and D (backlink)
        assert graph.direct_ids() == {"b", "c", "d"}
        assert graph.two_hop_titles() == {"B": ["E"]}

    def test_exclusion_invariant(self, web):
        builder = LinkGraphBuilder(web)
        for note in web:
            graph = builder.build(note)
            direct = graph.direct_ids()
            for connection in graph.two_hop:
                assert connection.related
                for other in connection.related:
                    assert other.id not in direct
                    assert other.id not in (note.id, connection.hub.id)

    def test_related_deduplicated(self):
        corpus = [
            make_note("A", "[[Hub]]"),
            make_note("Hub", "[[X]]"),
            make_note("X", "[[Hub]]"),
        ]
        graph = build_link_graph(corpus[0], corpus)
        assert graph.two_hop_titles() == {"Hub": ["X"]}

    def test_ghosts_never_appear(self, web):
        builder = LinkGraphBuilder(web)
        for note in web:
            graph = builder.build(note)
            seen = _titles(graph.outgoing) + _titles(graph.backlinks)
            for connection in graph.two_hop:
                seen += [connection.hub.title] + _titles(connection.related)
            assert "Ghost" not in seen

    def test_isolated_note(self):
        corpus = [make_note("Alone", "no links"), make_note("Other", "[[Nobody]]")]
        graph = build_link_graph(corpus[0], corpus)
        assert graph.outgoing == []
        assert graph.backlinks == []
        assert graph.two_hop == []
