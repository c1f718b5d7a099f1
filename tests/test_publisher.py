"""Publisher tests: pages, index and link panels."""

from __future__ import annotations

import logging
from pathlib import Path

from conftest import make_note

from hypernote.config import RenderOptions
from hypernote.core import render_corpus, render_note
from hypernote.publisher.generator import PublishConfig, SiteGenerator
from hypernote.publisher.templates import group_by_folder, render_note_page
from hypernote.store import load_notes


def _corpus():
    return [
        make_note("Alpha", "# Alpha\n\nGo to [[Beta]] or [[Gamma]].", folder="work"),
        make_note("Beta", "Beta points to [[Delta]].", folder="work"),
        make_note("Delta", "end"),
    ]


class TestCore:
    def test_render_note_bundles_html_and_graph(self):
        notes = _corpus()
        rendered = render_note(notes[0], notes)
        assert '<a href="beta.html" class="wiki-link">[[Beta]]</a>' in rendered.html
        assert [n.title for n in rendered.graph.outgoing] == ["Beta"]
        assert rendered.graph.two_hop_titles() == {"Beta": ["Delta"]}
        assert rendered.broken_links == ["Gamma"]

    def test_render_corpus_keeps_order(self):
        notes = _corpus()
        rendered = render_corpus(notes)
        assert [r.note.id for r in rendered] == ["alpha", "beta", "delta"]
        assert [n.title for n in rendered[1].graph.backlinks] == ["Alpha"]


class TestTemplates:
    def test_note_page_sections(self):
        notes = _corpus()
        page = render_note_page(render_note(notes[1], notes), RenderOptions())
        assert "<title>Beta</title>" in page
        assert "Created: 2024-01-15" in page
        assert "Updated: 2024-02-01" in page
        assert "Backlinks" in page
        assert '<a href="alpha.html">Alpha</a>' in page
        assert '<a href="index.html">Index</a>' in page

    def test_note_title_is_escaped(self):
        note = make_note("<b>Bold</b> title", id="bold")
        page = render_note_page(render_note(note, [note]), RenderOptions())
        assert "<h1>&lt;b&gt;Bold&lt;/b&gt; title</h1>" in page

    def test_group_by_folder_unfiled_last(self):
        groups = group_by_folder(_corpus() + [make_note("Aardvark", folder="animals")])
        assert [name for name, _ in groups] == ["animals", "work", "Unfiled"]
        assert [n.title for n in groups[1][1]] == ["Alpha", "Beta"]


class TestSiteGenerator:
    def test_generate_writes_pages(self, tmp_path: Path):
        output_dir = tmp_path / "site"
        result = SiteGenerator(PublishConfig(output_dir=output_dir), _corpus()).generate()

        assert result.notes_published == 3
        assert result.broken_links == [{"source": "Alpha", "target": "Gamma"}]
        for name in ("alpha.html", "beta.html", "delta.html", "index.html"):
            assert (output_dir / name).exists()

        alpha = (output_dir / "alpha.html").read_text()
        assert "Related Notes" in alpha
        assert '<a href="delta.html">Delta</a>' in alpha

    def test_base_url_applied(self, tmp_path: Path):
        config = PublishConfig(output_dir=tmp_path / "site", base_url="/wiki")
        SiteGenerator(config, _corpus()).generate()
        alpha = (tmp_path / "site" / "alpha.html").read_text()
        assert 'href="/wiki/beta.html" class="wiki-link"' in alpha
        index = (tmp_path / "site" / "index.html").read_text()
        assert 'href="/wiki/alpha.html"' in index

    def test_clean_removes_stale_files(self, tmp_path: Path):
        output_dir = tmp_path / "site"
        output_dir.mkdir()
        (output_dir / "stale.html").write_text("old")
        SiteGenerator(PublishConfig(output_dir=output_dir), _corpus()).generate()
        assert not (output_dir / "stale.html").exists()

    def test_no_clean_keeps_files(self, tmp_path: Path):
        output_dir = tmp_path / "site"
        output_dir.mkdir()
        (output_dir / "keep.txt").write_text("keep")
        SiteGenerator(PublishConfig(output_dir=output_dir, clean=False), _corpus()).generate()
        assert (output_dir / "keep.txt").exists()

    def test_from_note_store(self, notes_file: Path, tmp_path: Path):
        output_dir = tmp_path / "out"
        result = SiteGenerator(PublishConfig(output_dir=output_dir), load_notes(notes_file)).generate()
        assert result.notes_published == 3
        index = (output_dir / "index.html").read_text()
        assert "docs" in index and "Unfiled" in index

    def test_note_id_cannot_replace_index(self, tmp_path: Path, caplog):
        output_dir = tmp_path / "site"
        notes = _corpus() + [make_note("Index Note", "mine", id="index")]
        with caplog.at_level(logging.WARNING, logger="hypernote.publisher"):
            result = SiteGenerator(PublishConfig(output_dir=output_dir), notes).generate()

        assert result.notes_published == 3
        assert "reserved for the index page" in caplog.text
        index = (output_dir / "index.html").read_text()
        assert '<a href="alpha.html">Alpha</a>' in index

    def test_generate_twice_reports_links_once(self, tmp_path: Path):
        generator = SiteGenerator(PublishConfig(output_dir=tmp_path / "site"), _corpus())
        generator.generate()
        result = generator.generate()
        assert result.broken_links == [{"source": "Alpha", "target": "Gamma"}]
