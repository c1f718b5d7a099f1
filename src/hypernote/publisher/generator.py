"""Static site generator for a hypernote corpus.

Main orchestrator that renders every note through the core and writes a
page per note plus an index page.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..config import DEFAULT_OUTPUT_DIR, RenderOptions
from ..core import render_corpus
from ..models import Note, RenderedNote

log = logging.getLogger(__name__)

INDEX_PAGE = "index.html"


@dataclass
class PublishConfig:
    """Configuration for site generation."""

    output_dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)
    base_url: str = ""
    site_title: str = "Notes"
    clean: bool = True  # Remove output dir before build


@dataclass
class PublishResult:
    """Result of site generation."""

    notes_published: int
    broken_links: list[dict]  # [{source, target}]
    output_dir: str


class SiteGenerator:
    """Generates a static HTML site from a note corpus.

    Orchestrates the publishing pipeline:
    1. Render every note and build its link graph
    2. Write one page per note
    3. Write the index page
    """

    def __init__(self, config: PublishConfig, notes: Sequence[Note]):
        """Initialize generator.

        Args:
            config: Publishing configuration
            notes: The full corpus, already loaded
        """
        self.config = config
        self.notes = list(notes)
        self.options = RenderOptions(base_url=config.base_url)
        self.broken_links: list[dict] = []

    def generate(self) -> PublishResult:
        """Generate the complete static site.

        Returns:
            PublishResult with statistics and the output path
        """
        if self.config.clean and self.config.output_dir.exists():
            shutil.rmtree(self.config.output_dir)
        self.config.output_dir.mkdir(parents=True, exist_ok=True)

        self.broken_links = []

        rendered = render_corpus(self.notes, self.options)
        for page in rendered:
            for target in page.broken_links:
                self.broken_links.append({"source": page.note.title, "target": target})

        published = self._write_pages(rendered)
        log.info("Published %d notes to %s", published, self.config.output_dir)

        return PublishResult(
            notes_published=published,
            broken_links=self.broken_links,
            output_dir=str(self.config.output_dir),
        )

    def _write_pages(self, rendered: list[RenderedNote]) -> int:
        from .templates import render_index_page, render_note_page

        written = 0
        for page in rendered:
            filename = f"{page.note.id}{self.options.link_suffix}"
            if filename == INDEX_PAGE:
                log.warning(
                    "Skipping page for note %r: id %r is reserved for the index page",
                    page.note.title,
                    page.note.id,
                )
                continue
            html_path = self.config.output_dir / filename
            html_path.parent.mkdir(parents=True, exist_ok=True)
            html_path.write_text(render_note_page(page, self.options), encoding="utf-8")
            written += 1

        index_html = render_index_page(self.notes, self.config.site_title, self.options)
        (self.config.output_dir / INDEX_PAGE).write_text(index_html, encoding="utf-8")
        return written
