"""Shared test fixtures for the hypernote test suite.

Design:
- make_note: builds a Note with fixed timestamps, id derived from the title
- notes_file: writes a JSON note store into tmp_path
- runner: CliRunner for CLI tests
"""

import json
from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from hypernote.models import Note, NoteMetadata

CREATED = datetime(2024, 1, 15, 9, 30)
UPDATED = datetime(2024, 2, 1, 18, 0)


# ─────────────────────────────────────────────────────────────────────────────
# Helper Functions (for test code, not fixtures)
# ─────────────────────────────────────────────────────────────────────────────


def make_note(
    title: str,
    content: str = "",
    id: str | None = None,
    folder: str | None = None,
) -> Note:
    """Build a note; the id defaults to the lowercased, dashed title.

    Usage in tests:
        from conftest import make_note
        note = make_note("Other", "See [[Title]]")
    """
    return Note(
        id=id or title.lower().replace(" ", "-"),
        title=title,
        content=content,
        folder_name=folder,
        metadata=NoteMetadata(created=CREATED, updated=UPDATED),
    )


def note_record(title: str, content: str = "", folder: str | None = None) -> dict:
    """A raw note-store record, as the external store writes it."""
    return {
        "id": title.lower().replace(" ", "-"),
        "title": title,
        "content": content,
        "folderName": folder,
        "metadata": {
            "created": "2024-01-15T09:30:00",
            "updated": "2024-02-01T18:00:00",
        },
    }


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def notes_file(tmp_path: Path) -> Path:
    """Note store with three linked notes.

    Creates:
    - Home -> [[Guide]], [[Missing]]
    - Guide -> [[Reference]] (folder: docs)
    - Reference (folder: docs)
    """
    records = [
        note_record("Home", "# Welcome\n\nStart with [[Guide]] or [[Missing]]."),
        note_record("Guide", "Read [[Reference]] next.", folder="docs"),
        note_record("Reference", "- item one\n- item two", folder="docs"),
    ]
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
