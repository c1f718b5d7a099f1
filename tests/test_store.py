"""Tests for loading the JSON note store."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from conftest import note_record

from hypernote.store import NoteStoreError, load_notes


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadNotes:
    def test_loads_records_in_order(self, notes_file: Path):
        notes = load_notes(notes_file)
        assert [n.title for n in notes] == ["Home", "Guide", "Reference"]
        assert notes[1].folder_name == "docs"
        assert notes[0].folder_name is None
        assert notes[0].metadata.created == datetime(2024, 1, 15, 9, 30)

    def test_wrapped_notes_object(self, tmp_path: Path):
        path = _write(tmp_path, {"notes": [note_record("Solo")]})
        assert [n.title for n in load_notes(path)] == ["Solo"]

    def test_numeric_id_coerced(self, tmp_path: Path):
        record = note_record("Numbered")
        record["id"] = 42
        notes = load_notes(_write(tmp_path, [record]))
        assert notes[0].id == "42"

    def test_epoch_timestamps(self, tmp_path: Path):
        record = note_record("Epoch")
        record["metadata"] = {"created": 1700000000, "updated": 1700000000000}
        notes = load_notes(_write(tmp_path, [record]))
        assert notes[0].metadata.created == notes[0].metadata.updated

    def test_missing_store_is_empty(self, tmp_path: Path):
        assert load_notes(tmp_path / "absent.json") == []

    def test_malformed_json_fails_fast(self, tmp_path: Path):
        path = tmp_path / "notes.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(NoteStoreError, match="Invalid JSON"):
            load_notes(path)

    def test_invalid_record_lists_location(self, tmp_path: Path):
        record = note_record("Broken")
        del record["title"]
        with pytest.raises(NoteStoreError) as exc_info:
            load_notes(_write(tmp_path, [record]))
        assert "0.title" in str(exc_info.value)

    def test_wrong_shape(self, tmp_path: Path):
        with pytest.raises(NoteStoreError, match="Expected a list"):
            load_notes(_write(tmp_path, {"title": "not a list"}))
