"""Loading the JSON note store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .models import Note

log = logging.getLogger(__name__)

_NOTES_ADAPTER = TypeAdapter(list[Note])


class NoteStoreError(Exception):
    """Raised when the note store cannot be parsed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def _records(payload: Any, path: Path) -> list[Any]:
    # Accept a bare list of notes or {"notes": [...]}
    if isinstance(payload, dict) and "notes" in payload:
        payload = payload["notes"]
    if not isinstance(payload, list):
        raise NoteStoreError(path, "Expected a list of notes or an object with a 'notes' list")
    return payload


def load_notes(path: Path) -> list[Note]:
    """Load and validate every note in a JSON note store.

    Args:
        path: Path to the notes JSON file.

    Returns:
        Notes in store order. Empty if the store does not exist.

    Raises:
        NoteStoreError: If the file is not valid JSON or a record is invalid.
    """
    if not path.exists():
        log.warning("Note store %s not found, nothing to build", path)
        return []

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise NoteStoreError(path, f"Invalid JSON: {e}") from e
    except OSError as e:
        raise NoteStoreError(path, f"Cannot read note store: {e}") from e

    try:
        notes = _NOTES_ADAPTER.validate_python(_records(payload, path))
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise NoteStoreError(path, "Invalid note records:\n" + "\n".join(errors)) from e

    log.debug("Loaded %d notes from %s", len(notes), path)
    return notes
