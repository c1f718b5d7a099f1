"""Configuration management for hypernote.

This module contains all configurable constants for rendering and publishing.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import os
from pathlib import Path

from pydantic import BaseModel, field_validator


class ConfigurationError(Exception):
    """Raised when a configuration value is invalid."""

    pass


# =============================================================================
# Markup constants
# =============================================================================

# Width of one logical nesting level in list markup. Tabs in list indentation
# count as one full step.
LIST_INDENT_STEP = 2

# Blockquote marker as it appears after HTML escaping ("> " -> "&gt; ").
# Exactly this many characters are stripped from each quoted line.
BLOCKQUOTE_PREFIX = "&gt; "

# Suffix appended to a note id to form its page URL.
LINK_SUFFIX = ".html"

# =============================================================================
# Paths
# =============================================================================

# Note store consumed by `hypernote build` when no --notes is given.
DEFAULT_NOTES_PATH = Path("data/notes.json")

# Where generated pages are written.
DEFAULT_OUTPUT_DIR = Path("public")


def get_notes_path() -> Path:
    """Get the note store path.

    HYPERNOTE_NOTES_PATH overrides the default of data/notes.json.
    """
    override = os.environ.get("HYPERNOTE_NOTES_PATH")
    if override:
        return Path(override)
    return DEFAULT_NOTES_PATH


def get_output_dir() -> Path:
    """Get the site output directory.

    HYPERNOTE_OUTPUT_DIR overrides the default of public/.

    Raises:
        ConfigurationError: If the override points at an existing file.
    """
    override = os.environ.get("HYPERNOTE_OUTPUT_DIR")
    if not override:
        return DEFAULT_OUTPUT_DIR

    path = Path(override)
    if path.exists() and not path.is_dir():
        raise ConfigurationError(f"HYPERNOTE_OUTPUT_DIR is not a directory: {path}")
    return path


class RenderOptions(BaseModel):
    """Options threaded through the reference resolver."""

    base_url: str = ""
    link_suffix: str = LINK_SUFFIX

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        # Page links are "{base_url}{id}{suffix}", so a non-empty base needs a slash
        if value and not value.endswith("/"):
            return value + "/"
        return value

    @field_validator("link_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if "/" in value:
            raise ValueError(f"link_suffix must not contain '/': {value!r}")
        return value

    def note_url(self, note_id: str) -> str:
        return f"{self.base_url}{note_id}{self.link_suffix}"
