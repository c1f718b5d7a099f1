"""Pydantic models for notes, rendering results and the link graph."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteMetadata(BaseModel):
    """Timestamps carried by every note record."""

    model_config = ConfigDict(frozen=True)

    created: datetime
    updated: datetime


class Note(BaseModel):
    """A single note from the note store.

    The core never mutates notes; the model is frozen so a corpus can be
    shared between render and graph passes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str  # Opaque identifier, also the page filename
    title: str  # Unique within a corpus (assumed, not enforced)
    content: str = ""  # Raw markup
    folder_name: str | None = Field(default=None, alias="folderName")
    metadata: NoteMetadata

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Stores written by JS tooling often use numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class MarkdownResult(BaseModel):
    """Rendered HTML for one note's content plus the references it made."""

    html: str
    links: list[str] = Field(default_factory=list)  # Resolved [[titles]], first-seen order
    broken_links: list[str] = Field(default_factory=list)  # Ghost [[titles]]


class HubConnection(BaseModel):
    """Notes reached through a directly connected hub note."""

    hub: Note
    related: list[Note]


class LinkGraphResult(BaseModel):
    """Outgoing references, backlinks and two-hop connections of one note."""

    note_id: str
    outgoing: list[Note] = Field(default_factory=list)
    backlinks: list[Note] = Field(default_factory=list)
    two_hop: list[HubConnection] = Field(default_factory=list)

    def direct_ids(self) -> set[str]:
        """Ids of the direct set (outgoing plus backlinks)."""
        return {n.id for n in self.outgoing} | {n.id for n in self.backlinks}

    def two_hop_titles(self) -> dict[str, list[str]]:
        return {c.hub.title: [n.title for n in c.related] for c in self.two_hop}


class RenderedNote(BaseModel):
    """Per-note output of the core: rendered fragment plus link graph."""

    note: Note
    html: str
    graph: LinkGraphResult
    broken_links: list[str] = Field(default_factory=list)
