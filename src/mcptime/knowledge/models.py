"""Data models for knowledge records and search hits."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class RecordMetadata(BaseModel):
    """Classification attached to every record."""

    model_config = {"frozen": True}

    category: str
    year: int


class KnowledgeRecord(BaseModel):
    """An immutable document from the time-knowledge corpus."""

    model_config = {"frozen": True}

    id: str
    title: str
    text: str
    url: str | None = None
    metadata: RecordMetadata

    @property
    def searchable_text(self) -> str:
        """Lowercased surface a query token is matched against."""
        parts = [
            self.title,
            self.text,
            self.metadata.category,
            str(self.metadata.year),
            self.id,
        ]
        return " ".join(parts).lower()

    def to_payload(self) -> dict[str, Any]:
        """Full record as returned by ``fetch``; a missing url is ``None``."""
        return {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "url": self.url or None,
            "metadata": self.metadata.model_dump(),
        }


class SearchHit(BaseModel):
    """One ``search`` result — a truncated view of a record."""

    id: str
    title: str
    text: str
    url: str | None = None
