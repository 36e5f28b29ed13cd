"""Error types for the knowledge layer."""

from __future__ import annotations


class KnowledgeError(Exception):
    """Base error for knowledge-store failures."""


class KnowledgeLoadError(KnowledgeError):
    """The corpus could not be read, parsed, or validated."""


class RecordNotFoundError(KnowledgeError):
    """No record carries the requested id."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")
