"""KnowledgeStore — the immutable record set and its id index."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from mcptime.knowledge.errors import KnowledgeLoadError, RecordNotFoundError
from mcptime.knowledge.models import KnowledgeRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

DEFAULT_CORPUS = "time_records.json"


class KnowledgeStore:
    """Records in load order plus an eagerly built ``id -> record`` index.

    Usage::

        store = KnowledgeStore.load_default()
        record = store.get("atomic-clock")
    """

    def __init__(self, records: Iterable[KnowledgeRecord]) -> None:
        self._records: tuple[KnowledgeRecord, ...] = tuple(records)
        index: dict[str, KnowledgeRecord] = {}
        for record in self._records:
            if record.id in index:
                raise KnowledgeLoadError(f"Duplicate record id: {record.id}")
            index[record.id] = record
        self._index: Mapping[str, KnowledgeRecord] = MappingProxyType(index)

    @classmethod
    def from_json(cls, raw: str | bytes, *, source: str = "<memory>") -> KnowledgeStore:
        """Parse a JSON array of records.

        Raises:
            KnowledgeLoadError: On malformed JSON, a non-list document,
                an invalid record, or a duplicate id.
        """
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise KnowledgeLoadError(f"Invalid JSON in {source}: {exc}") from exc

        if not isinstance(data, list):
            raise KnowledgeLoadError(f"{source} must contain a JSON array of records")

        try:
            records = [KnowledgeRecord.model_validate(item) for item in data]
        except ValidationError as exc:
            raise KnowledgeLoadError(f"Invalid record in {source}: {exc}") from exc

        store = cls(records)
        logger.info("Loaded %d knowledge record(s) from %s", len(store), source)
        return store

    @classmethod
    def from_path(cls, path: str | Path) -> KnowledgeStore:
        p = Path(path)
        try:
            raw = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise KnowledgeLoadError(f"Cannot read {p}: {exc}") from exc
        return cls.from_json(raw, source=str(p))

    @classmethod
    def load_default(cls) -> KnowledgeStore:
        """Load the corpus shipped inside the package."""
        resource = resources.files("mcptime.knowledge").joinpath("data").joinpath(DEFAULT_CORPUS)
        return cls.from_json(resource.read_text(encoding="utf-8"), source=DEFAULT_CORPUS)

    @property
    def records(self) -> tuple[KnowledgeRecord, ...]:
        return self._records

    def get(self, record_id: str) -> KnowledgeRecord | None:
        return self._index.get(record_id)

    def require(self, record_id: str) -> KnowledgeRecord:
        record = self._index.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._index

    def __iter__(self) -> Iterator[KnowledgeRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
