"""Tests for KnowledgeStore loading and lookup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from mcptime.knowledge.errors import KnowledgeLoadError, RecordNotFoundError
from mcptime.knowledge.models import KnowledgeRecord
from mcptime.knowledge.store import KnowledgeStore


class TestKnowledgeStore:
    def test_keeps_load_order(self, store: KnowledgeStore) -> None:
        assert [r.id for r in store] == ["sundial", "atomic", "calendar"]
        assert len(store) == 3

    def test_get_and_contains(self, store: KnowledgeStore) -> None:
        record = store.get("atomic")
        assert record is not None
        assert record.title == "Atomic Clock"
        assert "atomic" in store
        assert "missing" not in store
        assert store.get("missing") is None

    def test_require_raises(self, store: KnowledgeStore) -> None:
        with pytest.raises(RecordNotFoundError, match="Record not found: missing") as exc_info:
            store.require("missing")
        assert exc_info.value.record_id == "missing"

    def test_duplicate_id_rejected(self, records: list[KnowledgeRecord]) -> None:
        with pytest.raises(KnowledgeLoadError, match="Duplicate record id: sundial"):
            KnowledgeStore([*records, records[0]])


class TestFromJson:
    def test_parses_array(self, sample_payloads: list[dict[str, Any]]) -> None:
        store = KnowledgeStore.from_json(json.dumps(sample_payloads))
        assert len(store) == 3
        assert store.require("calendar").url is None

    def test_invalid_json(self) -> None:
        with pytest.raises(KnowledgeLoadError, match="Invalid JSON"):
            KnowledgeStore.from_json("[{", source="broken.json")

    def test_non_array(self) -> None:
        with pytest.raises(KnowledgeLoadError, match="JSON array"):
            KnowledgeStore.from_json('{"id": "x"}')

    def test_invalid_record(self) -> None:
        bad = [{"id": "x", "title": "No text"}]
        with pytest.raises(KnowledgeLoadError, match="Invalid record"):
            KnowledgeStore.from_json(json.dumps(bad))


class TestFromPath:
    def test_reads_file(self, tmp_path: Path, sample_payloads: list[dict[str, Any]]) -> None:
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps(sample_payloads[:1]), encoding="utf-8")
        store = KnowledgeStore.from_path(path)
        assert [r.id for r in store] == ["sundial"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(KnowledgeLoadError, match="Cannot read"):
            KnowledgeStore.from_path(tmp_path / "nope.json")


class TestDefaultCorpus:
    def test_loads_packaged_records(self) -> None:
        store = KnowledgeStore.load_default()
        assert len(store) == 16
        assert "atomic-clock" in store
        assert "gregorian-reform" in store

    def test_ids_are_unique_and_years_are_ints(self) -> None:
        store = KnowledgeStore.load_default()
        ids = [r.id for r in store]
        assert len(ids) == len(set(ids))
        assert all(isinstance(r.metadata.year, int) for r in store)


class TestKnowledgeRecord:
    def test_payload_normalizes_missing_url(self, store: KnowledgeStore) -> None:
        payload = store.require("calendar").to_payload()
        assert payload == {
            "id": "calendar",
            "title": "Calendar Reform",
            "text": "The Gregorian calendar replaced the Julian calendar.",
            "url": None,
            "metadata": {"category": "calendar-systems", "year": 1582},
        }

    def test_empty_url_becomes_none(self, sample_payloads: list[dict[str, Any]]) -> None:
        record = KnowledgeRecord.model_validate({**sample_payloads[0], "url": ""})
        assert record.to_payload()["url"] is None

    def test_searchable_text_covers_metadata(self, store: KnowledgeStore) -> None:
        surface = store.require("sundial").searchable_text
        assert "ancient-timekeeping" in surface
        assert "-1500" in surface
        assert "sundial" in surface
        assert surface == surface.lower()

    def test_records_are_frozen(self, store: KnowledgeStore) -> None:
        record = store.require("atomic")
        with pytest.raises(ValidationError):
            record.title = "changed"  # type: ignore[misc]
