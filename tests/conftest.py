"""Shared fixtures: a small in-memory corpus, a frozen clock, and wired services."""

from __future__ import annotations

import copy
from typing import Any

import arrow
import pytest

from mcptime.knowledge.models import KnowledgeRecord
from mcptime.knowledge.search import SearchEngine
from mcptime.knowledge.store import KnowledgeStore
from mcptime.protocol.dispatcher import ProtocolDispatcher
from mcptime.tools.catalog import build_default_registry
from mcptime.tools.executor import ToolExecutor
from mcptime.tools.timeutils import TimeService

FROZEN_NOW = "2025-06-22T12:00:00+00:00"

LONG_TEXT = (
    "In 1955 the first caesium atomic clock was built at the National Physical "
    "Laboratory. It kept time by counting the microwave resonance of caesium-133 "
    "atoms, and within a decade the second itself was redefined in terms of that "
    "transition, ending the reign of astronomical time."
)


def make_record(
    record_id: str,
    title: str,
    text: str,
    *,
    url: str | None = "https://example.org/entry",
    category: str = "history",
    year: int = 1900,
) -> dict[str, Any]:
    return {
        "id": record_id,
        "title": title,
        "text": text,
        "url": url,
        "metadata": {"category": category, "year": year},
    }


SAMPLE_RECORDS: list[dict[str, Any]] = [
    make_record(
        "sundial",
        "Ancient Sundials",
        "Shadow clocks divided the day into unequal hours.",
        category="ancient-timekeeping",
        year=-1500,
    ),
    make_record("atomic", "Atomic Clock", LONG_TEXT, category="scientific", year=1955),
    make_record(
        "calendar",
        "Calendar Reform",
        "The Gregorian calendar replaced the Julian calendar.",
        url=None,
        category="calendar-systems",
        year=1582,
    ),
]


@pytest.fixture
def sample_payloads() -> list[dict[str, Any]]:
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def records() -> list[KnowledgeRecord]:
    return [KnowledgeRecord.model_validate(item) for item in SAMPLE_RECORDS]


@pytest.fixture
def store(records: list[KnowledgeRecord]) -> KnowledgeStore:
    return KnowledgeStore(records)


@pytest.fixture
def engine(store: KnowledgeStore) -> SearchEngine:
    return SearchEngine(store)


@pytest.fixture
def frozen_clock() -> arrow.Arrow:
    return arrow.get(FROZEN_NOW)


@pytest.fixture
def time_service(frozen_clock: arrow.Arrow) -> TimeService:
    return TimeService(clock=lambda: frozen_clock)


@pytest.fixture
def executor(engine: SearchEngine, time_service: TimeService) -> ToolExecutor:
    return ToolExecutor(engine, time_service)


@pytest.fixture
def dispatcher(executor: ToolExecutor) -> ProtocolDispatcher:
    return ProtocolDispatcher(build_default_registry(), executor)
