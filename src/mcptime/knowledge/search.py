"""SearchEngine — token OR-matching over the knowledge store.

Pure logic, no I/O.  A query is lowercased and split on whitespace; a
record matches when *any* token occurs as a substring of its searchable
text.  Results keep the store's load order; there is no ranking.

An empty or all-whitespace query has no tokens and therefore matches
nothing.

Snippets are cut at :data:`SNIPPET_LENGTH` characters and marked with
three ASCII dots rather than the single-character ellipsis, matching
what existing clients of this server already receive.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mcptime.knowledge.models import SearchHit
from mcptime.utils.telemetry import ATTR_SEARCH_RESULTS, ATTR_SEARCH_TOKENS, get_tracer

if TYPE_CHECKING:
    from mcptime.knowledge.models import KnowledgeRecord
    from mcptime.knowledge.store import KnowledgeStore

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SNIPPET_LENGTH = 200
ELLIPSIS = "..."


def tokenize(query: str) -> list[str]:
    """Lowercase *query* and split it on runs of whitespace."""
    return query.lower().split()


def snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    """Return the first *length* characters of *text*, marked when cut."""
    if len(text) <= length:
        return text
    return text[:length] + ELLIPSIS


class SearchEngine:
    """Scan a :class:`KnowledgeStore` for records matching a query."""

    def __init__(self, store: KnowledgeStore, *, snippet_length: int = SNIPPET_LENGTH) -> None:
        self._store = store
        self._snippet_length = snippet_length
        # Surfaces are derived once; the store never changes.
        self._surfaces: list[tuple[KnowledgeRecord, str]] = [
            (record, record.searchable_text) for record in store
        ]

    @property
    def store(self) -> KnowledgeStore:
        return self._store

    def search(self, query: str) -> list[SearchHit]:
        """Return a hit for every record any token of *query* occurs in."""
        tokens = tokenize(query)
        with _tracer.start_as_current_span("mcptime.search") as span:
            span.set_attribute(ATTR_SEARCH_TOKENS, len(tokens))
            hits = [
                self._to_hit(record)
                for record, surface in self._surfaces
                if any(token in surface for token in tokens)
            ]
            span.set_attribute(ATTR_SEARCH_RESULTS, len(hits))

        logger.debug("search %r: %d token(s), %d hit(s)", query, len(tokens), len(hits))
        return hits

    def _to_hit(self, record: KnowledgeRecord) -> SearchHit:
        return SearchHit(
            id=record.id,
            title=record.title,
            text=snippet(record.text, self._snippet_length),
            url=record.url or None,
        )
