"""Knowledge layer — the static time-knowledge corpus and its search engine."""

from mcptime.knowledge.errors import KnowledgeError, KnowledgeLoadError, RecordNotFoundError
from mcptime.knowledge.models import KnowledgeRecord, RecordMetadata, SearchHit
from mcptime.knowledge.search import SNIPPET_LENGTH, SearchEngine, tokenize
from mcptime.knowledge.store import KnowledgeStore

__all__ = [
    "KnowledgeError",
    "KnowledgeLoadError",
    "KnowledgeRecord",
    "KnowledgeStore",
    "RecordMetadata",
    "RecordNotFoundError",
    "SNIPPET_LENGTH",
    "SearchEngine",
    "SearchHit",
    "tokenize",
]
