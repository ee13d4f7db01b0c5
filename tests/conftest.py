"""
Shared fixtures: fake collaborators and knowledge banks.
"""
from typing import Dict, List, Optional, Sequence

import pytest
from langchain_core.embeddings import Embeddings

from faq_bot.embeddings import EmbeddingClient
from faq_bot.exceptions import UpstreamFetchError
from faq_bot.models import Entry, KnowledgeBank
from faq_bot.sources import EntrySource


SAMPLE_ROWS = [
    {"id": "1", "question": "What is the office address?", "answer": "123 Main St"},
    {"id": "2", "question": "What are your opening hours?", "answer": "Mon-Fri 9-17"},
    {"id": "3", "question": "How do I contact support?", "answer": "Email support@example.com"},
    {"id": "4", "question": "Are you hiring?", "answer": "See our careers page"},
    {"id": "5", "question": "How do I reset my password?", "answer": "Use the reset link"},
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource(EntrySource):
    """In-memory entry source that counts fetches and can be made to fail."""

    def __init__(self, rows: Optional[List[Dict[str, str]]] = None):
        self.rows = list(rows if rows is not None else SAMPLE_ROWS)
        self.calls = 0
        self.fail = False

    def fetch_entries(self) -> List[Dict[str, str]]:
        self.calls += 1
        if self.fail:
            raise UpstreamFetchError("store unavailable")
        return [dict(row) for row in self.rows]


class KeyedEmbedding(Embeddings):
    """
    Embedding model returning fixed vectors per text.

    Unknown texts get ``default``; ``fail`` makes every call raise.
    """

    def __init__(self, vectors: Dict[str, Sequence[float]], default=(0.0, 0.0, 1.0)):
        self.vectors = {text: list(vector) for text, vector in vectors.items()}
        self.default = list(default)
        self.fail = False
        self.document_calls: List[List[str]] = []
        self.query_calls: List[str] = []

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.document_calls.append(list(texts))
        if self.fail:
            raise RuntimeError("embedding service down")
        return [self.vectors.get(text, self.default) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        self.query_calls.append(text)
        if self.fail:
            raise RuntimeError("embedding service down")
        return self.vectors.get(text, self.default)


def make_bank(rows=None, vectors: Optional[Dict[str, Sequence[float]]] = None) -> KnowledgeBank:
    """Build a KnowledgeBank directly, optionally attaching embeddings by question."""
    entries = []
    for row in rows if rows is not None else SAMPLE_ROWS:
        entry = Entry.from_row(row)
        if vectors and entry.question in vectors:
            entry = entry.with_embedding(vectors[entry.question])
        entries.append(entry)

    dimension = None
    if vectors:
        dimension = len(next(iter(vectors.values())))
    return KnowledgeBank(entries=tuple(entries), loaded_at=0.0, ttl=300.0, embedding_dimension=dimension)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def bank():
    return make_bank()


@pytest.fixture
def embedding_model():
    return KeyedEmbedding({})


@pytest.fixture
def embedder(embedding_model):
    return EmbeddingClient(embedding_model, batch_size=2)
