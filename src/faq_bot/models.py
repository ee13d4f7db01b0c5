from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Sequence, Tuple

from .normalizer import normalize


@dataclass(frozen=True)
class Entry:
    id: str
    question: str
    answer: str
    normalized_question: str
    embedding: Optional[Tuple[float, ...]] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional["Entry"]:
        """
        Map a raw store row ``{id, question, answer}`` to an Entry.

        Returns None for rows without a usable question or answer, so malformed
        rows are skipped at the boundary instead of reaching the pipeline.
        """
        question = _clean_text(row.get("question"))
        answer = _clean_text(row.get("answer"))
        if not question or not answer:
            return None

        normalized_question = normalize(question)
        if not normalized_question:
            return None

        entry_id = row.get("id")
        return cls(
            id=str(entry_id) if entry_id is not None else normalized_question,
            question=question,
            answer=answer,
            normalized_question=normalized_question,
        )

    def with_embedding(self, embedding: Sequence[float]) -> "Entry":
        return replace(self, embedding=tuple(float(x) for x in embedding))


@dataclass(frozen=True)
class KnowledgeBank:
    """
    One loaded generation of the knowledge bank.

    Never mutated after construction; the cache swaps in a new instance on
    refresh.
    """
    entries: Tuple[Entry, ...]
    loaded_at: float
    ttl: float
    embedding_dimension: Optional[int] = None

    def is_fresh(self, now: float) -> bool:
        return self.loaded_at + self.ttl >= now

    @property
    def has_embeddings(self) -> bool:
        return any(entry.embedding is not None for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value if value else None
