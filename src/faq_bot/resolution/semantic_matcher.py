"""
Embedding-based matching.
"""
import logging
from typing import Optional

from ..embeddings import EmbeddingClient
from ..exceptions import UpstreamEmbeddingError
from ..models import KnowledgeBank
from ..schemas import MatchSource
from ..similarity import cosine_similarity
from .match_stage import MatchCandidate, MatchStage

logger = logging.getLogger(__name__)


class SemanticMatcher(MatchStage):
    """
    Third stage: cosine similarity between query and question embeddings.

    Skipped when the bank carries no embeddings (embedding disabled or failed
    for this generation) or when the query itself cannot be embedded.
    """

    name = MatchSource.SEMANTIC

    def __init__(
        self,
        embedder: EmbeddingClient,
        threshold: float = 0.78,
        direct_threshold: float = 0.9,
    ):
        """
        :param embedder: Embedding collaborator for the query
        :param threshold: Minimum cosine similarity to accept a match
        :param direct_threshold: Similarity at which the match is reported as a direct answer
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")
        if not threshold <= direct_threshold <= 1.0:
            raise ValueError(
                f"direct_threshold must be between threshold and 1.0, got {direct_threshold}"
            )

        self._embedder = embedder
        self.threshold = threshold
        self.direct_threshold = direct_threshold

    def try_match(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        if not bank.has_embeddings:
            return None

        try:
            query_vector = self._embedder.embed_query(query)
        except UpstreamEmbeddingError as e:
            logger.warning(f"Semantic stage skipped, query embedding failed: {e}")
            return None

        if bank.embedding_dimension is not None and len(query_vector) != bank.embedding_dimension:
            logger.warning(
                f"Semantic stage skipped, query dimension {len(query_vector)} "
                f"does not match bank dimension {bank.embedding_dimension}"
            )
            return None

        best_entry = None
        best_score = float("-inf")
        for entry in bank.entries:
            if entry.embedding is None:
                continue
            score = cosine_similarity(query_vector, entry.embedding)
            if score > best_score:
                best_entry, best_score = entry, score

        if best_entry is None or best_score < self.threshold:
            return None

        return MatchCandidate(
            entry=best_entry,
            score=best_score,
            stage=self.name,
            direct_answer=best_score >= self.direct_threshold,
        )
