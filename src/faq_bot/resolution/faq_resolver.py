"""
Answer resolver: the single entry point for resolving a free-text query.
"""
import logging

from ..bank_cache import KnowledgeBankCache
from ..config import DEFAULT_NO_ANSWER_TEXT
from ..exceptions import InvalidInputError
from ..schemas import MatchSource, ResolutionResult
from .resolution_policy import ResolutionPolicy

logger = logging.getLogger(__name__)


class FaqResolver:
    """
    Resolves queries to answers from the cached knowledge bank.

    Usage:
        resolver = FaqResolver(cache, policy)
        result = resolver.resolve("office address")
        result.answer   # "123 Main St"
        result.source   # MatchSource.EXACT
    """

    def __init__(
        self,
        cache: KnowledgeBankCache,
        policy: ResolutionPolicy,
        no_answer_text: str = DEFAULT_NO_ANSWER_TEXT,
        max_query_length: int = 500,
    ):
        """
        :param cache: Knowledge bank cache (shared across requests)
        :param policy: Stage escalation policy
        :param no_answer_text: Answer returned when no stage matches
        :param max_query_length: Longest accepted query, in characters
        """
        self._cache = cache
        self._policy = policy
        self.no_answer_text = no_answer_text
        self.max_query_length = max_query_length

    def resolve(self, query: str) -> ResolutionResult:
        """
        Resolve a query to an answer.

        :param query: Raw user query
        :return: ResolutionResult; source is MatchSource.NONE when nothing matched
        :raises InvalidInputError: if the query is missing, empty or too long
        :raises UpstreamFetchError: if no knowledge bank could be loaded
        :raises ResolutionTimeoutError: if the time budget was exceeded
        """
        query = self._validate_query(query)
        bank = self._cache.get()

        candidate = self._policy.resolve(query, bank)
        if candidate is None:
            return ResolutionResult(answer=self.no_answer_text, source=MatchSource.NONE)

        return ResolutionResult(
            answer=candidate.entry.answer,
            source=candidate.stage,
            matched_question=candidate.entry.question,
            score=candidate.score,
            direct_answer=candidate.direct_answer,
            entry_id=candidate.entry.id,
        )

    def _validate_query(self, query: str) -> str:
        if query is None or not isinstance(query, str):
            raise InvalidInputError("Query must be a non-empty string")

        query = query.replace("\x00", "").strip()
        if not query:
            raise InvalidInputError("Query cannot be empty")

        if len(query) > self.max_query_length:
            raise InvalidInputError(
                f"Query exceeds maximum length of {self.max_query_length} characters"
            )

        return query
