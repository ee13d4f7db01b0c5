"""
Keyword overlap matching with synonym-group bonuses.
"""
import logging
from typing import Optional

from ..models import KnowledgeBank
from ..schemas import MatchSource
from .match_stage import MatchCandidate, MatchStage
from .vocabulary import KeywordVocabulary

logger = logging.getLogger(__name__)


class KeywordMatcher(MatchStage):
    """
    Second stage: score entries by shared keywords.

    score = shared tokens + synonym_bonus * synonym groups present on both sides

    The highest score wins (first entry in bank order on ties) and is accepted
    only if it reaches ``min_score``.

    ``min_score`` defaults to 2 rather than 1: one shared synonym group or two
    shared content words count as a signal, a single incidental shared word
    does not. With 1, "where is your office located" would be answered here on
    "office" alone and never reach the semantic stage.
    """

    name = MatchSource.KEYWORD

    def __init__(
        self,
        vocabulary: Optional[KeywordVocabulary] = None,
        min_score: int = 2,
        min_token_length: int = 4,
        synonym_bonus: int = 2,
    ):
        """
        :param vocabulary: Synonym groups and stop words (defaults to the curated set)
        :param min_score: Minimum score to accept a match
        :param min_token_length: Shortest word counted as a keyword
        :param synonym_bonus: Score added per shared synonym group
        """
        if min_score < 1:
            raise ValueError(f"min_score must be >= 1, got {min_score}")
        if min_token_length < 1:
            raise ValueError(f"min_token_length must be >= 1, got {min_token_length}")

        self.vocabulary = vocabulary or KeywordVocabulary()
        self.min_score = min_score
        self.min_token_length = min_token_length
        self.synonym_bonus = synonym_bonus

    def try_match(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        query_tokens = self.vocabulary.tokenize(query, self.min_token_length)
        if not query_tokens:
            return None
        query_groups = self.vocabulary.groups_for(query_tokens)

        best_entry = None
        best_score = 0
        for entry in bank.entries:
            entry_tokens = self.vocabulary.tokenize(
                entry.normalized_question, self.min_token_length
            )
            score = len(query_tokens & entry_tokens)
            if query_groups:
                shared_groups = query_groups & self.vocabulary.groups_for(entry_tokens)
                score += self.synonym_bonus * len(shared_groups)

            if score > best_score:
                best_entry, best_score = entry, score

        if best_entry is None or best_score < self.min_score:
            return None

        logger.debug(f"Keyword match '{best_entry.question}' with score {best_score}")
        return MatchCandidate(entry=best_entry, score=float(best_score), stage=self.name)
