"""
Exact and containment matching on normalized questions.
"""
from typing import Optional

from ..models import KnowledgeBank
from ..normalizer import normalize
from ..schemas import MatchSource
from ..similarity import is_containment_match
from .match_stage import MatchCandidate, MatchStage


class ExactMatcher(MatchStage):
    """
    First stage: normalized equality, then containment.

    Equality is checked against the whole bank before any containment match,
    so "office address" picks the entry asked exactly that way over a longer
    question that merely contains it. Ties go to the first entry in bank order.
    """

    name = MatchSource.EXACT

    def __init__(self, min_contain_length: int = 5):
        """
        :param min_contain_length: Minimum length of the shorter string for a
                                   containment match
        """
        if min_contain_length < 1:
            raise ValueError(f"min_contain_length must be >= 1, got {min_contain_length}")
        self.min_contain_length = min_contain_length

    def try_match(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        normalized_query = normalize(query)
        if not normalized_query:
            return None

        for entry in bank.entries:
            if entry.normalized_question == normalized_query:
                return MatchCandidate(entry=entry, score=1.0, stage=self.name)

        for entry in bank.entries:
            question = entry.normalized_question
            if is_containment_match(normalized_query, question, self.min_contain_length):
                shorter, longer = sorted((len(normalized_query), len(question)))
                return MatchCandidate(
                    entry=entry,
                    score=shorter / longer,
                    stage=self.name,
                )

        return None
