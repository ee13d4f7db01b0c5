"""
Fuzzy matching strategy, the last resort before giving up.

Handles typos and near-miss phrasings.
"""
from typing import Optional

from ..models import KnowledgeBank
from ..normalizer import normalize
from ..schemas import MatchSource
from ..similarity import dice_coefficient, edit_tolerance, levenshtein_distance
from .match_stage import MatchCandidate, MatchStage


class FuzzyMatcher(MatchStage):
    """
    Fourth stage: character-level similarity.

    Scorers:
    - "dice": bigram Dice coefficient, accepted at or above ``threshold``
    - "levenshtein": edit distance, accepted within a tolerance relative to
      the query length (``edit_ratio``)
    """

    name = MatchSource.FUZZY

    SCORERS = ("dice", "levenshtein")

    def __init__(
        self,
        threshold: float = 0.58,
        scorer: str = "dice",
        edit_ratio: float = 0.35,
    ):
        """
        :param threshold: Minimum Dice score to accept a match (0.0-1.0)
        :param scorer: "dice" or "levenshtein"
        :param edit_ratio: Fraction of the query length tolerated as edits
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")
        if scorer not in self.SCORERS:
            raise ValueError(
                f"Unknown scorer '{scorer}'. Must be one of: {list(self.SCORERS)}"
            )
        if edit_ratio < 0:
            raise ValueError(f"edit_ratio must be >= 0, got {edit_ratio}")

        self.threshold = threshold
        self.scorer = scorer
        self.edit_ratio = edit_ratio

    def try_match(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        if not bank.entries:
            return None

        if self.scorer == "levenshtein":
            return self._match_edit_distance(query, bank)
        return self._match_dice(query, bank)

    def _match_dice(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        best_entry = None
        best_score = -1.0
        for entry in bank.entries:
            score = dice_coefficient(query, entry.normalized_question)
            if score > best_score:
                best_entry, best_score = entry, score

        if best_entry is None or best_score < self.threshold:
            return None
        return MatchCandidate(entry=best_entry, score=best_score, stage=self.name)

    def _match_edit_distance(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        normalized_query = normalize(query)
        if not normalized_query:
            return None

        best_entry = None
        best_distance = None
        for entry in bank.entries:
            distance = levenshtein_distance(normalized_query, entry.normalized_question)
            if best_distance is None or distance < best_distance:
                best_entry, best_distance = entry, distance

        if best_entry is None or best_distance > edit_tolerance(normalized_query, self.edit_ratio):
            return None

        longest = max(len(normalized_query), len(best_entry.normalized_question))
        return MatchCandidate(
            entry=best_entry,
            score=1.0 - best_distance / longest,
            stage=self.name,
        )
