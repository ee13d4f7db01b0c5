"""
Core abstractions for answer resolution.

Each matching strategy is a MatchStage; the ResolutionPolicy runs them in
order and the first stage that returns a candidate wins.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..models import Entry, KnowledgeBank
from ..schemas import MatchSource


@dataclass(frozen=True)
class MatchCandidate:
    """
    Accepted match produced by a stage.

    Attributes:
        entry: Matched bank entry (borrowed from the bank, not copied)
        score: Stage-specific similarity score
        stage: Stage that produced the match
        direct_answer: Semantic match above the direct-answer threshold
    """
    entry: Entry
    score: float
    stage: MatchSource
    direct_answer: bool = False


class MatchStage(ABC):
    """
    Protocol for one matching strategy.

    A stage applies its own acceptance threshold and returns a candidate only
    when it is confident; otherwise the policy moves on to the next stage.
    """

    name: MatchSource

    @abstractmethod
    def try_match(
        self,
        query: str,
        bank: KnowledgeBank,
    ) -> Optional[MatchCandidate]:
        """
        Match a query against every entry of the bank.

        :param query: Raw user query (stages normalize as needed)
        :param bank: Current knowledge bank generation
        :return: Accepted MatchCandidate, or None to fall through
        """
        pass
