"""
Resolution policy: ordered escalation through match stages.
"""
import logging
import time
from typing import Callable, List, Optional

from ..exceptions import ResolutionTimeoutError
from ..models import KnowledgeBank
from .match_stage import MatchCandidate, MatchStage

logger = logging.getLogger(__name__)


class ResolutionPolicy:
    """
    Runs match stages in order until one accepts.

    Stage order and thresholds are configuration, not control flow: the
    policy only knows that the first accepted candidate wins and that later
    stages are never consulted after that.
    """

    def __init__(
        self,
        stages: List[MatchStage],
        time_budget_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        :param stages: Stages to try in order (e.g. exact, keyword, semantic, fuzzy)
        :param time_budget_seconds: Abandon resolution once this much time has
                                    passed before starting the next stage (None = no limit)
        :param clock: Monotonic time source
        """
        if not stages:
            raise ValueError("At least one stage must be provided")
        if time_budget_seconds is not None and time_budget_seconds <= 0:
            raise ValueError(f"time_budget_seconds must be > 0, got {time_budget_seconds}")

        self._stages = list(stages)
        self.time_budget_seconds = time_budget_seconds
        self._clock = clock

    @property
    def stage_names(self) -> List[str]:
        return [stage.name.value for stage in self._stages]

    def resolve(self, query: str, bank: KnowledgeBank) -> Optional[MatchCandidate]:
        """
        Try each stage in order and return the first accepted candidate.

        :param query: Raw user query
        :param bank: Knowledge bank generation to match against
        :return: Winning MatchCandidate, or None if no stage accepted
        :raises ResolutionTimeoutError: if the time budget ran out between stages
        """
        started = self._clock()

        for stage in self._stages:
            if self.time_budget_seconds is not None:
                elapsed = self._clock() - started
                if elapsed > self.time_budget_seconds:
                    raise ResolutionTimeoutError(
                        f"Resolution exceeded {self.time_budget_seconds}s "
                        f"before the {stage.name.value} stage"
                    )

            candidate = stage.try_match(query, bank)
            if candidate is not None:
                logger.info(
                    f"Query resolved by {candidate.stage.value} stage "
                    f"(score={candidate.score:.3f}): '{candidate.entry.question}'"
                )
                return candidate

        logger.info("No stage accepted the query")
        return None
