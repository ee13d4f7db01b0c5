from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MatchSource(str, Enum):
    """Stage that produced an answer."""
    EXACT = "exact"
    KEYWORD = "keyword"
    SEMANTIC = "semantic"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Answer returned to the caller, with provenance.

    Attributes:
        answer: Matched answer, or the canned no-answer text
        source: Stage that matched (MatchSource.NONE when nothing did)
        matched_question: Question of the matched entry
        score: Stage-specific similarity score of the match
        direct_answer: Semantic match above the direct-answer threshold
        entry_id: External identifier of the matched entry
    """
    answer: str
    source: MatchSource
    matched_question: Optional[str] = None
    score: Optional[float] = None
    direct_answer: bool = False
    entry_id: Optional[str] = None

    @property
    def is_match(self) -> bool:
        return self.source is not MatchSource.NONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON response shape."""
        result: Dict[str, Any] = {
            "answer": self.answer,
            "source": self.source.value,
        }

        if self.matched_question is not None:
            result["matched_question"] = self.matched_question

        if self.score is not None:
            result["score"] = round(self.score, 4)

        if self.direct_answer:
            result["direct_answer"] = True

        return result
