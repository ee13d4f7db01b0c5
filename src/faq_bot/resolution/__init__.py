"""
Answer resolution layer.

Turns a free-text query into an answer by escalating through match stages of
decreasing precision: exact -> keyword -> semantic -> fuzzy.

Key components:
- MatchStage: protocol for matching strategies
- MatchCandidate: accepted match with stage provenance
- Matchers: Exact, Keyword, Semantic and Fuzzy strategies
- ResolutionPolicy: ordered escalation over stages
- FaqResolver: query validation, bank lookup and result building
"""
from .match_stage import MatchStage, MatchCandidate
from .exact_matcher import ExactMatcher
from .keyword_matcher import KeywordMatcher
from .semantic_matcher import SemanticMatcher
from .fuzzy_matcher import FuzzyMatcher
from .vocabulary import KeywordVocabulary
from .resolution_policy import ResolutionPolicy
from .faq_resolver import FaqResolver
from .resolver_factory import create_resolver, create_stages

__all__ = [
    "MatchStage",
    "MatchCandidate",
    "ExactMatcher",
    "KeywordMatcher",
    "SemanticMatcher",
    "FuzzyMatcher",
    "KeywordVocabulary",
    "ResolutionPolicy",
    "FaqResolver",
    "create_resolver",
    "create_stages",
]
