"""
Factory wiring the configured stage order into a resolver.
"""
from typing import List, Optional

from ..bank_cache import KnowledgeBankCache
from ..config import FaqBotConfig
from ..embeddings import EmbeddingClient
from .exact_matcher import ExactMatcher
from .faq_resolver import FaqResolver
from .fuzzy_matcher import FuzzyMatcher
from .keyword_matcher import KeywordMatcher
from .match_stage import MatchStage
from .resolution_policy import ResolutionPolicy
from .semantic_matcher import SemanticMatcher
from .vocabulary import KeywordVocabulary


def create_stages(
    config: FaqBotConfig,
    embedder: Optional[EmbeddingClient] = None,
    vocabulary: Optional[KeywordVocabulary] = None,
) -> List[MatchStage]:
    """
    Build the stages in precision-first order: exact, keyword, semantic, fuzzy.

    The semantic stage is only included when an embedder is available.
    """
    stages: List[MatchStage] = [
        ExactMatcher(min_contain_length=config.exact_min_contain_length),
        KeywordMatcher(
            vocabulary=vocabulary,
            min_score=config.keyword_min_score,
            min_token_length=config.keyword_min_token_length,
            synonym_bonus=config.keyword_synonym_bonus,
        ),
    ]

    if embedder is not None:
        stages.append(
            SemanticMatcher(
                embedder,
                threshold=config.semantic_threshold,
                direct_threshold=config.semantic_direct_threshold,
            )
        )

    stages.append(
        FuzzyMatcher(
            threshold=config.fuzzy_threshold,
            scorer=config.fuzzy_scorer,
            edit_ratio=config.fuzzy_edit_ratio,
        )
    )
    return stages


def create_resolver(
    config: FaqBotConfig,
    cache: KnowledgeBankCache,
    embedder: Optional[EmbeddingClient] = None,
    vocabulary: Optional[KeywordVocabulary] = None,
) -> FaqResolver:
    """
    Factory function to create a configured FaqResolver.

    :param config: FaqBotConfig with thresholds
    :param cache: Shared knowledge bank cache
    :param embedder: Embedding client for the semantic stage (None disables it)
    :param vocabulary: Optional custom keyword vocabulary
    :return: FaqResolver
    """
    policy = ResolutionPolicy(
        stages=create_stages(config, embedder, vocabulary),
        time_budget_seconds=config.resolution_time_budget_seconds,
    )
    return FaqResolver(
        cache=cache,
        policy=policy,
        no_answer_text=config.no_answer_text,
        max_query_length=config.max_query_length,
    )
