"""
Public application facade for the FAQ bot.

This is the single stable entry point for the library. All dependency wiring
and factory usage is encapsulated here.
"""
import logging
import math
import time
from typing import Any, Dict, Optional

from .bank_cache import KnowledgeBankCache
from .config import FaqBotConfig
from .embeddings import EmbeddingClient, create_embedding_client
from .exceptions import NotInitializedError
from .resolution import FaqResolver, create_resolver
from .schemas import ResolutionResult
from .sources import EntrySource, create_entry_source

logger = logging.getLogger(__name__)


class FaqBotApp:
    """
    Public application facade for the FAQ bot.

    Usage:
        config = load_config_from_env()
        bot = FaqBotApp(config)
        bot.initialize()
        result = bot.ask("What is the office address?")
    """

    def __init__(
        self,
        config: FaqBotConfig,
        source: Optional[EntrySource] = None,
        embedder: Optional[EmbeddingClient] = None,
    ):
        """
        :param config: FaqBotConfig instance
        :param source: Optional entry source (built from config if None)
        :param embedder: Optional embedding client (built from config if None
                         and semantic matching is enabled)
        """
        self._config = config
        self._source = source
        self._embedder = embedder
        self._cache: Optional[KnowledgeBankCache] = None
        self._resolver: Optional[FaqResolver] = None

    @property
    def config(self) -> FaqBotConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._resolver is not None

    def initialize(self) -> None:
        """
        Wire source, embedder, cache and resolver; optionally warm the cache.

        Call this once before using ask().
        """
        if self._source is None:
            self._source = create_entry_source(self._config)

        if self._embedder is None and self._config.enable_semantic:
            self._embedder = create_embedding_client(self._config)

        self._cache = KnowledgeBankCache(
            source=self._source,
            embedder=self._embedder,
            ttl_seconds=self._config.cache_ttl_seconds,
            serve_stale_on_error=self._config.serve_stale_on_error,
            retry_after_seconds=self._config.refresh_retry_seconds,
            max_question_length=self._config.max_query_length,
        )
        self._resolver = create_resolver(self._config, self._cache, self._embedder)

        logger.info(
            f"FAQ bot initialized (source={self._config.source}, "
            f"semantic={'on' if self._embedder else 'off'})"
        )

        if self._config.warmup_on_start:
            self.warmup()

    def warmup(self) -> None:
        """
        Preload the knowledge bank so the first request does not pay for it.

        A failed warmup is logged; the next request retries the load.
        """
        try:
            self._require_cache().get()
        except Exception:
            logger.warning("Knowledge bank warmup failed", exc_info=True)

    def ask(self, query: str) -> ResolutionResult:
        """
        Resolve a query to an answer.

        :raises NotInitializedError: if initialize() was not called
        :raises InvalidInputError: for empty or oversized queries
        :raises UpstreamFetchError: if no knowledge bank could be loaded
        """
        if self._resolver is None:
            raise NotInitializedError("FAQ bot is not initialized.")
        return self._resolver.resolve(query)

    def refresh(self) -> int:
        """
        Force a knowledge bank reload.

        :return: Number of entries in the bank now being served
        """
        bank = self._require_cache().refresh()
        return len(bank)

    def status(self) -> Dict[str, Any]:
        """Describe the currently cached bank without loading it."""
        bank = self._require_cache().peek()
        if bank is None:
            return {"loaded": False, "entries": 0, "embeddings": False}

        now = time.monotonic()
        status = {
            "loaded": True,
            "entries": len(bank),
            "embeddings": bank.has_embeddings,
            "fresh": bank.is_fresh(now),
            "ttl_seconds": bank.ttl,
        }
        # Invalidated banks carry no meaningful load time
        if math.isfinite(bank.loaded_at):
            status["age_seconds"] = round(max(0.0, now - bank.loaded_at), 1)
        return status

    def _require_cache(self) -> KnowledgeBankCache:
        if self._cache is None:
            raise NotInitializedError("FAQ bot is not initialized.")
        return self._cache
