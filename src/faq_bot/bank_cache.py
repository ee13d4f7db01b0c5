"""
In-memory, time-bounded cache of the knowledge bank.

The cache holds one immutable KnowledgeBank generation at a time. Readers take
the current reference without locking; a refresh builds a complete new bank
and swaps the reference, so a reader never sees a partially loaded bank.
"""
import logging
import threading
import time
from typing import Callable, List, Optional

from .embeddings import EmbeddingClient
from .exceptions import UpstreamEmbeddingError, UpstreamFetchError
from .models import Entry, KnowledgeBank
from .sources import EntrySource

logger = logging.getLogger(__name__)


class KnowledgeBankCache:
    """
    Lazily refreshed holder of the current knowledge bank.

    Usage:
        cache = KnowledgeBankCache(source, embedder, ttl_seconds=300)
        bank = cache.get()  # loads on first use, then again once stale

    With ``serve_stale_on_error`` a stale bank keeps being served while
    another request refreshes it, and for ``retry_after_seconds`` after a
    failed refresh.
    """

    def __init__(
        self,
        source: EntrySource,
        embedder: Optional[EmbeddingClient] = None,
        ttl_seconds: float = 300.0,
        serve_stale_on_error: bool = True,
        retry_after_seconds: float = 30.0,
        max_question_length: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        :param source: Fetch collaborator for raw rows
        :param embedder: Embedding collaborator; None disables question embeddings
        :param ttl_seconds: How long a loaded bank stays fresh
        :param serve_stale_on_error: Keep serving the last good bank when a refresh fails
        :param retry_after_seconds: Pause before refetching after a failed refresh
        :param max_question_length: Skip rows whose question is longer than the
                                    resolver accepts as a query (None = no limit)
        :param clock: Monotonic time source (injectable for tests)
        """
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        if retry_after_seconds < 0:
            raise ValueError(f"retry_after_seconds must be >= 0, got {retry_after_seconds}")

        self._source = source
        self._embedder = embedder
        self._ttl = ttl_seconds
        self._serve_stale_on_error = serve_stale_on_error
        self._retry_after_seconds = retry_after_seconds
        self._max_question_length = max_question_length
        self._clock = clock
        self._bank: Optional[KnowledgeBank] = None
        self._next_retry_at = float("-inf")
        self._refresh_lock = threading.Lock()

    @property
    def semantic_enabled(self) -> bool:
        return self._embedder is not None

    def peek(self) -> Optional[KnowledgeBank]:
        """Current bank without triggering a load (may be stale or None)."""
        return self._bank

    def get(self) -> KnowledgeBank:
        """
        Return a fresh bank, reloading it if the current one expired.

        :raises UpstreamFetchError: if no bank could ever be loaded, or the
                                    refresh failed and stale serving is off
        """
        bank = self._bank
        now = self._clock()
        if bank is not None and bank.is_fresh(now):
            return bank

        if bank is not None and self._serve_stale_on_error:
            if now < self._next_retry_at:
                return bank
            # Someone else is already refreshing
            if not self._refresh_lock.acquire(blocking=False):
                return bank
            try:
                return self._refresh_if_stale()
            finally:
                self._refresh_lock.release()

        with self._refresh_lock:
            return self._refresh_if_stale()

    def refresh(self) -> KnowledgeBank:
        """
        Force a reload regardless of freshness.

        :raises UpstreamFetchError: if the store cannot be read; the previous
                                    bank stays in place for get()
        """
        with self._refresh_lock:
            bank = self._load()
            self._store(bank)
            return bank

    def invalidate(self) -> None:
        """
        Mark the current bank stale so the next get() reloads it.

        The old generation is kept as a fallback for failed refreshes.
        """
        bank = self._bank
        if bank is not None:
            self._bank = KnowledgeBank(
                entries=bank.entries,
                loaded_at=float("-inf"),
                ttl=bank.ttl,
                embedding_dimension=bank.embedding_dimension,
            )
        self._next_retry_at = float("-inf")

    def _refresh_if_stale(self) -> KnowledgeBank:
        # Another request may have refreshed while we waited
        previous = self._bank
        if previous is not None and previous.is_fresh(self._clock()):
            return previous

        try:
            bank = self._load()
        except UpstreamFetchError:
            if previous is None or not self._serve_stale_on_error:
                raise
            self._next_retry_at = self._clock() + self._retry_after_seconds
            logger.warning(
                f"Knowledge bank refresh failed; serving previous generation "
                f"with {len(previous)} entries, next attempt in "
                f"{self._retry_after_seconds:.0f}s",
                exc_info=True,
            )
            return previous

        self._store(bank)
        return bank

    def _store(self, bank: KnowledgeBank) -> None:
        self._bank = bank
        self._next_retry_at = float("-inf")

    def _load(self) -> KnowledgeBank:
        started = self._clock()
        rows = self._source.fetch_entries()

        entries: List[Entry] = []
        skipped = too_long = 0
        for row in rows:
            entry = Entry.from_row(row)
            if entry is None:
                skipped += 1
                continue
            limit = self._max_question_length
            if limit is not None and len(entry.question) > limit:
                too_long += 1
                continue
            entries.append(entry)

        if skipped:
            logger.info(f"Skipped {skipped} rows without a usable question or answer")
        if too_long:
            logger.warning(
                f"Skipped {too_long} rows with questions longer than "
                f"{self._max_question_length} characters"
            )

        embedded, dimension = self._embed_entries(entries)

        bank = KnowledgeBank(
            entries=tuple(embedded),
            loaded_at=self._clock(),
            ttl=self._ttl,
            embedding_dimension=dimension,
        )
        logger.info(
            f"Knowledge bank loaded: {len(bank)} entries, "
            f"embeddings={'on' if bank.has_embeddings else 'off'}, "
            f"took {self._clock() - started:.2f}s"
        )
        return bank

    def _embed_entries(self, entries: List[Entry]):
        if self._embedder is None or not entries:
            return entries, None

        try:
            vectors = self._embedder.embed([entry.question for entry in entries])
        except UpstreamEmbeddingError as e:
            logger.warning(f"Embedding failed; semantic matching disabled for this bank: {e}")
            return entries, None

        embedded = [
            entry.with_embedding(vector) for entry, vector in zip(entries, vectors)
        ]
        return embedded, len(vectors[0])
