"""
Embedding collaborator.

Wraps any LangChain ``Embeddings`` model with request batching and output
validation, translating every failure into UpstreamEmbeddingError.
"""
import logging
from typing import List, Sequence

from langchain_core.embeddings import Embeddings

from .config import FaqBotConfig
from .config_validator import get_required_env
from .exceptions import UpstreamEmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Batched access to an embedding model.

    Usage:
        client = EmbeddingClient(create_embedding_model(config), batch_size=64)
        vectors = client.embed(["What is the office address?"])
    """

    def __init__(self, model: Embeddings, batch_size: int = 64):
        """
        :param model: LangChain embeddings model
        :param batch_size: Maximum number of texts per request
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        self._model = model
        self.batch_size = batch_size

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed texts, one vector per text, in input order.

        :raises UpstreamEmbeddingError: on transport failure, missing vectors
                                        or inconsistent dimensions
        """
        texts = list(texts)
        vectors: List[List[float]] = []

        for start in range(0, len(texts), self.batch_size):
            batch = texts[start:start + self.batch_size]
            try:
                batch_vectors = self._model.embed_documents(batch)
            except Exception as e:
                raise UpstreamEmbeddingError(f"Embedding request failed: {e}") from e

            if len(batch_vectors) != len(batch):
                raise UpstreamEmbeddingError(
                    f"Embedding service returned {len(batch_vectors)} vectors "
                    f"for {len(batch)} texts"
                )
            vectors.extend(list(vector) for vector in batch_vectors)

        dimensions = {len(vector) for vector in vectors}
        if len(dimensions) > 1:
            raise UpstreamEmbeddingError(
                f"Embedding service returned mixed dimensions: {sorted(dimensions)}"
            )
        if 0 in dimensions:
            raise UpstreamEmbeddingError("Embedding service returned empty vectors")

        logger.debug(f"Embedded {len(texts)} texts in batches of {self.batch_size}")
        return vectors

    def embed_query(self, text: str) -> List[float]:
        """
        Embed a single query text.

        :raises UpstreamEmbeddingError: on transport failure or empty output
        """
        try:
            vector = self._model.embed_query(text)
        except Exception as e:
            raise UpstreamEmbeddingError(f"Query embedding failed: {e}") from e

        if not vector:
            raise UpstreamEmbeddingError("Embedding service returned an empty query vector")
        return list(vector)


def create_embedding_model(config: FaqBotConfig) -> Embeddings:
    """
    Factory for the remote embedding model.

    :param config: FaqBotConfig with embedding settings
    :return: OpenAIEmbeddings instance
    :raises ConfigurationError: if no OpenAI API key is available
    """
    from langchain_openai import OpenAIEmbeddings

    api_key = config.openai_api_key or get_required_env(
        "OPENAI_API_KEY",
        description="OpenAI API key for embeddings (get from https://platform.openai.com/api-keys)",
    )
    return OpenAIEmbeddings(
        model=config.embedding_model,
        openai_api_key=api_key,
        request_timeout=config.request_timeout_seconds,
        max_retries=1,
    )


def create_embedding_client(config: FaqBotConfig) -> EmbeddingClient:
    return EmbeddingClient(
        create_embedding_model(config),
        batch_size=config.embedding_batch_size,
    )
