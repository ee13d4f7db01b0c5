class FaqBotError(Exception):
    """Base exception for the FAQ bot service."""


class ConfigurationError(FaqBotError):
    """Raised when required configuration is missing or invalid."""


class NotInitializedError(FaqBotError):
    """Raised when the bot is used before initialization."""


class InvalidInputError(FaqBotError):
    """Raised when a query is missing, empty or malformed."""


class UpstreamFetchError(FaqBotError):
    """Raised when the knowledge bank cannot be fetched from its store."""


class UpstreamEmbeddingError(FaqBotError):
    """Raised when the embedding service fails or returns malformed output."""


class ResolutionTimeoutError(FaqBotError):
    """Raised when resolution exceeds its time budget."""
