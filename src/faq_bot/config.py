from dataclasses import dataclass
from typing import Optional


DEFAULT_NO_ANSWER_TEXT = "Sorry, I couldn't find an answer."


@dataclass
class FaqBotConfig:
    # Knowledge bank source: "notion" or "csv"
    source: str = "notion"
    faq_csv_path: Optional[str] = None

    # Notion
    notion_token: Optional[str] = None
    notion_database_id: Optional[str] = None
    notion_question_property: str = "Question"
    notion_answer_property: str = "Answer"
    notion_page_size: int = 100
    notion_max_rows: Optional[int] = None

    # Embeddings
    enable_semantic: bool = False
    openai_api_key: Optional[str] = None
    embedding_model: str = "text-embedding-3-small"
    embedding_batch_size: int = 64

    # Upstream calls
    request_timeout_seconds: float = 10.0

    # Cache
    cache_ttl_seconds: float = 300.0
    serve_stale_on_error: bool = True
    refresh_retry_seconds: float = 30.0

    # Resolution thresholds
    exact_min_contain_length: int = 5
    keyword_min_token_length: int = 4
    keyword_min_score: int = 2
    keyword_synonym_bonus: int = 2
    semantic_threshold: float = 0.78
    semantic_direct_threshold: float = 0.9
    fuzzy_threshold: float = 0.58
    fuzzy_scorer: str = "dice"
    fuzzy_edit_ratio: float = 0.35
    resolution_time_budget_seconds: Optional[float] = None

    # Responses
    no_answer_text: str = DEFAULT_NO_ANSWER_TEXT
    max_query_length: int = 500

    # Admin / runtime
    admin_refresh_key: Optional[str] = None
    warmup_on_start: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate value ranges that would silently break resolution."""
        if self.source not in ("notion", "csv"):
            raise ValueError(f"source must be 'notion' or 'csv', got {self.source!r}")

        for name in ("semantic_threshold", "semantic_direct_threshold", "fuzzy_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")

        if self.semantic_direct_threshold < self.semantic_threshold:
            raise ValueError(
                "semantic_direct_threshold must not be lower than semantic_threshold"
            )

        if self.cache_ttl_seconds < 0:
            raise ValueError(f"cache_ttl_seconds must be >= 0, got {self.cache_ttl_seconds}")

        if self.refresh_retry_seconds < 0:
            raise ValueError(
                f"refresh_retry_seconds must be >= 0, got {self.refresh_retry_seconds}"
            )

        if self.embedding_batch_size < 1:
            raise ValueError(
                f"embedding_batch_size must be >= 1, got {self.embedding_batch_size}"
            )
