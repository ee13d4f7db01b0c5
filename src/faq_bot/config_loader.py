"""
Configuration loader for the FAQ bot.

Reads environment variables (and a local .env file in development) into a
validated FaqBotConfig.
"""
from dotenv import load_dotenv

from .config import DEFAULT_NO_ANSWER_TEXT, FaqBotConfig
from .config_validator import (
    get_bool_env,
    get_float_env,
    get_int_env,
    get_optional_env,
    get_required_env,
    validate_path,
)
from .exceptions import ConfigurationError


def load_config_from_env(use_dotenv: bool = True) -> FaqBotConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        bot = FaqBotApp(config)
        bot.initialize()

    :param use_dotenv: Load a .env file first (disable in production)
    :return: Validated FaqBotConfig instance
    :raises ConfigurationError: if required values are missing or invalid
    """
    if use_dotenv:
        load_dotenv()

    source = (get_optional_env("FAQ_SOURCE", "notion") or "notion").strip().lower()
    openai_api_key = get_optional_env("OPENAI_API_KEY")

    try:
        config = FaqBotConfig(
            source=source,
            faq_csv_path=get_optional_env("FAQ_CSV_PATH"),
            notion_token=get_optional_env("NOTION_TOKEN"),
            notion_database_id=get_optional_env("NOTION_DB_ID"),
            notion_question_property=get_optional_env("NOTION_QUESTION_PROPERTY", "Question"),
            notion_answer_property=get_optional_env("NOTION_ANSWER_PROPERTY", "Answer"),
            notion_page_size=get_int_env("NOTION_PAGE_SIZE", 100),
            notion_max_rows=get_int_env("NOTION_MAX_ROWS", None),
            # Semantic matching is only on by default when embeddings are reachable
            enable_semantic=get_bool_env("ENABLE_SEMANTIC", bool(openai_api_key)),
            openai_api_key=openai_api_key,
            embedding_model=get_optional_env("EMBEDDING_MODEL", "text-embedding-3-small"),
            embedding_batch_size=get_int_env("EMBEDDING_BATCH_SIZE", 64),
            request_timeout_seconds=get_float_env("REQUEST_TIMEOUT_SECONDS", 10.0),
            cache_ttl_seconds=get_float_env("CACHE_TTL_SECONDS", 300.0),
            serve_stale_on_error=get_bool_env("SERVE_STALE_ON_ERROR", True),
            refresh_retry_seconds=get_float_env("REFRESH_RETRY_SECONDS", 30.0),
            exact_min_contain_length=get_int_env("EXACT_MIN_CONTAIN_LENGTH", 5),
            keyword_min_token_length=get_int_env("KEYWORD_MIN_TOKEN_LENGTH", 4),
            keyword_min_score=get_int_env("KEYWORD_MIN_SCORE", 2),
            keyword_synonym_bonus=get_int_env("KEYWORD_SYNONYM_BONUS", 2),
            semantic_threshold=get_float_env("SEMANTIC_THRESHOLD", 0.78),
            semantic_direct_threshold=get_float_env("SEMANTIC_DIRECT_THRESHOLD", 0.9),
            fuzzy_threshold=get_float_env("FUZZY_THRESHOLD", 0.58),
            fuzzy_scorer=get_optional_env("FUZZY_SCORER", "dice"),
            fuzzy_edit_ratio=get_float_env("FUZZY_EDIT_RATIO", 0.35),
            resolution_time_budget_seconds=get_float_env("RESOLUTION_TIME_BUDGET_SECONDS", None),
            no_answer_text=get_optional_env("NO_ANSWER_TEXT", DEFAULT_NO_ANSWER_TEXT),
            max_query_length=get_int_env("MAX_QUERY_LENGTH", 500),
            admin_refresh_key=get_optional_env("ADMIN_REFRESH_KEY") or None,
            warmup_on_start=get_bool_env("WARMUP_ON_START", True),
            log_level=get_optional_env("LOG_LEVEL", "INFO"),
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    _validate_source_settings(config)
    return config


def _validate_source_settings(config: FaqBotConfig) -> None:
    """Fail fast when the selected source cannot be reached."""
    if config.source == "notion":
        config.notion_token = get_required_env(
            "NOTION_TOKEN",
            description="Notion integration token with read access to the FAQ database",
        )
        config.notion_database_id = get_required_env(
            "NOTION_DB_ID",
            description="ID of the Notion database holding Question/Answer rows",
        )
    else:
        validate_path(config.faq_csv_path, "FAQ_CSV_PATH", must_exist=True)

    if config.enable_semantic and not config.openai_api_key:
        raise ConfigurationError(
            "ENABLE_SEMANTIC is true but OPENAI_API_KEY is not set."
        )
