"""
Fetch collaborators that load raw question/answer rows from a store.
"""
from ..config import FaqBotConfig
from .base import EntrySource
from .csv_source import CsvEntrySource
from .notion_source import NotionEntrySource


def create_entry_source(config: FaqBotConfig) -> EntrySource:
    """
    Build the entry source selected by ``config.source``.

    :raises ValueError: if the selected source is missing its settings
    """
    if config.source == "csv":
        if not config.faq_csv_path:
            raise ValueError("faq_csv_path is required for the csv source")
        return CsvEntrySource(config.faq_csv_path)

    if not config.notion_token or not config.notion_database_id:
        raise ValueError("notion_token and notion_database_id are required for the notion source")

    return NotionEntrySource(
        token=config.notion_token,
        database_id=config.notion_database_id,
        question_property=config.notion_question_property,
        answer_property=config.notion_answer_property,
        page_size=config.notion_page_size,
        max_rows=config.notion_max_rows,
        timeout=config.request_timeout_seconds,
    )


__all__ = [
    "EntrySource",
    "CsvEntrySource",
    "NotionEntrySource",
    "create_entry_source",
]
