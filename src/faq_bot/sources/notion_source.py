"""
Notion database as the knowledge bank store.

Talks to the Notion REST API directly over httpx and pages through the
database with ``start_cursor`` until ``has_more`` is false.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import UpstreamFetchError
from .base import EntrySource

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionEntrySource(EntrySource):
    """
    Reads Question (title) / Answer (rich text) rows from a Notion database.
    """

    def __init__(
        self,
        token: str,
        database_id: str,
        question_property: str = "Question",
        answer_property: str = "Answer",
        page_size: int = 100,
        max_rows: Optional[int] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        :param token: Notion integration token
        :param database_id: Database to query
        :param question_property: Name of the title property holding the question
        :param answer_property: Name of the rich-text property holding the answer
        :param page_size: Rows per request (Notion allows at most 100)
        :param max_rows: Stop paging once this many rows were read (None = all)
        :param timeout: Per-request timeout in seconds
        :param client: Optional preconfigured httpx.Client (tests, connection reuse)
        """
        if not 1 <= page_size <= 100:
            raise ValueError(f"page_size must be between 1 and 100, got {page_size}")

        self._database_id = database_id
        self._question_property = question_property
        self._answer_property = answer_property
        self._page_size = page_size
        self._max_rows = max_rows
        self._client = client or httpx.Client(
            base_url=NOTION_API_URL,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            },
        )

    def fetch_entries(self) -> List[Dict[str, str]]:
        rows: List[Dict[str, str]] = []
        cursor: Optional[str] = None

        while True:
            payload = self._query_page(cursor)
            for page in payload["results"]:
                if isinstance(page, dict):
                    rows.append(self._parse_page(page))

            cursor = payload.get("next_cursor") if payload.get("has_more") else None
            if not cursor:
                break
            if self._max_rows is not None and len(rows) >= self._max_rows:
                logger.warning(
                    f"Notion fetch stopped at max_rows={self._max_rows}; more rows available"
                )
                break

        if self._max_rows is not None:
            rows = rows[: self._max_rows]

        logger.info(f"Fetched {len(rows)} rows from Notion database {self._database_id}")
        return rows

    def close(self) -> None:
        self._client.close()

    def _query_page(self, cursor: Optional[str]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"page_size": self._page_size}
        if cursor:
            body["start_cursor"] = cursor

        try:
            response = self._client.post(f"/databases/{self._database_id}/query", json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"Notion query failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamFetchError(f"Failed to fetch from Notion: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("results", []), list):
            raise UpstreamFetchError("Notion returned an unexpected response shape")
        payload.setdefault("results", [])
        return payload

    def _parse_page(self, page: Dict[str, Any]) -> Dict[str, str]:
        properties = page.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        return {
            "id": page.get("id"),
            "question": _plain_text(properties.get(self._question_property), "title"),
            "answer": _plain_text(properties.get(self._answer_property), "rich_text"),
        }


def _plain_text(prop: Optional[Dict[str, Any]], kind: str) -> str:
    """Join the plain_text fragments of a title or rich_text property."""
    if not isinstance(prop, dict):
        return ""
    fragments = prop.get(kind)
    if not isinstance(fragments, list):
        return ""
    return " ".join(
        str(fragment.get("plain_text") or "") for fragment in fragments if isinstance(fragment, dict)
    ).strip()
