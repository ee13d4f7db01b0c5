"""
Fetch collaborator protocol for the knowledge bank.
"""
from abc import ABC, abstractmethod
from typing import Dict, List


class EntrySource(ABC):
    """
    Source of raw question/answer rows.

    Implementations page through the whole store and return every row as
    ``{"id": ..., "question": ..., "answer": ...}`` in store order. Rows are
    validated later by ``Entry.from_row``.
    """

    @abstractmethod
    def fetch_entries(self) -> List[Dict[str, str]]:
        """
        Fetch all rows from the store.

        :raises UpstreamFetchError: if the store cannot be read
        """
        pass
