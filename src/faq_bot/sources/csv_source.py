import csv
from typing import Dict, List, Optional

from ..exceptions import UpstreamFetchError
from .base import EntrySource


class CsvEntrySource(EntrySource):
    """
    Loads question/answer rows from a spreadsheet export (CSV).

    Expects ``Question`` and ``Answer`` columns; an ``ID`` column is optional.
    Header matching is case-insensitive.
    """

    ID_COLUMNS = ("id",)
    QUESTION_COLUMNS = ("question", "spørgsmål", "spoergsmaal")
    ANSWER_COLUMNS = ("answer", "svar")

    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def fetch_entries(self) -> List[Dict[str, str]]:
        rows: List[Dict[str, str]] = []

        try:
            with open(self.csv_path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                for line_number, row in enumerate(reader, start=1):
                    rows.append(self._parse_row(row, line_number))
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise UpstreamFetchError(
                f"Failed to read FAQ table from {self.csv_path}: {e}"
            ) from e

        return rows

    def _parse_row(self, row: dict, line_number: int) -> Dict[str, str]:
        lowered = {
            (key or "").strip().lower(): value for key, value in row.items()
        }
        entry_id = self._first_value(lowered, self.ID_COLUMNS)
        return {
            "id": entry_id or f"row-{line_number}",
            "question": self._first_value(lowered, self.QUESTION_COLUMNS) or "",
            "answer": self._first_value(lowered, self.ANSWER_COLUMNS) or "",
        }

    def _first_value(self, row: dict, columns) -> Optional[str]:
        for column in columns:
            value = row.get(column)
            if value is not None and value.strip():
                return value.strip()
        return None
