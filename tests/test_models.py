"""
Tests for the knowledge bank data model and response schema.
"""
import dataclasses

import pytest

from faq_bot.models import Entry, KnowledgeBank
from faq_bot.schemas import MatchSource, ResolutionResult


class TestEntryFromRow:
    """Tests for the raw row -> Entry boundary mapping."""

    def test_valid_row(self):
        """Test that a complete row becomes an Entry with a normalized question."""
        entry = Entry.from_row({"id": "p1", "question": " What is the office address? ", "answer": "123 Main St"})

        assert entry.id == "p1"
        assert entry.question == "What is the office address?"
        assert entry.answer == "123 Main St"
        assert entry.normalized_question == "what is the office address"
        assert entry.embedding is None

    @pytest.mark.parametrize(
        "row",
        [
            {"id": "1", "question": "", "answer": "x"},
            {"id": "2", "question": "Where?", "answer": "   "},
            {"id": "3", "answer": "No question"},
            {"id": "4", "question": "No answer"},
            {"id": "5", "question": None, "answer": None},
            {"id": "6", "question": "???", "answer": "Only punctuation"},
        ],
    )
    def test_invalid_rows_are_skipped(self, row):
        """Test that rows without a usable question or answer map to None."""
        assert Entry.from_row(row) is None

    def test_missing_id_falls_back_to_question(self):
        """Test that entries without an id still get a stable identifier."""
        entry = Entry.from_row({"question": "Are you hiring?", "answer": "Yes"})
        assert entry.id == "are you hiring"

    def test_entries_are_immutable(self):
        """Test that entries cannot be mutated after loading."""
        entry = Entry.from_row({"id": "1", "question": "Q?", "answer": "A"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.answer = "changed"

    def test_with_embedding_returns_copy(self):
        """Test that attaching an embedding leaves the original untouched."""
        entry = Entry.from_row({"id": "1", "question": "Q?", "answer": "A"})
        embedded = entry.with_embedding([1, 2, 3])

        assert entry.embedding is None
        assert embedded.embedding == (1.0, 2.0, 3.0)
        assert embedded.question == entry.question


class TestKnowledgeBank:
    """Tests for KnowledgeBank freshness."""

    def test_fresh_until_ttl_elapses(self):
        bank = KnowledgeBank(entries=(), loaded_at=100.0, ttl=60.0)

        assert bank.is_fresh(100.0)
        assert bank.is_fresh(160.0)
        assert not bank.is_fresh(160.1)

    def test_has_embeddings(self):
        entry = Entry.from_row({"id": "1", "question": "Q?", "answer": "A"})
        assert not KnowledgeBank(entries=(entry,), loaded_at=0, ttl=1).has_embeddings
        assert KnowledgeBank(entries=(entry.with_embedding([1.0]),), loaded_at=0, ttl=1).has_embeddings


class TestResolutionResult:
    """Tests for the response shape."""

    def test_match_to_dict(self):
        result = ResolutionResult(
            answer="123 Main St",
            source=MatchSource.SEMANTIC,
            matched_question="What is the office address?",
            score=0.851234,
            entry_id="1",
        )

        assert result.to_dict() == {
            "answer": "123 Main St",
            "source": "semantic",
            "matched_question": "What is the office address?",
            "score": 0.8512,
        }
        assert result.is_match

    def test_no_match_to_dict(self):
        """Test that optional fields are omitted when absent."""
        result = ResolutionResult(answer="Sorry", source=MatchSource.NONE)

        assert result.to_dict() == {"answer": "Sorry", "source": "none"}
        assert not result.is_match

    def test_direct_answer_flag(self):
        result = ResolutionResult(answer="A", source=MatchSource.SEMANTIC, score=0.95, direct_answer=True)
        assert result.to_dict()["direct_answer"] is True
