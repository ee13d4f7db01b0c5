"""
Tests for the Flask HTTP surface and the FaqBotApp facade.
"""
import pytest

from faq_bot.api import create_app
from faq_bot.app import FaqBotApp
from faq_bot.config import DEFAULT_NO_ANSWER_TEXT, FaqBotConfig
from faq_bot.exceptions import NotInitializedError
from faq_bot.schemas import MatchSource

from conftest import SAMPLE_ROWS, FakeSource


ADMIN_KEY = "refresh-key-123"


@pytest.fixture
def bot(source):
    config = FaqBotConfig(
        source="csv",
        faq_csv_path="unused.csv",
        warmup_on_start=False,
        admin_refresh_key=ADMIN_KEY,
    )
    bot = FaqBotApp(config, source=source)
    bot.initialize()
    return bot


@pytest.fixture
def client(bot):
    app = create_app(bot)
    app.config["TESTING"] = True
    return app.test_client()


class TestFaqBotApp:
    """Tests for the application facade."""

    def test_ask_before_initialize(self):
        bot = FaqBotApp(FaqBotConfig(source="csv"), source=FakeSource())

        with pytest.raises(NotInitializedError):
            bot.ask("office address")

    def test_ask(self, bot):
        result = bot.ask("office address")
        assert result.answer == "123 Main St"

    def test_warmup_loads_bank(self, source):
        config = FaqBotConfig(source="csv", warmup_on_start=True)
        bot = FaqBotApp(config, source=source)

        bot.initialize()

        assert source.calls == 1
        assert bot.status()["loaded"] is True

    def test_failed_warmup_is_not_fatal(self, source):
        source.fail = True
        bot = FaqBotApp(FaqBotConfig(source="csv", warmup_on_start=True), source=source)

        bot.initialize()

        assert bot.is_initialized
        assert bot.status() == {"loaded": False, "entries": 0, "embeddings": False}

    def test_refresh_returns_entry_count(self, bot, source):
        source.rows = source.rows[:3]
        assert bot.refresh() == 3

    def test_every_bank_question_resolves_exactly(self, source):
        """Test that questions longer than the query limit never enter the bank."""
        long_question = "Could you explain " + "in great detail " * 35 + "the refund policy?"
        source.rows.append({"id": "long", "question": long_question, "answer": "See terms"})
        bot = FaqBotApp(FaqBotConfig(source="csv", max_query_length=500), source=source)
        bot.initialize()

        bank = bot._require_cache().get()
        for entry in bank.entries:
            result = bot.ask(entry.question)
            assert result.source is MatchSource.EXACT
            assert result.answer == entry.answer
        assert "long" not in [entry.id for entry in bank.entries]

    def test_status_after_load(self, bot):
        bot.ask("office address")
        status = bot.status()

        assert status["loaded"] is True
        assert status["entries"] == len(SAMPLE_ROWS)
        assert status["embeddings"] is False
        assert status["fresh"] is True
        assert status["age_seconds"] >= 0


class TestAskEndpoint:
    """Tests for /api/ask."""

    def test_index(self, client):
        response = client.get("/")
        assert response.data == b"FAQ bot running!"

    def test_ask_get(self, client):
        response = client.get("/api/ask", query_string={"q": "office address"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["answer"] == "123 Main St"
        assert data["source"] == "exact"
        assert data["matched_question"] == "What is the office address?"

    def test_ask_post_json(self, client):
        response = client.post("/api/ask", json={"question": "How can I reach you by phone?"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["answer"] == "Email support@example.com"
        assert data["source"] == "keyword"

    def test_no_match(self, client):
        response = client.get("/api/ask", query_string={"q": "xyz totally unrelated"})

        assert response.status_code == 200
        assert response.get_json() == {"answer": DEFAULT_NO_ANSWER_TEXT, "source": "none"}

    @pytest.mark.parametrize("query_string", [{}, {"q": ""}, {"q": "   "}])
    def test_missing_query(self, client, query_string):
        response = client.get("/api/ask", query_string=query_string)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Missing q"}

    def test_non_string_query(self, client):
        response = client.post("/api/ask", json={"q": 42})
        assert response.status_code == 400

    def test_query_too_long(self, client):
        response = client.get("/api/ask", query_string={"q": "a" * 501})

        assert response.status_code == 400
        assert "maximum length" in response.get_json()["error"]

    def test_store_unavailable(self, client, source):
        source.fail = True

        response = client.get("/api/ask", query_string={"q": "office address"})

        assert response.status_code == 502
        assert response.get_json() == {"error": "Failed to fetch FAQ entries"}

    def test_uninitialized_bot(self):
        app = create_app(FaqBotApp(FaqBotConfig(source="csv"), source=FakeSource()))

        response = app.test_client().get("/api/ask", query_string={"q": "office"})

        assert response.status_code == 503

    def test_cors_headers(self, client):
        response = client.get("/api/ask", query_string={"q": "office address"})
        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestRefreshEndpoint:
    """Tests for /api/refresh and /api/status."""

    def test_refresh_with_header_key(self, client, source):
        response = client.post("/api/refresh", headers={"X-Admin-Key": ADMIN_KEY})

        assert response.status_code == 200
        assert response.get_json() == {"refreshed": True, "entries": len(SAMPLE_ROWS)}
        assert source.calls == 1

    def test_refresh_with_query_key(self, client):
        response = client.post("/api/refresh", query_string={"key": ADMIN_KEY})
        assert response.status_code == 200

    @pytest.mark.parametrize("headers", [{}, {"X-Admin-Key": "wrong"}])
    def test_refresh_forbidden(self, client, source, headers):
        response = client.post("/api/refresh", headers=headers)

        assert response.status_code == 403
        assert source.calls == 0

    def test_refresh_disabled_without_configured_key(self, source):
        bot = FaqBotApp(FaqBotConfig(source="csv", warmup_on_start=False), source=source)
        bot.initialize()

        response = create_app(bot).test_client().post("/api/refresh", headers={"X-Admin-Key": ""})

        assert response.status_code == 403

    def test_refresh_with_failing_store(self, client, source):
        """Test that a forced reload that cannot reach the store is reported as failed."""
        client.get("/api/ask", query_string={"q": "office address"})
        source.fail = True

        response = client.post("/api/refresh", headers={"X-Admin-Key": ADMIN_KEY})

        assert response.status_code == 502
        assert response.get_json() == {"error": "Failed to fetch FAQ entries"}
        answer = client.get("/api/ask", query_string={"q": "office address"}).get_json()
        assert answer["answer"] == "123 Main St"

    def test_refresh_picks_up_new_rows(self, client, source):
        client.get("/api/ask", query_string={"q": "office address"})
        source.rows.append({"id": "6", "question": "Do you ship abroad?", "answer": "Yes, worldwide"})

        client.post("/api/refresh", headers={"X-Admin-Key": ADMIN_KEY})
        response = client.get("/api/ask", query_string={"q": "Do you ship abroad?"})

        assert response.get_json()["answer"] == "Yes, worldwide"

    def test_status(self, client):
        assert client.get("/api/status").get_json()["loaded"] is False

        client.get("/api/ask", query_string={"q": "office address"})
        data = client.get("/api/status").get_json()

        assert data["loaded"] is True
        assert data["entries"] == len(SAMPLE_ROWS)
