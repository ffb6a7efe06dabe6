# tests/test_ai.py
"""
Tests for the assistant context builder and the generation client
"""
import http.client
import json
import socket
import urllib.error
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from library_catalog.ai import (
    ERROR_PREFIX,
    NO_BOOKS_AVAILABLE,
    NO_RESPONSE,
    GenerationClient,
    build_context,
    build_system_instruction,
)
from library_catalog.catalog.schemas import Book


def _reply(body: bytes) -> MagicMock:
    """Stand-in for the context manager returned by urlopen."""
    response = MagicMock()
    response.read.return_value = body
    cm = MagicMock()
    cm.__enter__.return_value = response
    cm.__exit__.return_value = False
    return cm


@pytest.fixture
def client():
    return GenerationClient(url="http://ai.test/api/generate", model="llama3")


class TestBuildContext:
    def test_empty_catalog(self):
        assert build_context([]) == "No books currently available."
        assert build_context([]) == NO_BOOKS_AVAILABLE

    def test_single_book(self):
        books = [Book(title="Dune", author="Herbert", price=Decimal("9.99"))]

        assert '"Dune" by Herbert ($9.99)' in build_context(books)

    def test_joins_in_catalog_order(self):
        books = [
            Book(title="Dune", author="Herbert", price=Decimal("9.99")),
            Book(title="Emma", author="Austen", price=Decimal("5")),
        ]

        assert build_context(books) == '"Dune" by Herbert ($9.99); "Emma" by Austen ($5.00)'

    def test_is_deterministic(self):
        books = [Book(title="Dune", author="Herbert", price=Decimal("9.99"))]

        assert build_context(books) == build_context(books)

    def test_system_instruction_wraps_inventory(self):
        instruction = build_system_instruction('"Dune" by Herbert ($9.99)')

        assert instruction.startswith("You are a helpful library assistant.")
        assert '[\"Dune\" by Herbert ($9.99)]' in instruction
        assert "pick strictly from this list" in instruction


class TestGenerationRequest:
    def test_request_shape(self, client):
        assert client.build_request("Hi", "ctx") == {
            "model": "llama3",
            "prompt": "Hi",
            "system": "ctx",
            "stream": False,
        }

    def test_posts_json_once(self, client):
        with patch("urllib.request.urlopen") as mock_urlopen:
            mock_urlopen.return_value = _reply(b'{"response": "Read Dune."}')
            client.ask("Recommend a book", "ctx")

        assert mock_urlopen.call_count == 1
        request = mock_urlopen.call_args[0][0]
        assert request.full_url == "http://ai.test/api/generate"
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {
            "model": "llama3",
            "prompt": "Recommend a book",
            "system": "ctx",
            "stream": False,
        }

    def test_timeout_passed_only_when_configured(self):
        timed = GenerationClient(url="http://ai.test/api/generate", model="m", timeout=5)
        with patch("urllib.request.urlopen") as mock_urlopen:
            mock_urlopen.return_value = _reply(b'{"response": "ok"}')
            timed.ask("q", "ctx")

        assert mock_urlopen.call_args[1] == {"timeout": 5}


class TestAsk:
    def test_returns_answer(self, client):
        with patch("urllib.request.urlopen", return_value=_reply(b'{"response": "Read Dune."}')):
            assert client.ask("q", "ctx") == "Read Dune."

    @pytest.mark.parametrize("body", [b"", b"   ", b"null", b"{}", b'{"response": null}', b'{"response": ""}'])
    def test_empty_reply(self, client, body):
        with patch("urllib.request.urlopen", return_value=_reply(body)):
            assert client.ask("q", "ctx") == "No response from AI."
            assert client.ask("q", "ctx") == NO_RESPONSE

    def test_connection_refused(self, client):
        error = urllib.error.URLError(ConnectionRefusedError(111, "Connection refused"))
        with patch("urllib.request.urlopen", side_effect=error):
            answer = client.ask("q", "ctx")

        assert answer.startswith("Error connecting to AI service: ")
        assert "Connection refused" in answer

    def test_http_error_status(self, client):
        error = urllib.error.HTTPError("http://ai.test/api/generate", 500, "Internal Server Error", {}, None)
        with patch("urllib.request.urlopen", side_effect=error):
            answer = client.ask("q", "ctx")

        assert answer == ERROR_PREFIX + "HTTP 500 Internal Server Error"

    def test_timeout(self, client):
        with patch("urllib.request.urlopen", side_effect=socket.timeout("timed out")):
            assert client.ask("q", "ctx") == ERROR_PREFIX + "timed out"

    def test_broken_protocol(self, client):
        with patch("urllib.request.urlopen", side_effect=http.client.BadStatusLine("")):
            assert client.ask("q", "ctx").startswith(ERROR_PREFIX)

    def test_invalid_json(self, client):
        with patch("urllib.request.urlopen", return_value=_reply(b"<html>oops</html>")):
            answer = client.ask("q", "ctx")

        assert answer.startswith(ERROR_PREFIX + "invalid JSON in reply")

    def test_unexpected_shapes(self, client):
        with patch("urllib.request.urlopen", return_value=_reply(b'["a"]')):
            assert client.ask("q", "ctx") == ERROR_PREFIX + "unexpected reply of type list"
        with patch("urllib.request.urlopen", return_value=_reply(b'{"response": 3}')):
            assert client.ask("q", "ctx") == ERROR_PREFIX + "unexpected 'response' of type int"

    def test_bad_url_never_raises(self):
        answer = GenerationClient(url="not a url", model="m").ask("q", "ctx")

        assert answer.startswith(ERROR_PREFIX)

    def test_failure_is_logged(self, client, caplog):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
            with caplog.at_level("ERROR", logger="library_catalog"):
                client.ask("q", "ctx")

        assert "Error reaching http://ai.test/api/generate: down" in caplog.text


class TestDefaults:
    def test_reads_config(self):
        from library_catalog.config import Config

        default = GenerationClient()

        assert default.url == Config.AI_SERVICE_URL
        assert default.model == Config.AI_MODEL


class TestHostileReplies:
    def test_deeply_nested_reply(self, client):
        body = b"[" * 200000 + b"]" * 200000
        with patch("urllib.request.urlopen", return_value=_reply(body)):
            answer = client.ask("q", "ctx")

        assert answer == ERROR_PREFIX + "invalid JSON in reply (nested too deeply)"

    def test_huge_prices_in_context(self):
        books = [Book(title="Vault", author="Rich", price=Decimal("1E+30"))]

        assert build_context(books) == '"Vault" by Rich ($1000000000000000000000000000000.00)'
