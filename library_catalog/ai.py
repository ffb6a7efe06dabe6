# library_catalog/ai.py
"""
Library assistant: catalog context and the text generation client.

``build_context`` turns the catalog into a one-line inventory and
``build_system_instruction`` wraps it in the assistant instructions.
``GenerationClient.ask`` posts a single non-streaming request to an
Ollama style ``/api/generate`` endpoint. It never raises: transport and
protocol failures come back as readable text so the chat endpoint can
always answer.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from .catalog.decorators import format_price
from .catalog.schemas import Book
from .config import Config


logger = logging.getLogger(__name__)

NO_BOOKS_AVAILABLE = "No books currently available."
NO_RESPONSE = "No response from AI."
ERROR_PREFIX = "Error connecting to AI service: "

SYSTEM_TEMPLATE = (
    "You are a helpful library assistant. "
    "You have access to the following books in the library catalog: [{inventory}]. "
    "Answer the user's questions based on this catalog. "
    "If they ask for a recommendation, pick strictly from this list."
)


# === Contexte du catalogue ===

def build_context(books: Iterable[Book]) -> str:
    """Render the catalog as ``"Title" by Author ($price)`` entries.

    Entries are joined with ``"; "`` in catalog order. An empty catalog
    yields ``NO_BOOKS_AVAILABLE``.
    """
    entries = [f'"{b.title}" by {b.author} (${format_price(b.price)})' for b in books]
    if not entries:
        return NO_BOOKS_AVAILABLE
    return "; ".join(entries)


def build_system_instruction(inventory: str) -> str:
    return SYSTEM_TEMPLATE.format(inventory=inventory)


# === Client de génération ===

class GenerationResult(BaseModel):
    """Outcome of one generation call.

    Exactly one of three shapes: ``answer`` set (success), ``error``
    set (transport or protocol failure), or neither (empty reply).
    """

    answer: Optional[str] = None
    error: Optional[str] = None


class GenerationClient:
    """Client for a text generation endpoint.

    Parameters
    ----------
    url : Optional[str]
        Endpoint accepting ``{model, prompt, system, stream}``. Defaults
        to ``Config.AI_SERVICE_URL``.
    model : Optional[str]
        Model identifier. Defaults to ``Config.AI_MODEL``.
    timeout : Optional[float]
        Socket timeout in seconds. ``None`` keeps the transport default.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.url = url or Config.AI_SERVICE_URL
        self.model = model or Config.AI_MODEL
        self.timeout = timeout if timeout is not None else Config.ai_timeout()

    def build_request(self, prompt: str, system_context: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "system": system_context,
            "stream": False,
        }

    def ask(self, prompt: str, system_context: str) -> str:
        """Send ``prompt`` once and return the answer or a fallback text."""
        result = self.generate(prompt, system_context)
        if result.error is not None:
            return ERROR_PREFIX + result.error
        if not result.answer:
            return NO_RESPONSE
        return result.answer

    def generate(self, prompt: str, system_context: str) -> GenerationResult:
        payload = self.build_request(prompt, system_context)
        logger.debug("Sending generation request to %s (model=%s)", self.url, self.model)
        try:
            raw = self._post_json(payload)
        except urllib.error.HTTPError as exc:
            logger.error("Generation endpoint %s returned status %s", self.url, exc.code)
            return GenerationResult(error=f"HTTP {exc.code} {exc.reason}")
        except urllib.error.URLError as exc:
            logger.error("Error reaching %s: %s", self.url, exc.reason)
            return GenerationResult(error=str(exc.reason))
        except (OSError, http.client.HTTPException) as exc:
            # Timeouts, resets, broken status lines
            logger.error("Transport error talking to %s: %r", self.url, exc)
            return GenerationResult(error=str(exc) or exc.__class__.__name__)
        except ValueError as exc:
            # Malformed endpoint address
            logger.error("Invalid generation endpoint %r: %s", self.url, exc)
            return GenerationResult(error=str(exc))
        return self._parse_reply(raw)

    def _post_json(self, payload: Dict[str, Any]) -> str:
        request = urllib.request.Request(
            self.url,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            method="POST",
        )
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        with urllib.request.urlopen(request, **kwargs) as response:
            return response.read().decode("utf-8", errors="ignore")

    def _parse_reply(self, raw: str) -> GenerationResult:
        if not raw.strip():
            logger.warning("Generation endpoint %s returned an empty body", self.url)
            return GenerationResult()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Generation endpoint %s returned invalid JSON: %s", self.url, exc)
            return GenerationResult(error=f"invalid JSON in reply ({exc.msg})")
        except RecursionError:
            logger.error("Generation endpoint %s returned JSON nested too deeply", self.url)
            return GenerationResult(error="invalid JSON in reply (nested too deeply)")
        if data is None:
            return GenerationResult()
        if not isinstance(data, dict):
            return GenerationResult(error=f"unexpected reply of type {type(data).__name__}")
        answer = data.get("response")
        if answer is None:
            return GenerationResult()
        if not isinstance(answer, str):
            return GenerationResult(error=f"unexpected 'response' of type {type(answer).__name__}")
        return GenerationResult(answer=answer)
