"""
Client for interacting with an Ollama LLM server.

This client wraps HTTP requests to the Ollama REST API. Generation goes
through the ``/api/chat`` endpoint with streaming disabled. Errors are
raised as :class:`~commiat.llm.base.ProviderFailure` subclasses so the
gateway can decide whether to fall back to OpenRouter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from commiat.llm.base import MalformedResponse, ModelBackend, post_json


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3"


@dataclass
class OllamaClient(ModelBackend):
    """Client for interacting with an Ollama server.

    Parameters
    ----------
    base_url : str
        Base URL of the Ollama server including the port, e.g.
        ``"http://localhost:11434"``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. ``None`` waits as long as
        the HTTP client does by default.
    """

    base_url: str = DEFAULT_OLLAMA_BASE_URL
    request_timeout: Optional[float] = None

    @property
    def name(self) -> str:
        return "ollama"

    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/chat"

    def _request(self, prompt: str, model: str) -> str:
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }
        url = self.endpoint()
        data = post_json(
            self.name,
            url,
            payload,
            headers={"Content-Type": "application/json"},
            timeout=self.request_timeout,
        )
        # The chat endpoint nests the assistant text under 'message'.
        message = data.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            logger.error("Unexpected response structure from Ollama: %s", data)
            raise MalformedResponse(
                "Invalid Ollama API response structure.",
                provider=self.name,
                request_url=url,
                status=200,
                response_data=data,
            )
        return content
