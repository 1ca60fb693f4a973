"""
Client for the OpenRouter chat completions API.

OpenRouter exposes an OpenAI-compatible ``/chat/completions`` endpoint
behind a bearer token. Besides generation, :meth:`OpenRouterClient.list_models`
fetches the public model catalogue for ``commiat model select``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from commiat.llm.base import (
    AUXILIARY_TIMEOUT,
    AuthFailure,
    MalformedResponse,
    ModelBackend,
    NetworkFailure,
    ServerFailure,
    post_json,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_MODELS_URL = "https://openrouter.ai/api/v1/models"
DEFAULT_OPENROUTER_MODEL = "google/gemini-2.5-flash-lite"


@dataclass
class OpenRouterClient(ModelBackend):
    """Client for OpenRouter.

    Parameters
    ----------
    api_key : str, optional
        OpenRouter API key. Requests fail with :class:`AuthFailure` when
        it is missing.
    request_timeout : float, optional
        Timeout in seconds for generation requests.
    """

    api_key: Optional[str] = None
    request_timeout: Optional[float] = None
    referer: str = "http://localhost"
    title: str = "Commiat CLI"

    @property
    def name(self) -> str:
        return "openrouter"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    def _request(self, prompt: str, model: str) -> str:
        if not self.api_key:
            raise AuthFailure(
                "Could not obtain OpenRouter API key.", provider=self.name, request_url=OPENROUTER_API_URL
            )
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }
        data = post_json(
            self.name,
            OPENROUTER_API_URL,
            payload,
            headers=self._headers(),
            timeout=self.request_timeout,
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str):
            logger.error("Unexpected response structure from OpenRouter: %s", data)
            raise MalformedResponse(
                "Invalid OpenRouter API response structure.",
                provider=self.name,
                request_url=OPENROUTER_API_URL,
                status=200,
                response_data=data,
            )
        return content

    def list_models(self) -> List[Tuple[str, str]]:
        """Return ``(model_id, display_name)`` pairs from the OpenRouter catalogue.

        This is a best-effort call with a short timeout.
        """
        try:
            response = requests.get(OPENROUTER_MODELS_URL, timeout=AUXILIARY_TIMEOUT)
        except requests.RequestException as exc:
            raise NetworkFailure(str(exc), provider=self.name, request_url=OPENROUTER_MODELS_URL) from exc
        if response.status_code != 200:
            raise ServerFailure(
                f"openrouter returned status {response.status_code}",
                provider=self.name,
                request_url=OPENROUTER_MODELS_URL,
                status=response.status_code,
            )
        try:
            entries = response.json().get("data", [])
        except (ValueError, AttributeError) as exc:
            raise MalformedResponse(
                "Failed to parse OpenRouter model list", provider=self.name, request_url=OPENROUTER_MODELS_URL
            ) from exc
        models: List[Tuple[str, str]] = []
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, dict):
                continue
            model_id = entry.get("id")
            if not model_id:
                continue
            models.append((model_id, f"{entry.get('name') or model_id} - {model_id}"))
        return models
