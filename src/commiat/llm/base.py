"""
Shared pieces of the language model backends.

This module defines the :class:`ModelBackend` interface implemented by
the Ollama and OpenRouter clients, the :class:`ProviderFailure`
hierarchy used to classify what went wrong, the HTTP helper that maps
``requests`` errors and status codes onto that hierarchy, and the
output cleanup applied to every generated text.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Timeout for best-effort calls that are not part of message generation.
AUXILIARY_TIMEOUT = 5.0


class ProviderFailure(Exception):
    """Base class for failures talking to a model provider.

    Attributes
    ----------
    provider : str
        Name of the backend that failed, ``"ollama"`` or ``"openrouter"``.
    request_url : str, optional
        The URL that was requested.
    status : int, optional
        HTTP status of the response, when one was received.
    response_data : Any, optional
        Decoded body (or raw text) of the error response.
    """

    def __init__(
        self,
        message: str,
        provider: str = "",
        request_url: Optional[str] = None,
        status: Optional[int] = None,
        response_data: Any = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.request_url = request_url
        self.status = status
        self.response_data = response_data


class NetworkFailure(ProviderFailure):
    """The request never produced an HTTP response (refused, timed out, ...)."""


class AuthFailure(ProviderFailure):
    """The provider rejected the credentials (401/403) or none were configured."""


class ServerFailure(ProviderFailure):
    """The provider answered with an error status other than 401/403."""


class MalformedResponse(ProviderFailure):
    """The provider answered successfully but the body could not be used."""


_THINKING_PATTERNS = [
    r"<think>.*?</think>",
    r"<thinking>.*?</thinking>",
    r"<thought>.*?</thought>",
    r"<reasoning>.*?</reasoning>",
]
_FENCE_OPEN = re.compile(r"^```[\w-]*\s*")
_FENCE_CLOSE = re.compile(r"```\s*$")


def strip_thinking_tags(text: str) -> str:
    """Remove reasoning blocks such as ``<think>...</think>`` from a response.

    >>> strip_thinking_tags("<think>reasoning...</think>Answer")
    'Answer'
    """
    result = text
    for pattern in _THINKING_PATTERNS:
        result = re.sub(pattern, "", result, flags=re.DOTALL | re.IGNORECASE)
    return result.strip()


def clean_model_output(text: str) -> str:
    """Normalize generated text the same way for every backend.

    Reasoning tags are removed, then the text is trimmed, a surrounding
    fenced code block (with an optional language tag) is stripped, one
    layer of enclosing quotes is removed and the result is trimmed
    again.

    >>> clean_model_output('```text\\n"feat: add login"\\n```')
    'feat: add login'
    """
    out = strip_thinking_tags(text or "")
    out = _FENCE_OPEN.sub("", out)
    out = _FENCE_CLOSE.sub("", out).strip()
    if out[:1] in ("'", '"'):
        out = out[1:]
    if out[-1:] in ("'", '"'):
        out = out[:-1]
    return out.strip()


def _response_data(response: Any) -> Any:
    try:
        return response.json()
    except ValueError:
        return getattr(response, "text", None)


def post_json(
    provider: str,
    url: str,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """POST ``payload`` as JSON and return the decoded response body.

    Raises
    ------
    NetworkFailure
        If no response was received.
    AuthFailure
        On HTTP 401 or 403.
    ServerFailure
        On any other non-2xx status.
    MalformedResponse
        If the body is not a JSON object.
    """
    logger.debug("Sending request to %s at %s (%d prompt chars)", provider, url, len(json.dumps(payload)))
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Failed to reach %s: %s", provider, exc)
        raise NetworkFailure(str(exc) or f"{provider} request failed", provider=provider, request_url=url) from exc

    status = response.status_code
    if not 200 <= status < 300:
        data = _response_data(response)
        logger.error("%s returned status %s: %s", provider, status, data)
        failure_cls = AuthFailure if status in (401, 403) else ServerFailure
        raise failure_cls(
            f"{provider} returned status {status}",
            provider=provider,
            request_url=url,
            status=status,
            response_data=data,
        )

    try:
        data = response.json()
    except ValueError as exc:
        logger.error("Failed to parse %s response: %s", provider, exc)
        raise MalformedResponse(
            f"Failed to parse {provider} response", provider=provider, request_url=url, status=status
        ) from exc
    if not isinstance(data, dict):
        raise MalformedResponse(
            f"Unexpected response structure from {provider}",
            provider=provider,
            request_url=url,
            status=status,
            response_data=data,
        )
    return data


class ModelBackend(ABC):
    """A text generation backend.

    Subclasses implement :meth:`_request`, which returns the raw text of
    the first completion; :meth:`complete` applies the shared cleanup.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier used in logs and errors."""

    @abstractmethod
    def _request(self, prompt: str, model: str) -> str:
        pass

    def complete(self, prompt: str, model: str) -> str:
        """Generate a completion for ``prompt`` using ``model``.

        Raises
        ------
        ProviderFailure
            One of its subclasses, depending on what went wrong.
        """
        return clean_model_output(self._request(prompt, model))
