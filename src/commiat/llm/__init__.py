"""
Language model integration for commiat.

This package contains the :class:`OllamaClient` and
:class:`OpenRouterClient` backends, the shared failure classes in
:mod:`commiat.llm.base`, the prompts in :mod:`commiat.llm.prompts`, and
the fallback-aware :class:`~commiat.llm.gateway.ProviderGateway`.
"""

from .base import (  # noqa: F401
    AuthFailure,
    MalformedResponse,
    ModelBackend,
    NetworkFailure,
    ProviderFailure,
    ServerFailure,
)
from .ollama_client import OllamaClient  # noqa: F401
from .openrouter_client import OpenRouterClient  # noqa: F401
