"""
Provider gateway: one call site for text generation.

:class:`ProviderGateway` sends a prompt to the primary backend chosen by
the :class:`~commiat.config.loader.ProviderConfig` and, when Ollama is
primary, fallback is enabled and an OpenRouter key exists, retries a
failed request once on OpenRouter. Authentication failures never fall
back since a second provider cannot fix a credentials problem on the
first.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from commiat.config.loader import PROVIDER_OLLAMA, ProviderConfig
from commiat.error_log import ErrorLog
from commiat.llm.base import AuthFailure, ModelBackend, NetworkFailure, ProviderFailure
from commiat.llm.ollama_client import DEFAULT_OLLAMA_BASE_URL, OllamaClient
from commiat.llm.openrouter_client import OpenRouterClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def should_fall_back(failure: ProviderFailure) -> bool:
    """Return True if ``failure`` is worth retrying on the secondary backend.

    Network failures and error statuses of 400 and above qualify, except
    401 and 403.
    """
    if isinstance(failure, AuthFailure):
        return False
    if isinstance(failure, NetworkFailure):
        return True
    status = failure.status
    return status is not None and status >= 400 and status not in (401, 403)


class ProviderGateway:
    """Generate text through the configured backend with one-hop fallback.

    Parameters
    ----------
    config : ProviderConfig
        Resolved provider settings.
    primary : ModelBackend
        Backend matching ``config.provider``.
    secondary : ModelBackend, optional
        OpenRouter backend used for fallback. Only consulted when the
        primary is Ollama.
    error_log : ErrorLog, optional
        Receives the primary failure before a fallback attempt.
    on_fallback : callable, optional
        Called with the primary failure just before falling back, so the
        CLI can tell the user.
    """

    def __init__(
        self,
        config: ProviderConfig,
        primary: ModelBackend,
        secondary: Optional[ModelBackend] = None,
        error_log: Optional[ErrorLog] = None,
        on_fallback: Optional[Callable[[ProviderFailure], None]] = None,
    ) -> None:
        self.config = config
        self.primary = primary
        self.secondary = secondary
        self.error_log = error_log
        self.on_fallback = on_fallback

    def can_fall_back(self) -> bool:
        return (
            self.config.provider == PROVIDER_OLLAMA
            and self.config.fallback_enabled
            and self.config.openrouter_configured
            and self.secondary is not None
        )

    def generate(self, prompt: str) -> str:
        """Generate a completion for ``prompt``.

        Raises
        ------
        ProviderFailure
            The primary's failure when no fallback applies, otherwise the
            secondary's failure.
        """
        try:
            return self.primary.complete(prompt, self.config.model)
        except ProviderFailure as failure:
            if not (self.can_fall_back() and should_fall_back(failure)):
                raise
            logger.warning(
                "Ollama request failed (status: %s, message: %s); falling back to OpenRouter",
                failure.status or "N/A",
                failure,
            )
            if self.error_log is not None:
                self.error_log.record(failure)
            if self.on_fallback is not None:
                self.on_fallback(failure)
            return self.secondary.complete(prompt, self.config.openrouter_model)


def build_gateway(
    config: ProviderConfig,
    error_log: Optional[ErrorLog] = None,
    on_fallback: Optional[Callable[[ProviderFailure], None]] = None,
) -> ProviderGateway:
    """Create the backends described by ``config`` and wrap them in a gateway."""
    openrouter = OpenRouterClient(api_key=config.api_key, request_timeout=config.request_timeout)
    if config.provider == PROVIDER_OLLAMA:
        primary: ModelBackend = OllamaClient(
            base_url=config.base_url or DEFAULT_OLLAMA_BASE_URL,
            request_timeout=config.request_timeout,
        )
        return ProviderGateway(config, primary, openrouter, error_log=error_log, on_fallback=on_fallback)
    return ProviderGateway(config, openrouter, None, error_log=error_log, on_fallback=on_fallback)
