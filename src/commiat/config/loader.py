"""
Configuration loader for commiat.

Global settings live in ``~/.commiat/config``, a ``KEY=value`` file read
with :mod:`dotenv`. Every key can be overridden by an environment
variable of the same name. :func:`load_provider_config` resolves which
model backend to use and returns a :class:`ProviderConfig`.

If the configuration file cannot be read or holds invalid values, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values, set_key

from commiat.llm.ollama_client import DEFAULT_OLLAMA_BASE_URL, DEFAULT_OLLAMA_MODEL
from commiat.llm.openrouter_client import DEFAULT_OPENROUTER_MODEL


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_KEY_API_KEY = "COMMIAT_OPENROUTER_API_KEY"
CONFIG_KEY_OPENROUTER_MODEL = "COMMIAT_OPENROUTER_MODEL"
CONFIG_KEY_USE_OLLAMA = "COMMIAT_USE_OLLAMA"
CONFIG_KEY_OLLAMA_BASE_URL = "COMMIAT_OLLAMA_BASE_URL"
CONFIG_KEY_OLLAMA_MODEL = "COMMIAT_OLLAMA_MODEL"
CONFIG_KEY_OLLAMA_FALLBACK = "COMMIAT_OLLAMA_FALLBACK_TO_OPENROUTER"
CONFIG_KEY_DEFAULT_MULTI = "COMMIAT_DEFAULT_MULTI"
CONFIG_KEY_REQUEST_TIMEOUT = "COMMIAT_REQUEST_TIMEOUT"

PROVIDER_OLLAMA = "ollama"
PROVIDER_OPENROUTER = "openrouter"

_API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"


class ConfigError(Exception):
    """Raised when the commiat configuration is unreadable or invalid."""

    pass


@dataclass
class ProviderConfig:
    """Resolved model provider settings.

    Attributes
    ----------
    provider : str
        ``"ollama"`` or ``"openrouter"``; the primary backend.
    model : str
        Model identifier for the primary backend.
    base_url : str, optional
        Ollama server URL (only meaningful when Ollama is primary).
    fallback_enabled : bool
        Whether a failed Ollama request may be retried on OpenRouter.
    openrouter_model : str
        Model used whenever OpenRouter is called, as primary or fallback.
    api_key : str, optional
        OpenRouter API key, if configured.
    request_timeout : float, optional
        Timeout for generation requests. ``None`` keeps the HTTP client
        default.
    """

    provider: str
    model: str
    base_url: Optional[str] = None
    fallback_enabled: bool = False
    openrouter_model: str = DEFAULT_OPENROUTER_MODEL
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None

    @property
    def openrouter_configured(self) -> bool:
        return bool(self.api_key)


def _get_config_directory() -> Path:
    """Return the directory holding the global configuration, ``~/.commiat``."""
    return Path.home() / ".commiat"


def get_global_config_path() -> Path:
    return _get_config_directory() / "config"


def ensure_global_config_file() -> Path:
    """Create an empty global config file if none exists and return its path."""
    path = get_global_config_path()
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.info("Created empty global config file at %s", path)
    return path


def load_global_config() -> Dict[str, str]:
    """Read the global config file. A missing file yields an empty mapping."""
    path = get_global_config_path()
    if not path.exists():
        return {}
    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read global config file %s: %s", path, exc)
        raise ConfigError(f"Cannot read global config {path}: {exc}") from exc
    return {key: value for key, value in values.items() if value is not None}


def update_global_config(key: str, value: str) -> Path:
    """Persist ``key=value`` in the global config file."""
    path = ensure_global_config_file()
    set_key(str(path), key, value)
    logger.debug("Updated %s in %s", key, path)
    return path


def _setting(key: str, global_config: Mapping[str, str]) -> Optional[str]:
    """Return the environment value of ``key``, else the file value, else None."""
    env_value = os.environ.get(key)
    if env_value:
        return env_value
    return global_config.get(key) or None


def get_api_key(global_config: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the OpenRouter API key from the environment or the config file."""
    env_key = os.environ.get(CONFIG_KEY_API_KEY)
    if env_key and env_key != _API_KEY_PLACEHOLDER:
        return env_key
    config = load_global_config() if global_config is None else global_config
    return config.get(CONFIG_KEY_API_KEY) or None


def is_openrouter_configured() -> bool:
    return get_api_key() is not None


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in ("1", "true")


def _use_ollama(global_config: Mapping[str, str]) -> bool:
    env_value = os.environ.get(CONFIG_KEY_USE_OLLAMA)
    if env_value:
        return _is_true(env_value)
    return global_config.get(CONFIG_KEY_USE_OLLAMA) == "true"


def _request_timeout(global_config: Mapping[str, str]) -> Optional[float]:
    raw = _setting(CONFIG_KEY_REQUEST_TIMEOUT, global_config)
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"'{CONFIG_KEY_REQUEST_TIMEOUT}' must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"'{CONFIG_KEY_REQUEST_TIMEOUT}' must be positive")
    return timeout


def is_default_multi() -> bool:
    """Return True when multi-commit mode is configured as the default."""
    return _is_true(_setting(CONFIG_KEY_DEFAULT_MULTI, load_global_config()))


def load_provider_config() -> ProviderConfig:
    """Resolve the provider settings from the environment and the config file.

    Returns
    -------
    ProviderConfig
        Ollama settings when Ollama is enabled, otherwise OpenRouter
        settings (with fallback always disabled).

    Raises
    ------
    ConfigError
        If the config file cannot be read or a value is invalid.
    """
    global_config = load_global_config()
    openrouter_model = _setting(CONFIG_KEY_OPENROUTER_MODEL, global_config) or DEFAULT_OPENROUTER_MODEL
    api_key = get_api_key(global_config)
    timeout = _request_timeout(global_config)

    if _use_ollama(global_config):
        config = ProviderConfig(
            provider=PROVIDER_OLLAMA,
            model=_setting(CONFIG_KEY_OLLAMA_MODEL, global_config) or DEFAULT_OLLAMA_MODEL,
            base_url=_setting(CONFIG_KEY_OLLAMA_BASE_URL, global_config) or DEFAULT_OLLAMA_BASE_URL,
            fallback_enabled=_is_true(_setting(CONFIG_KEY_OLLAMA_FALLBACK, global_config)),
            openrouter_model=openrouter_model,
            api_key=api_key,
            request_timeout=timeout,
        )
    else:
        config = ProviderConfig(
            provider=PROVIDER_OPENROUTER,
            model=openrouter_model,
            openrouter_model=openrouter_model,
            api_key=api_key,
            request_timeout=timeout,
        )
    logger.debug(
        "Provider configuration: provider=%s model=%s fallback=%s",
        config.provider,
        config.model,
        config.fallback_enabled,
    )
    return config
