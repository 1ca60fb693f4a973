"""
Configuration loading for commiat.

Global provider settings come from ``~/.commiat/config`` and the
environment (:mod:`commiat.config.loader`); the optional per-project
message format comes from a ``.commiat`` file
(:mod:`commiat.config.format_config`).
"""

from .loader import ConfigError, ProviderConfig, load_provider_config  # noqa: F401
from .format_config import FormatConfig, load_format_config  # noqa: F401
