"""
Multi-commit grouping.

This package turns the language model's free-form grouping answer into
validated commit groups. See :mod:`commiat.grouping.response_sanitizer`,
:mod:`commiat.grouping.group_parser` and
:mod:`commiat.grouping.normalizer` for details.
"""

from .group_model import NormalizationResult, NormalizedGroup  # noqa: F401
from .group_parser import MalformedGroupResponse, parse_group_proposals  # noqa: F401
from .normalizer import normalize_groups  # noqa: F401
from .response_sanitizer import sanitize_group_response  # noqa: F401
