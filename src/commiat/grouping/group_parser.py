"""
Parsing of the model's grouping answer into loosely typed proposals.

The proposals returned here are untrusted: they are plain JSON values
and only become :class:`~commiat.grouping.group_model.NormalizedGroup`
objects after :func:`commiat.grouping.normalizer.normalize_groups`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from commiat.grouping.response_sanitizer import sanitize_group_response


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class MalformedGroupResponse(Exception):
    """Raised when the model's grouping answer is not valid JSON.

    The raw model text is kept on the exception so callers can show it
    before falling back to a single commit.
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


def parse_group_proposals(text: Any) -> List[Any]:
    """Parse a model response into a list of group proposals.

    Parameters
    ----------
    text : Any
        Raw model output. It is sanitized before parsing.

    Returns
    -------
    List[Any]
        The parsed array, or a single parsed value wrapped in a list.

    Raises
    ------
    MalformedGroupResponse
        If no valid JSON can be recovered from the text.
    """
    raw = "" if text is None else str(text)
    candidate = sanitize_group_response(raw)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.debug("Could not parse grouping response: %s", exc)
        raise MalformedGroupResponse(
            f"Model response is not valid JSON: {exc}", raw_text=raw
        ) from exc
    if isinstance(parsed, list):
        return parsed
    return [parsed]
