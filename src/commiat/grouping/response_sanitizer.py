"""
Cleanup of free-form model output before it is parsed as JSON.

Models are asked to answer with a bare JSON array but routinely wrap it
in a markdown fence or surround it with chatter. The helpers here only
perform syntactic cleanup; they never validate the content and never
raise.
"""

from __future__ import annotations

import re
from typing import Any, Optional


_FENCE_OPEN_JSON = re.compile(r"^```json\s*", re.IGNORECASE)
_FENCE_OPEN = re.compile(r"^```\s*")
_FENCE_CLOSE = re.compile(r"```\s*$")
# Greedy span so nested objects inside the array stay intact.
_JSON_ARRAY_OF_OBJECTS = re.compile(r"\[\s*\{[\s\S]*\}\s*\]")


def strip_code_fences(text: Any) -> str:
    """Remove a leading ```` ```json ```` (or bare ```` ``` ````) fence and a trailing fence."""
    if not isinstance(text, str):
        return ""
    out = text.strip()
    out = _FENCE_OPEN_JSON.sub("", out)
    out = _FENCE_OPEN.sub("", out)
    out = _FENCE_CLOSE.sub("", out)
    return out.strip()


def extract_first_json_array(text: Any) -> Optional[str]:
    """Return the first substring shaped like ``[ { ... } ]``, or None."""
    if not isinstance(text, str):
        return None
    match = _JSON_ARRAY_OF_OBJECTS.search(text)
    return match.group(0) if match else None


def sanitize_group_response(text: Any) -> str:
    """Turn raw model output into the best JSON candidate available.

    Parameters
    ----------
    text : Any
        Text returned by the model. Anything that is not a string is
        treated as empty.

    Returns
    -------
    str
        The extracted JSON array if one is found, otherwise the text with
        its code fences removed.

    Examples
    --------
    >>> sanitize_group_response('```json\\n[{"group": "a"}]\\n```')
    '[{"group": "a"}]'
    >>> sanitize_group_response('Sure! [{"group": "a"}] Thanks')
    '[{"group": "a"}]'
    """
    cleaned = strip_code_fences(text)
    return extract_first_json_array(cleaned) or cleaned
