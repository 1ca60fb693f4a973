"""
Placeholders in the commit message format.

A format such as ``"{type}({scope}): {msg} [{gitBranch}]"`` contains
three kinds of variables: ``msg`` and ``type``, which the model fills
from the diff; system variables such as ``gitBranch``, whose values are
read from the repository; and custom variables, which the user describes
once in the project's ``.commiat`` file.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List

from commiat.config.format_config import FormatConfig
from commiat.vcs.git_client import GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


VARIABLE_PATTERN = re.compile(r"\{([a-zA-Z0-9_]+)\}")
MODEL_VARIABLES = ("type", "msg")


def _git_branch(vcs) -> str:
    return vcs.get_current_branch()


SYSTEM_VARIABLES: Dict[str, Callable] = {
    "gitBranch": _git_branch,
}


def detect_variables(fmt: str) -> List[str]:
    """Return the unique placeholder names in ``fmt``, in order, without ``msg``.

    >>> detect_variables("{type}({scope}): {msg}")
    ['type', 'scope']
    """
    found: List[str] = []
    for name in VARIABLE_PATTERN.findall(fmt):
        if name != "msg" and name not in found:
            found.append(name)
    return found


def get_system_variable_values(vcs) -> Dict[str, str]:
    """Resolve every system variable against ``vcs``.

    A variable that cannot be resolved gets an empty value and a warning
    in the log.
    """
    values: Dict[str, str] = {}
    for name, resolver in SYSTEM_VARIABLES.items():
        try:
            values[name] = resolver(vcs)
        except GitError as exc:
            logger.warning("Could not retrieve value for system variable {%s}: %s", name, exc)
            values[name] = ""
    return values


def missing_variable_descriptions(variables: List[str], config: FormatConfig) -> List[str]:
    """Return the custom variables that have no description in ``config``."""
    return [
        name
        for name in variables
        if name not in SYSTEM_VARIABLES
        and name not in MODEL_VARIABLES
        and not config.variables.get(name)
    ]
