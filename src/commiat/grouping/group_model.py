"""
Data models for multi-commit grouping.

A :class:`NormalizedGroup` is a subset of the changed files that should
become a single commit. The :class:`NormalizationResult` bundles the
groups produced by one normalization run together with the warnings
collected along the way and the files no proposal claimed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


UNASSIGNED_GROUP_NAME = "(Unassigned)"
UNASSIGNED_GROUP_DESCRIPTION = "Files not assigned to any group by the AI."


@dataclass
class NormalizedGroup:
    """Representation of a validated commit group.

    Attributes
    ----------
    name : str
        Display name of the group, e.g. ``"frontend UI enhancements"``.
    description : str
        Short description of the changes, possibly empty.
    files : List[str]
        Non-empty, duplicate-free list of files, all part of the change set.
    is_synthetic : bool
        True only for the catch-all group holding files no proposal claimed.
    """

    name: str
    description: str
    files: List[str]
    is_synthetic: bool = False


@dataclass
class NormalizationResult:
    """Outcome of reconciling model proposals against the change set."""

    groups: List[NormalizedGroup] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    unassigned_files: List[str] = field(default_factory=list)
