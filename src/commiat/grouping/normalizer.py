"""
Reconciliation of model-proposed groups with the actual change set.

The model's grouping is advisory. :func:`normalize_groups` guarantees
that every changed file ends up in exactly one group:

* files outside the change set are dropped silently,
* a file claimed by several proposals stays with the first one
  (first-group-wins) and the later claims are reported as warnings,
* proposals left without files are skipped with a warning,
* files no proposal claimed are collected into a trailing
  ``(Unassigned)`` group.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from commiat.grouping.group_model import (
    UNASSIGNED_GROUP_DESCRIPTION,
    UNASSIGNED_GROUP_NAME,
    NormalizationResult,
    NormalizedGroup,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def dedupe_preserve_order(items: Iterable[str]) -> List[str]:
    """Return ``items`` without duplicates, keeping first occurrences."""
    seen = set()
    out: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _coerce_proposal(index: int, proposal: Any) -> Tuple[str, str, List[str]]:
    """Extract ``(name, description, files)`` from an untrusted proposal."""
    data: Mapping[str, Any] = proposal if isinstance(proposal, Mapping) else {}

    raw_name = data.get("group")
    if isinstance(raw_name, str) and raw_name.strip():
        name = raw_name.strip()
    else:
        name = f"Group {index + 1}"

    raw_description = data.get("description")
    description = raw_description.strip() if isinstance(raw_description, str) else ""

    raw_files = data.get("files")
    if not isinstance(raw_files, list):
        raw_files = []
    files = []
    for entry in raw_files:
        text = "" if entry is None else str(entry).strip()
        if text:
            files.append(text)
    return name, description, files


def _absorb_proposal(
    index: int,
    proposal: Any,
    change_set: AbstractSet[str],
    assigned: FrozenSet[str],
) -> Tuple[Optional[NormalizedGroup], FrozenSet[str], List[str]]:
    """Fold step: turn one proposal into a group given the files already assigned.

    Returns the group (or None when nothing is left), the updated assigned
    set and the warnings produced by this proposal.
    """
    name, description, files = _coerce_proposal(index, proposal)
    in_scope = [f for f in dedupe_preserve_order(files) if f in change_set]

    kept: List[str] = []
    dropped: List[str] = []
    claimed = set(assigned)
    for path in in_scope:
        if path in claimed:
            dropped.append(path)
            continue
        claimed.add(path)
        kept.append(path)

    warnings: List[str] = []
    if dropped:
        warnings.append(
            f'Group "{name}" dropped {len(dropped)} overlapping file(s) due to '
            f"first-group-wins: {', '.join(dropped)}"
        )
    if not kept:
        warnings.append(f'Group "{name}" has no remaining relevant files and will be skipped.')
        return None, frozenset(claimed), warnings
    return NormalizedGroup(name=name, description=description, files=kept), frozenset(claimed), warnings


def normalize_groups(proposals: Any, change_set: Sequence[str]) -> NormalizationResult:
    """Normalize model proposals against the authoritative change set.

    Parameters
    ----------
    proposals : Any
        The parsed model output, normally a list of mappings with
        ``group``, ``files`` and ``description`` keys. Anything that is
        not a list is treated as an empty list.
    change_set : Sequence[str]
        The files relevant to this invocation, in display order.

    Returns
    -------
    NormalizationResult
        Pairwise disjoint groups covering the whole change set, the
        collected warnings, and the files no proposal claimed.
    """
    ordered_changes = dedupe_preserve_order(str(f) for f in change_set)
    membership = frozenset(ordered_changes)
    items = proposals if isinstance(proposals, list) else []

    result = NormalizationResult()
    assigned: FrozenSet[str] = frozenset()
    for index, proposal in enumerate(items):
        group, assigned, warnings = _absorb_proposal(index, proposal, membership, assigned)
        result.warnings.extend(warnings)
        if group is not None:
            result.groups.append(group)

    result.unassigned_files = [f for f in ordered_changes if f not in assigned]
    if result.unassigned_files:
        result.groups.append(
            NormalizedGroup(
                name=UNASSIGNED_GROUP_NAME,
                description=UNASSIGNED_GROUP_DESCRIPTION,
                files=list(result.unassigned_files),
                is_synthetic=True,
            )
        )
    logger.debug(
        "Normalized %d proposal(s) into %d group(s); %d unassigned file(s)",
        len(items),
        len(result.groups),
        len(result.unassigned_files),
    )
    return result
