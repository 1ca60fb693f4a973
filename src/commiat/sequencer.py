"""
Group commit sequencer.

:class:`GroupCommitSequencer` drives multi-commit mode. It asks the
model to partition the change set, normalizes the answer, and then, one
group at a time and strictly in order:

1. isolates the group by unstaging everything and staging only its files,
2. asks the model for a commit message for the staged diff,
3. hands the message to the confirmation callback,
4. commits, or aborts the rest of the sequence on cancellation.

Commits made before a failure or a cancellation are kept. When the
grouping answer cannot be parsed, the sequencer commits the whole change
set at once instead (:meth:`GroupCommitSequencer.run_single`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from commiat.grouping.group_model import NormalizedGroup
from commiat.grouping.group_parser import MalformedGroupResponse, parse_group_proposals
from commiat.grouping.normalizer import normalize_groups
from commiat.llm.prompts import build_grouping_prompt


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@dataclass(frozen=True)
class CommitDecision:
    """The user's answer for one proposed commit message."""

    message: Optional[str] = None

    @classmethod
    def confirmed(cls, message: str) -> "CommitDecision":
        return cls(message=message)

    @classmethod
    def cancelled(cls) -> "CommitDecision":
        return cls(message=None)

    @property
    def is_cancelled(self) -> bool:
        return self.message is None


@dataclass
class MultiCommitOptions:
    """Options shared by the multi-commit and single-commit paths."""

    include_untracked: bool = False
    no_verify: bool = False
    prefix: Optional[str] = None
    affix: Optional[str] = None


@dataclass
class MultiCommitResult:
    """Outcome of one sequencer run.

    ``succeeded`` is False only when the user cancelled; errors are
    raised instead.
    """

    succeeded: bool
    committed_groups: int
    total_groups: int
    fell_back_to_single: bool = False
    warnings: List[str] = field(default_factory=list)


Confirm = Callable[[str, NormalizedGroup], CommitDecision]
PromptBuilder = Callable[[str], str]


class SequenceReporter:
    """Receives progress notifications from the sequencer.

    The default implementation only logs; the CLI subclasses it to
    print to the terminal.
    """

    def warning(self, message: str) -> None:
        logger.warning(message)

    def groups_planned(self, groups: Sequence[NormalizedGroup]) -> None:
        logger.info("Planned %d commit group(s)", len(groups))

    def group_started(self, index: int, total: int, group: NormalizedGroup) -> None:
        logger.info("Processing group %d/%d: %s", index, total, group.name)

    def group_skipped(self, group: NormalizedGroup) -> None:
        logger.info("Skipping group %s: none of its files are part of the current changes", group.name)

    def group_committed(self, group: NormalizedGroup, no_verify: bool) -> None:
        logger.info("Committed group %s", group.name)

    def cancelled(self, index: int, group: NormalizedGroup) -> None:
        logger.info("Group %d (%s) cancelled; aborting remaining groups", index, group.name)

    def fell_back_to_single(self, error: MalformedGroupResponse) -> None:
        logger.warning("Failed to parse grouping response, falling back to a single commit: %s", error)

    def finished(self, result: MultiCommitResult) -> None:
        logger.info(
            "Committed %d of %d group(s)", result.committed_groups, result.total_groups
        )


def apply_prefix_affix(message: str, prefix: Optional[str] = None, affix: Optional[str] = None) -> str:
    """Add ``prefix``/``affix`` to the first line of ``message``.

    A separating space is inserted unless the prefix already ends (or the
    affix already starts) with one.

    >>> apply_prefix_affix("feat: add login\\n\\nbody", prefix="[WIP]", affix="(#12)")
    '[WIP] feat: add login (#12)\\n\\nbody'
    """
    message = message.strip()
    if not prefix and not affix:
        return message
    lines = message.split("\n")
    first = lines[0]
    if prefix:
        first = f"{prefix}{'' if prefix.endswith(' ') else ' '}{first}"
    if affix:
        first = f"{first}{'' if affix.startswith(' ') else ' '}{affix}"
    lines[0] = first
    return "\n".join(lines)


class GroupCommitSequencer:
    """Materialize one commit per normalized group.

    Parameters
    ----------
    vcs : GitClient
        Version control collaborator.
    gateway : ProviderGateway
        Anything with a ``generate(prompt) -> str`` method.
    confirm : callable
        ``confirm(message, group) -> CommitDecision``.
    build_prompt : callable
        Turns a staged diff into the commit message prompt.
    reporter : SequenceReporter, optional
        Progress sink, defaults to logging only.
    """

    def __init__(
        self,
        vcs,
        gateway,
        confirm: Confirm,
        build_prompt: PromptBuilder,
        reporter: Optional[SequenceReporter] = None,
    ) -> None:
        self.vcs = vcs
        self.gateway = gateway
        self.confirm = confirm
        self.build_prompt = build_prompt
        self.reporter = reporter or SequenceReporter()

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan(self, change_set: Sequence[str], diff: str) -> Tuple[List[NormalizedGroup], List[str]]:
        """Ask the model for a grouping and normalize it.

        Raises
        ------
        MalformedGroupResponse
            If the model's answer is not valid JSON.
        """
        answer = self.gateway.generate(build_grouping_prompt(diff))
        proposals = parse_group_proposals(answer)
        result = normalize_groups(proposals, change_set)
        return result.groups, result.warnings

    # ------------------------------------------------------------------
    # Per-group steps
    # ------------------------------------------------------------------
    def _isolate(self, group: NormalizedGroup, change_set: Sequence[str]) -> List[str]:
        self.vcs.unstage_all()
        files = [f for f in group.files if f in change_set]
        if files:
            self.vcs.add(files)
        return files

    def _generate_message(self, options: MultiCommitOptions) -> str:
        diff = self.vcs.diff(staged=True)
        message = self.gateway.generate(self.build_prompt(diff))
        return apply_prefix_affix(message, options.prefix, options.affix)

    def _decide_and_commit(self, message: str, group: NormalizedGroup, options: MultiCommitOptions) -> bool:
        decision = self.confirm(message, group)
        if decision.is_cancelled:
            return False
        self.vcs.commit(decision.message, no_verify=options.no_verify)
        self.reporter.group_committed(group, options.no_verify)
        return True

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def run(self, options: MultiCommitOptions) -> MultiCommitResult:
        """Run multi-commit mode over the current changes.

        Raises
        ------
        GitError, ProviderFailure
            Propagated unchanged; commits already made are kept.
        """
        change_set = tuple(self.vcs.get_relevant_files(options.include_untracked))
        if not change_set:
            result = MultiCommitResult(succeeded=True, committed_groups=0, total_groups=0)
            self.reporter.finished(result)
            return result

        if options.include_untracked:
            untracked = self.vcs.list_untracked()
            if untracked:
                logger.debug("Staging %d untracked file(s) for analysis", len(untracked))
                self.vcs.add(untracked)
        diff = self.vcs.diff(staged=True)

        try:
            groups, warnings = self.plan(change_set, diff)
        except MalformedGroupResponse as exc:
            self.reporter.fell_back_to_single(exc)
            result = self._commit_once(options, change_set)
            result.fell_back_to_single = True
            return result

        for warning in warnings:
            self.reporter.warning(warning)
        self.reporter.groups_planned(groups)

        committed = 0
        total = len(groups)
        for index, group in enumerate(groups, start=1):
            self.reporter.group_started(index, total, group)
            if not self._isolate(group, change_set):
                self.reporter.group_skipped(group)
                continue
            message = self._generate_message(options)
            if not self._decide_and_commit(message, group, options):
                self.reporter.cancelled(index, group)
                return MultiCommitResult(
                    succeeded=False, committed_groups=committed, total_groups=total, warnings=warnings
                )
            committed += 1

        result = MultiCommitResult(
            succeeded=True, committed_groups=committed, total_groups=total, warnings=warnings
        )
        self.reporter.finished(result)
        return result

    def run_single(self, options: MultiCommitOptions) -> MultiCommitResult:
        """Commit everything currently staged as a single commit."""
        change_set = tuple(self.vcs.diff_summary(staged=True))
        return self._commit_once(options, change_set)

    def _commit_once(self, options: MultiCommitOptions, change_set: Sequence[str]) -> MultiCommitResult:
        group = NormalizedGroup(name="All changes", description="", files=list(change_set))
        message = self._generate_message(options)
        if not self._decide_and_commit(message, group, options):
            self.reporter.cancelled(1, group)
            return MultiCommitResult(succeeded=False, committed_groups=0, total_groups=1)
        result = MultiCommitResult(succeeded=True, committed_groups=1, total_groups=1)
        self.reporter.finished(result)
        return result


def run_multi_commit(
    options: MultiCommitOptions,
    vcs,
    gateway,
    confirm: Confirm,
    build_prompt: PromptBuilder,
    reporter: Optional[SequenceReporter] = None,
) -> MultiCommitResult:
    """Convenience wrapper around :meth:`GroupCommitSequencer.run`."""
    sequencer = GroupCommitSequencer(vcs, gateway, confirm, build_prompt, reporter=reporter)
    return sequencer.run(options)
