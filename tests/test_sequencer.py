"""Tests for the group commit sequencer using an in-memory repository."""

import json
import unittest
from unittest.mock import patch

from commiat.grouping.group_model import NormalizedGroup
from commiat.llm.base import ServerFailure
from commiat.sequencer import (
    CommitDecision,
    GroupCommitSequencer,
    MultiCommitOptions,
    SequenceReporter,
    apply_prefix_affix,
    run_multi_commit,
)
from commiat.vcs.git_client import GitError


class FakeVcs:
    """Tracks the index as a set of staged paths and records every call."""

    def __init__(self, staged=(), untracked=()):
        self.staged = list(staged)
        self.untracked = list(untracked)
        self.commits = []
        self.calls = []
        self.fail_commit_at = None

    def get_relevant_files(self, include_untracked=False):
        files = list(self.staged)
        if include_untracked:
            files += [f for f in self.untracked if f not in files]
        return files

    def list_untracked(self):
        return list(self.untracked)

    def diff_summary(self, staged=True):
        return list(self.staged)

    def diff(self, staged=True):
        return "DIFF:" + ",".join(self.staged)

    def add(self, paths):
        self.calls.append(("add", list(paths)))
        for path in paths:
            if path not in self.staged:
                self.staged.append(path)

    def unstage_all(self):
        self.calls.append(("unstage_all",))
        self.staged = []

    def commit(self, message, no_verify=False):
        if self.fail_commit_at is not None and len(self.commits) == self.fail_commit_at:
            raise GitError("hook rejected commit")
        self.calls.append(("commit", message, no_verify))
        self.commits.append((message, list(self.staged)))


class FakeGateway:
    """Returns the grouping answer first, then numbered commit messages."""

    def __init__(self, grouping_answer, messages=None):
        self.grouping_answer = grouping_answer
        self.messages = list(messages or [])
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if prompt.startswith("GROUP"):
            if isinstance(self.grouping_answer, Exception):
                raise self.grouping_answer
            return self.grouping_answer
        if self.messages:
            return self.messages.pop(0)
        return f"feat: commit {len(self.prompts)}"


class RecordingReporter(SequenceReporter):
    def __init__(self):
        self.events = []

    def warning(self, message):
        self.events.append(("warning", message))

    def group_skipped(self, group):
        self.events.append(("skipped", group.name))

    def cancelled(self, index, group):
        self.events.append(("cancelled", index, group.name))

    def fell_back_to_single(self, error):
        self.events.append(("fallback", error.raw_text))


def _commit_prompt(diff):
    return f"COMMIT {diff}"


def _accept_all(message, group):
    return CommitDecision.confirmed(message)


def _grouping(*groups):
    return json.dumps([{"group": name, "files": files, "description": ""} for name, files in groups])


class GroupingPromptTagMixin:
    def setUp(self) -> None:
        patcher = patch("commiat.sequencer.build_grouping_prompt", lambda diff: f"GROUP {diff}")
        patcher.start()
        self.addCleanup(patcher.stop)


class TestMultiCommitRun(GroupingPromptTagMixin, unittest.TestCase):
    def test_one_commit_per_group_in_order(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py", "README.md"])
        gateway = FakeGateway(
            _grouping(("feature", ["a.py", "b.py"]), ("docs", ["README.md"])),
            ["feat: add a and b", "docs: update readme"],
        )
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())

        self.assertTrue(result.succeeded)
        self.assertEqual(result.committed_groups, 2)
        self.assertEqual(result.total_groups, 2)
        self.assertEqual(
            vcs.commits,
            [("feat: add a and b", ["a.py", "b.py"]), ("docs: update readme", ["README.md"])],
        )
        self.assertEqual(gateway.prompts[1], "COMMIT DIFF:a.py,b.py")
        self.assertEqual(gateway.prompts[2], "COMMIT DIFF:README.md")

    def test_unassigned_files_get_their_own_commit(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py", "c.py"])
        gateway = FakeGateway(_grouping(("feature", ["a.py", "ghost.py"])))
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())

        self.assertEqual(result.committed_groups, 2)
        self.assertEqual([files for _, files in vcs.commits], [["a.py"], ["b.py", "c.py"]])

    def test_normalization_warnings_are_reported(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py", "b.py"]), ("two", ["b.py"])))
        reporter = RecordingReporter()
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt, reporter).run(
            MultiCommitOptions()
        )

        warnings = [e[1] for e in reporter.events if e[0] == "warning"]
        self.assertEqual(len(warnings), 2)
        self.assertEqual(result.warnings, warnings)
        self.assertEqual(result.committed_groups, 1)

    def test_cancel_aborts_remaining_groups(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py", "c.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py"]), ("two", ["b.py"]), ("three", ["c.py"])))
        answers = iter([CommitDecision.confirmed("feat: one"), CommitDecision.cancelled()])
        reporter = RecordingReporter()
        result = GroupCommitSequencer(
            vcs, gateway, lambda message, group: next(answers), _commit_prompt, reporter
        ).run(MultiCommitOptions())

        self.assertFalse(result.succeeded)
        self.assertEqual(result.committed_groups, 1)
        self.assertEqual(result.total_groups, 3)
        self.assertEqual(vcs.commits, [("feat: one", ["a.py"])])
        self.assertIn(("cancelled", 2, "two"), reporter.events)
        # The third group is never isolated or generated.
        self.assertEqual(len(gateway.prompts), 3)

    def test_edited_message_is_committed(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py"])), ["feat: draft"])
        confirm = lambda message, group: CommitDecision.confirmed("feat: edited by hand")
        GroupCommitSequencer(vcs, gateway, confirm, _commit_prompt).run(MultiCommitOptions())
        self.assertEqual(vcs.commits[0][0], "feat: edited by hand")

    def test_no_verify_and_prefix_affix(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py"])), ["  feat: add a\n\nbody  "])
        options = MultiCommitOptions(no_verify=True, prefix="[WIP]", affix="(#7)")
        GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(options)

        self.assertIn(("commit", "[WIP] feat: add a (#7)\n\nbody", True), vcs.calls)

    def test_untracked_files_are_staged_before_grouping(self) -> None:
        vcs = FakeVcs(staged=["a.py"], untracked=["new.txt"])
        gateway = FakeGateway(_grouping(("one", ["a.py"]), ("two", ["new.txt"])))
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(
            MultiCommitOptions(include_untracked=True)
        )

        self.assertEqual(gateway.prompts[0], "GROUP DIFF:a.py,new.txt")
        self.assertEqual(result.committed_groups, 2)
        self.assertEqual(vcs.commits[1][1], ["new.txt"])

    def test_untracked_ignored_without_option(self) -> None:
        vcs = FakeVcs(staged=["a.py"], untracked=["new.txt"])
        gateway = FakeGateway(_grouping(("one", ["a.py", "new.txt"])))
        GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())
        self.assertEqual(vcs.commits[0][1], ["a.py"])

    def test_empty_change_set_does_nothing(self) -> None:
        vcs = FakeVcs()
        gateway = FakeGateway("unused")
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())

        self.assertTrue(result.succeeded)
        self.assertEqual((result.committed_groups, result.total_groups), (0, 0))
        self.assertEqual(gateway.prompts, [])

    def test_malformed_grouping_falls_back_to_single_commit(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py"])
        gateway = FakeGateway("Sorry, I cannot do that.", ["chore: everything"])
        reporter = RecordingReporter()
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt, reporter).run(
            MultiCommitOptions()
        )

        self.assertTrue(result.succeeded)
        self.assertTrue(result.fell_back_to_single)
        self.assertEqual(vcs.commits, [("chore: everything", ["a.py", "b.py"])])
        self.assertIn(("fallback", "Sorry, I cannot do that."), reporter.events)

    def test_provider_failure_during_grouping_propagates(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway(ServerFailure("boom", status=500))
        with self.assertRaises(ServerFailure):
            GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())
        self.assertEqual(vcs.commits, [])

    def test_git_failure_keeps_earlier_commits(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py"])
        vcs.fail_commit_at = 1
        gateway = FakeGateway(_grouping(("one", ["a.py"]), ("two", ["b.py"])))
        with self.assertRaises(GitError):
            GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run(MultiCommitOptions())
        self.assertEqual(len(vcs.commits), 1)

    def test_group_left_empty_at_isolation_is_skipped(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py"])))
        reporter = RecordingReporter()
        sequencer = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt, reporter)
        sequencer.plan = lambda change_set, diff: (
            [NormalizedGroup("stale", "", ["gone.py"]), NormalizedGroup("one", "", ["a.py"])],
            [],
        )
        result = sequencer.run(MultiCommitOptions())

        self.assertIn(("skipped", "stale"), reporter.events)
        self.assertEqual(result.committed_groups, 1)
        self.assertEqual(result.total_groups, 2)

    def test_run_multi_commit_wrapper(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway(_grouping(("one", ["a.py"])))
        result = run_multi_commit(MultiCommitOptions(), vcs, gateway, _accept_all, _commit_prompt)
        self.assertEqual(result.committed_groups, 1)


class TestRunSingle(unittest.TestCase):
    def test_single_commit(self) -> None:
        vcs = FakeVcs(staged=["a.py", "b.py"])
        gateway = FakeGateway("unused", ["fix: both"])
        result = GroupCommitSequencer(vcs, gateway, _accept_all, _commit_prompt).run_single(
            MultiCommitOptions(no_verify=True)
        )

        self.assertTrue(result.succeeded)
        self.assertEqual(vcs.calls, [("commit", "fix: both", True)])
        self.assertEqual(gateway.prompts, ["COMMIT DIFF:a.py,b.py"])

    def test_single_commit_cancelled(self) -> None:
        vcs = FakeVcs(staged=["a.py"])
        gateway = FakeGateway("unused")
        result = GroupCommitSequencer(
            vcs, gateway, lambda message, group: CommitDecision.cancelled(), _commit_prompt
        ).run_single(MultiCommitOptions())

        self.assertFalse(result.succeeded)
        self.assertEqual(vcs.commits, [])

    def test_confirm_sees_whole_change_set(self) -> None:
        seen = []

        def confirm(message, group):
            seen.append(group)
            return CommitDecision.confirmed(message)

        vcs = FakeVcs(staged=["a.py", "b.py"])
        GroupCommitSequencer(vcs, FakeGateway("unused"), confirm, _commit_prompt).run_single(MultiCommitOptions())
        self.assertEqual(seen[0].name, "All changes")
        self.assertEqual(seen[0].files, ["a.py", "b.py"])


class TestApplyPrefixAffix(unittest.TestCase):
    def test_no_decoration(self) -> None:
        self.assertEqual(apply_prefix_affix("  feat: x  "), "feat: x")

    def test_existing_spaces_are_respected(self) -> None:
        self.assertEqual(apply_prefix_affix("feat: x", prefix="WIP: ", affix=" !"), "WIP: feat: x !")

    def test_only_first_line_changes(self) -> None:
        self.assertEqual(apply_prefix_affix("a\nb", affix="[skip ci]"), "a [skip ci]\nb")


class TestCommitDecision(unittest.TestCase):
    def test_states(self) -> None:
        self.assertTrue(CommitDecision.cancelled().is_cancelled)
        self.assertFalse(CommitDecision.confirmed("m").is_cancelled)


if __name__ == "__main__":
    unittest.main()
