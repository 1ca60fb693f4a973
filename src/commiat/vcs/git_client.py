"""
Git client implementation for commiat.

This module wraps the Git operations the commit assistant needs: listing
staged and untracked files, reading diffs, staging and unstaging paths,
and committing. All subprocess calls go through :meth:`GitClient._run`
so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


def _split_paths(output: str) -> List[str]:
    # Output of a "-z" listing: NUL-terminated, unquoted, whitespace kept.
    return [path for path in output.split("\0") if path]


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Return the closest directory at or above ``start`` holding ``.git``."""
        here = start.resolve()
        for candidate in (here, *here.parents):
            if (candidate / ".git").exists():
                return candidate
        return None

    # ------------------------------------------------------------------
    # Command runner
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run ``git <args>`` inside :attr:`repo_root` and capture its output.

        Raises
        ------
        GitError
            When ``git`` is missing, or when it exits non-zero and
            ``check`` is set. The message is git's stderr (or stdout).
        """
        command = ["git", *args]
        logger.debug("git %s (cwd=%s)", " ".join(args), self.repo_root)
        try:
            result = subprocess.run(
                command,
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Failed to execute git: %s", e)
            raise GitError(f"Failed to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "git %s exited with %d\nstdout: %s\nstderr: %s",
                " ".join(args),
                result.returncode,
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Diffs and file lists
    # ------------------------------------------------------------------
    def diff_summary(self, staged: bool = True) -> List[str]:
        """Return the paths touched by the staged (or unstaged) changes.

        Renames are reported as a deletion plus an addition, so both the
        old and the new path appear in the list.
        """
        args = ["diff", "--name-only", "--no-renames", "-z"]
        if staged:
            args.append("--staged")
        return _split_paths(self._run(args).stdout)

    def diff(self, staged: bool = True) -> str:
        """Return the unified diff of the staged (or unstaged) changes."""
        args = ["diff"]
        if staged:
            args.append("--staged")
        return self._run(args).stdout

    def list_untracked(self) -> List[str]:
        """Return untracked files that are not ignored."""
        result = self._run(["ls-files", "-z", "--others", "--exclude-standard"])
        return _split_paths(result.stdout)

    def get_relevant_files(self, include_untracked: bool = False) -> List[str]:
        """Return the staged files, optionally followed by untracked files.

        The result has no duplicates and keeps Git's ordering.
        """
        files = self.diff_summary(staged=True)
        if include_untracked:
            for path in self.list_untracked():
                if path not in files:
                    files.append(path)
        return files

    def get_current_branch(self) -> str:
        """Get the name of the current branch.

        Raises
        ------
        GitError
            If unable to determine the current branch.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"], check=True)
        return result.stdout.strip()

    # ------------------------------------------------------------------
    # Staging and committing
    # ------------------------------------------------------------------
    def add(self, paths: Sequence[str]) -> None:
        """Stage the given paths. Deleted files are staged as deletions."""
        if not paths:
            return
        self._run(["add", "--"] + list(paths))

    def add_all(self) -> None:
        """Stage every change in the working tree (``git add .``)."""
        self._run(["add", "."])

    def reset(self, paths: Sequence[str]) -> None:
        """Unstage the given paths, leaving the working tree untouched."""
        if not paths:
            return
        self._run(["reset", "--"] + list(paths))

    def unstage_all(self) -> None:
        """Reset the whole index to ``HEAD``, keeping the working tree.

        On a branch without commits the index is emptied instead.
        """
        if self._run(["rev-parse", "--verify", "-q", "HEAD"], check=False).returncode == 0:
            self._run(["reset", "-q"])
        else:
            self._run(["rm", "--cached", "-r", "-q", "--ignore-unmatch", "--", "."])

    def commit(self, message: str, no_verify: bool = False) -> None:
        """Create a commit with the given message.

        Multi-line commit messages are supported. With ``no_verify`` the
        pre-commit and commit-msg hooks are skipped.
        """
        args = ["commit", "-m", message]
        if no_verify:
            args.append("--no-verify")
        self._run(args, check=True)
