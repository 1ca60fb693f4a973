"""
Version control system (VCS) integration.

commiat works on Git repositories only. :class:`GitClient` exposes the
operations the commit sequencer relies on: listing changed files,
reading diffs, staging, unstaging and committing.
"""

from .git_client import GitClient, GitError  # noqa: F401
