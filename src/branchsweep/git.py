"""Git repository operations."""

import logging
import os
from pathlib import Path
from typing import Protocol

# Let a missing git executable surface as GitCommandNotFound at call time
# instead of an ImportError.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from git import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError, Repo  # noqa: E402

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git operation error."""


class BranchSource(Protocol):
    """The two git operations a sweep needs."""

    def list_merged(self, target: str) -> str:
        """Return raw `git branch --merged` output for target."""
        ...

    def delete_branch(self, name: str) -> None:
        """Safely delete a local branch, raising GitError on refusal."""
        ...


def _describe(err: GitCommandError | GitCommandNotFound) -> str:
    """Pick the most useful line of detail out of a git failure."""
    stderr = err.stderr.strip() if isinstance(err.stderr, str) else ""
    if stderr.startswith("stderr: "):
        stderr = stderr[len("stderr: ") :].strip().strip("'").strip()
    return stderr or str(err)


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Open the repository containing path."""
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (GitCommandError, GitCommandNotFound, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err
        logger.debug("Opened repository at %s", self.repo.working_dir)

    def list_merged(self, target: str) -> str:
        """List branches merged into target.

        Returns the untouched output of ``git branch --merged``: one name per
        line, indented, with the checked-out branch marked by ``*``.

        Raises:
            GitError: If git is missing or the target cannot be resolved.
            UnicodeDecodeError: If a branch name is not valid UTF-8.
        """
        logger.debug("Listing branches merged into %s", target)
        try:
            raw = self.repo.git.branch("--no-color", "--merged", target, stdout_as_string=False)
        except (GitCommandError, GitCommandNotFound) as err:
            logger.debug("git branch --merged failed: %s", err)
            raise GitError(_describe(err)) from err
        # Strict: every name is handed back to git unchanged
        return raw.decode("utf-8")

    def delete_branch(self, name: str) -> None:
        """Delete a local branch with ``-d`` so git checks merge status first.

        Raises:
            GitError: If git refuses (not fully merged, missing branch).
        """
        logger.debug("Deleting branch %s", name)
        try:
            self.repo.git.branch("-d", "--", name)
        except (GitCommandError, GitCommandNotFound) as err:
            logger.debug("git branch -d %s failed: %s", name, err)
            raise GitError(_describe(err)) from err
