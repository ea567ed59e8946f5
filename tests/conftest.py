"""Test configuration and fixtures."""

import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Generator, Optional

import pytest
from git import Actor, Repo

from branchsweep.git import GitError


class FakeSource:
    """In-memory stand-in for GitRepo that records every call."""

    def __init__(self, output: str = "", fail: Iterable[str] = (), list_error: Optional[str] = None) -> None:
        self.output = output
        self.fail = set(fail)
        self.list_error = list_error
        self.targets: list[str] = []
        self.attempted: list[str] = []

    def list_merged(self, target: str) -> str:
        self.targets.append(target)
        if self.list_error:
            raise GitError(self.list_error)
        return self.output

    def delete_branch(self, name: str) -> None:
        self.attempted.append(name)
        if name in self.fail:
            raise GitError(f"error: the branch '{name}' is not fully merged")


class FixedSelector:
    """Checklist double that always confirms the same indices."""

    def __init__(self, indices: Sequence[int]) -> None:
        self.indices = list(indices)
        self.calls: list[tuple[list[str], list[bool]]] = []

    def __call__(self, names: Sequence[str], defaults: Sequence[bool]) -> list[int]:
        self.calls.append((list(names), list(defaults)))
        return list(self.indices)


@pytest.fixture
def make_source() -> Callable[..., FakeSource]:
    """Build FakeSource instances."""
    return FakeSource


@pytest.fixture
def make_selector() -> Callable[[Sequence[int]], FixedSelector]:
    """Build FixedSelector instances."""
    return FixedSelector


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with merged and unmerged branches.

    Layout:
        main                 initial commit plus two merges
        feature/merged       merged into main
        feature/also-merged  merged into main
        feature/unmerged     one commit main does not have
        feature/current      checked out, at the tip of main
    """
    local_path = tmp_path / "local"
    local_path.mkdir()

    local_repo = Repo.init(local_path)

    # Set up git config
    author = Actor("Test User", "test@example.com")
    with local_repo.config_writer() as config:
        config.set_value("user", "name", author.name)
        config.set_value("user", "email", author.email)
        config.set_value("commit", "gpgsign", "false")

    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author, committer=author)

    # Whatever init.defaultBranch says, call it main
    if local_repo.active_branch.name != "main":
        local_repo.active_branch.rename("main")
    main_branch = local_repo.heads.main

    def create_branch(name: str, merge: bool = False) -> None:
        """Create a branch with one commit, optionally merged back into main."""
        main_branch.checkout()
        branch = local_repo.create_head(name)
        branch.checkout()

        file_name = name.replace("/", "_") + ".txt"
        (local_path / file_name).write_text(f"{name} content")
        local_repo.index.add([file_name])
        local_repo.index.commit(f"Add {name}", author=author, committer=author)

        if merge:
            main_branch.checkout()
            local_repo.git.merge(name, "--no-ff", "-m", f"Merge {name}")

    create_branch("feature/merged", merge=True)
    create_branch("feature/also-merged", merge=True)
    create_branch("feature/unmerged")

    main_branch.checkout()
    local_repo.create_head("feature/current").checkout()

    yield local_path

    # Cleanup is handled by pytest's tmp_path fixture


@pytest.fixture
def undecodable_branch(test_env: Path) -> bytes:
    """Add a merged branch whose name is not valid UTF-8."""
    name = b"bad-\xff-name"
    subprocess.run([b"git", b"branch", name, b"main"], cwd=test_env, check=True)
    return name
