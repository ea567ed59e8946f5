"""Find merged branches, let the user pick, delete the picks."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.markup import escape

from branchsweep.git import BranchSource, GitError

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

# (names, defaults) -> indices left checked
Selector = Callable[[Sequence[str], Sequence[bool]], list[int]]


class SweepOutcome(Enum):
    """How a sweep ended."""

    ERROR = "error"
    CLEAN = "clean"
    CANCELLED = "cancelled"
    DRY_RUN = "dry-run"
    DONE = "done"


@dataclass
class SweepResult:
    """What a sweep found, selected and deleted."""

    outcome: SweepOutcome
    candidates: list[str] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def filter_merged(output: str, target: str) -> list[str]:
    """Turn ``git branch --merged`` output into deletion candidates.

    The checked-out branch and the target itself are dropped. Everything
    else is kept in git's order, duplicates included.
    """
    candidates = []
    for line in output.splitlines():
        name = line.strip()
        if not name:
            continue
        # Current branch
        if name.startswith("*"):
            continue
        if name == target:
            continue
        candidates.append(name)
    return candidates


def delete_branches(
    source: BranchSource,
    names: Sequence[str],
    dry_run: bool = False,
    out: Optional[Console] = None,
    err: Optional[Console] = None,
) -> SweepResult:
    """Delete each branch in turn; a failure never stops the rest."""
    out = out or console
    err = err or err_console

    if dry_run:
        for name in names:
            out.print(f"[yellow]\\[Dry-Run] Would delete:[/yellow] {escape(name)}")
        return SweepResult(SweepOutcome.DRY_RUN, selected=list(names))

    result = SweepResult(SweepOutcome.DONE, selected=list(names))
    for name in names:
        try:
            source.delete_branch(name)
        except GitError as git_err:
            logger.debug("Could not delete %s: %s", name, git_err)
            err.print(f"[red]❌ Error deleting:[/red] {escape(name)} [dim]({escape(str(git_err))})[/dim]")
            result.failed.append(name)
            continue
        out.print(f"[green]🗑️  Deleted:[/green] {escape(name)}")
        result.deleted.append(name)

    out.print("[bold green]Done! 🧹[/bold green]")
    return result


def sweep(
    source: BranchSource,
    selector: Selector,
    target: str = "main",
    dry_run: bool = False,
    out: Optional[Console] = None,
    err: Optional[Console] = None,
) -> SweepResult:
    """Run one full list, filter, select, delete pass."""
    out = out or console
    err = err or err_console

    out.print(f"[blue]🔍 Searching for branches merged into[/blue] [bold]{escape(target)}[/bold] ...")

    try:
        output = source.list_merged(target)
    except GitError as git_err:
        logger.debug("Listing merged branches failed: %s", git_err)
        err.print("[red]Error: Target branch not found or not a git repository.[/red]")
        return SweepResult(SweepOutcome.ERROR)

    candidates = filter_merged(output, target)
    if not candidates:
        out.print("[green]✨ Clean! No merged branches to delete.[/green]")
        return SweepResult(SweepOutcome.CLEAN)

    out.print(f"Found {len(candidates)} branches to delete:")
    indices = selector(candidates, [True] * len(candidates))
    if not indices:
        out.print("Cancelled. No branches were deleted.")
        return SweepResult(SweepOutcome.CANCELLED, candidates=candidates)

    picked = [candidates[i] for i in sorted(set(indices))]
    logger.debug("Selected %d of %d branches", len(picked), len(candidates))

    result = delete_branches(source, picked, dry_run=dry_run, out=out, err=err)
    result.candidates = candidates
    return result
