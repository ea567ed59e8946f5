"""Command line interface for branchsweep."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from branchsweep import __version__
from branchsweep.git import GitError, GitRepo
from branchsweep.sweep import sweep
from branchsweep.ui import checklist_select

app = typer.Typer(help="Clean up git branches already merged into a target branch")
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Send diagnostics to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        print(f"branchsweep {__version__}")
        raise typer.Exit()


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=0) from err


@app.command()
def main(
    target: Annotated[
        str, typer.Option("--target", "-t", help="Target branch (the one others were merged into), e.g. main or master")
    ] = "main",
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Only print what would be deleted, do not delete anything")
    ] = False,
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Interactively delete local branches already merged into TARGET."""
    setup_logging(verbose)
    repo = get_repo(path)
    sweep(repo, checklist_select, target=target, dry_run=dry_run)


if __name__ == "__main__":
    app()
