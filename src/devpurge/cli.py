"""CLI interface for devpurge."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.prompt import Prompt

from devpurge import __version__
from devpurge.analyzer import analyze_root
from devpurge.cache import ScanCache
from devpurge.categories import get_all_categories
from devpurge.cleaner import delete_candidates
from devpurge.config import load_settings
from devpurge.display import (
    confirm_deletion,
    console,
    prompt_selection,
    show_candidates,
    show_categories,
    show_deletion_progress,
    show_deletion_result,
    show_purge_summary,
    show_scanning_progress,
    shorten_path,
)
from devpurge.models import DeletionResult, Outcome

BYTES_PER_MB = 1024 * 1024

app = typer.Typer(
    name="devpurge",
    help="Find and delete regenerable build and dependency folders",
    add_completion=False,
)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"devpurge version {__version__}")
        raise typer.Exit()


def run_purge(
    path: Optional[str] = None,
    min_size: Optional[int] = None,
    scan: bool = False,
    no_cache: bool = False,
    yes: bool = False,
    dry_run: bool = False,
    cache_file: Optional[str] = None,
) -> Outcome:
    """
    Run the scan, select, confirm and delete flow.

    Returns:
        The terminal state the run ended in
    """
    settings = load_settings()

    if path is None:
        path = Prompt.ask("Enter path to scan", default=os.getcwd(), console=console)

    root = Path(os.path.expanduser(path))
    if not root.exists():
        console.print(f"[red]Path does not exist: {escape(str(root))}[/red]")
        return Outcome.INVALID_PATH
    if not root.is_dir():
        console.print(f"[red]Not a directory: {escape(str(root))}[/red]")
        return Outcome.INVALID_PATH

    min_size_mb = settings.min_size_mb if min_size is None else min_size
    min_bytes = min_size_mb * BYTES_PER_MB
    use_cache = settings.use_cache and not no_cache
    cache = ScanCache(Path(os.path.expanduser(cache_file)) if cache_file else settings.cache_path)

    with show_scanning_progress() as progress:
        task = progress.add_task(f"Scanning {escape(str(root))}...", total=None)

        def on_visit(visited: str) -> None:
            progress.update(task, description=f"Scanning: {escape(shorten_path(visited))}")

        analysis = analyze_root(
            root,
            min_size_bytes=min_bytes,
            cache=cache,
            fresh=scan,
            use_cache=use_cache,
            on_visit=on_visit,
        )

    if analysis.from_cache:
        console.print(f"Loaded {analysis.found_count} results from cache.")
    elif analysis.cache_saved:
        console.print("[dim]Scan results cached.[/dim]")

    if analysis.found_count == 0:
        console.print("[yellow]No dependency folders found.[/yellow]")
        return Outcome.NOTHING_FOUND

    if min_bytes > 0:
        console.print(
            f"Filtered out {analysis.filtered_out} folders smaller than {min_size_mb} MB."
        )

    if not analysis.candidates:
        console.print("[yellow]No dependency folders found matching criteria.[/yellow]")
        return Outcome.NOTHING_AFTER_FILTER

    show_candidates(analysis)

    if yes:
        indices = list(range(len(analysis.candidates)))
    else:
        indices = prompt_selection(len(analysis.candidates))

    if not indices:
        console.print("[yellow]No folders selected. Exiting.[/yellow]")
        return Outcome.NOTHING_SELECTED

    selected = [analysis.candidates[i] for i in indices]

    if dry_run:
        console.print("[yellow]DRY RUN - No folders will be deleted[/yellow]")
    elif not yes and not confirm_deletion(len(selected)):
        console.print("[yellow]Operation cancelled.[/yellow]")
        return Outcome.CANCELLED

    with show_deletion_progress() as progress:
        task = progress.add_task(f"Deleting {len(selected)} folders...", total=len(selected))

        def on_deleted(result: DeletionResult) -> None:
            show_deletion_result(result)
            progress.advance(task)

        summary = delete_candidates(
            selected,
            cache=cache if use_cache else None,
            dry_run=dry_run,
            progress_callback=on_deleted,
        )

    show_purge_summary(summary, dry_run=dry_run)

    if summary.failure_count:
        return Outcome.COMPLETED_WITH_FAILURES
    return Outcome.COMPLETED


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)"
    ),
) -> None:
    """devpurge - reclaim disk space from build and dependency folders."""
    _setup_logging(verbose)
    # If no command specified, run an interactive purge
    if ctx.invoked_subcommand is None:
        if run_purge() == Outcome.INVALID_PATH:
            raise typer.Exit(1)


@app.command()
def purge(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Root directory to scan"),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", "-m", min=0, help="Hide folders smaller than this many MB"
    ),
    scan: bool = typer.Option(False, "--scan", help="Ignore cached results and rescan"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Neither read nor write the cache"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Select everything, skip confirmation"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    cache_file: Optional[str] = typer.Option(None, "--cache-file", help="Scan cache location"),
) -> None:
    """Scan for dependency folders and delete the selected ones."""
    outcome = run_purge(
        path=path,
        min_size=min_size,
        scan=scan,
        no_cache=no_cache,
        yes=yes,
        dry_run=dry_run,
        cache_file=cache_file,
    )
    if outcome == Outcome.INVALID_PATH:
        raise typer.Exit(1)


@app.command(name="list")
def list_categories() -> None:
    """List the folder names devpurge looks for."""
    show_categories(get_all_categories())
    console.print(
        "[dim]A folder is only offered when the file next to it confirms the project type.[/dim]"
    )


@app.command(name="clear-cache")
def clear_cache(
    cache_file: Optional[str] = typer.Option(None, "--cache-file", help="Scan cache location"),
) -> None:
    """Delete the cached scan results."""
    settings = load_settings()
    cache = ScanCache(Path(os.path.expanduser(cache_file)) if cache_file else settings.cache_path)
    if cache.clear():
        console.print(f"[green]Removed scan cache {cache.path}[/green]")
    else:
        console.print("[dim]No scan cache to remove.[/dim]")


if __name__ == "__main__":
    app()
