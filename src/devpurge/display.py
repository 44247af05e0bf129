"""Rich terminal display for devpurge."""

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Prompt
from rich.table import Table

from devpurge.models import Analysis, Category, DeletionResult, PurgeSummary, RuleKind

console = Console()

MAX_PROGRESS_PATH = 50


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


def shorten_path(path: str, max_len: int = MAX_PROGRESS_PATH) -> str:
    """Keep the tail of a long path, prefixed with '...'."""
    if len(path) <= max_len:
        return path
    return "..." + path[-(max_len - 3):]


def evidence_text(category: Category) -> str:
    """Describe what a category needs next to it to be purgeable."""
    rule = category.rule
    if rule.kind == RuleKind.ALWAYS:
        return "always"
    if rule.kind == RuleKind.ANY_EXTENSION:
        return ", ".join(f"*.{ext}" for ext in rule.extensions)
    return ", ".join(rule.files)


def show_categories(categories: list[Category]) -> None:
    """Display the purgeable folder names and their evidence."""
    table = Table(title="Purgeable Folders", show_header=True, header_style="bold")
    table.add_column("Folder", style="cyan")
    table.add_column("Ecosystem")
    table.add_column("Requires next to it")

    for cat in categories:
        table.add_row(cat.name, cat.ecosystem, evidence_text(cat))

    console.print(table)


def show_candidates(analysis: Analysis) -> None:
    """Display the folders offered for deletion, numbered for selection."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Path")

    for index, candidate in enumerate(analysis.candidates, 1):
        table.add_row(str(index), format_size(candidate.size), escape(candidate.path))

    console.print(table)
    console.print(
        f"[bold]Found {len(analysis.candidates)} folders. "
        f"Total size: {format_size(analysis.total_size)}[/bold]"
    )


def parse_selection(text: str, count: int) -> list[int] | None:
    """
    Parse a selection like '1,3-5' into zero-based indices.

    'all' (or an empty answer) selects everything and 'none' selects nothing.

    Returns:
        Sorted indices, or None if the answer is invalid
    """
    answer = text.strip().lower()
    if answer in ("", "all", "a"):
        return list(range(count))
    if answer in ("none", "n"):
        return []

    selected: set[int] = set()
    for part in answer.replace(" ", "").split(","):
        if not part:
            continue
        try:
            if "-" in part:
                start_str, end_str = part.split("-", 1)
                start, end = int(start_str), int(end_str)
            else:
                start = end = int(part)
        except ValueError:
            return None
        if start < 1 or end > count or start > end:
            return None
        selected.update(range(start - 1, end))

    return sorted(selected)


def prompt_selection(count: int) -> list[int]:
    """Ask which of the listed folders to delete."""
    while True:
        answer = Prompt.ask(
            "Select folders to DELETE (e.g. 1,3-5, 'all' or 'none')",
            default="all",
            console=console,
        )
        selection = parse_selection(answer, count)
        if selection is not None:
            return selection
        console.print(f"[red]Invalid selection. Use numbers between 1 and {count}.[/red]")


def confirm_deletion(count: int) -> bool:
    """Ask the user to type 'yes' before deleting."""
    console.print(
        f"\nAre you sure you want to delete {count} folders? (type 'yes' to confirm)"
    )
    answer = Prompt.ask(">", default="", show_default=False, console=console)
    return answer.strip().lower() == "yes"


def show_scanning_progress() -> Progress:
    """Create spinner for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_deletion_progress() -> Progress:
    """Create progress bar for deletion."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def show_deletion_result(result: DeletionResult) -> None:
    """Display result of a single deletion."""
    if result.success and result.already_gone:
        console.print(f"  [dim]Already gone: {escape(result.path)}[/dim]")
    elif result.success:
        prefix = "[yellow]Would delete[/yellow]" if result.dry_run else "[green]✓[/green]"
        console.print(f"  {prefix} {escape(result.path)} ({format_size(result.size)})")
    else:
        reason = escape(result.error or "unknown error")
        console.print(f"  [red]✗ Failed to delete {escape(result.path)}: {reason}[/red]")


def show_purge_summary(summary: PurgeSummary, dry_run: bool = False) -> None:
    """Display the end-of-run totals."""
    console.print()
    if dry_run:
        console.print(
            f"[yellow]DRY RUN - {format_size(summary.reclaimed_bytes)} would be reclaimed[/yellow]"
        )
        return

    if summary.failure_count:
        console.print(
            f"[yellow]Cleanup finished with {summary.failure_count} failed deletions. "
            f"Reclaimed space: {format_size(summary.reclaimed_bytes)}[/yellow]"
        )
    else:
        console.print(
            f"[bold green]Cleanup complete! Reclaimed space: "
            f"{format_size(summary.reclaimed_bytes)}[/bold green]"
        )
