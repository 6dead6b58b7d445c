"""Rich terminal display for nodesweep."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from nodesweep.config import Settings
from nodesweep.models import DeleteResult, DriveInfo, ScanItem, ScanProgress, format_size

console = Console()


def total_size(items: list[ScanItem]) -> int:
    """Sum of known sizes; unmeasured items count as zero."""
    return sum(item.size or 0 for item in items)


def show_scan_results(items: list[ScanItem]) -> None:
    """Display discovered node_modules directories."""
    if not items:
        console.print("[yellow]No node_modules directories found.[/yellow]")
        return

    table = Table(title="node_modules Found", show_header=True, header_style="bold")
    table.add_column("Project")
    table.add_column("Size", justify="right")
    table.add_column("Path", style="dim")

    for item in items:
        size = item.size_human if item.size is not None else "[dim]unknown[/dim]"
        table.add_row(item.project_path, size, item.node_modules_path)

    console.print(table)

    unknown = sum(1 for item in items if item.size is None)
    summary = f"[bold]{len(items)} found, {format_size(total_size(items))} total[/bold]"
    if unknown:
        summary += f" [dim]({unknown} without size)[/dim]"
    console.print(summary)


def show_cleanup_preview(items: list[ScanItem], dry_run: bool = False) -> None:
    """Display what is about to be moved to the trash."""
    if dry_run:
        console.print("[yellow]DRY RUN - Nothing will be moved to the trash[/yellow]\n")

    table = Table(title="Cleanup Preview", show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Size", justify="right")

    for item in items:
        table.add_row(item.node_modules_path, item.size_human)

    console.print(table)
    console.print(f"\n[bold]Total to trash: {format_size(total_size(items))}[/bold]")


def show_delete_result(result: DeleteResult) -> None:
    """Display result of a single deletion."""
    if result.success:
        console.print(f"  [green]✓[/green] {result.path}")
    else:
        console.print(f"  [red]✗[/red] {result.path}: {result.error}")


def show_delete_summary(results: list[DeleteResult], dry_run: bool = False) -> None:
    """Display totals after a batch of deletions."""
    success_count = sum(1 for r in results if r.success)
    failure_count = len(results) - success_count

    console.print()
    verb = "Would move" if dry_run else "Moved"
    console.print(f"[bold green]{verb} {success_count} folder(s) to the trash[/bold green]")
    if failure_count:
        console.print(f"[red]{failure_count} folder(s) could not be removed[/red]")


def show_drives(drives: list[DriveInfo]) -> None:
    """Display scannable locations."""
    table = Table(title="Drives", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Path")
    for drive in drives:
        table.add_row(drive.name, drive.path)
    console.print(table)


def show_settings(settings: Settings, path: Path) -> None:
    """Display effective settings."""
    roots = "\n".join(f"  • {root}" for root in settings.default_roots) or "  (none)"
    console.print(
        Panel(
            f"[bold]Default roots:[/bold]\n{roots}\n"
            f"[bold]Include sizes:[/bold] {settings.include_sizes}\n"
            f"[bold]Dry run:[/bold] {settings.dry_run}",
            title="Settings",
            subtitle=str(path),
            border_style="blue",
        )
    )


def show_scanning_progress() -> Progress:
    """Create progress display for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("[dim]{task.fields[stats]}[/dim]"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def describe_progress(progress: ScanProgress) -> str:
    """One-line summary of a progress snapshot."""
    return (
        f"{progress.folders_scanned}/{progress.total_folders_estimated} folders, "
        f"{progress.node_modules_found} found, {progress.directories_skipped} skipped"
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
