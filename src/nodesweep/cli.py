"""CLI interface for nodesweep."""

import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from nodesweep import __version__
from nodesweep.commands import (
    delete_node_modules,
    list_drives,
    open_folder_in_explorer,
    start_scan,
    start_scan_with_progress,
)
from nodesweep.config import Settings, config_path, expand_path, load_settings, save_settings
from nodesweep.display import (
    confirm_action,
    console,
    describe_progress,
    show_cleanup_preview,
    show_delete_result,
    show_delete_summary,
    show_drives,
    show_scan_results,
    show_scanning_progress,
    show_settings,
)
from nodesweep.errors import CommandError, ConfigError
from nodesweep.models import ScanItem, ScanProgress

log = logging.getLogger(__name__)

app = typer.Typer(
    name="nodesweep",
    help="Find node_modules folders and move the ones you don't need to the trash",
    add_completion=False,
)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_settings() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        console.print(f"[yellow]Warning: {e}[/yellow]")
        console.print("[dim]Falling back to default settings[/dim]")
        return Settings()


def _resolve_roots(roots: Optional[list[str]], settings: Settings) -> list[str]:
    if roots:
        return [str(expand_path(root)) for root in roots]
    return settings.expanded_roots


def _scan_with_progress(roots: list[str], include_sizes: bool) -> list[ScanItem]:
    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning...", stats="")

        def on_progress(event: str, snapshot: ScanProgress) -> None:
            description = "Done" if snapshot.is_complete else f"Scanning {snapshot.current_folder}"
            progress.update(task, description=description, stats=describe_progress(snapshot))

        return start_scan_with_progress(roots, include_sizes, on_progress)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nodesweep version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
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
    """nodesweep - find and safely trash node_modules folders."""
    _setup_logging(verbose)


@app.command()
def scan(
    roots: Optional[List[str]] = typer.Argument(
        None, help="Directories to scan (defaults to configured roots)"
    ),
    sizes: Optional[bool] = typer.Option(
        None, "--sizes/--no-sizes", help="Measure the size of each node_modules folder"
    ),
    as_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Scan for node_modules folders."""
    settings = _load_settings()
    scan_roots = _resolve_roots(roots, settings)
    include_sizes = settings.include_sizes if sizes is None else sizes

    if as_json:
        items = start_scan(scan_roots, include_sizes)
        typer.echo(json.dumps([item.model_dump() for item in items], indent=2))
        return

    console.print(f"[bold blue]Scanning {', '.join(scan_roots)}...[/bold blue]\n")
    items = _scan_with_progress(scan_roots, include_sizes)
    show_scan_results(items)

    if items:
        console.print()
        console.print("[dim]Run [bold]nodesweep clean[/bold] to move them to the trash[/dim]")


@app.command()
def clean(
    roots: Optional[List[str]] = typer.Argument(
        None, help="Directories to scan (defaults to configured roots)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check everything but move nothing"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
) -> None:
    """Scan, then move every node_modules found to the trash."""
    settings = _load_settings()
    scan_roots = _resolve_roots(roots, settings)
    dry_run = dry_run or settings.dry_run

    items = _scan_with_progress(scan_roots, settings.include_sizes)
    if not items:
        console.print("[yellow]No node_modules directories found.[/yellow]")
        raise typer.Exit(0)

    show_cleanup_preview(items, dry_run=dry_run)

    if not yes and not dry_run:
        console.print()
        if not confirm_action("Move these folders to the trash?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    console.print("\n[bold]Cleaning...[/bold]")
    results = delete_node_modules([item.node_modules_path for item in items], dry_run=dry_run)

    for result in results:
        show_delete_result(result)
    show_delete_summary(results, dry_run=dry_run)

    if not all(r.success for r in results):
        raise typer.Exit(1)


@app.command()
def delete(
    paths: List[str] = typer.Argument(..., help="node_modules folders to move to the trash"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check everything but move nothing"),
) -> None:
    """Move specific node_modules folders to the trash."""
    settings = _load_settings()
    dry_run = dry_run or settings.dry_run

    results = delete_node_modules([str(expand_path(p)) for p in paths], dry_run=dry_run)

    for result in results:
        show_delete_result(result)
    show_delete_summary(results, dry_run=dry_run)

    if not all(r.success for r in results):
        raise typer.Exit(1)


@app.command()
def drives() -> None:
    """List drives and mount points that can be scanned."""
    show_drives(list_drives())


@app.command(name="open")
def open_folder(
    path: str = typer.Argument(..., help="Folder to open"),
) -> None:
    """Open a folder in the system file manager."""
    try:
        open_folder_in_explorer(str(expand_path(path)))
    except CommandError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def config(
    add_root: Optional[str] = typer.Option(None, "--add-root", help="Add a default scan root"),
    remove_root: Optional[str] = typer.Option(
        None, "--remove-root", help="Remove a default scan root"
    ),
    sizes: Optional[bool] = typer.Option(
        None, "--sizes/--no-sizes", help="Measure sizes by default"
    ),
) -> None:
    """Show or change default settings."""
    settings = _load_settings()
    changed = False

    if add_root and add_root not in settings.default_roots:
        settings.default_roots.append(add_root)
        changed = True

    if remove_root:
        if remove_root not in settings.default_roots:
            console.print(f"[red]Not a configured root: {remove_root}[/red]")
            raise typer.Exit(1)
        settings.default_roots.remove(remove_root)
        changed = True

    if sizes is not None and sizes != settings.include_sizes:
        settings.include_sizes = sizes
        changed = True

    if changed and not save_settings(settings):
        console.print(f"[red]Failed to save {config_path()}[/red]")
        raise typer.Exit(1)

    show_settings(settings, config_path())


if __name__ == "__main__":
    app()
