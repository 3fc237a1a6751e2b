# birdhouse_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from ...constants import (
    MSG_BUILD_SUCCESS,
    MSG_DELETE_SUCCESS,
    MSG_RELEASE_SUCCESS,
    MSG_ROLLBACK_SUCCESS,
    Operation,
    Target,
)
from ...models.result import ImageReport, OperationStatus, ReleaseResult
from ...services import PipelineContext
from ...utils.formatting import format_clock, format_megabytes, format_size, pluralize

console = Console()


def _success_message(result: ReleaseResult, backup_path: Optional[str]) -> str:
    if result.operation == Operation.DELETE:
        return MSG_DELETE_SUCCESS.format(path=result.application_path)
    if result.operation == Operation.ROLLBACK:
        return MSG_ROLLBACK_SUCCESS.format(path=result.application_path, backup=backup_path)
    if result.target in (Target.NONE, Target.LOCAL):
        return MSG_BUILD_SUCCESS.format(version=result.version)
    return MSG_RELEASE_SUCCESS.format(version=result.version)


def format_release_result(result: ReleaseResult, backup_path: Optional[str] = None) -> None:
    """Format and display the result of a release, delete or rollback run"""
    title = f"{result.operation.value.capitalize()} Result"

    if result.is_failed:
        lines = [f"[red]✗ {result.operation.value.capitalize()} failed[/red]"]
        for error in result.errors:
            lines.append(f"  [red]• [{error.code}] {error.message}[/red]")
        if result.duration is not None:
            lines.append("")
            lines.append(f"[bold]Elapsed:[/bold] {format_clock(result.duration)}")
        console.print(Panel("\n".join(lines), title=title, border_style="red"))
        return

    lines = [f"[green]{_success_message(result, backup_path)}[/green]", ""]

    if result.operation == Operation.RELEASE:
        lines.append(f"[bold]Version:[/bold] {result.version}")
        if result.application_path:
            lines.append(f"[bold]Application path:[/bold] {result.application_path}")
        if result.target != Target.NONE:
            lines.append(f"[bold]Uploaded files:[/bold] {result.files_uploaded}")
        lines.append(f"[bold]Cached files:[/bold] {result.cached_files}")
        lines.append(f"[bold]Cache size:[/bold] {format_megabytes(result.cache_size)}")
        if result.minify_report is not None:
            report = result.minify_report
            lines.append(
                f"[bold]Minified size:[/bold] {format_megabytes(report.minified_size)} "
                f"(saved {format_size(report.saved_bytes)})"
            )
    elif result.operation == Operation.ROLLBACK:
        lines.append(f"[bold]Restored files:[/bold] {result.files_uploaded}")

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {format_clock(result.duration)}")

    border = "green" if result.status == OperationStatus.SUCCESS else "yellow"
    console.print(Panel("\n".join(lines), title=title, border_style=border))

    if result.warnings:
        console.print("\n[bold yellow]Warnings:[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  • {warning}")


def format_image_reports(reports: List[ImageReport], title: str = "Images") -> None:
    """Display a table with one row per image report"""
    if not reports:
        console.print(f"[yellow]No {title.lower()} generated[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Status", style="cyan")
    table.add_column("Processed", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Failed", justify="right", style="red")

    for report in reports:
        table.add_row(
            report.status.value,
            str(len(report.processed)),
            str(len(report.skipped)),
            str(len(report.errors)),
        )
    console.print(table)

    for report in reports:
        for error in report.errors:
            console.print(f"  [red]•[/red] {error.message}")


def show_information(context: PipelineContext, result: ReleaseResult) -> None:
    """Print the detailed information block of a run"""
    pipeline = context.pipeline

    paths = Table(show_header=False, box=box.SIMPLE)
    paths.add_column("Key", style="cyan")
    paths.add_column("Value")
    paths.add_row("Project root", str(context.path_resolver.project_root))
    paths.add_row("Production path", pipeline.production_path or "-")
    paths.add_row("Staging path", pipeline.staging_path or "-")
    paths.add_row("Local build", pipeline.dist_path or "-")
    console.print(Panel(paths, title="Information", border_style="blue"))

    manifest = result.manifest
    if manifest is None:
        return

    console.print(
        f"Included {pluralize(len(manifest), 'file')} "
        f"({format_megabytes(manifest.total_size)})"
    )

    table = Table(box=box.ROUNDED)
    table.add_column("Extension", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    for extension, stats in sorted(manifest.extensions.items()):
        table.add_row(extension or "(none)", str(stats.count), format_size(stats.size))
    console.print(table)

    if result.minify_report and result.minify_report.files:
        for item in result.minify_report.files:
            console.print(
                f"  [dim]{item.path}: {format_size(item.original_size)} "
                f"→ {format_size(item.minified_size)}[/dim]"
            )


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {message}")
