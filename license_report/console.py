"""Rich console utilities for license-report.

This module provides a shared Rich Console instance and helper functions
for CLI output, including GitHub Actions annotations in CI.
"""

import os
from contextlib import contextmanager
from typing import Any, Callable, Generator, List, Optional, Tuple

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from ._manifests.models import DependencyRecord

# Detect GitHub Actions
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "step": "bold blue",
        "highlight": "magenta",
    }
)

# Force colors ON in GitHub Actions (Rich may otherwise disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_banner(version: str = "unknown") -> None:
    """Print the license-report banner."""
    banner = Text()
    banner.append("license-report", style="bold blue")
    # Only prefix with 'v' if version looks like semver (starts with digit)
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="yellow")
    banner.append(" - dependency licenses from go.mod, package.json and pyproject.toml", style="bright_blue")
    console.print(banner)


def print_step_header(step_num: int, title: str) -> None:
    """
    Print a styled step header.

    In GitHub Actions, uses ::group:: for collapsible sections.
    In other environments, uses Rich styling.
    """
    step_title = f"STEP {step_num}: {title}"

    if IS_GITHUB_ACTIONS:
        print(f"::group::{step_title}")
        console.print(f"[bold blue]{step_title}[/bold blue]")
    else:
        console.print()
        console.rule(f"[bold blue]{step_title}[/bold blue]", style="blue")


def print_step_end(step_num: int, success: bool = True) -> None:
    """Print step completion status and close GitHub Actions group."""
    if success:
        console.print(f"[success]✓ Step {step_num} completed successfully[/success]")
    else:
        console.print(f"[error]✗ Step {step_num} failed[/error]")

    if IS_GITHUB_ACTIONS:
        print("::endgroup::")
    else:
        console.print()


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """Emit a warning that appears in GitHub Actions job summary."""
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::warning title={title}::{message}")
        else:
            print(f"::warning::{message}")
    else:
        if title:
            console.print(f"[warning]Warning ({title}):[/warning] {message}")
        else:
            console.print(f"[warning]Warning:[/warning] {message}")


def gha_error(message: str, title: Optional[str] = None) -> None:
    """Emit an error that appears in GitHub Actions job summary."""
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::error title={title}::{message}")
        else:
            print(f"::error::{message}")
    else:
        if title:
            console.print(f"[error]Error ({title}):[/error] {message}")
        else:
            console.print(f"[error]Error:[/error] {message}")


def gha_notice(message: str, title: Optional[str] = None) -> None:
    """Emit a notice annotation in GitHub Actions."""
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::notice title={title}::{message}")
        else:
            print(f"::notice::{message}")
    else:
        if title:
            console.print(f"[info]Notice ({title}):[/info] {message}")
        else:
            console.print(f"[info]Notice:[/info] {message}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_resolution_summary(total: int, licenses_found: int, sparse: int) -> None:
    """
    Print the resolution summary as a Rich table.

    Args:
        total: Number of dependencies resolved
        licenses_found: Records with a license
        sparse: Records with nothing beyond the echoed identity
    """
    data = [
        ("Dependencies", total),
        ("Licenses found", f"{licenses_found}/{total}"),
        ("Unresolved (no metadata)", sparse),
    ]
    print_summary_table("Resolution Summary", data)

    missing = total - licenses_found
    if missing:
        gha_warning(f"{missing} of {total} dependencies have no license in the report", title="Missing licenses")


@contextmanager
def resolution_progress(total: int) -> Generator[Callable[[int, int, DependencyRecord], None], None, None]:
    """
    Progress bar for dependency resolution.

    Yields a callback with the signature expected by
    LicenseResolver.resolve_all. In GitHub Actions the bar is replaced by
    one line per dependency (the step header already opened a group),
    since live rendering does not survive log capture.
    """
    if IS_GITHUB_ACTIONS:

        def log_line(index: int, count: int, dependency: DependencyRecord) -> None:
            console.print(f"[{index + 1}/{count}] {dependency}", markup=False, highlight=False)

        yield log_line
        return

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )
    with progress:
        task = progress.add_task("Resolving", total=total)

        def advance(index: int, count: int, dependency: DependencyRecord) -> None:
            progress.update(task, completed=index, description=f"Resolving {dependency.name}")

        yield advance
        progress.update(task, completed=total)


def print_final_success(report_path: str) -> None:
    """Print final success message."""
    console.print()
    if IS_GITHUB_ACTIONS:
        console.print(f"[bold green]✓ SUCCESS![/bold green] License report generated: {report_path}")
    else:
        console.rule("[bold green]SUCCESS[/bold green]", style="green")
        console.print(f"[bold green]License report generated: {report_path}[/bold green]", justify="center")
    console.print()


def print_final_failure(message: str) -> None:
    """Print final failure message."""
    console.print()
    gha_error(message, title="License Report Failed")
    if not IS_GITHUB_ACTIONS:
        console.rule("[bold red]FAILED[/bold red]", style="red")
        console.print(f"[bold red]{message}[/bold red]", justify="center")
    console.print()
