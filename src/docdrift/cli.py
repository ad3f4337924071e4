"""docdrift CLI - Audit agent instruction files for drift."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from docdrift import __version__
from docdrift.audit import run_audit
from docdrift.checks.line_budget import count_lines
from docdrift.config import PRESETS, AuditConfig, ConfigError, get_preset, load_overrides
from docdrift.discovery import AuditError, find_instruction_files, find_root
from docdrift.models.issue import Severity
from docdrift.models.report import AuditReport
from docdrift.output.json_writer import write_report
from docdrift.output.tree import build_issue_tree, build_summary_tree, display_tree

app = typer.Typer(
    name="docdrift",
    help="Audit AGENTS.md, CLAUDE.md and SKILL.md files for drift",
    no_args_is_help=False,
    rich_markup_mode="rich",
)
console = Console()

EXIT_ISSUES = 1
EXIT_CONFIG = 2


def version_callback(value: bool) -> None:
    if value:
        console.print(f"docdrift version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Audit agent instruction files against the source tree."""
    if ctx.invoked_subcommand is None:
        # Default to audit of the current directory
        _audit(Path("."), "broad", None, False, None, False, False, False)


@app.command()
def audit(
    path: Path = typer.Argument(
        Path("."),
        help="Directory to start project root resolution from",
    ),
    preset: str = typer.Option(
        "broad",
        "--preset",
        "-p",
        help=f"Configuration preset ({', '.join(sorted(PRESETS))})",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Use this directory as the project root instead of resolving one",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of a tree",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON report to this file",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        "-s",
        help="Show issues grouped by check instead of by file",
    ),
    no_pyproject: bool = typer.Option(
        False,
        "--no-pyproject",
        help="Ignore [tool.docdrift] settings in pyproject.toml",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Run every check and report drift (exit code 1 when issues are found)."""
    _audit(path, preset, root, json_output, output, summary, no_pyproject, verbose)


@app.command()
def files(
    path: Path = typer.Argument(
        Path("."),
        help="Directory to start project root resolution from",
    ),
    preset: str = typer.Option(
        "broad",
        "--preset",
        "-p",
        help=f"Configuration preset ({', '.join(sorted(PRESETS))})",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Use this directory as the project root instead of resolving one",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """List the instruction files an audit would check."""
    _configure_logging(verbose)
    config, project_root = _resolve(path, preset, root, no_pyproject=False)

    try:
        discovered = find_instruction_files(project_root, config)
    except AuditError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG)

    console.print(f"[dim]Project root:[/] {escape(str(project_root))}\n")
    if not discovered:
        console.print("[yellow]![/] No instruction files found")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("Category", style="cyan")
    table.add_column("Lines", justify="right")
    for doc in discovered:
        try:
            lines = str(count_lines(doc.path.read_bytes()))
        except OSError:
            lines = "[red]unreadable[/]"
        table.add_row(escape(doc.rel_path), doc.category.label, lines)
    console.print(table)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve(
    path: Path,
    preset: str,
    root: Optional[Path],
    no_pyproject: bool,
) -> tuple[AuditConfig, Path]:
    """Build the config and find the project root, exiting on bad config."""
    try:
        config = get_preset(preset)
        project_root = (root or find_root(config, path.resolve())).resolve()
        if not no_pyproject:
            config = load_overrides(project_root, config)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/] {escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG)
    return config, project_root


def _audit(
    path: Path,
    preset: str,
    root: Optional[Path],
    json_output: bool,
    output: Optional[Path],
    summary: bool,
    no_pyproject: bool,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    config, project_root = _resolve(path, preset, root, no_pyproject)

    try:
        report = run_audit(config, root=project_root)
    except AuditError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG)

    if output is not None:
        write_report(report, output, config)

    if json_output:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _display_report(report, summary)
        if output is not None:
            console.print(f"[green]Report saved to:[/] {escape(str(output))}")

    if report.issues:
        raise typer.Exit(EXIT_ISSUES)


def _display_report(report: AuditReport, summary: bool) -> None:
    """Display issues, the line budget breakdown and a closing summary."""
    console.print(Panel.fit("[bold blue]docdrift - Instruction File Audit[/]"))
    console.print(f"\n[dim]Project root:[/] {escape(str(report.root))}")
    console.print(f"[dim]Instruction files:[/] {len(report.files)}")

    if report.issues:
        tree = build_summary_tree(report.issues) if summary else build_issue_tree(
            report.issues, report.root.name
        )
        display_tree(tree)

    mark = "[red]✗[/]" if report.over_budget else "[green]✓[/]"
    console.print(
        f"\nCombined instruction files: {report.line_counts.total} lines "
        f"(budget: {report.line_budget}) {mark}"
    )
    if report.line_counts.counts:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("File")
        table.add_column("Lines", justify="right")
        for name, n in report.line_counts.items():
            table.add_row(escape(name), str(n))
        console.print(table)

    if report.issues:
        errors = report.count_severity(Severity.ERROR)
        warnings = report.count_severity(Severity.WARNING)
        console.print(
            f"\n[bold]Found {len(report.issues)} issue(s)[/] "
            f"([red]{errors} error(s)[/], [yellow]{warnings} warning(s)[/])"
        )
    else:
        console.print("\n[bold green]No issues found ✓[/]")
