"""Lint CLI command."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillshelf.core.context import SharedContext
from skillshelf.core.lint import LintReport, Severity, describe_rules

console = Console()

SEVERITY_STYLE = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def _print_report(report: LintReport) -> None:
    if not report.issues:
        console.print(
            f"[green]✓ {report.skills_checked} skill(s) checked, no issues[/green]"
        )
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Severity")
    table.add_column("Rule", no_wrap=True)
    table.add_column("Path", style="cyan")
    table.add_column("Message", overflow="fold")
    for issue in report.issues:
        style = SEVERITY_STYLE[issue.severity]
        table.add_row(
            f"[{style}]{issue.severity.value}[/{style}]",
            issue.rule,
            escape(issue.path or ""),
            escape(issue.message),
        )
    console.print(table)

    summary = (
        f"{report.skills_checked} skill(s) checked: "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    console.print(f"[{'green' if report.ok else 'red'}]{summary}[/]")


def lint_command(
    ctx: typer.Context, strict: bool | None, output_format: str, list_rules: bool
) -> None:
    """Validate skills and the manifest; exit 1 when the report fails."""
    if list_rules:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Rule", no_wrap=True)
        table.add_column("Severity")
        table.add_column("Check")
        for row in describe_rules():
            table.add_row(row["rule"], row["severity"], row["summary"])
        console.print(table)
        return

    context = SharedContext(ctx.obj["config"])
    report = context.lint(strict=strict)

    if output_format == "json":
        typer.echo(report.model_dump_json(indent=2))
    else:
        _print_report(report)

    if not report.ok:
        raise typer.Exit(1)
