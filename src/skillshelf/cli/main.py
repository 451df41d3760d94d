"""CLI interface for skillshelf using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from skillshelf.cli.config import config_app
from skillshelf.cli.lint import lint_command
from skillshelf.cli.manifest import manifest_app
from skillshelf.cli.server import serve_command
from skillshelf.cli.skills import (
    list_command,
    new_command,
    register_command,
    search_command,
    show_command,
    unregister_command,
)
from skillshelf.utils.config import Config

app = typer.Typer(
    name="skillshelf",
    help="Skillshelf: catalog, validate and register Markdown skill documents",
    no_args_is_help=True,
    add_completion=True,
)
app.add_typer(manifest_app, name="manifest")
app.add_typer(config_app, name="config")

console = Console()


# Global config option callback
def load_config_callback(ctx: typer.Context, workspace: str):
    """Load configuration and store it in the context."""
    if ctx.resilient_parsing:
        return workspace

    try:
        cfg = Config.load(Path(workspace))
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    return workspace


@app.callback()
def main(
    ctx: typer.Context,
    workspace: str = typer.Option(
        ".",
        "--workspace",
        "-w",
        help="Path to the skills repository root",
        callback=load_config_callback,
        is_eager=True,
    ),
) -> None:
    """
    Skillshelf: catalog, validate and register Markdown skill documents.

    Configuration is read from skillshelf.yaml and skillshelf.local.yaml in
    the workspace; both are optional.
    """
    # Config is loaded via callback, nothing to do here
    pass


@app.command("list")
def list_skills(ctx: typer.Context) -> None:
    """List all valid skills."""
    list_command(ctx)


@app.command()
def show(
    ctx: typer.Context,
    skill: Annotated[str, typer.Argument(help="Skill directory ID or frontmatter name")],
    raw: Annotated[
        bool, typer.Option("--raw", help="Print the Markdown body only")
    ] = False,
) -> None:
    """Show a skill."""
    show_command(ctx, skill, raw=raw)


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Task description to match against")],
    limit: Annotated[int, typer.Option("--limit", "-n", min=1)] = 5,
) -> None:
    """Preview which skills a task description would activate."""
    search_command(ctx, query, limit)


@app.command()
def lint(
    ctx: typer.Context,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on warnings too (default: lint.strict)"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    list_rules: Annotated[
        bool, typer.Option("--rules", help="List lint rules and exit")
    ] = False,
) -> None:
    """Validate skill frontmatter and the marketplace manifest."""
    if output_format not in ("text", "json"):
        console.print(f"[red]Unknown format: {output_format}[/red]")
        raise typer.Exit(2)
    # Without --strict the configured lint.strict applies
    lint_command(ctx, strict or None, output_format, list_rules)


@app.command()
def new(
    ctx: typer.Context,
    skill_id: Annotated[str, typer.Argument(help="Lowercase-hyphenated skill name")],
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="When the assistant should use it"),
    ] = None,
    plugin: Annotated[
        str | None,
        typer.Option("--plugin", "-p", help="Manifest plugin to register under"),
    ] = None,
    register: Annotated[
        bool,
        typer.Option("--register/--no-register", help="Add to the marketplace manifest"),
    ] = True,
) -> None:
    """Scaffold a new skill."""
    new_command(ctx, skill_id, description, plugin, register)


@app.command()
def register(
    ctx: typer.Context,
    skill_id: Annotated[str, typer.Argument(help="Skill directory ID")],
    plugin: Annotated[
        str | None,
        typer.Option("--plugin", "-p", help="Manifest plugin (defaults to the first)"),
    ] = None,
) -> None:
    """Add a skill to the marketplace manifest."""
    register_command(ctx, skill_id, plugin)


@app.command()
def unregister(
    ctx: typer.Context,
    skill_id: Annotated[str, typer.Argument(help="Skill directory ID")],
) -> None:
    """Remove a skill from the marketplace manifest."""
    unregister_command(ctx, skill_id)


@app.command("serve")
def serve(
    ctx: typer.Context,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Serve the skill catalog over HTTP."""
    serve_command(ctx, host, port)


if __name__ == "__main__":
    app()
