"""Skill catalog CLI commands."""

import questionary
import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from skillshelf.core.context import SharedContext
from skillshelf.core.exceptions import ManifestError
from skillshelf.core.lint import NAME_PATTERN
from skillshelf.utils.config import Config
from skillshelf.utils.def_loader import DefExistsError, DefNotFoundError, InvalidDefError
from skillshelf.utils.logging import setup_logging

console = Console()


def _context(ctx: typer.Context) -> SharedContext:
    config: Config = ctx.obj["config"]
    return SharedContext(config)


def list_command(ctx: typer.Context) -> None:
    """Print a table of valid skills and whether the manifest lists them."""
    context = _context(ctx)
    skills = context.skill_loader.discover_skills()

    registered: set[str] | None = None
    if context.manifest_store.exists():
        try:
            registered = context.manifest_store.registered_skill_ids()
        except ManifestError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")

    if not skills:
        console.print(f"[yellow]No skills found in {context.config.skills_path}[/yellow]")
        return

    table = Table(title=f"Skills ({len(skills)})", title_justify="left")
    table.add_column("ID", style="bold cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description", overflow="fold")
    if registered is not None:
        table.add_column("Registered", justify="center")

    for skill in skills:
        row = [skill.id, escape(skill.name), escape(skill.description)]
        if registered is not None:
            row.append("[green]yes[/green]" if skill.id in registered else "[red]no[/red]")
        table.add_row(*row)

    console.print(table)


def show_command(ctx: typer.Context, ref: str, raw: bool = False) -> None:
    """Print a skill, looked up by directory ID or frontmatter name."""
    context = _context(ctx)
    try:
        skill = context.skill_loader.resolve(ref)
    except DefNotFoundError:
        console.print(f"[red]Skill not found: {escape(ref)}[/red]")
        raise typer.Exit(1)
    except InvalidDefError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if raw:
        typer.echo(skill.content)
        return

    console.print(
        Panel(
            f"[bold]{escape(skill.name)}[/bold]\n{escape(skill.description)}",
            title=f"skills/{skill.id}",
            border_style="cyan",
        )
    )
    console.print(Markdown(skill.content))


def search_command(ctx: typer.Context, query: str, limit: int) -> None:
    """Preview which skills a task description would activate."""
    context = _context(ctx)
    matches = context.matcher.rank(
        query, context.skill_loader.discover_skills(), limit=limit
    )

    if not matches:
        console.print(f"[yellow]No skills match '{escape(query)}'[/yellow]")
        return

    table = Table(title=f"Matches for '{escape(query)}'", title_justify="left")
    table.add_column("Score", justify="right")
    table.add_column("ID", style="bold cyan", no_wrap=True)
    table.add_column("Matched terms")
    table.add_column("Description", overflow="fold")
    for match in matches:
        table.add_row(
            f"{match.score:.2f}",
            match.skill.id,
            ", ".join(match.matched_terms),
            escape(match.skill.description),
        )
    console.print(table)


def new_command(
    ctx: typer.Context,
    skill_id: str,
    description: str | None,
    plugin: str | None,
    register: bool,
) -> None:
    """Scaffold a new skill and optionally register it in the manifest."""
    context = _context(ctx)
    setup_logging(context.config)

    if not NAME_PATTERN.match(skill_id):
        console.print(
            f"[red]Skill ID '{skill_id}' must be lowercase letters, digits and single hyphens[/red]"
        )
        raise typer.Exit(1)

    description = (description or "").strip()
    if not description:
        description = questionary.text(
            "Describe when the assistant should use this skill:",
            validate=lambda text: bool(text.strip()) or "Description is required",
        ).ask()
        if not description or not description.strip():
            console.print("[yellow]Aborted.[/yellow]")
            raise typer.Exit(1)

    try:
        context.skill_loader.create_skill(skill_id, skill_id, description.strip())
    except (DefExistsError, InvalidDefError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    skill_file = context.skill_loader.skill_file(skill_id)
    console.print(f"[green]Created {skill_file}[/green]")

    if register:
        _register(context, skill_id, plugin)


def _register(context: SharedContext, skill_id: str, plugin: str | None) -> None:
    try:
        changed = context.manifest_store.register_skill(skill_id, plugin)
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if changed:
        console.print(f"[green]Registered '{skill_id}' in {context.config.manifest_path}[/green]")
    else:
        console.print(f"[yellow]'{skill_id}' is already registered[/yellow]")


def register_command(ctx: typer.Context, skill_id: str, plugin: str | None) -> None:
    """Add an existing skill to the marketplace manifest."""
    context = _context(ctx)
    setup_logging(context.config)

    try:
        context.skill_loader.load_skill(skill_id)
    except (DefNotFoundError, InvalidDefError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    _register(context, skill_id, plugin)


def unregister_command(ctx: typer.Context, skill_id: str) -> None:
    """Remove a skill from the marketplace manifest."""
    context = _context(ctx)
    setup_logging(context.config)

    try:
        removed = context.manifest_store.unregister_skill(skill_id)
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if removed:
        console.print(f"[green]Removed {removed} reference(s) to '{skill_id}'[/green]")
    else:
        console.print(f"[yellow]'{skill_id}' is not registered[/yellow]")
