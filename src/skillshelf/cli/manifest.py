"""Manifest subcommand group for skillshelf CLI."""

import json

import typer
from rich.console import Console
from rich.markup import escape

from skillshelf.core.exceptions import ManifestError
from skillshelf.core.manifest import ManifestStore
from skillshelf.core.skill_def import SKILL_FILENAME
from skillshelf.utils.logging import setup_logging

manifest_app = typer.Typer(
    help="Inspect and create the marketplace manifest",
    no_args_is_help=True,
)
console = Console()


@manifest_app.command()
def init(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Marketplace name"),
    owner: str = typer.Option(..., "--owner", "-o", help="Publisher name"),
    email: str = typer.Option(None, "--email", help="Publisher contact email"),
    plugin: str = typer.Option(
        None, "--plugin", "-p", help="Plugin name (defaults to the marketplace name)"
    ),
    description: str = typer.Option(None, "--description", "-d"),
    register_existing: bool = typer.Option(
        True,
        "--register-existing/--empty",
        help="List every skill already on disk in the new plugin",
    ),
) -> None:
    """Create a new marketplace manifest."""
    config = ctx.obj["config"]
    setup_logging(config)
    store = ManifestStore.from_config(config)

    try:
        store.init(name, owner, plugin=plugin, description=description, email=email)
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created {config.manifest_path}[/green]")

    if register_existing and config.skills_path.is_dir():
        for skill_dir in sorted(config.skills_path.iterdir()):
            if skill_dir.name.startswith("."):
                continue
            if (skill_dir / SKILL_FILENAME).is_file():
                store.register_skill(skill_dir.name)
                console.print(f"  + {skill_dir.name}")


@manifest_app.command()
def show(ctx: typer.Context) -> None:
    """Print the manifest as JSON."""
    store = ManifestStore.from_config(ctx.obj["config"])
    try:
        marketplace = store.load()
    except ManifestError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    typer.echo(json.dumps(marketplace.model_dump(mode="json", exclude_unset=True), indent=2))
