"""Config subcommand group for skillshelf CLI."""

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from skillshelf.utils.config import LOCAL_CONFIG_FILE, Config

config_app = typer.Typer(
    help="Inspect and change skillshelf settings",
    no_args_is_help=True,
)
console = Console()


@config_app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    config: Config = ctx.obj["config"]
    data = config.model_dump(mode="json")
    console.print(Syntax(yaml.safe_dump(data, sort_keys=False), "yaml"))


@config_app.command("set")
def set_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dotted config key, e.g. lint.strict"),
    value: str = typer.Argument(..., help="Value, parsed as YAML"),
) -> None:
    """Persist a setting to skillshelf.local.yaml."""
    config: Config = ctx.obj["config"]
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as e:
        console.print(f"[red]Cannot parse value: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if key.split(".")[0] == "workspace":
        console.print("[red]workspace is set with --workspace, not in config[/red]")
        raise typer.Exit(1)

    try:
        config.set_local(key, parsed)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {escape(key)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Set {escape(key)} in {LOCAL_CONFIG_FILE}[/green]")
