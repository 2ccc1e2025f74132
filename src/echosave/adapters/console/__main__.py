"""CLI entry point for the EchoSave console adapter."""

import asyncio
import logging
import shlex
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ...core.commands import ADD_FILE_TO_CODE_GROUP, OPEN_CODE
from ...core.config import Settings, load_settings
from ...core.errors import ConfigError
from ...core.logging import configure_logging
from ...core.runtime import Runtime, create_runtime
from .port import ConsolePort

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="echosave",
    help="Share groups of text files under a short code"
)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to YAML config file")]
EnvFileOption = Annotated[Optional[Path], typer.Option("--env-file", help="Path to .env file with Supabase credentials")]
NoLaunchOption = Annotated[bool, typer.Option("--no-launch", help="Do not open files with the system viewer")]

SHELL_HELP = """Commands:
  open         enter a code and pick a file or action
  add <path>   add a local file to the active code group
  active       show the active code group
  help         show this help
  quit         leave the shell"""


def _load(config: Optional[Path], env_file: Optional[Path]) -> Settings:
    try:
        settings = load_settings(config, env_file)
    except ConfigError as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        raise typer.Exit(1)
    configure_logging(settings.log_level)
    return settings


async def _run_shell(runtime: Runtime) -> None:
    await runtime.report_config_error()
    typer.echo(SHELL_HELP)
    try:
        while True:
            try:
                line = typer.prompt("echosave", prompt_suffix="> ", default="", show_default=False)
            except typer.Abort:
                break
            try:
                parts = shlex.split(line)
            except ValueError as e:
                typer.secho(f"Cannot parse command: {e}", fg=typer.colors.RED, err=True)
                continue
            if not parts:
                continue

            command, args = parts[0].lower(), parts[1:]
            if command in ("quit", "exit"):
                break
            elif command == "help":
                typer.echo(SHELL_HELP)
            elif command == "active":
                typer.echo(runtime.session.get_active() or "No active code group")
            elif command == "open":
                await runtime.commands.execute(OPEN_CODE)
            elif command == "add":
                if len(args) != 1:
                    typer.secho("Usage: add <path>", fg=typer.colors.RED, err=True)
                    continue
                await runtime.commands.execute(ADD_FILE_TO_CODE_GROUP, Path(args[0]).expanduser())
            else:
                typer.secho(f"Unknown command: {command}", fg=typer.colors.RED, err=True)
    finally:
        await runtime.aclose()


async def _run_open(runtime: Runtime) -> None:
    try:
        await runtime.report_config_error()
        await runtime.commands.execute(OPEN_CODE)
    finally:
        await runtime.aclose()


@app.command()
def shell(
    config: ConfigOption = None,
    env_file: EnvFileOption = None,
    no_launch: NoLaunchOption = False,
):
    """Interactive shell keeping the active code group between commands."""
    settings = _load(config, env_file)
    runtime = create_runtime(settings, ConsolePort(launch_documents=not no_launch), "console")
    asyncio.run(_run_shell(runtime))


@app.command("open")
def open_group(
    config: ConfigOption = None,
    env_file: EnvFileOption = None,
    no_launch: NoLaunchOption = False,
):
    """Enter a code, then open, add or delete files of that group."""
    settings = _load(config, env_file)
    runtime = create_runtime(settings, ConsolePort(launch_documents=not no_launch), "console")
    asyncio.run(_run_open(runtime))


@app.command()
def check_config(
    config: ConfigOption = None,
    env_file: EnvFileOption = None,
):
    """Validate configuration without contacting the backend."""
    settings = _load(config, env_file)
    problems = settings.credential_problems()
    if problems:
        for problem in problems:
            typer.echo(f"❌ {problem}", err=True)
        raise typer.Exit(1)
    typer.echo("✅ Configuration is valid")
    typer.echo(f"Supabase URL: {settings.supabase_url}")
    typer.echo(f"Table: {settings.table}")
    typer.echo(f"Files open in: {settings.workspace_root or settings.fallback_dir}")
    typer.echo(f"Log directory: {settings.log_dir}")


if __name__ == "__main__":
    app()
