"""Terminal implementation of the interaction port."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import typer

logger = logging.getLogger(__name__)


class ConsolePort:
    """Prompts, numbered menus and notices on stdin/stdout."""

    def __init__(self, launch_documents: bool = True):
        self.launch_documents = launch_documents

    async def show_info(self, message: str) -> None:
        typer.echo(message)

    async def show_error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, err=True)

    async def prompt_text(self, prompt: str) -> Optional[str]:
        try:
            value = typer.prompt(prompt, default="", show_default=False)
        except typer.Abort:
            return None
        return value or None

    async def pick(self, items: Sequence[str], placeholder: str) -> Optional[str]:
        if not items:
            return None
        typer.echo(placeholder)
        for i, item in enumerate(items, start=1):
            typer.echo(f"  {i}. {item}")
        try:
            choice = typer.prompt("Choice (empty to cancel)", default="", show_default=False)
        except typer.Abort:
            return None

        choice = choice.strip()
        if not choice:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(items):
            return items[int(choice) - 1]
        # Accept the item text itself as well
        if choice in items:
            return choice
        await self.show_error(f"Invalid choice: {choice}")
        return None

    async def pick_local_file(self) -> Optional[Path]:
        raw = await self.prompt_text("Path of the file to add")
        if not raw:
            return None
        return Path(raw.strip()).expanduser()

    async def show_document(self, path: Path) -> None:
        typer.echo(f"Opened {path}")
        if self.launch_documents:
            rc = typer.launch(str(path))
            if rc != 0:
                logger.warning("Launching %s returned %s", path, rc)
