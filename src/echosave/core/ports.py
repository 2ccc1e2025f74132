"""Interaction port implemented by each host (console, HTTP, editor plugin).

The orchestrator only talks to the user through these methods, so the same
flows run unchanged in a terminal, behind an HTTP API or in tests with a
scripted port.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Info/error message channel."""

    async def show_info(self, message: str) -> None:  # pragma: no cover - protocol
        ...

    async def show_error(self, message: str) -> None:  # pragma: no cover - protocol
        ...


@runtime_checkable
class InteractionPort(Notifier, Protocol):
    """Prompts, menus and document display offered by the host UI."""

    async def prompt_text(self, prompt: str) -> Optional[str]:  # pragma: no cover - protocol
        """Ask for free text. None means the user dismissed the prompt."""
        ...

    async def pick(self, items: Sequence[str], placeholder: str) -> Optional[str]:  # pragma: no cover - protocol
        """Let the user choose one of ``items``. None means nothing was chosen."""
        ...

    async def pick_local_file(self) -> Optional[Path]:  # pragma: no cover - protocol
        """Open a file dialog and return the chosen path, if any."""
        ...

    async def show_document(self, path: Path) -> None:  # pragma: no cover - protocol
        """Display a local file to the user."""
        ...
