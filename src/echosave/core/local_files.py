"""Local file transfer: read a file into a string, write a string to a file."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .errors import InvalidKeyError, LocalIOError

logger = logging.getLogger(__name__)


class LocalFiles:
    """Whole-file UTF-8 reads and complete-or-absent writes.

    Files opened from a code group are materialised under ``workspace_root``
    when one is configured, otherwise under ``fallback_dir``.
    """

    def __init__(self, workspace_root: Optional[Path] = None, fallback_dir: Optional[Path] = None):
        self.workspace_root = Path(workspace_root).expanduser() if workspace_root else None
        self.fallback_dir = Path(fallback_dir).expanduser() if fallback_dir else Path.cwd()

    @property
    def base_dir(self) -> Path:
        return self.workspace_root or self.fallback_dir

    def resolve_open_path(self, file_name: str) -> Path:
        """Return where a stored file is written when opened.

        Only the last path segment of ``file_name`` is used.
        """
        name = Path(file_name.replace("\\", "/")).name
        if name in ("", ".", ".."):
            raise InvalidKeyError(f"Invalid file name: {file_name!r}")
        return self.base_dir / name

    async def read_text(self, path: Path | str) -> str:
        p = Path(path).expanduser()
        try:
            async with aiofiles.open(p, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LocalIOError(p, e) from e

    async def write_text(self, path: Path | str, content: str) -> Path:
        """Write ``content`` to ``path``, replacing any existing file atomically."""
        p = Path(path).expanduser()
        tmp = p.with_name(f".{p.name}.{uuid.uuid4().hex}.tmp")
        try:
            await aiofiles.os.makedirs(p.parent, exist_ok=True)
            async with aiofiles.open(tmp, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp, p)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise LocalIOError(p, e) from e
        logger.debug("Wrote %d chars to %s", len(content), p)
        return p
