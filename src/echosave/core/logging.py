"""
Action journal for EchoSave.

Every user action (opening a group, adding, deleting, opening files) is
appended as a JSON line to a per-adapter, per-day operations log:

    <log_dir>/echosave-<adapter>/operations_YYYY-MM-DD.log
"""

import json
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".echosave" / "logs"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ActionLogger:
    """
    Journal of user actions for one host adapter (console, http, ...).

    Failures to write the journal are reported through the standard logging
    module and never interrupt the action being journaled.
    """

    def __init__(self, adapter_name: str, base_log_dir: Path):
        self.adapter_name = adapter_name
        self.log_dir = Path(base_log_dir).expanduser() / f"echosave-{adapter_name}"
        self._write_lock = asyncio.Lock()
        self._dir_ready = False

    def current_log_file(self) -> Path:
        today = datetime.now().strftime("%Y-%m-%d")
        return self.log_dir / f"operations_{today}.log"

    def _line(self, operation: str, details: Dict[str, Any], level: str) -> str:
        entry = {
            "timestamp": datetime.now().isoformat(),
            "adapter": self.adapter_name,
            "level": level,
            "operation": operation,
            "details": details,
        }
        return json.dumps(entry, ensure_ascii=False, default=str) + "\n"

    async def log_operation(
        self,
        operation: str,
        details: Dict[str, Any],
        level: str = "INFO"
    ) -> None:
        """
        Append one operation to today's journal.

        Args:
            operation: Name of the operation (e.g., "file_added", "group_deleted")
            details: Operation details; values must be JSON-serialisable or stringifiable
            level: Log level (INFO, WARNING, ERROR)
        """
        line = self._line(operation, details, level)
        async with self._write_lock:
            try:
                if not self._dir_ready:
                    await aiofiles.os.makedirs(self.log_dir, exist_ok=True)
                    self._dir_ready = True
                async with aiofiles.open(self.current_log_file(), "a", encoding="utf-8") as f:
                    await f.write(line)
            except OSError as e:
                logger.error("Could not journal %s for %s: %s", operation, self.adapter_name, e)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )


def get_action_logger(adapter_name: str, base_log_dir: Optional[Path] = None) -> ActionLogger:
    """Get an action logger instance."""
    if base_log_dir is None:
        base_log_dir = DEFAULT_LOG_DIR
    return ActionLogger(adapter_name, base_log_dir)
