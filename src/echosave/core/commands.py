"""Host-facing commands and the action boundary.

Hosts invoke actions by command id. Whatever goes wrong inside an action is
turned into a notice here; nothing reaches the host's event loop.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Awaitable, Callable, Dict, Optional

from .errors import EchoSaveError
from .logging import ActionLogger
from .orchestrator import SyncOrchestrator
from .ports import Notifier

logger = logging.getLogger(__name__)

OPEN_CODE = "echosave.openCode"
ADD_FILE_TO_CODE_GROUP = "echosave.addFileToCodeGroup"

ALIASES = {
    "open-code-group": OPEN_CODE,
    "add-file-to-active-group": ADD_FILE_TO_CODE_GROUP,
}

UNEXPECTED_NOTICE = "An unexpected error occurred. See the logs for details."

Handler = Callable[..., Awaitable[Any]]


class CommandRegistry:
    """Maps command ids to orchestrator actions."""

    def __init__(
        self,
        orchestrator: SyncOrchestrator,
        notifier: Optional[Notifier] = None,
        action_logger: Optional[ActionLogger] = None,
    ):
        self.orchestrator = orchestrator
        self.notifier = notifier or orchestrator.port
        self.action_logger = action_logger
        self._handlers: Dict[str, Handler] = {
            OPEN_CODE: orchestrator.open_code_group,
            ADD_FILE_TO_CODE_GROUP: orchestrator.add_file_to_active_group,
        }

    @property
    def command_ids(self) -> list[str]:
        return sorted(self._handlers)

    def resolve(self, command_id: str) -> str:
        command_id = ALIASES.get(command_id, command_id)
        if command_id not in self._handlers:
            raise KeyError(f"Unknown command: {command_id}")
        return command_id

    async def execute(self, command_id: str, *args: Any) -> Any:
        """Run a command. Errors become notices and the result is None."""
        command_id = self.resolve(command_id)
        try:
            return await self._handlers[command_id](*args)
        except EchoSaveError as e:
            logger.info("%s failed: %s", command_id, e)
            await self._journal_failure(command_id, e)
            await self.notifier.show_error(str(e))
        except Exception as e:
            logger.error("Unexpected error in %s: %s\n%s", command_id, e, traceback.format_exc())
            await self._journal_failure(command_id, e)
            await self.notifier.show_error(UNEXPECTED_NOTICE)
        return None

    async def _journal_failure(self, command_id: str, error: Exception) -> None:
        if self.action_logger is None:
            return
        await self.action_logger.log_operation(
            "command_failed",
            {
                "command": command_id,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
            level="ERROR",
        )
