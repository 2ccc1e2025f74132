"""User-facing flows: open a code group, then open, add or delete files in it."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from .errors import NoActiveGroupError
from .local_files import LocalFiles
from .logging import ActionLogger
from .ports import InteractionPort
from .repository import GroupRepository
from .results import Result, is_ok
from .session import Session

logger = logging.getLogger(__name__)

ADD_FILE = "➕ Add File"
DELETE_FILE = "🗑️ Delete File"
DELETE_GROUP = "🗑️ Delete Code Group"
GROUP_ACTIONS = (ADD_FILE, DELETE_FILE, DELETE_GROUP)


class FlowState(str, Enum):
    IDLE = "idle"
    CODE_ENTERED = "code_entered"
    GROUP_LISTED = "group_listed"
    FILE_OPENED = "file_opened"
    FILE_ADDED = "file_added"
    FILE_DELETED = "file_deleted"
    GROUP_DELETED = "group_deleted"


class SyncOrchestrator:
    """Runs the interactive flows against a repository, a session and a host port.

    Backend failures surface as notices through the repository; the flows
    never retry and simply end, leaving the session in its last stable state.
    """

    def __init__(
        self,
        repository: GroupRepository,
        session: Session,
        port: InteractionPort,
        files: LocalFiles,
        action_logger: Optional[ActionLogger] = None,
    ):
        self.repository = repository
        self.session = session
        self.port = port
        self.files = files
        self.action_logger = action_logger

    async def _journal(self, operation: str, **details) -> None:
        if self.action_logger is not None:
            await self.action_logger.log_operation(operation, details)

    async def open_code_group(self) -> FlowState:
        """Prompt for a code, list its files and act on the user's choice.

        Returns the state the flow ended in; IDLE when the user backed out.
        """
        code = (await self.port.prompt_text("Enter a code") or "").strip()
        if not code:
            return FlowState.IDLE

        # Set even when the group is empty so "add file" works right away
        self.session.set_active(code)
        await self.port.show_info(f"Active Code: {code}")
        await self._journal("code_entered", code=code)

        files = await self.repository.list_files(code)
        names = [f.file_name for f in files]
        placeholder = "Select a file to open or delete" if names else "No files found. Add one!"
        selected = await self.port.pick(names + list(GROUP_ACTIONS), placeholder)

        if selected is None:
            return FlowState.IDLE
        if selected == ADD_FILE:
            return await self._add_file(code)
        if selected == DELETE_FILE:
            return await self._delete_file(code, names)
        if selected == DELETE_GROUP:
            return await self._delete_group(code)
        if selected in names:
            return await self._open_file(code, selected)

        logger.warning("Ignoring unknown selection %r", selected)
        return FlowState.IDLE

    async def add_file_to_active_group(self, path: Path | str) -> Result:
        """Upload a local file into the active code group.

        Raises:
            NoActiveGroupError: No code group has been opened (no backend call is made)
            LocalIOError: The file could not be read
        """
        code = self.session.get_active()
        if not code:
            raise NoActiveGroupError()

        result = await self._upload(code, Path(path))
        await self._journal("add_to_active_group", code=code, path=str(path), ok=is_ok(result))
        return result

    async def _upload(self, code: str, path: Path) -> Result:
        content = await self.files.read_text(path)
        return await self.repository.save_file(code, path.name, content)

    async def _add_file(self, code: str) -> FlowState:
        path = await self.port.pick_local_file()
        if path is None:
            return FlowState.IDLE

        result = await self._upload(code, Path(path))
        await self._journal("file_added", code=code, path=str(path), ok=is_ok(result))
        return FlowState.FILE_ADDED if is_ok(result) else FlowState.IDLE

    async def _delete_file(self, code: str, names: list[str]) -> FlowState:
        file_name = await self.port.pick(names, "Select a file to delete")
        if not file_name:
            return FlowState.IDLE

        result = await self.repository.delete_file(code, file_name)
        await self._journal("file_deleted", code=code, file_name=file_name, ok=is_ok(result))
        return FlowState.FILE_DELETED if is_ok(result) else FlowState.IDLE

    async def _delete_group(self, code: str) -> FlowState:
        result = await self.repository.delete_group(code, self.session)
        await self._journal("group_deleted", code=code, ok=is_ok(result))
        return FlowState.GROUP_DELETED if is_ok(result) else FlowState.IDLE

    async def _open_file(self, code: str, file_name: str) -> FlowState:
        entry = await self.repository.fetch_file(code, file_name)
        if entry is None:
            await self.port.show_error(f"'{file_name}' is no longer in {code}.")
            return FlowState.IDLE

        target = self.files.resolve_open_path(entry.file_name)
        await self.files.write_text(target, entry.content)
        await self.port.show_document(target)
        await self._journal("file_opened", code=code, file_name=file_name, path=str(target))
        return FlowState.FILE_OPENED
