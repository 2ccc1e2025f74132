from __future__ import annotations

import json
import logging
from typing import List, Optional

from .errors import BackendError, InvalidKeyError, UnknownError
from .models import FileEntry, Record
from .ports import Notifier
from .results import BackendFailure, Ok, Result, UnknownFailure
from .session import Session
from .store import RecordStore

logger = logging.getLogger(__name__)

UNKNOWN_SAVE_NOTICE = "An unknown error occurred while saving the file. See the logs for details."


class GroupRepository:
    """Code group operations on top of a record store.

    Reads report backend failures and fall back to an empty listing; writes
    report their outcome to the user and return a tagged Result.
    """

    def __init__(self, store: RecordStore, notifier: Notifier):
        self.store = store
        self.notifier = notifier

    async def list_files(self, code: str) -> List[FileEntry]:
        """Return the files of a group, or [] after reporting a backend failure."""
        try:
            records = await self.store.query(code)
        except BackendError as e:
            logger.warning("Listing %s failed: %s", code, e.message)
            await self.notifier.show_error(f"Error fetching data: {e.message}")
            return []
        except UnknownError as e:
            self._log_unknown(f"listing {code}", e)
            await self.notifier.show_error("Error fetching data. See the logs for details.")
            return []
        return [r.to_entry() for r in records]

    async def fetch_file(self, code: str, file_name: str) -> Optional[FileEntry]:
        """Fetch one file by re-listing its group, so the content is current."""
        for entry in await self.list_files(code):
            if entry.file_name == file_name:
                return entry
        return None

    async def save_file(self, code: str, file_name: str, content: str) -> Result:
        """Insert or replace ``file_name`` in group ``code``."""
        if not code or not file_name:
            raise InvalidKeyError("Code and file name must not be empty")

        record = Record(code=code, file_name=file_name, content=content)
        try:
            await self.store.upsert(record)
        except BackendError as e:
            logger.error("Error saving %s to %s: %s", file_name, code, e.message)
            await self.notifier.show_error(f"Error saving file: {e.message}")
            return BackendFailure(e.message)
        except UnknownError as e:
            self._log_unknown(f"saving {code}/{file_name}", e)
            await self.notifier.show_error(UNKNOWN_SAVE_NOTICE)
            return UnknownFailure(e.raw_payload)

        await self.notifier.show_info(f"'{file_name}' saved successfully to {code}!")
        return Ok(record)

    async def delete_file(self, code: str, file_name: str) -> Result:
        """Remove one file. Removing a file that is not there still succeeds."""
        try:
            await self.store.delete_by_code_and_file(code, file_name)
        except (BackendError, UnknownError) as e:
            return await self._delete_failed(f"'{file_name}' from {code}", e)

        await self.notifier.show_info(f"Deleted '{file_name}' from {code}.")
        return Ok()

    async def delete_group(self, code: str, session: Optional[Session] = None) -> Result:
        """Remove every file of a group and forget it as the active code."""
        try:
            await self.store.delete_by_code(code)
        except (BackendError, UnknownError) as e:
            return await self._delete_failed(f"code group {code}", e)

        if session is not None and session.clear_if_matches(code):
            logger.info("Cleared active code %s", code)
        await self.notifier.show_info("Code group deleted successfully.")
        return Ok()

    async def _delete_failed(self, target: str, error: Exception) -> Result:
        if isinstance(error, UnknownError):
            self._log_unknown(f"deleting {target}", error)
            await self.notifier.show_error(f"Failed to delete {target}. See the logs for details.")
            return UnknownFailure(error.raw_payload)
        logger.error("Failed to delete %s: %s", target, error.message)
        await self.notifier.show_error(f"Failed to delete {target}: {error.message}")
        return BackendFailure(error.message)

    @staticmethod
    def _log_unknown(action: str, error: UnknownError) -> None:
        logger.error(
            "An unknown error occurred while %s (status %s):\n%s",
            action,
            error.status_code,
            json.dumps(error.raw_payload, indent=2, default=str),
        )
