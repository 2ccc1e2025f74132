"""Record store contract.

This module defines the minimal interface the rest of EchoSave needs from a
remote table-like store. Any backend able to filter rows by equality, upsert
with a declared conflict key and delete by equality can implement it.

Architecture:
- RecordStore: Protocol every backend implements
- SupabaseRecordStore (supabase_store.py): PostgREST implementation over httpx
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .models import Record

CONFLICT_KEY = ("code", "file_name")


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for backends holding (code, file_name, content) rows.

    Implementations raise BackendError for transport, authentication and
    query failures, and UnknownError for error payloads they cannot parse.
    """

    async def query(self, code: str, file_name: Optional[str] = None) -> List[Record]:  # pragma: no cover - protocol
        """Return every record under ``code`` (optionally one file). Order is unspecified.

        An empty list means nothing matched; it is not an error.
        """
        ...

    async def upsert(self, record: Record) -> None:  # pragma: no cover - protocol
        """Insert ``record`` or replace the content of the row with the same key.

        Must be atomic per call; the conflict key is exactly (code, file_name).
        """
        ...

    async def delete_by_code_and_file(self, code: str, file_name: str) -> None:  # pragma: no cover - protocol
        """Remove at most one record. Removing a missing record is a no-op."""
        ...

    async def delete_by_code(self, code: str) -> None:  # pragma: no cover - protocol
        """Remove every record of the group. An empty group is a no-op."""
        ...
