"""In-memory record store and scripted interaction port for tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from echosave.core.models import Record


class InMemoryRecordStore:
    """RecordStore keeping rows in a dict keyed by (code, file_name).

    Set ``fail_with`` to an exception instance to make every call raise it.
    """

    def __init__(self, records: Sequence[Record] = ()):
        self.rows: Dict[Tuple[str, str], Record] = {r.key: r for r in records}
        self.calls: List[Tuple] = []
        self.fail_with: Optional[Exception] = None

    def _enter(self, *call) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def query(self, code: str, file_name: Optional[str] = None) -> List[Record]:
        self._enter("query", code, file_name)
        return [
            r for (c, f), r in self.rows.items()
            if c == code and (file_name is None or f == file_name)
        ]

    async def upsert(self, record: Record) -> None:
        self._enter("upsert", record.code, record.file_name)
        self.rows[record.key] = record

    async def delete_by_code_and_file(self, code: str, file_name: str) -> None:
        self._enter("delete_by_code_and_file", code, file_name)
        self.rows.pop((code, file_name), None)

    async def delete_by_code(self, code: str) -> None:
        self._enter("delete_by_code", code)
        for key in [k for k in self.rows if k[0] == code]:
            del self.rows[key]


class ScriptedPort:
    """Interaction port answering prompts from pre-loaded lists."""

    def __init__(
        self,
        texts: Sequence[Optional[str]] = (),
        picks: Sequence[Optional[str]] = (),
        files: Sequence[Optional[Path]] = (),
    ):
        self.texts = list(texts)
        self.picks = list(picks)
        self.files = list(files)
        self.infos: List[str] = []
        self.errors: List[str] = []
        self.pick_requests: List[Tuple[List[str], str]] = []
        self.documents: List[Path] = []

    async def show_info(self, message: str) -> None:
        self.infos.append(message)

    async def show_error(self, message: str) -> None:
        self.errors.append(message)

    async def prompt_text(self, prompt: str) -> Optional[str]:
        return self.texts.pop(0) if self.texts else None

    async def pick(self, items: Sequence[str], placeholder: str) -> Optional[str]:
        self.pick_requests.append((list(items), placeholder))
        return self.picks.pop(0) if self.picks else None

    async def pick_local_file(self) -> Optional[Path]:
        return self.files.pop(0) if self.files else None

    async def show_document(self, path: Path) -> None:
        self.documents.append(path)
