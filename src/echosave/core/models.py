from __future__ import annotations

from pydantic import BaseModel


class Record(BaseModel):
    """One stored file: the (code, file_name) pair is the unique key."""
    code: str
    file_name: str
    content: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.code, self.file_name)

    def to_entry(self) -> "FileEntry":
        return FileEntry(file_name=self.file_name, content=self.content)


class FileEntry(BaseModel):
    """A file as listed inside a code group."""
    file_name: str
    content: str
