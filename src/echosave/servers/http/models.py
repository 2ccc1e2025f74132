from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ...core.models import FileEntry


class Notice(BaseModel):
    level: str
    message: str


class ActionResponse(BaseModel):
    """Outcome of an action together with the notices it produced."""
    ok: bool
    notices: List[Notice] = []


class GroupListing(ActionResponse):
    code: str
    files: List[FileEntry] = []


class SaveFileRequest(BaseModel):
    content: str


class AddFileRequest(BaseModel):
    """Path of a file on the server's filesystem."""
    path: str


class SessionResponse(BaseModel):
    active_code: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    backend_configured: bool
