#%% Custom Exceptions
"""
Exception types for EchoSave.

Every error raised by the core derives from EchoSaveError so host adapters can
catch them at the command boundary and turn them into user notices.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class EchoSaveError(Exception):
    """Base exception class for all EchoSave errors."""
    pass


class ConfigError(EchoSaveError):
    """Raised when backend credentials or settings are missing or invalid."""
    pass


class InvalidKeyError(EchoSaveError):
    """Raised when a code or file name is empty."""
    pass


class NoActiveGroupError(EchoSaveError):
    """Raised when a file is added while no code group is active."""

    def __init__(self, message: str = "No active code group selected. Please select a code group first."):
        super().__init__(message)


class BackendError(EchoSaveError):
    """Raised when the record store reports a recognised error or is unreachable."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint


class UnknownError(EchoSaveError):
    """Raised when the record store answers with an error payload of unknown shape."""

    def __init__(self, raw_payload: Any, *, status_code: Optional[int] = None):
        super().__init__(f"Unrecognised error payload (status {status_code})")
        self.raw_payload = raw_payload
        self.status_code = status_code


class LocalIOError(EchoSaveError):
    """Raised when a local file cannot be read or written."""

    def __init__(self, path: Path | str, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot access {self.path}: {cause}")
