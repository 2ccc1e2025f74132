"""
Core module for EchoSave.

Provides the storage-addressing and synchronization logic shared by every
host adapter.

Exports:
- RecordStore / SupabaseRecordStore: remote (code, file_name, content) table
- GroupRepository: list/save/delete files of a code group
- Session: the active code group
- SyncOrchestrator / CommandRegistry: interactive flows and their commands
- Error types and tagged results
"""

from .commands import ADD_FILE_TO_CODE_GROUP, OPEN_CODE, CommandRegistry
from .config import Settings, check_credentials, load_settings
from .errors import (
    BackendError,
    ConfigError,
    EchoSaveError,
    InvalidKeyError,
    LocalIOError,
    NoActiveGroupError,
    UnknownError,
)
from .local_files import LocalFiles
from .models import FileEntry, Record
from .orchestrator import FlowState, SyncOrchestrator
from .ports import InteractionPort, Notifier
from .repository import GroupRepository
from .results import BackendFailure, Ok, Result, UnknownFailure, is_ok
from .runtime import Runtime, create_runtime
from .session import Session
from .store import RecordStore
from .supabase_store import SupabaseRecordStore

__all__ = [
    "ADD_FILE_TO_CODE_GROUP",
    "OPEN_CODE",
    "BackendError",
    "BackendFailure",
    "CommandRegistry",
    "ConfigError",
    "EchoSaveError",
    "FileEntry",
    "FlowState",
    "GroupRepository",
    "InteractionPort",
    "InvalidKeyError",
    "LocalFiles",
    "LocalIOError",
    "NoActiveGroupError",
    "Notifier",
    "Ok",
    "Record",
    "RecordStore",
    "Result",
    "Runtime",
    "Session",
    "Settings",
    "SupabaseRecordStore",
    "SyncOrchestrator",
    "UnknownError",
    "UnknownFailure",
    "check_credentials",
    "create_runtime",
    "is_ok",
    "load_settings",
]
