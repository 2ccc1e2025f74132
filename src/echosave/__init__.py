"""
EchoSave: share groups of text files under a short code.

Files are stored in a Supabase table keyed by (code, file_name); any client
that knows the code can list, open, add or delete the files of that group.
"""

__version__ = "0.1.0"

# Re-export core components for convenience
from .core import CommandRegistry, GroupRepository, Session, SyncOrchestrator

__all__ = [
    "CommandRegistry",
    "GroupRepository",
    "Session",
    "SyncOrchestrator",
]
