from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .commands import CommandRegistry
from .config import Settings, check_credentials
from .errors import ConfigError
from .local_files import LocalFiles
from .logging import ActionLogger, get_action_logger
from .orchestrator import SyncOrchestrator
from .ports import InteractionPort
from .repository import GroupRepository
from .session import Session
from .store import RecordStore
from .supabase_store import SupabaseRecordStore

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Everything one host adapter needs, wired from Settings."""

    settings: Settings
    store: RecordStore
    session: Session
    files: LocalFiles
    action_logger: ActionLogger
    config_error: Optional[ConfigError] = None
    # Only set when the runtime was built around a long-lived port
    repository: Optional[GroupRepository] = None
    orchestrator: Optional[SyncOrchestrator] = None
    commands: Optional[CommandRegistry] = None

    def bind(self, port: InteractionPort) -> SyncOrchestrator:
        """Build an orchestrator for ``port`` over the shared parts."""
        repository = GroupRepository(self.store, port)
        return SyncOrchestrator(repository, self.session, port, self.files, self.action_logger)

    async def report_config_error(self) -> None:
        """Tell the user once that backend calls will fail."""
        if self.config_error is not None and self.orchestrator is not None:
            await self.orchestrator.port.show_error(f"❌ {self.config_error}")

    async def aclose(self) -> None:
        aclose = getattr(self.store, "aclose", None)
        if aclose is not None:
            await aclose()


def create_runtime(
    settings: Settings,
    port: Optional[InteractionPort],
    adapter_name: str,
    *,
    store: Optional[RecordStore] = None,
    session: Optional[Session] = None,
) -> Runtime:
    """Build store, repository, session, orchestrator and commands.

    Without a port only the shared parts are built; callers then ``bind``
    an orchestrator per interaction.

    Missing credentials do not stop startup: the problem is kept on the
    runtime for a one-time notice and every backend call fails afterwards.
    """
    config_error = None
    try:
        check_credentials(settings)
    except ConfigError as e:
        logger.error("%s", e)
        config_error = e

    if store is None:
        store = SupabaseRecordStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.table,
            timeout=settings.request_timeout,
        )

    action_logger = get_action_logger(adapter_name, settings.log_dir)
    session = session or Session()
    files = LocalFiles(settings.workspace_root, settings.fallback_dir)
    runtime = Runtime(
        settings=settings,
        store=store,
        session=session,
        files=files,
        action_logger=action_logger,
        config_error=config_error,
    )
    if port is not None:
        runtime.orchestrator = runtime.bind(port)
        runtime.repository = runtime.orchestrator.repository
        runtime.commands = CommandRegistry(runtime.orchestrator, action_logger=action_logger)
    return runtime
