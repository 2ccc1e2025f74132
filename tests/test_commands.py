import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from echosave.core.commands import (
    ADD_FILE_TO_CODE_GROUP,
    OPEN_CODE,
    UNEXPECTED_NOTICE,
    CommandRegistry,
)
from echosave.core.errors import NoActiveGroupError
from echosave.core.local_files import LocalFiles
from echosave.core.logging import ActionLogger
from echosave.core.orchestrator import DELETE_GROUP, FlowState, SyncOrchestrator
from echosave.core.repository import GroupRepository
from echosave.core.session import Session
from tests.fakes import InMemoryRecordStore, ScriptedPort


def make_registry(tmp_path, port, session=None):
    store = InMemoryRecordStore()
    files = LocalFiles(workspace_root=tmp_path)
    orch = SyncOrchestrator(GroupRepository(store, port), session or Session(), port, files)
    action_logger = ActionLogger("test", tmp_path / "logs")
    return CommandRegistry(orch, action_logger=action_logger), store, action_logger


async def test_add_without_active_group_becomes_notice(tmp_path):
    port = ScriptedPort()
    registry, store, action_logger = make_registry(tmp_path, port)

    result = await registry.execute(ADD_FILE_TO_CODE_GROUP, tmp_path / "a.txt")

    assert result is None
    assert port.errors == [str(NoActiveGroupError())]
    assert store.calls == []
    entry = json.loads(action_logger.current_log_file().read_text(encoding="utf-8"))
    assert entry["operation"] == "command_failed"
    assert entry["details"]["error_type"] == "NoActiveGroupError"


async def test_local_read_failure_becomes_notice(tmp_path):
    port = ScriptedPort()
    registry, store, _ = make_registry(tmp_path, port, session=Session("G"))

    await registry.execute("add-file-to-active-group", tmp_path / "missing.txt")

    assert len(port.errors) == 1
    assert "missing.txt" in port.errors[0]
    assert store.calls == []


async def test_unexpected_exception_is_logged_not_raised(tmp_path, caplog):
    port = ScriptedPort()
    registry, _, _ = make_registry(tmp_path, port)
    registry.orchestrator.open_code_group = AsyncMock(side_effect=RuntimeError("boom"))
    registry._handlers[OPEN_CODE] = registry.orchestrator.open_code_group

    with caplog.at_level("ERROR"):
        assert await registry.execute(OPEN_CODE) is None

    assert port.errors == [UNEXPECTED_NOTICE]
    assert "boom" in caplog.text


async def test_open_command_returns_flow_state(tmp_path):
    port = ScriptedPort(texts=["XYZ"], picks=[DELETE_GROUP])
    registry, _, _ = make_registry(tmp_path, port)

    assert await registry.execute("open-code-group") == FlowState.GROUP_DELETED


def test_unknown_command(tmp_path):
    registry, _, _ = make_registry(tmp_path, ScriptedPort())

    with pytest.raises(KeyError):
        registry.resolve("echosave.nothing")
    assert registry.command_ids == [ADD_FILE_TO_CODE_GROUP, OPEN_CODE]
