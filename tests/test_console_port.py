import sys
from pathlib import Path
from unittest.mock import patch

import typer

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from echosave.adapters.console.port import ConsolePort

ITEMS = ["a.txt", "➕ Add File"]


async def test_pick_by_number():
    with patch("typer.prompt", return_value="2"):
        assert await ConsolePort().pick(ITEMS, "Select") == "➕ Add File"


async def test_pick_by_text_and_cancel():
    port = ConsolePort()
    with patch("typer.prompt", return_value="a.txt"):
        assert await port.pick(ITEMS, "Select") == "a.txt"
    with patch("typer.prompt", return_value=""):
        assert await port.pick(ITEMS, "Select") is None
    with patch("typer.prompt", side_effect=typer.Abort()):
        assert await port.pick(ITEMS, "Select") is None


async def test_pick_out_of_range(capsys):
    with patch("typer.prompt", return_value="9"):
        assert await ConsolePort().pick(ITEMS, "Select") is None
    assert "Invalid choice: 9" in capsys.readouterr().err


async def test_prompt_text_empty_is_none():
    with patch("typer.prompt", return_value=""):
        assert await ConsolePort().prompt_text("Enter a code") is None


async def test_show_document_without_launch(tmp_path, capsys):
    with patch("typer.launch") as launch:
        await ConsolePort(launch_documents=False).show_document(tmp_path / "a.txt")
    launch.assert_not_called()
    assert "a.txt" in capsys.readouterr().out
