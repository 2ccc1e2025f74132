import sys
from pathlib import Path

import pytest

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from echosave.core.errors import InvalidKeyError
from echosave.core.session import Session


def test_new_session_has_no_active_code():
    assert Session().get_active() is None


def test_set_active_overwrites():
    session = Session()
    session.set_active("ONE")
    session.set_active("TWO")
    assert session.get_active() == "TWO"
    assert session.active_code == "TWO"


def test_set_active_rejects_empty_code():
    with pytest.raises(InvalidKeyError):
        Session().set_active("")


def test_clear_if_matches():
    session = Session("XYZ")

    assert session.clear_if_matches("ABC") is False
    assert session.get_active() == "XYZ"

    assert session.clear_if_matches("XYZ") is True
    assert session.get_active() is None
    assert session.clear_if_matches("XYZ") is False
