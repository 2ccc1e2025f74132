from __future__ import annotations

from typing import Optional

from .errors import InvalidKeyError


class Session:
    """Holds the active code group for one host process.

    The active code is set when the user opens a group and is the implicit
    target of "add file to active group". Only one user action is expected
    to mutate it at a time, so there is no locking.
    """

    def __init__(self, active_code: Optional[str] = None):
        self._active_code = active_code or None

    @property
    def active_code(self) -> Optional[str]:
        return self._active_code

    def get_active(self) -> Optional[str]:
        return self._active_code

    def set_active(self, code: str) -> None:
        if not code:
            raise InvalidKeyError("Code cannot be empty")
        self._active_code = code

    def clear_if_matches(self, code: str) -> bool:
        """Forget the active code if it is ``code``. Returns True when cleared."""
        if self._active_code is not None and self._active_code == code:
            self._active_code = None
            return True
        return False

    def __repr__(self) -> str:
        return f"Session(active_code={self._active_code!r})"
