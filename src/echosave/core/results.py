"""Tagged results returned by repository write operations.

Writes never raise backend errors to their caller; they report them to the
user and hand back one of the variants below so the caller can branch on
what happened without inspecting exception shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Ok:
    """The operation completed."""

    value: Optional[Any] = None


@dataclass(frozen=True)
class BackendFailure:
    """The store rejected the operation with a recognised error."""

    message: str


@dataclass(frozen=True)
class UnknownFailure:
    """The store failed with a payload we could not interpret."""

    raw_payload: Any


Result = Union[Ok, BackendFailure, UnknownFailure]


def is_ok(result: Result) -> bool:
    return isinstance(result, Ok)
