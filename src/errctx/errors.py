from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(eq=False, slots=True)
class ErrctxError(Exception):
    """Raised when errctx itself is called incorrectly.

    These never wrap or decorate the caller's errors; they report misuse of
    the API such as an unpaired key. ``context`` holds the offending input.
    """

    message: str
    code: str | None = None
    context: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False, slots=True, kw_only=True)
class OddKeyValuesError(ErrctxError):
    count: int
    message: str = field(init=False)
    code: str = field(init=False, default="ERRCTX_ODD_KEY_VALUES")

    def __post_init__(self) -> None:
        self.message = f"Expected alternating key/value pairs, got {self.count} items"
        self.context = {"count": self.count}


@dataclass(eq=False, slots=True, kw_only=True)
class NoneContextKeyError(ErrctxError):
    message: str = field(init=False, default="Context keys must not be None")
    code: str = field(init=False, default="ERRCTX_NONE_CONTEXT_KEY")
