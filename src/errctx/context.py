"""Immutable request-scoped context chains.

A :class:`Context` is a linked list of key/value links; every ``with_value``
returns a new link and leaves its parent untouched. The *current* context is
tracked with :mod:`contextvars`, so it follows a request across threads
started with ``contextvars.copy_context`` and into asyncio tasks.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from errctx.errors import NoneContextKeyError


@dataclass(frozen=True, slots=True, eq=False)
class Context:
    parent: Context | None = None
    key: Hashable | None = None
    val: Any = None

    @classmethod
    def background(cls) -> Context:
        return _BACKGROUND

    def with_value(self, key: Hashable, val: Any) -> Context:
        if key is None:
            raise NoneContextKeyError()
        return Context(parent=self, key=key, val=val)

    def value(self, key: Hashable) -> Any:
        """Nearest value bound to *key* walking towards the root, or ``None``."""
        ctx: Context | None = self
        while ctx is not None:
            if ctx.key is not None and ctx.key == key:
                return ctx.val
            ctx = ctx.parent
        return None


_BACKGROUND = Context()

_current: ContextVar[Context] = ContextVar("errctx_context", default=_BACKGROUND)


def current_context() -> Context:
    return _current.get()


@contextmanager
def use_context(ctx: Context) -> Iterator[Context]:
    """Bind *ctx* as the current context until the block exits."""
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)

