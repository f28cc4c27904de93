"""Attach opaque key/value context to exceptions without changing them.

Errors returned from :func:`set_values` are immutable::

    err = ValueError("ERR")
    get_value(err, "foo")        # None

    err2 = set_values(err, "foo", "a")
    get_value(err2, "foo")       # "a"

    err3 = set_values(err2, "foo", "b")
    get_value(err2, "foo")       # "a"
    get_value(err3, "foo")       # "b"
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import Any

from errctx.errors import OddKeyValuesError


class ContextError(Exception):
    """A base exception paired with a read-only context map.

    ``str()`` of a ContextError is always the base exception's message and
    ``__cause__`` points at the base, so tracebacks render the original.
    ``err`` and ``ctx`` cannot be rebound; the usual exception attributes
    (traceback, notes, context) stay writable for the interpreter.
    """

    __slots__ = ("_err", "_ctx")

    def __init__(
        self, err: BaseException | None, ctx: Mapping[Hashable, Any] | None = None
    ) -> None:
        super().__init__(err)
        self._err = err
        self._ctx: Mapping[Hashable, Any] = MappingProxyType(dict(ctx or {}))
        self.__cause__ = err

    @property
    def err(self) -> BaseException | None:
        return self._err

    @property
    def ctx(self) -> Mapping[Hashable, Any]:
        return self._ctx

    def __repr__(self) -> str:
        return f"ContextError({self._err!r}, {dict(self._ctx)!r})"

    def __str__(self) -> str:
        return str(self.err)

    def unwrap(self) -> BaseException | None:
        return self.err

    def is_(self, other: BaseException | None) -> bool:
        """True if *other* is, or decorates, the same base exception."""
        return other is self.err or base(other) is self.err


def base(err: BaseException | None) -> BaseException | None:
    """Return the exception wrapped by :func:`set_values`, or *err* as-is."""
    if isinstance(err, ContextError):
        return err.err
    return err


def set_values(err: BaseException | None, *kvs: Any) -> ContextError:
    """Decorate *err* with alternating key/value pairs.

    Keys already set on *err* are kept unless overridden; *err* itself is
    never touched. Later pairs win over earlier ones with the same key.
    """
    if len(kvs) % 2:
        raise OddKeyValuesError(count=len(kvs))

    ctx: dict[Hashable, Any] = {}
    if isinstance(err, ContextError):
        ctx.update(err.ctx)
    for i in range(0, len(kvs), 2):
        ctx[kvs[i]] = kvs[i + 1]
    return ContextError(base(err), ctx)


def get_value(err: BaseException | None, key: Hashable, default: Any = None) -> Any:
    """Value set for *key* by :func:`set_values`, or *default*."""
    if not isinstance(err, ContextError):
        return default
    return err.ctx.get(key, default)
