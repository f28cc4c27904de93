"""Bridges between :class:`~errctx.kv.KV` bags and errors or contexts."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from errctx.context import Context, current_context, use_context
from errctx.decorate import get_value, set_values
from errctx.kv import KV, merge
from errctx.mark import line, mark_skip


class _KVKey(enum.Enum):
    KV = 0


def err_with_kv(
    err: BaseException | None, *kvs: Mapping[str, Any]
) -> BaseException | None:
    """Embed the merge of *kvs* into *err* and mark the caller.

    If *err* already carries a KV the result holds the merge of all of them,
    with the newly passed ones taking precedence.
    """
    if err is None:
        return None
    kv = merge(get_value(err, _KVKey.KV), *kvs)
    return mark_skip(set_values(err, _KVKey.KV, kv), 1)


def err_kv(err: BaseException | None) -> KV:
    """Copy of the KV embedded by :func:`err_with_kv`.

    ``"err"`` is always set to the error's message. ``"source"`` is set to the
    marked line unless the KV already has one.
    """
    if err is None:
        return KV()
    kv: KV = get_value(err, _KVKey.KV, KV())
    kv = kv.set("err", str(err))
    source = line(err)
    if source is not None and kv.get("source") is None:
        kv = kv.set("source", source)
    return kv


def ctx_with_kv(ctx: Context, *kvs: Mapping[str, Any]) -> Context:
    """Return a new Context whose KV is the existing one merged with *kvs*."""
    kv = merge(ctx.value(_KVKey.KV), *kvs)
    return ctx.with_value(_KVKey.KV, kv)


def ctx_kv(ctx: Context) -> KV:
    """KV embedded by :func:`ctx_with_kv`, or an empty KV."""
    kv = ctx.value(_KVKey.KV)
    if kv is None:
        return KV()
    return kv.copy()


@contextmanager
def bind_kv(*kvs: Mapping[str, Any]) -> Iterator[Context]:
    """Merge *kvs* into the current context's KV for the duration of the block."""
    with use_context(ctx_with_kv(current_context(), *kvs)) as ctx:
        yield ctx
