"""Attach and retrieve immutable contextual metadata on errors and contexts."""

from loguru import logger

from errctx.bridge import bind_kv, ctx_kv, ctx_with_kv, err_kv, err_with_kv
from errctx.chain import find, is_, iter_chain, unwrap
from errctx.context import Context, current_context, use_context
from errctx.decorate import ContextError, base, get_value, set_values
from errctx.errors import ErrctxError, NoneContextKeyError, OddKeyValuesError
from errctx.kv import KV, merge
from errctx.mark import line, mark, mark_skip, mark_traceback

logger.disable("errctx")

__all__ = [
    "KV",
    "Context",
    "ContextError",
    "ErrctxError",
    "NoneContextKeyError",
    "OddKeyValuesError",
    "base",
    "bind_kv",
    "ctx_kv",
    "ctx_with_kv",
    "current_context",
    "err_kv",
    "err_with_kv",
    "find",
    "get_value",
    "is_",
    "iter_chain",
    "line",
    "mark",
    "mark_skip",
    "mark_traceback",
    "merge",
    "set_values",
    "unwrap",
    "use_context",
]
