"""loguru integration: log errors and contexts together with their KVs."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TextIO

from loguru import logger

from errctx.bridge import ctx_kv, err_kv
from errctx.config import Settings
from errctx.context import Context, current_context
from errctx.kv import merge

if TYPE_CHECKING:
    from loguru import Logger, Record


def _extra(
    err: BaseException | None, ctx: Context | None, replace_quotes: bool
) -> dict[str, str]:
    kv = merge(
        ctx_kv(ctx) if ctx is not None else None,
        err_kv(err) if err is not None else None,
    )
    return dict(kv.string_pairs(replace_quotes=replace_quotes))


def bind(
    err: BaseException | None = None,
    ctx: Context | None = None,
    replace_quotes: bool = True,
) -> Logger:
    """Logger bound with the KVs of *ctx* and *err*; the error's keys win."""
    return logger.bind(**_extra(err, ctx, replace_quotes))


def log_error(
    err: BaseException,
    message: str | None = None,
    level: str = "ERROR",
    ctx: Context | None = None,
    replace_quotes: bool = True,
) -> None:
    bind(err, ctx, replace_quotes).opt(exception=err, depth=1).log(
        level, message or str(err)
    )


def make_patcher(
    replace_quotes: bool = True, then: Callable[[Record], None] | None = None
) -> Callable[[Record], None]:
    """Build a patcher adding the current context's KV to ``record["extra"]``.

    Keys already on the record are kept. *then* runs afterwards, so an
    application's own patcher can be chained.
    """

    def patcher(record: Record) -> None:
        extra: dict[str, Any] = record["extra"]
        for key, value in _extra(None, current_context(), replace_quotes).items():
            extra.setdefault(key, value)
        if then is not None:
            then(record)

    return patcher


patch_record = make_patcher()


def configure(
    settings: Settings | None = None,
    sink: TextIO | None = None,
    patcher: Callable[[Record], None] | None = None,
) -> int:
    """Take over loguru's global setup and return the new sink's id.

    Existing handlers (loguru's default stderr one included) are removed and
    the global patcher is replaced by one that renders context KVs, followed
    by *patcher* when given.
    """
    settings = settings or Settings()
    logger.remove()
    logger.configure(
        patcher=make_patcher(replace_quotes=settings.replace_quotes, then=patcher)
    )
    return logger.add(
        sink or sys.stderr, level=settings.log_level, format=settings.log_format
    )
