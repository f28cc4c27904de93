from __future__ import annotations

import asyncio
import functools
import inspect
import traceback
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar, cast

from loguru import logger

from errctx.bridge import err_with_kv
from errctx.kv import KV
from errctx.mark import mark_traceback

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int = 6) -> str:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def _annotated(exc: Exception, kv: KV) -> BaseException:
    logger.opt(exception=exc).debug("{}", _format_tail(exc))
    # mark first so the raise site wins over this module's line
    return cast(BaseException, err_with_kv(mark_traceback(exc), kv))


def annotate(**values: Any) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator re-raising any exception decorated with *values* as a KV."""
    kv = KV(values)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    raise _annotated(exc, kv)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                raise _annotated(exc, kv)

        return sync_wrapper  # type: ignore[return-value]

    return decorator
