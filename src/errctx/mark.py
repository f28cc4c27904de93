from __future__ import annotations

import enum
import os
import sys
from types import TracebackType

from loguru import logger

from errctx.decorate import ContextError, get_value, set_values


class _MarkKey(enum.Enum):
    SOURCE = 0


def _format(filename: str, lineno: int) -> str:
    return f"{os.path.basename(filename)}:{lineno}"


def mark(err: BaseException | None) -> BaseException | None:
    """Record the file and line that called ``mark`` on *err*.

    Later calls never overwrite a previously recorded line.
    """
    return mark_skip(err, 1)


def mark_skip(err: BaseException | None, skip: int) -> BaseException | None:
    """Like :func:`mark` but skips *skip* extra frames.

    ``skip=0`` marks the caller of ``mark_skip`` itself.
    """
    if err is None:
        return None
    if get_value(err, _MarkKey.SOURCE) is not None:
        return err
    try:
        frame = sys._getframe(1 + skip)
    except ValueError:
        logger.trace("No frame at depth {} to mark {!r}", skip, err)
        return err
    return set_values(
        err, _MarkKey.SOURCE, _format(frame.f_code.co_filename, frame.f_lineno)
    )


def mark_traceback(err: BaseException | None) -> BaseException | None:
    """Mark *err* with the innermost frame of its traceback (the raise site)."""
    if err is None:
        return None
    if get_value(err, _MarkKey.SOURCE) is not None:
        return err
    tb: TracebackType | None = err.__traceback__
    if tb is None and isinstance(err, ContextError) and err.err is not None:
        tb = err.err.__traceback__
    if tb is None:
        return err
    while tb.tb_next is not None:
        tb = tb.tb_next
    return set_values(
        err, _MarkKey.SOURCE, _format(tb.tb_frame.f_code.co_filename, tb.tb_lineno)
    )


def line(err: BaseException | None) -> str | None:
    """File and line where ``mark`` was first called on *err*, if any."""
    source = get_value(err, _MarkKey.SOURCE)
    return source if isinstance(source, str) else None
