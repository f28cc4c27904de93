"""Generic inspection of exception chains.

A link's parent is whatever its ``unwrap()`` method returns, or its explicit
cause (``raise ... from ...``) when it has no such method. Links may expose an
``is_(target)`` hook to widen what they consider equal.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

E = TypeVar("E", bound=BaseException)


def unwrap(err: BaseException | None) -> BaseException | None:
    if err is None:
        return None
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any link in *err*'s chain matches *target*."""
    if err is None or target is None:
        return err is target
    for link in iter_chain(err):
        if link is target:
            return True
        hook = getattr(link, "is_", None)
        if callable(hook) and hook(target):
            return True
    return False


def find(err: BaseException | None, cls: type[E]) -> E | None:
    """First link in *err*'s chain that is an instance of *cls*."""
    for link in iter_chain(err):
        if isinstance(link, cls):
            return link
    return None
