import asyncio

import pytest

from errctx.bridge import err_kv
from errctx.decorate import ContextError, base
from errctx.wrap import annotate


def _boom() -> None:
    raise ValueError("boom")


RAISE_LINE = _boom.__code__.co_firstlineno + 1


@annotate(user="alice")
def fails() -> None:
    _boom()


@annotate(user="bob")
def succeeds(x: int) -> int:
    return x * 2


@annotate(job="sync")
async def fails_async() -> None:
    await asyncio.sleep(0)
    _boom()


@annotate(job="cancel")
async def cancelled() -> None:
    raise asyncio.CancelledError()


def test_annotate_passes_through_results() -> None:
    assert succeeds(21) == 42
    assert succeeds.__name__ == "succeeds"


def test_annotate_decorates_and_marks_raise_site(captured_logs) -> None:
    with pytest.raises(ContextError) as info:
        fails()

    err = info.value
    assert str(err) == "boom"
    assert isinstance(base(err), ValueError)
    assert err_kv(err) == {
        "err": "boom",
        "user": "alice",
        "source": f"test_wrap.py:{RAISE_LINE}",
    }
    assert any("ValueError: boom" in str(m) for m in captured_logs)


def test_annotate_nested_keeps_inner_values() -> None:
    @annotate(layer="outer", user="carol")
    def outer() -> None:
        fails()

    with pytest.raises(ContextError) as info:
        outer()

    kv = err_kv(info.value)
    assert kv["layer"] == "outer"
    assert kv["user"] == "carol"
    assert kv["source"] == f"test_wrap.py:{RAISE_LINE}"


@pytest.mark.asyncio
async def test_annotate_async() -> None:
    with pytest.raises(ContextError) as info:
        await fails_async()

    assert err_kv(info.value) == {
        "err": "boom",
        "job": "sync",
        "source": f"test_wrap.py:{RAISE_LINE}",
    }


@pytest.mark.asyncio
async def test_annotate_async_passes_cancellation() -> None:
    with pytest.raises(asyncio.CancelledError):
        await cancelled()
