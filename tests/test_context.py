import pytest

from errctx.context import Context, current_context, use_context
from errctx.errors import NoneContextKeyError


def test_background_is_shared_and_empty() -> None:
    assert Context.background() is Context.background()
    assert Context.background().value("missing") is None


def test_with_value_chains_without_touching_parent() -> None:
    root = Context.background()
    ctx1 = root.with_value("a", 1)
    ctx2 = ctx1.with_value("b", 2)
    ctx3 = ctx2.with_value("a", 3)

    assert root.value("a") is None
    assert ctx1.value("a") == 1 and ctx1.value("b") is None
    assert ctx2.value("a") == 1 and ctx2.value("b") == 2
    assert ctx3.value("a") == 3
    assert ctx3.parent is ctx2


def test_none_key_never_matches() -> None:
    assert Context.background().value(None) is None


def test_use_context_restores_previous() -> None:
    before = current_context()
    ctx = before.with_value("a", 1)

    with use_context(ctx) as active:
        assert active is ctx
        assert current_context() is ctx

    assert current_context() is before


def test_with_value_rejects_none_key() -> None:
    with pytest.raises(NoneContextKeyError) as info:
        Context.background().with_value(None, "lost")

    assert info.value.code == "ERRCTX_NONE_CONTEXT_KEY"
