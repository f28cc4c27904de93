from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger


@pytest.fixture
def captured_logs() -> Iterator[list[Any]]:
    """Collect loguru messages (with their records) emitted during a test."""
    messages: list[Any] = []
    logger.enable("errctx")
    sink_id = logger.add(messages.append, level="TRACE", format="{message}")
    yield messages
    logger.remove(sink_id)
    logger.disable("errctx")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Drop ERRCTX_* variables and run from an empty directory (no .env)."""
    for name in ("ERRCTX_LOG_LEVEL", "ERRCTX_LOG_FORMAT", "ERRCTX_REPLACE_QUOTES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
