"""Tests for the debounce helper."""

from __future__ import annotations

import asyncio

import pytest

from autosuggest.debounce import Debouncer


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.mark.anyio
async def test_rapid_submissions_collapse_into_latest_call() -> None:
    debouncer = Debouncer(delay=0.02)
    calls: list[int] = []

    for value in range(5):
        debouncer.submit(lambda v=value: calls.append(v))
    await asyncio.sleep(0.1)

    assert calls == [4]
    assert debouncer.pending is False


@pytest.mark.anyio
async def test_cancel_drops_pending_call() -> None:
    debouncer = Debouncer(delay=0.02)
    calls: list[str] = []

    debouncer.submit(lambda: calls.append("fired"))
    assert debouncer.pending is True
    debouncer.cancel()
    await asyncio.sleep(0.06)

    assert calls == []


@pytest.mark.anyio
async def test_coroutine_callbacks_are_awaited() -> None:
    debouncer = Debouncer(delay=0.01)
    calls: list[str] = []

    async def _callback() -> None:
        await asyncio.sleep(0)
        calls.append("async")

    debouncer.submit(_callback)
    await asyncio.sleep(0.05)

    assert calls == ["async"]


@pytest.mark.anyio
async def test_started_call_runs_to_completion_before_next() -> None:
    debouncer = Debouncer(delay=0.01)
    release = asyncio.Event()
    events: list[str] = []

    async def _slow() -> None:
        events.append("slow:start")
        await release.wait()
        events.append("slow:end")

    async def _fast() -> None:
        events.append("fast")

    debouncer.submit(_slow)
    await asyncio.sleep(0.03)
    assert debouncer.busy is True

    debouncer.submit(_fast)
    await asyncio.sleep(0.03)
    assert events == ["slow:start"]

    release.set()
    await asyncio.sleep(0.03)

    assert events == ["slow:start", "slow:end", "fast"]
    assert debouncer.busy is False
