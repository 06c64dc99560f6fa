"""Tests for :mod:`codealchemy.ui.domain.clipboard_operation`."""

from __future__ import annotations

import asyncio

import pytest

from codealchemy.ui.domain.clipboard_operation import ClipboardOperation
from codealchemy.ui.models.workspace_models import CopyResult, CopyState

from tests.helpers import FakeScheduler, StubClipboardProvider


def _operation(
    scheduler: FakeScheduler,
    provider: StubClipboardProvider | None,
    *,
    fallback: StubClipboardProvider | None = None,
    changes: list[CopyState] | None = None,
) -> ClipboardOperation:
    return ClipboardOperation(
        provider,
        scheduler,
        fallback=fallback,
        reset_delay_ms=1800,
        on_change=changes.append if changes is not None else None,
    )


@pytest.mark.asyncio
async def test_successful_copy_sets_flag_then_resets(scheduler: FakeScheduler) -> None:
    provider = StubClipboardProvider()
    changes: list[CopyState] = []
    operation = _operation(scheduler, provider, changes=changes)

    result = await operation.copy("abc")

    assert result.ok
    assert provider.writes == ["abc"]
    assert operation.copied
    assert operation.state.reset_at == pytest.approx(1.8)

    scheduler.advance(1799)
    assert operation.copied
    scheduler.advance(1)
    assert not operation.copied
    assert changes == [CopyState(copied=True, reset_at=1.8), CopyState()]


@pytest.mark.asyncio
async def test_second_copy_extends_reset(scheduler: FakeScheduler) -> None:
    operation = _operation(scheduler, StubClipboardProvider())

    await operation.copy("one")
    scheduler.advance(1000)
    await operation.copy("two")

    scheduler.advance(1000)
    assert operation.copied
    scheduler.advance(800)
    assert not operation.copied
    assert scheduler.pending == 0


@pytest.mark.asyncio
async def test_empty_value_is_rejected(scheduler: FakeScheduler) -> None:
    provider = StubClipboardProvider()
    operation = _operation(scheduler, provider)

    result = await operation.copy("")

    assert not result.ok
    assert provider.writes == []
    assert not operation.copied


@pytest.mark.asyncio
async def test_fallback_used_when_primary_fails(scheduler: FakeScheduler) -> None:
    primary = StubClipboardProvider(fail=True)
    fallback = StubClipboardProvider()
    operation = _operation(scheduler, primary, fallback=fallback)

    result = await operation.copy("xyz")

    assert result.ok
    assert fallback.writes == ["xyz"]
    assert operation.copied


@pytest.mark.asyncio
async def test_total_failure_keeps_previous_state(scheduler: FakeScheduler) -> None:
    provider = StubClipboardProvider()
    operation = _operation(scheduler, provider)
    await operation.copy("ok")
    previous = operation.state

    provider.fail = True
    result = await operation.copy("broken")

    assert not result.ok
    assert operation.state == previous


@pytest.mark.asyncio
async def test_failure_without_providers(scheduler: FakeScheduler) -> None:
    operation = _operation(scheduler, None)

    result = await operation.copy("anything")

    assert not result.ok
    assert not operation.copied


@pytest.mark.asyncio
async def test_superseded_copy_does_not_touch_state(scheduler: FakeScheduler) -> None:
    gate = asyncio.Event()
    provider = StubClipboardProvider(gate=gate)
    changes: list[CopyState] = []
    operation = _operation(scheduler, provider, changes=changes)

    first = asyncio.ensure_future(operation.copy("first"))
    second = asyncio.ensure_future(operation.copy("second"))
    await asyncio.sleep(0)
    gate.set()
    first_result, second_result = await asyncio.gather(first, second)

    assert first_result == CopyResult(ok=False, superseded=True)
    assert second_result == CopyResult(ok=True)
    assert provider.writes == ["first", "second"]
    assert [state.copied for state in changes] == [True]
    assert scheduler.pending == 1


@pytest.mark.asyncio
async def test_superseded_success_does_not_confirm_a_newer_failure(scheduler: FakeScheduler) -> None:
    gate = asyncio.Event()
    provider = StubClipboardProvider(gate=gate)
    operation = _operation(scheduler, provider)

    first = asyncio.ensure_future(operation.copy("first"))
    await asyncio.sleep(0)
    provider.gate = None
    provider.fail = True
    second_result = await operation.copy("second")
    provider.fail = False
    gate.set()
    first_result = await first

    assert provider.writes == ["first"]
    assert not first_result.ok and first_result.superseded
    assert second_result == CopyResult(ok=False)
    assert not operation.copied
    assert scheduler.pending == 0


@pytest.mark.asyncio
async def test_cancel_clears_flag_and_timer(scheduler: FakeScheduler) -> None:
    changes: list[CopyState] = []
    operation = _operation(scheduler, StubClipboardProvider(), changes=changes)
    await operation.copy("abc")

    operation.cancel()

    assert not operation.copied
    assert scheduler.pending == 0
    assert changes[-1] == CopyState()


@pytest.mark.asyncio
async def test_cancel_while_in_flight_discards_result(scheduler: FakeScheduler) -> None:
    gate = asyncio.Event()
    operation = _operation(scheduler, StubClipboardProvider(gate=gate))

    task = asyncio.ensure_future(operation.copy("late"))
    await asyncio.sleep(0)
    operation.cancel()
    gate.set()
    result = await task

    assert result.superseded and not result.ok
    assert not operation.copied
    assert scheduler.pending == 0
