import asyncio

import pytest

from app.client.optimistic import OptimisticState
from app.client.polling import SingleFlightPoller


def test_begin_commit_keeps_forward_value():
    state = OptimisticState([1])
    token = state.begin(lambda v: v + [2], lambda v: [x for x in v if x != 2])
    assert state.value == [1, 2]
    assert state.is_pending(token)

    state.commit(token)
    assert state.value == [1, 2]
    assert not state.has_pending


def test_rollback_applies_inverse_after_replace():
    state = OptimisticState(["a"])
    token = state.begin(lambda v: v + ["tmp"], lambda v: [x for x in v if x != "tmp"])
    state.replace(["a", "b", "tmp"])
    state.rollback(token)
    assert state.value == ["a", "b"]

    # unknown tokens are ignored
    state.rollback(token)
    assert state.value == ["a", "b"]


def test_run_rolls_back_and_reraises():
    state = OptimisticState(0)

    async def failing():
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError):
        asyncio.run(state.run(lambda v: v + 1, lambda v: v - 1, failing))
    assert state.value == 0
    assert not state.has_pending


def test_poller_skips_tick_while_in_flight():
    applied = []
    calls = []

    async def scenario():
        gate = asyncio.Event()

        async def fetch():
            calls.append(len(calls) + 1)
            await gate.wait()
            return len(calls)

        poller = SingleFlightPoller(fetch, applied.append, interval=60)
        first = poller.tick()
        await asyncio.sleep(0)
        assert poller.tick() is None
        assert poller.skipped_ticks == 1
        gate.set()
        await first
        second = poller.tick()
        assert second is not None
        await second

    asyncio.run(scenario())
    assert calls == [1, 2]
    assert applied == [1, 2]


def test_poller_discards_stale_response():
    applied = []

    async def scenario():
        slow_gate = asyncio.Event()
        responses = iter(["stale", "fresh"])

        async def fetch():
            value = next(responses)
            if value == "stale":
                await slow_gate.wait()
            return value

        poller = SingleFlightPoller(fetch, applied.append, interval=60)
        slow = poller.tick()
        await asyncio.sleep(0)
        assert await poller.fetch_now() is True
        slow_gate.set()
        await slow
        assert poller.applied_seq == 2

    asyncio.run(scenario())
    assert applied == ["fresh"]


def test_poller_reports_errors():
    errors = []

    async def fetch():
        raise ValueError("boom")

    async def scenario():
        poller = SingleFlightPoller(fetch, lambda _: None, interval=60, on_error=errors.append)
        assert await poller.fetch_now() is False

    asyncio.run(scenario())
    assert len(errors) == 1


def test_poller_loop_runs_on_interval():
    applied = []

    async def fetch():
        return "tick"

    async def scenario():
        poller = SingleFlightPoller(fetch, applied.append, interval=0.01)
        poller.start()
        assert poller.running
        await asyncio.sleep(0.1)
        await poller.stop()
        assert not poller.running

    asyncio.run(scenario())
    assert len(applied) >= 2
