"""
Fixed-interval polling with a single-flight guard.

Every fetch is stamped with a monotonic sequence number. A result is applied
only if no newer fetch has already been applied, so a slow response can never
overwrite fresher state.
"""

import asyncio
import itertools
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlightPoller(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        apply: Callable[[T], None],
        interval: float,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self._fetch = fetch
        self._apply = apply
        self._on_error = on_error
        self.interval = interval
        self._sequence = itertools.count(1)
        self.applied_seq = 0
        self.skipped_ticks = 0
        self._in_flight: Optional[asyncio.Task] = None
        self._loop_task: Optional[asyncio.Task] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def _run(self, seq: int) -> bool:
        try:
            result = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Poll #{seq} failed: {e}")
            if self._on_error is not None:
                self._on_error(e)
            return False
        if seq <= self.applied_seq:
            logger.debug(f"Discarding stale poll #{seq} (applied #{self.applied_seq})")
            return False
        self.applied_seq = seq
        self._apply(result)
        return True

    def tick(self) -> Optional[asyncio.Task]:
        """Start a fetch unless one is still unresolved. Returns the task, or None when skipped."""
        if self.in_flight:
            self.skipped_ticks += 1
            logger.debug("Previous poll still in flight, skipping tick")
            return None
        self._in_flight = asyncio.ensure_future(self._run(next(self._sequence)))
        return self._in_flight

    async def fetch_now(self) -> bool:
        """Fetch immediately, bypassing the single-flight guard. True if the result was applied."""
        return await self._run(next(self._sequence))

    async def _loop(self):
        while True:
            await asyncio.sleep(self.interval)
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.ensure_future(self._loop())

    async def stop(self) -> None:
        tasks = [t for t in (self._loop_task, self._in_flight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._loop_task = None
        self._in_flight = None
