"""
Optimistic local state with explicit rollback.

A mutation is applied locally before its request resolves. The inverse is
computed up front and parked under a pending token; on failure the inverse is
applied, on success the token is simply dropped.
"""

import itertools
import logging
from typing import Awaitable, Callable, Dict, Generic, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R")

Mutation = Callable[[S], S]


class OptimisticState(Generic[S]):
    def __init__(self, value: S):
        self._value = value
        self._pending: Dict[int, Mutation] = {}
        self._tokens = itertools.count(1)

    @property
    def value(self) -> S:
        return self._value

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def is_pending(self, token: int) -> bool:
        return token in self._pending

    def begin(self, forward: Mutation, inverse: Mutation) -> int:
        """Apply forward now and remember inverse. Returns the pending token."""
        token = next(self._tokens)
        self._pending[token] = inverse
        self._value = forward(self._value)
        return token

    def commit(self, token: int) -> None:
        self._pending.pop(token, None)

    def rollback(self, token: int) -> None:
        inverse = self._pending.pop(token, None)
        if inverse is None:
            logger.debug(f"Rollback for unknown token {token} ignored")
            return
        self._value = inverse(self._value)

    def replace(self, value: S) -> None:
        """Install authoritative state. Pending inverses stay registered."""
        self._value = value

    async def run(self, forward: Mutation, inverse: Mutation, request: Callable[[], Awaitable[R]]) -> R:
        """begin, await request, then commit; rolls back and re-raises on any failure"""
        token = self.begin(forward, inverse)
        try:
            result = await request()
        except BaseException:
            self.rollback(token)
            raise
        self.commit(token)
        return result
