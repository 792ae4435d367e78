"""Per-key serialization guard for item and mastery mutations."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass, field

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class _KeyGuardState:
    """Lock plus the number of tasks holding or waiting on it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    waiters: int = 0


class MutationGuard:
    """
    Serialize mutations that share a key within this process.

    Keys are strings such as "potion:<id>" or "mastery:potion:<character>:<template>".
    State for a key is dropped once no task holds or waits on it. Cross-process
    races are caught by the version column on item rows.
    """

    def __init__(self) -> None:
        self._states: dict[str, _KeyGuardState] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        state = self._states.get(key)
        if state is None:
            state = _KeyGuardState()
            self._states[key] = state
        state.waiters += 1
        contended = state.lock.locked()
        if contended:
            logger.debug("Waiting for mutation guard", lock_key=key)
        try:
            async with state.lock:
                yield
        finally:
            state.waiters -= 1
            if state.waiters == 0 and self._states.get(key) is state:
                del self._states[key]

    @asynccontextmanager
    async def acquire_many(self, keys: Iterable[str]) -> AsyncIterator[None]:
        """Hold every key at once. Keys are taken in sorted order and duplicates collapse to one."""
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.acquire(key))
            yield

    def active_keys(self) -> list[str]:
        return list(self._states)
