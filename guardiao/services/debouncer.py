# guardiao/services/debouncer.py
"""
Trailing debounce for search-as-you-type lookups.

Each submit() restarts a single settle timer; the lookup only runs once input
has been quiet for `delay` seconds. A lookup that is already running is not
interrupted, but its result is dropped if the input changed meanwhile or the
debouncer was closed, so a slow query can never overwrite a newer answer.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from guardiao.config import settings
from guardiao.utils.logger import get_logger

logger = get_logger(__name__)

Lookup = Callable[[Any], Awaitable[Any]]
Deliver = Callable[[Any, Any], Awaitable[None]]


class Debouncer:
    def __init__(self, lookup: Lookup, deliver: Deliver, delay: Optional[float] = None):
        self._lookup = lookup
        self._deliver = deliver
        self.delay = settings.LOOKUP_DEBOUNCE_SECONDS if delay is None else delay
        self._latest: Any = None
        self._timer: Optional[asyncio.Task] = None
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def submit(self, value: Any):
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self._latest = value
        self._cancel_timer()
        task = asyncio.create_task(self._run(value))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self):
        """Forget the current input: drop the pending timer and any result still on its way."""
        self._latest = None
        self._cancel_timer()

    def _cancel_timer(self):
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def _run(self, value: Any):
        await asyncio.sleep(self.delay)
        if self._timer is asyncio.current_task():
            self._timer = None   # in flight now; later submits must not cancel it

        try:
            result = await self._lookup(value)
        except Exception as e:
            logger.error(f"[LOOKUP] Lookup for {value!r} failed: {e}")
            return

        if self._closed or value != self._latest:
            logger.debug(f"[LOOKUP] Discarding stale result for {value!r}")
            return
        await self._deliver(value, result)

    async def close(self):
        """Cancel the pending timer and drop results of lookups still running."""
        self._closed = True
        self._cancel_timer()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
