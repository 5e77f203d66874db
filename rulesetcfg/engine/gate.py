# rulesetcfg/engine/gate.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ..errors import format_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateOutcome:
    ok: bool
    seq: int
    error: Optional[str] = None


class CoalescingGate:
    """
    Serialize runs of one async job and collapse bursts of requests.

    - At most one run is in flight; at most one more waits behind it.
    - A request made while a run is waiting joins that run instead of
      queueing another, so every caller of one run shares its outcome.
    - The job reads whatever state it needs when it starts, not when it was
      requested; the last request therefore always sees the latest state.
    - Never raises: job failures are logged once and returned as an outcome.
    """

    def __init__(self, work: Callable[[], Awaitable[None]], *, name: str = "job"):
        self._work = work
        self.name = name
        self._tail: Optional[asyncio.Task] = None
        self._waiting: Optional[asyncio.Task] = None
        self._seq = 0

    @property
    def busy(self) -> bool:
        return self._tail is not None and not self._tail.done()

    @property
    def runs_requested(self) -> int:
        """Number of distinct runs scheduled so far (coalesced requests share one)."""
        return self._seq

    def submit(self) -> "asyncio.Task[GateOutcome]":
        if self._waiting is not None and not self._waiting.done():
            return self._waiting
        prev = self._tail if self.busy else None
        self._seq += 1
        job = asyncio.ensure_future(self._run(prev, self._seq))
        self._tail = job
        self._waiting = job
        return job

    async def run(self) -> GateOutcome:
        # shield: cancelling one waiter must not cancel a run others share
        return await asyncio.shield(self.submit())

    async def _run(self, prev: Optional[asyncio.Task], seq: int) -> GateOutcome:
        if prev is not None:
            await asyncio.wait([prev])
        me = asyncio.current_task()
        if self._waiting is me:
            self._waiting = None
        try:
            await self._work()
            return GateOutcome(ok=True, seq=seq)
        except Exception as e:  # noqa: BLE001
            logger.error("%s run #%d failed: %s", self.name, seq, format_error(e), exc_info=True)
            return GateOutcome(ok=False, seq=seq, error=format_error(e))
        finally:
            if self._tail is me:
                self._tail = None
