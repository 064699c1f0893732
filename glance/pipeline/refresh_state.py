"""Refresh state machine and the in-flight guarded controller.

States: idle -> fetching -> displaying | displaying_stale. A fetching state
keeps the previously resolved snapshot so the display never blanks while a
refresh is running. Transitions are pure functions over RefreshState; the
controller is the only writer.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from glance.models.common import utc_now
from glance.models.display import DisplaySnapshot

logger = logging.getLogger(__name__)


class RefreshStatus(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"
    DISPLAYING = "displaying"
    DISPLAYING_STALE = "displaying_stale"


@dataclass(frozen=True)
class RefreshState:
    status: RefreshStatus = RefreshStatus.IDLE
    snapshot: DisplaySnapshot | None = None
    error: str | None = None
    token: int = 0  # identifies the cycle allowed to complete
    resumed_status: RefreshStatus = RefreshStatus.IDLE  # restored on abandon
    updated_at: datetime | None = None

    @property
    def in_flight(self) -> bool:
        return self.status is RefreshStatus.FETCHING

    @property
    def is_loading(self) -> bool:
        """Fetching with nothing rendered yet: show a placeholder."""
        return self.in_flight and self.snapshot is None


def begin_fetch(state: RefreshState, token: int) -> RefreshState:
    return replace(
        state,
        status=RefreshStatus.FETCHING,
        token=token,
        resumed_status=state.status,
        updated_at=utc_now(),
    )


def complete_fetch(
    state: RefreshState, token: int, snapshot: DisplaySnapshot
) -> RefreshState:
    if token != state.token or not state.in_flight:
        return state
    return replace(
        state,
        status=RefreshStatus.DISPLAYING,
        snapshot=snapshot,
        error=None,
        updated_at=utc_now(),
    )


def fail_fetch(state: RefreshState, token: int, error: str) -> RefreshState:
    if token != state.token or not state.in_flight:
        return state
    status = (
        RefreshStatus.DISPLAYING_STALE
        if state.snapshot is not None
        else RefreshStatus.IDLE
    )
    return replace(state, status=status, error=error, updated_at=utc_now())


def abandon_fetch(state: RefreshState, token: int) -> RefreshState:
    """Drop a cancelled cycle without writing any of its results."""
    if token != state.token or not state.in_flight:
        return state
    return replace(state, status=state.resumed_status, updated_at=utc_now())


class RefreshController:
    """Single entry point for timer ticks and manual refreshes.

    A trigger that arrives while a cycle is in flight is ignored rather than
    queued, so there is never more than one pair of outstanding requests.
    """

    def __init__(self, run_cycle: Callable[[], Awaitable[DisplaySnapshot]]):
        self._run_cycle = run_cycle
        self.state = RefreshState()
        self._next_token = 0
        self._task: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def trigger(self, reason: str = "timer") -> bool:
        """Run one refresh cycle. Returns False if one was already running."""
        if self.in_flight:
            logger.info("Refresh (%s) ignored: a cycle is already in flight", reason)
            return False

        self._next_token += 1
        token = self._next_token
        self.state = begin_fetch(self.state, token)
        logger.info("Refresh #%d starting (%s)", token, reason)

        self._task = asyncio.ensure_future(self._run_cycle())
        try:
            snapshot = await self._task
        except asyncio.CancelledError:
            self.state = abandon_fetch(self.state, token)
            logger.info("Refresh #%d abandoned", token)
            raise
        except Exception as e:
            logger.exception("Refresh #%d crashed", token)
            self.state = fail_fetch(self.state, token, f"{type(e).__name__}: {e}")
        else:
            self.state = complete_fetch(self.state, token, snapshot)
        finally:
            self._task = None
        return True

    def cancel(self) -> None:
        """Abandon the in-flight cycle, if any. Its results are never written."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.state = abandon_fetch(self.state, self.state.token)
