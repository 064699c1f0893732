"""Refresh daemon: re-runs the refresh cycle on a fixed interval.

Usage:
    python -m glance daemon                 # every refresh_interval_minutes
    python -m glance daemon --interval 300  # every 5 minutes
"""

import asyncio
import logging
import signal
import time
from collections.abc import Awaitable, Callable

from glance.config.schema import GlanceConfig
from glance.pipeline.refresh_state import (
    RefreshController,
    RefreshState,
    RefreshStatus,
)

logger = logging.getLogger(__name__)


class RefreshDaemon:
    """Drives a RefreshController from a fixed-interval timer until stopped."""

    def __init__(
        self,
        config: GlanceConfig,
        controller: RefreshController,
        interval: int | None = None,
        on_refresh: Callable[[RefreshState], None] | None = None,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ):
        self.config = config
        self.controller = controller
        self.interval = (
            interval
            if interval is not None
            else config.display.refresh_interval_minutes * 60
        )
        self.on_refresh = on_refresh
        self.on_close = on_close
        self._stop = asyncio.Event()
        self._total_cycles = 0
        self._total_degraded = 0
        self._total_failures = 0

    def start(self) -> None:
        """Blocking entry point for the CLI."""
        print(
            f"🔄 Refresh daemon started for {self.config.location.name} "
            f"(every {self.interval}s)"
        )
        try:
            asyncio.run(self._main())
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        print(
            f"⏹️  Daemon stopped — {self._total_cycles} refreshes "
            f"({self._total_degraded} degraded, {self._total_failures} failed)"
        )

    async def _main(self) -> None:
        self._setup_signals()
        try:
            await self.run()
        finally:
            if self.on_close is not None:
                await self.on_close()

    async def run(self) -> None:
        """Timer loop. Returns once stop() is called."""
        logger.info(
            "Daemon started — location=%s interval=%ds",
            self.config.location.name, self.interval,
        )
        try:
            while not self._stop.is_set():
                cycle_start = time.monotonic()
                await self._run_one_refresh()

                remaining = max(0.0, self.interval - (time.monotonic() - cycle_start))
                try:
                    await asyncio.wait_for(self._stop.wait(), timeout=remaining)
                except asyncio.TimeoutError:
                    pass
        finally:
            self.controller.cancel()
            logger.info(
                "Daemon stopped — %d refreshes (%d degraded, %d failed)",
                self._total_cycles, self._total_degraded, self._total_failures,
            )

    def stop(self) -> None:
        self._stop.set()

    async def _run_one_refresh(self) -> None:
        ran = await self.controller.trigger("timer")
        if not ran:
            return
        self._total_cycles += 1

        state = self.controller.state
        if state.status is RefreshStatus.DISPLAYING:
            if state.snapshot is not None and state.snapshot.degraded:
                self._total_degraded += 1
                logger.warning("Refresh #%d produced fallback data", state.token)
        else:
            self._total_failures += 1

        if self.on_refresh is not None:
            self.on_refresh(state)

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def _stop(signum: int) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, shutting down gracefully...", sig_name)
            print(f"\n⏹️  Received {sig_name}, finishing current refresh...")
            self.stop()

        for signum in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(signum, _stop, signum)
            except (NotImplementedError, RuntimeError):
                # add_signal_handler is unavailable off the main thread / on Windows
                logger.debug("Signal handler for %s not installed", signum)
