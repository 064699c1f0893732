"""Weather glance dashboard — FastAPI backend serving the latest display snapshot."""

import asyncio
import contextlib
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse

from glance.chart.local_clock import LocalClock
from glance.config.loader import config_hash
from glance.config.schema import GlanceConfig
from glance.daemon import RefreshDaemon
from glance.models.common import utc_now_iso
from glance.pipeline.refresh_cycle import RefreshCycle
from glance.pipeline.refresh_state import RefreshController
from glance.reporting.formatters import state_to_dict

DASHBOARD_HTML = Path(__file__).parent / "static" / "dashboard.html"


def create_app(
    config: GlanceConfig | None = None,
    controller: RefreshController | None = None,
    start_daemon: bool = True,
) -> FastAPI:
    """Build the dashboard app.

    Without an explicit controller one is wired to a real RefreshCycle. When
    start_daemon is set the lifespan runs the fixed-interval refresh loop and
    abandons any in-flight cycle on shutdown.
    """
    config = config or GlanceConfig()
    clock = LocalClock(config.location.timezone)
    cycle: RefreshCycle | None = None
    if controller is None:
        cycle = RefreshCycle.from_config(config)
        controller = RefreshController(cycle.run)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        daemon_task: asyncio.Task | None = None
        daemon: RefreshDaemon | None = None
        if start_daemon:
            daemon = RefreshDaemon(config, controller)
            daemon_task = asyncio.create_task(daemon.run())
        try:
            yield
        finally:
            if daemon is not None and daemon_task is not None:
                daemon.stop()
                daemon_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await daemon_task
            controller.cancel()
            if cycle is not None:
                await cycle.close()

    app = FastAPI(title="Weather Glance", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.controller = controller
    app.state.clock = clock

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/snapshot")
    def get_snapshot():
        """Refresh state plus the last fully resolved snapshot, if any."""
        return state_to_dict(controller.state, clock)

    @app.post("/api/refresh")
    async def refresh():
        """Manual refresh. Ignored while a cycle is already in flight."""
        ran = await controller.trigger("manual")
        if not ran:
            return {"status": "ignored", "reason": "refresh already in flight"}
        return {"status": controller.state.status.value}

    @app.get("/api/health")
    def get_health():
        state = controller.state
        snapshot = state.snapshot
        return {
            "status": state.status.value,
            "has_data": snapshot is not None,
            "degraded": snapshot.degraded if snapshot is not None else None,
            "last_error": state.error,
            "timestamp": utc_now_iso(),
        }

    @app.get("/api/config")
    def get_config():
        return {"hash": config_hash(config), "config": config.model_dump()}

    # ── Serve dashboard ─────────────────────────────────────────────

    @app.get("/")
    def serve_dashboard():
        if DASHBOARD_HTML.exists():
            return FileResponse(DASHBOARD_HTML, media_type="text/html")
        return HTMLResponse("<h1>Dashboard not found</h1>", status_code=404)

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8777)
