"""CLI entry point for the weather glance display."""

import argparse
import asyncio
import logging
from pathlib import Path

from pydantic import ValidationError

from glance.chart.local_clock import LocalClock
from glance.config.loader import get_config_value, load_config
from glance.config.schema import GlanceConfig
from glance.daemon import RefreshDaemon
from glance.pipeline.refresh_cycle import RefreshCycle
from glance.pipeline.refresh_state import RefreshController, RefreshState
from glance.reporting.formatters import format_snapshot_json, format_snapshot_text

DEFAULT_CONFIG = "ops/configs/default.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="glance",
        description="Passive-glance weather display",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # once
    once_p = sub.add_parser("once", help="Run one refresh and print it")
    once_p.add_argument("--json", action="store_true", help="Print JSON")

    # daemon
    daemon_p = sub.add_parser("daemon", help="Refresh on a fixed interval")
    daemon_p.add_argument(
        "--interval", type=int, default=None, help="Seconds between refreshes"
    )

    # serve
    serve_p = sub.add_parser("serve", help="Serve the dashboard")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. display.max_bar_mm")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = _load(args.config)
    except ValidationError as e:
        print(f"Invalid config {args.config}:\n{e}")
        return 1

    logging.basicConfig(
        level=config.ops.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "once":
        return _cmd_once(config, args)
    elif args.command == "daemon":
        return _cmd_daemon(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _load(path: str) -> GlanceConfig:
    if not Path(path).exists():
        logger.warning("Config %s not found, using built-in defaults", path)
        return GlanceConfig()
    return load_config(path)


def _cmd_once(config: GlanceConfig, args) -> int:
    clock = LocalClock(config.location.timezone)

    async def _run():
        cycle = RefreshCycle.from_config(config)
        try:
            return await cycle.run()
        finally:
            await cycle.close()

    snapshot = asyncio.run(_run())
    if args.json:
        print(format_snapshot_json(snapshot, clock))
    else:
        print(format_snapshot_text(snapshot, clock))
    return 0 if not snapshot.degraded else 1


def _cmd_daemon(config: GlanceConfig, args) -> int:
    clock = LocalClock(config.location.timezone)
    cycle = RefreshCycle.from_config(config)
    controller = RefreshController(cycle.run)

    def _print(state: RefreshState) -> None:
        if state.snapshot is not None:
            print(format_snapshot_text(state.snapshot, clock))
        if state.error:
            print(f"Refresh failed: {state.error}")

    daemon = RefreshDaemon(
        config,
        controller,
        interval=args.interval,
        on_refresh=_print,
        on_close=cycle.close,
    )
    daemon.start()
    return 0


def _cmd_serve(config: GlanceConfig, args) -> int:
    import uvicorn

    from glance.dashboard import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.ops.dashboard_host,
        port=args.port or config.ops.dashboard_port,
    )
    return 0


def _cmd_config(config: GlanceConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
