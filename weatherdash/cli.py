"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging

from weatherdash.config.loader import get_config_value, load_config
from weatherdash.config.schema import AppConfig
from weatherdash.ingest.geolocation import geolocator_for
from weatherdash.reporting.formatters import format_dashboard_text
from weatherdash.reporting.health_checker import HealthChecker
from weatherdash.session.controller import SessionController, build_session
from weatherdash.storage.database import connect
from weatherdash.storage.kv_store import SqliteStore

DEFAULT_CONFIG = "config/weatherdash.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="Current weather and 5-day forecast lookups",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # search
    search_p = sub.add_parser("search", help="Look up a city")
    search_p.add_argument("city", nargs="+", help="City name")

    # locate
    locate_p = sub.add_parser("locate", help="Look up the current position")
    locate_p.add_argument("--lat", type=float, default=None, help="Latitude")
    locate_p.add_argument("--lon", type=float, default=None, help="Longitude")

    # recent / recent clear
    recent_p = sub.add_parser("recent", help="Show or clear recent searches")
    recent_p.add_argument("action", nargs="?", choices=["clear"])

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. provider.units")

    # serve
    serve_p = sub.add_parser("serve", help="Run the JSON API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"db_path": args.db})}
        )

    if args.command == "search":
        return _cmd_search(config, args)
    elif args.command == "locate":
        return _cmd_locate(config, args)
    elif args.command == "recent":
        return _cmd_recent(config, args)
    elif args.command == "health":
        return _cmd_health(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _open_session(config: AppConfig, geolocator=None):
    conn = connect(config.storage.db_path)
    return conn, build_session(config, SqliteStore(conn), geolocator)


def _print_session(controller: SessionController, config: AppConfig) -> None:
    print(
        format_dashboard_text(
            controller.state, controller.recent_searches, config.provider.units
        )
    )


def _cmd_search(config: AppConfig, args) -> int:
    conn, controller = _open_session(config)
    try:
        ok = asyncio.run(controller.submit_query(" ".join(args.city)))
        _print_session(controller, config)
        return 0 if ok else 1
    finally:
        conn.close()


def _cmd_locate(config: AppConfig, args) -> int:
    if args.lat is not None or args.lon is not None:
        geolocator = geolocator_for(args.lat, args.lon)
    else:
        geolocator = geolocator_for(config.location.latitude, config.location.longitude)
    conn, controller = _open_session(config, geolocator)
    try:
        ok = asyncio.run(controller.use_my_location())
        _print_session(controller, config)
        return 0 if ok else 1
    finally:
        conn.close()


def _cmd_recent(config: AppConfig, args) -> int:
    conn, controller = _open_session(config)
    try:
        if args.action == "clear":
            controller.clear_recent()
            print("Recent searches cleared")
            return 0
        recent = controller.recent_searches
        if not recent:
            print("No recent searches")
        for i, name in enumerate(recent, start=1):
            print(f"{i}. {name}")
        return 0
    finally:
        conn.close()


def _cmd_health(config: AppConfig) -> int:
    conn = connect(config.storage.db_path)
    try:
        status = asyncio.run(HealthChecker(conn, config).check())
    finally:
        conn.close()

    print(f"DB: {'OK' if status.db_connected else 'FAIL'}")
    print(f"API key: {'set' if status.api_key_configured else 'MISSING'}")
    print(f"OpenWeather API: {'OK' if status.provider_reachable else 'FAIL'}")
    print(f"Recent searches: {status.recent_count}")
    return 0 if status.ok else 1


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        shown = config.model_copy(
            update={
                "provider": config.provider.model_copy(
                    update={"api_key": "***" if config.provider.api_key else ""}
                )
            }
        )
        print(shown.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get KEY")
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherdash.dashboard import create_app

    conn, controller = _open_session(
        config, geolocator_for(config.location.latitude, config.location.longitude)
    )
    try:
        app = create_app(
            controller, HealthChecker(conn, config), config.provider.units
        )
        uvicorn.run(
            app,
            host=args.host or config.dashboard.host,
            port=args.port or config.dashboard.port,
        )
        return 0
    finally:
        conn.close()
