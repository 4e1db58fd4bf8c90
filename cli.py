"""CLI entry point for api-relay."""

import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from app import create_app
from core.config import CONFIG_FILE, load_config
from core.router import PrefixRouter
from ui.console import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()
    plain = not config.proxy.dashboard

    # Handle CLI arguments
    for arg in sys.argv[1:]:
        if arg == "--routes":
            _print_routes(PrefixRouter())
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--plain":
            plain = True
            continue

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    import uvicorn

    clear_logs()
    console.print("Starting proxy server...")
    dashboard = None if plain else Dashboard(config)
    logger = ConsoleLogger(console) if dashboard is None else dashboard
    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Relay started", host=config.proxy.host, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_routes(router: PrefixRouter):
    """Print the prefix -> upstream table."""
    table = Table(title="Routes (first match wins)")
    table.add_column("Prefix", style="cyan")
    table.add_column("Upstream")
    for route in router.routes:
        table.add_row(route.prefix, route.upstream)
    console.print(table)


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]API Relay[/bold cyan]

Forwards /<prefix>/... to the matching third-party API (see --routes).

[bold]Usage:[/bold]
    api-relay              Start with live dashboard
    api-relay --plain      Start with one log line per event
    api-relay --routes     Show the prefix table
    api-relay --config     Show config and log locations
    api-relay --help       Show this help
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
