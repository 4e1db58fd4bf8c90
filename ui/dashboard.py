"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from core.routes import ROUTE_TABLE
from ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single relayed request."""

    def __init__(self, method: str, path: str, timestamp: datetime):
        self.method = method
        self.path = path
        self.timestamp = timestamp
        self.prefix: str | None = None
        self.status: int | None = None


class Dashboard:
    """Real-time dashboard showing traffic per upstream prefix."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._pending: dict[str, RequestInfo] = {}
        self._prefix_count: dict[str, int] = {route.prefix: 0 for route in ROUTE_TABLE}
        self._counts = {"total": 0, "not_found": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(self, method: str, path: str) -> None:
        """Log an inbound request."""
        with self._lock:
            self._counts["total"] += 1
            self._recent.insert(0, RequestInfo(method, path, datetime.now()))
            self._recent = self._recent[: self._max_recent]
            self._refresh()
            write_cli_log("REQUEST", path, method=method)

    def log_header(self, name: str, value: str) -> None:
        """Headers are only shown in plain console mode."""

    def log_forward(self, prefix: str, target_url: str) -> None:
        """Log a request matched to an upstream prefix."""
        with self._lock:
            self._prefix_count[prefix] = self._prefix_count.get(prefix, 0) + 1
            if self._recent:
                self._recent[0].prefix = prefix
                self._pending[target_url] = self._recent[0]
            self._refresh()
            write_cli_log("FORWARD", target_url, prefix=prefix)

    def log_response(self, target_url: str, status: int) -> None:
        """Log the upstream status for a forwarded request."""
        with self._lock:
            info = self._pending.pop(target_url, None)
            if info:
                info.status = status
            self._refresh()
            write_cli_log("RESPONSE", target_url, status=status)

    def log_not_found(self, path: str) -> None:
        """Log a path without a matching prefix."""
        with self._lock:
            self._counts["not_found"] += 1
            for info in self._recent:
                if info.status is None and info.path.split("?", 1)[0] == path:
                    info.status = 404
                    break
            self._refresh()
            write_cli_log("NOT_FOUND", path, status=404)

    def log_error(self, target_url: str, message: str) -> None:
        """Log a failed upstream call."""
        with self._lock:
            self._counts["errors"] += 1
            info = self._pending.pop(target_url, None)
            if info:
                info.status = 500
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{target_url}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], target=target_url, status=500)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["body"].split_row(
            Layout(name="prefixes", ratio=1),
            Layout(name="recent", ratio=2),
        )

        layout["header"].update(self._build_header())
        layout["prefixes"].update(self._build_prefix_panel())
        layout["recent"].update(self._build_recent_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("API Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Requests: {self._counts['total']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Not found: {self._counts['not_found']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_prefix_panel(self) -> Panel:
        """Build per-prefix counters, busiest first."""
        table = Table(show_header=False, expand=True, box=None)
        table.add_column("Prefix")
        table.add_column("Count", justify="right")

        active = [(p, n) for p, n in self._prefix_count.items() if n]
        if not active:
            return Panel(
                Text("No relayed requests yet...", style="dim"),
                title="[blue]Upstreams[/blue]",
                border_style="blue",
            )
        for prefix, count in sorted(active, key=lambda item: item[1], reverse=True):
            table.add_row(prefix, str(count))

        return Panel(table, title="[blue]Upstreams[/blue]", border_style="blue")

    def _build_recent_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Path", ratio=2)
            table.add_column("Status", width=6)

            for info in self._recent:
                status = "…" if info.status is None else str(info.status)
                style = "red" if info.status and info.status >= 400 else ""
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    escape(info.path[:60] + "..." if len(info.path) > 60 else info.path),
                    Text(status, style=style),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[magenta]Recent[/magenta]", border_style="magenta")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Call http://localhost:{self.config.proxy.port}/<prefix>/... "
                "(e.g. /openai/v1/models)",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
