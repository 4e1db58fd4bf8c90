"""Plain console request logger."""

from rich.console import Console
from rich.markup import escape

from ui.log_utils import write_cli_log


class ConsoleLogger:
    """Print one line per relay event and mirror it to the log file."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def log_request(self, method: str, path: str) -> None:
        self.console.print(f"Received request: [bold]{method}[/bold] {escape(path)}")
        write_cli_log("REQUEST", path, method=method)

    def log_header(self, name: str, value: str) -> None:
        self.console.print(f"[dim]Forwarding header: {escape(name)}: {escape(value)}[/dim]")

    def log_forward(self, prefix: str, target_url: str) -> None:
        self.console.print(f"Forwarding request to: [cyan]{escape(target_url)}[/cyan]")
        write_cli_log("FORWARD", target_url, prefix=prefix)

    def log_response(self, target_url: str, status: int) -> None:
        style = "green" if status < 400 else "yellow"
        self.console.print(
            f"Received response status from {escape(target_url)}: [{style}]{status}[/{style}]"
        )
        write_cli_log("RESPONSE", target_url, status=status)

    def log_not_found(self, path: str) -> None:
        self.console.print(f"[yellow]No matching prefix found for path:[/yellow] {escape(path)}")
        write_cli_log("NOT_FOUND", path, status=404)

    def log_error(self, target_url: str, message: str) -> None:
        self.console.print(f"[red]Failed to fetch {escape(target_url)}:[/red] {escape(message)}")
        write_cli_log("ERROR", message[:200], target=target_url, status=500)
