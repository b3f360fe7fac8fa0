"""Startup screen."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from muckbridge.config import Config

console = Console()

TAGLINE = "WebSocket to telnet proxy"


def display_startup_screen(config: Config, local_url: str | None = None) -> None:
    """Print where the proxy listens and what it proxies to."""
    listen = config.server.listen
    host = "127.0.0.1" if listen.host == "0.0.0.0" else listen.host

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Listen", f"ws://{host}:{listen.port}/")
    if local_url:
        table.add_row("Network", local_url)
    table.add_row("MUCK", str(config.backend.address))
    table.add_row("Charset", "GBK" if config.backend.use_gbk else "UTF-8")

    console.print(Panel(table, title="[bold]muckbridge[/bold]", subtitle=TAGLINE, expand=False))
