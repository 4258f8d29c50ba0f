"""
Web server CLI commands for MyTODOs.

This module provides commands to start and describe the task store server.
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..config import get_config


console = Console()


@click.group()
def web():
    """Task store server commands."""
    pass


@web.command()
@click.option("--host", default=None, help="Host to bind the server to (default: from config)")
@click.option("--port", default=None, type=int, help="Port to bind the server to (default: from config)")
@click.option("--debug", is_flag=True, help="Enable debug mode with auto-reload")
def start(host, port, debug):
    """Start the MyTODOs task store server."""
    from ..web.server import start_server

    config = get_config()
    host = host or config.host
    port = port or config.port

    content = Text()
    content.append("Server will start at: ", style="white")
    content.append(f"http://{host}:{port}", style="bold green")
    content.append("\n\n")
    content.append("Allowed UI origins: ", style="yellow")
    content.append(", ".join(config.cors_origins) or "none", style="white")
    content.append("\n")
    content.append("Tasks live in memory only and reset when the server stops.", style="dim")

    if debug:
        content.append("\n\n")
        content.append("Debug mode: ", style="yellow")
        content.append("ENABLED", style="bold red")
        content.append(" (auto-reload on file changes)", style="white")

    console.print(Panel(
        content,
        title=Text("MyTODOs Server", style="bold cyan"),
        border_style="cyan",
        padding=(1, 2),
    ))
    console.print("Press Ctrl+C to stop the server", style="dim")

    try:
        start_server(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        console.print("Server stopped", style="yellow")
    except Exception as e:
        raise click.ClickException(f"Failed to start server: {e}")


@web.command()
def info():
    """Show information about the task store server."""
    config = get_config()

    info_text = Text()
    info_text.append("The MyTODOs server keeps the authoritative task list in memory\n")
    info_text.append("and exposes it as a small REST API.\n\n")

    info_text.append("API Endpoints:\n", style="bold yellow")
    info_text.append("• GET /tasks - List all tasks\n")
    info_text.append("• POST /tasks - Create new task\n")
    info_text.append("• PUT /tasks/{id} - Replace a task\n")
    info_text.append("• DELETE /tasks/{id} - Delete task\n")
    info_text.append("• GET /health - Server status\n")
    info_text.append("(also served under /api)\n\n")

    info_text.append("Client:\n", style="bold yellow")
    info_text.append(f"• Store URL: {config.api_url}\n")
    info_text.append(f"• Local cache: {config.get_cache_path()}\n")

    console.print(Panel(
        info_text,
        title="Web Server Information",
        border_style="cyan",
        padding=(1, 2),
    ))
