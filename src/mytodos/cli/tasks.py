"""Command-line interface for MyTODOs."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..client import ClientSyncLayer, LocalStorage, MutationResult, TaskCache, TaskFilter, TasksAPI
from ..config import ConfigModel, get_config, load_config
from ..errors import NotFoundError, ValidationError
from .web import web


console = Console()
T = TypeVar("T")


def make_api(config: ConfigModel) -> TasksAPI:
    """Build the remote store client from configuration."""
    return TasksAPI(config.api_url, timeout=config.request_timeout)


def make_cache(config: ConfigModel) -> TaskCache:
    """Build the local task cache from configuration."""
    return TaskCache(LocalStorage(config.get_cache_path()))


def print_result(result: Optional[MutationResult]) -> None:
    """Show a mutation notice: green when the store has it, yellow when only local."""
    if result is None:
        return
    style = "green" if result.synced else "yellow"
    console.print(escape(result.notice), style=style)


def run_with_layer(action: Callable[[ClientSyncLayer], Awaitable[T]]) -> T:
    """Load the task list and run an action against it."""

    async def runner() -> T:
        config = get_config()
        async with make_api(config) as api:
            layer = ClientSyncLayer(api, make_cache(config))
            loaded = await layer.load()
            if loaded.error is not None:
                print_result(loaded)
            return await action(layer)

    try:
        return asyncio.run(runner())
    except (ValidationError, NotFoundError) as e:
        raise click.ClickException(str(e))


@click.group()
@click.option("--config", type=click.Path(), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config, verbose):
    """MyTODOs - organize tasks, even when the server is away."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config:
        load_config(Path(config))


@cli.command("list")
@click.option(
    "--filter", "task_filter",
    type=click.Choice([f.value for f in TaskFilter]),
    default=TaskFilter.ALL.value,
    show_default=True,
    help="Which tasks to show",
)
def list_tasks(task_filter):
    """List tasks."""

    async def action(layer: ClientSyncLayer):
        return layer.filtered(TaskFilter(task_filter))

    tasks = run_with_layer(action)

    if not tasks:
        suffix = "" if task_filter == TaskFilter.ALL.value else f" in {task_filter} view"
        console.print(f"No tasks{suffix}.", style="dim")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Done", justify="center")
    table.add_column("Description")
    for task in tasks:
        mark = "[green]✔[/green]" if task.is_completed else "○"
        description = escape(task.description)
        if task.is_completed:
            description = f"[strike]{description}[/strike]"
        table.add_row(task.id, mark, description)
    console.print(table)


@cli.command()
@click.argument("description")
def add(description):
    """Add a new task."""

    async def action(layer: ClientSyncLayer):
        return await layer.add(description)

    print_result(run_with_layer(action))


@cli.command()
@click.argument("task_id")
def toggle(task_id):
    """Mark a task completed, or active again."""

    async def action(layer: ClientSyncLayer):
        return await layer.toggle(task_id)

    print_result(run_with_layer(action))


@cli.command()
@click.argument("task_id")
@click.argument("description")
@click.option("--completed/--active", default=None, help="Set the completion state (default: unchanged)")
def edit(task_id, description, completed):
    """Replace a task's description."""

    async def action(layer: ClientSyncLayer):
        if completed is None:
            is_completed = next((t.is_completed for t in layer.tasks if t.id == task_id), False)
        else:
            is_completed = completed
        return await layer.update(task_id, description, is_completed)

    print_result(run_with_layer(action))


@cli.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def delete(task_id, yes):
    """Delete a task after confirmation."""
    skip_prompt = yes or not get_config().confirm_deletion

    async def action(layer: ClientSyncLayer):
        task = layer.request_delete(task_id)
        if not skip_prompt and not click.confirm(f"Delete '{task.description}'?"):
            layer.cancel_delete()
            console.print("Deletion cancelled.", style="dim")
            return None
        return await layer.confirm_delete()

    print_result(run_with_layer(action))


@cli.command("clear-cache")
def clear_cache():
    """Forget the local cache; the next command loads from the server."""
    make_cache(get_config()).clear()
    console.print("Local cache cleared.", style="green")


cli.add_command(web)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
