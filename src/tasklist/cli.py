"""CLI interface for tasklist."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tasklist import __version__
from tasklist.app import TaskListApp
from tasklist.config import CONFIG_FILE, TaskListConfig
from tasklist.logging_setup import setup_logging
from tasklist.models import AppView, Filter

console = Console()

# Colours per theme: accent, muted, body text.
PALETTES: dict[str, dict[str, str]] = {
    "light": {"accent": "#7c3aed", "muted": "#6b7280", "text": "#1f2937"},
    "dark": {"accent": "#c4b5fd", "muted": "#9ca3af", "text": "#e5e7eb"},
}
DANGER = "#ef4444"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasklist")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for stored tasks and theme (overrides config)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, data_dir: str | None, verbose: bool) -> None:
    """tasklist - a small persistent task list.

    \b
    Examples:
      tasklist add Buy milk
      tasklist list --filter active
      tasklist toggle 1718000000000
      tasklist move 1718000000000 1
      tasklist clear
      tasklist theme
    """
    ctx.ensure_object(dict)

    try:
        config = TaskListConfig.load()
    except ValueError as e:
        console.print(f"[red]Invalid configuration in {CONFIG_FILE}:[/red] {escape(str(e))}")
        ctx.exit(1)

    if config.logging.enabled:
        setup_logging(
            log_dir=config.logging.directory,
            console_level=logging.DEBUG if verbose else config.logging.console_level,
            file_level=config.logging.file_level,
        )

    app = TaskListApp.from_config(config, data_dir=data_dir)
    app.load()
    ctx.call_on_close(app.close)

    ctx.obj["config"] = config
    ctx.obj["app"] = app

    # No subcommand: show the list
    if ctx.invoked_subcommand is None:
        _render(app, app.view())


@main.command("list")
@click.option(
    "--filter",
    "-f",
    "filter_name",
    type=click.Choice([f.value for f in Filter]),
    default=Filter.ALL.value,
    help="Which tasks to show",
)
@click.pass_context
def list_command(ctx: click.Context, filter_name: str) -> None:
    """Show tasks."""
    app: TaskListApp = ctx.obj["app"]
    _render(app, app.set_filter(filter_name))


@main.command("add")
@click.argument("words", nargs=-1, required=True)
@click.pass_context
def add_command(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Add a task."""
    app: TaskListApp = ctx.obj["app"]

    before = app.view().total
    view = app.add(" ".join(words))
    if view.total == before:
        console.print("[yellow]Nothing to add.[/yellow] Task text is empty.")
        return

    task = app.engine.tasks[-1]
    console.print(f"[green]Added:[/green] {escape(task.text)} [dim]({task.id})[/dim]", highlight=False)


@main.command("toggle")
@click.argument("task_id")
@click.pass_context
def toggle_command(ctx: click.Context, task_id: str) -> None:
    """Mark a task complete, or active again."""
    app: TaskListApp = ctx.obj["app"]

    if app.engine.get(task_id) is None:
        console.print(f"[red]No task with id[/red] {task_id}")
        ctx.exit(1)

    app.toggle_complete(task_id)
    task = app.engine.get(task_id)
    assert task is not None
    state = "completed" if task.completed else "active"
    console.print(f"[green]Marked {state}:[/green] {escape(task.text)}", highlight=False)


@main.command("delete")
@click.argument("task_id")
@click.pass_context
def delete_command(ctx: click.Context, task_id: str) -> None:
    """Delete a task."""
    app: TaskListApp = ctx.obj["app"]

    task = app.engine.get(task_id)
    if task is None:
        console.print(f"[red]No task with id[/red] {task_id}")
        ctx.exit(1)

    app.delete(task_id)
    console.print(f"[green]Deleted:[/green] {escape(task.text)}", highlight=False)


@main.command("move")
@click.argument("task_id")
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
def move_command(ctx: click.Context, task_id: str, position: int) -> None:
    """Move a task to POSITION (1-based) in the full list."""
    app: TaskListApp = ctx.obj["app"]

    if app.engine.get(task_id) is None:
        console.print(f"[red]No task with id[/red] {task_id}")
        ctx.exit(1)

    _render(app, app.move(task_id, position - 1))


@main.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_command(ctx: click.Context, yes: bool) -> None:
    """Remove all completed tasks."""
    app: TaskListApp = ctx.obj["app"]

    before = app.view()
    if not before.has_completed:
        console.print("[dim]No completed tasks.[/dim]")
        return

    if not yes and not click.confirm("Remove all completed tasks?", default=False):
        console.print("Cancelled.")
        return

    after = app.clear_completed()
    removed = before.total - after.total
    console.print(f"[green]Cleared {removed} completed task{'s' if removed != 1 else ''}.[/green]")


@main.command("theme")
@click.pass_context
def theme_command(ctx: click.Context) -> None:
    """Toggle between the light and dark theme."""
    app: TaskListApp = ctx.obj["app"]

    view = app.toggle_theme()
    name = "dark" if view.is_dark else "light"
    console.print(f"Theme: [bold {PALETTES[name]['accent']}]{name}[/]")


def _render(app: TaskListApp, view: AppView) -> None:
    palette = PALETTES["dark" if view.is_dark else "light"]

    if not view.total:
        console.print(f"[{palette['muted']}]No todos yet. Add one with [bold]tasklist add[/bold].[/]")
        return

    positions = {task.id: i for i, task in enumerate(app.engine.tasks, 1)}

    table = Table(
        title=f"TODO ({view.filter.value})",
        title_style=f"bold {palette['accent']}",
        show_header=True,
    )
    table.add_column("#", style=palette["muted"], justify="right")
    table.add_column("ID", style=palette["accent"])
    table.add_column("", width=1)
    table.add_column("Task", style=palette["text"])

    for task in view.tasks:
        mark = "✓" if task.completed else "○"
        text_style = f"strike {palette['muted']}" if task.completed else ""
        table.add_row(str(positions[task.id]), task.id, mark, Text(task.text, style=text_style))

    if view.tasks:
        console.print(table)
    else:
        console.print(f"[{palette['muted']}]No {view.filter.value} tasks.[/]")

    footer = f"[{palette['muted']}]{view.items_left}[/]"
    if view.has_completed:
        footer += f"  [{DANGER}]clear completed: tasklist clear[/]"
    console.print(footer)
