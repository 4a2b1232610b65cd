"""
globenv CLI

Command-line interface for reading and persisting user environment variables.
"""

import os
from functools import wraps

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from globenv import __version__
from globenv import environment
from globenv.errors import EnvError
from globenv.logging import setup_logging

app = typer.Typer(
    name="globenv",
    help="Globally set & read environment variables",
    add_completion=False,
)
console = Console()


def handle_errors(func):
    """Print EnvError in red and exit 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except EnvError as e:
            console.print(f"[red]✗[/red] {escape(str(e))}")
            raise typer.Exit(1)
    return wrapper


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Globally set & read environment variables."""
    try:
        settings = environment.load_settings()
    except EnvError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        debug_mode=verbose,
    )


@app.command()
@handle_errors
def get(key: str = typer.Argument(..., help="Variable name")):
    """Print a variable's value."""
    value = environment.get_var(key)
    if value is None:
        console.print(f"[yellow]{escape(key)} is not set[/yellow]")
        raise typer.Exit(1)
    console.print(value, markup=False, highlight=False, soft_wrap=True)


@app.command("set")
@handle_errors
def set_(
    key: str = typer.Argument(..., help="Variable name"),
    value: str = typer.Argument(..., help="Value (empty removes the variable)"),
):
    """Set a variable persistently."""
    environment.set_var(key, value)
    if value:
        console.print(f"[green]✓[/green] {escape(key)} set")
    else:
        console.print(f"[green]✓[/green] {escape(key)} removed")


@app.command()
@handle_errors
def remove(key: str = typer.Argument(..., help="Variable name")):
    """Remove a variable persistently."""
    environment.remove_var(key)
    console.print(f"[green]✓[/green] {escape(key)} removed")


@app.command()
@handle_errors
def paths():
    """List PATH segments."""
    value = environment.get_paths() or ""
    table = Table(title="PATH")
    table.add_column("#", style="dim")
    table.add_column("Segment", style="cyan")
    for i, segment in enumerate(s for s in value.split(os.pathsep) if s):
        table.add_row(str(i), escape(segment))
    console.print(table)


@app.command("add-path")
@handle_errors
def add_path(path: str = typer.Argument(..., help="Directory to append")):
    """Append a directory to PATH persistently."""
    environment.set_path(path)
    console.print(f"[green]✓[/green] {escape(path)} added to PATH")


@app.command("remove-path")
@handle_errors
def remove_path(path: str = typer.Argument(..., help="Directory to drop")):
    """Remove a directory from PATH persistently."""
    environment.remove_path(path)
    console.print(f"[green]✓[/green] {escape(path)} removed from PATH")


@app.command()
@handle_errors
def where():
    """Show which store variables are persisted in."""
    store = environment.platform_store()
    table = Table(title="globenv store")
    table.add_column("Backend", style="cyan")
    table.add_column("Location", style="green")
    table.add_row(store.name, escape(store.location()))
    console.print(table)


@app.command()
def version():
    """Show version information."""
    console.print(f"globenv v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
