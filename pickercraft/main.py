#!/usr/bin/env python3
"""
Main CLI entry point for pickercraft
"""

import typer
from rich.console import Console
from rich.table import Table

from pickercraft import __version__
from pickercraft.config.settings import get_config_path, load_settings
from pickercraft.exceptions import ConfigurationError
from pickercraft.host import EditorHost
from pickercraft.utils.logging_utils import setup_logging

app = typer.Typer(
    help="Incremental pickers built on external command chains",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """
    pickercraft - search files and text by chaining external tools

    [bold]Examples:[/bold]

    Find a file:
        [cyan]pickercraft files[/cyan]

    Live grep, starting with a query:
        [cyan]pickercraft grep "TODO"[/cyan]

    Run a picker defined in ~/.config/pickercraft/config.json:
        [cyan]pickercraft pick todo[/cyan]
    """
    setup_logging(verbose=verbose)


def _run_picker(name: str, query: str) -> None:
    from pickercraft.ui.picker.picker_app import PickerApp

    try:
        settings = load_settings()
        picker = settings.get_picker(name)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    host = EditorHost()
    target = PickerApp(picker, settings, host, initial_query=query).run()
    if target is None:
        return

    try:
        host.open_file(target.path, target.line, target.column)
    except FileNotFoundError as e:
        console.print(f"[red]Error: cannot launch editor: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def files(query: str = typer.Argument("", help="Initial query")):
    """Pick a file by name"""
    _run_picker("files", query)


@app.command()
def grep(query: str = typer.Argument("", help="Initial query")):
    """Search file contents and jump to a match"""
    _run_picker("grep", query)


@app.command()
def pick(
    name: str = typer.Argument(..., help="Picker name from the config"),
    query: str = typer.Argument("", help="Initial query"),
):
    """Run any configured picker"""
    _run_picker(name, query)


@app.command("list")
def list_pickers():
    """Show configured pickers and their command chains"""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title=f"Pickers ({get_config_path()})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Mode", style="magenta")
    table.add_column("Pipeline", style="green")

    for name, picker in sorted(settings.pickers.items()):
        chain = " | ".join(
            " ".join([c["cmd"], *c.get("args", [])]) for c in picker.commands
        )
        table.add_row(name, "located" if picker.located else "plain", chain)

    console.print(table)


@app.command()
def version():
    """Show pickercraft version"""
    typer.echo(f"pickercraft version {__version__}")


def run():
    """Run the CLI application"""
    app()


if __name__ == "__main__":
    run()
