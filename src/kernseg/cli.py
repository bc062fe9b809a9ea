"""Command-line interface."""

import logging

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(help="KERNSEG: Kernel segmentation of genomic signals")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def version():
    """Show KERNSEG version."""
    from kernseg import __version__
    console.print(f"KERNSEG version {__version__}")


@app.command()
def plugins():
    """List available domain plugins."""
    from kernseg.plugins import plugins as plugin_registry

    plugin_list = plugin_registry.list()

    table = Table(title="Available Plugins")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Record", style="magenta")

    for name in plugin_list:
        plugin = plugin_registry.load(name)
        table.add_row(name, plugin.version, plugin.record_type.__name__)

    console.print(table)


@app.command()
def info(plugin_name: str):
    """Show information about a plugin and its default configuration."""
    from kernseg.plugins import plugins as plugin_registry

    try:
        plugin = plugin_registry.load(plugin_name)
    except KeyError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{plugin.name}[/bold] v{plugin.version}")
    console.print(f"\n{plugin.__doc__ or 'No description available'}")

    table = Table(title="Default configuration")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    for key, value in plugin.default_config().to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
