"""Main CLI entry point for meshcatalog."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from meshcatalog import __version__

console = Console()


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.verbose: bool = False
        self._settings: Any = None

    @property
    def settings(self) -> Any:
        """Lazy-load settings from the config file and environment."""
        if self._settings is None:
            from meshcatalog.core.settings import ConfigError, Settings

            try:
                if self.config_path:
                    self._settings = Settings.load(self.config_path, os.environ)
                else:
                    self._settings = Settings.from_env(os.environ)
            except ConfigError as e:
                raise click.ClickException(str(e)) from e
        return self._settings


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="meshcatalog")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to adapter config YAML file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@pass_context
def cli(ctx: Context, config: Path | None, verbose: bool) -> None:
    """
    Meshcatalog - service-mesh capability registration.

    Registers a mesh adapter's workloads and traits with a Meshery
    server and keeps the generated catalog fresh.
    """
    ctx.config_path = config
    ctx.verbose = verbose


# Import and register subcommands
from meshcatalog.cli.register import register
from meshcatalog.cli.resolve import filters, resolve
from meshcatalog.cli.run import run

cli.add_command(filters)
cli.add_command(register)
cli.add_command(resolve)
cli.add_command(run)


@cli.command()
@pass_context
def info(ctx: Context) -> None:
    """Show the effective adapter settings."""
    from rich.table import Table

    from meshcatalog.core.mesh import CILIUM
    from meshcatalog.refresh.scheduler import REFRESH_INTERVAL

    settings = ctx.settings

    console.print(f"\n[bold]Meshcatalog v{__version__}[/bold]\n")

    table = Table(title=f"{CILIUM.display_name} Adapter")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Mesh", CILIUM.name)
    table.add_row("Version", settings.version)
    table.add_row("Server", settings.server_address)
    table.add_row("Adapter address", settings.adapter_address)
    table.add_row("Component URL", settings.component_url or "[dim]upstream chart[/dim]")
    table.add_row("Refresh interval", str(REFRESH_INTERVAL))
    table.add_row("Root path", str(settings.root_path))
    table.add_row("Debug", "yes" if settings.debug else "no")

    console.print(table)


if __name__ == "__main__":
    cli()
