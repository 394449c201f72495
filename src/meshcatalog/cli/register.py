"""One-shot registration CLI command."""

from __future__ import annotations

import click
from rich.console import Console

from meshcatalog.cli.main import Context, pass_context
from meshcatalog.client.registration import RegistrationClient

console = Console()


@click.command()
@click.option(
    "--static/--no-static",
    "do_static",
    default=True,
    help="Register static workloads and traits",
)
@click.option(
    "--dynamic/--no-dynamic",
    "do_dynamic",
    default=True,
    help="Generate and register components from the resolved source",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False),
    help="Static capability catalog YAML (default: packaged catalog)",
)
@pass_context
def register(ctx: Context, do_static: bool, do_dynamic: bool, catalog: str | None) -> None:
    """
    Run one registration cycle in the foreground.

    Exits with status 1 if any registration was not accepted.

    Examples:

        # Register everything once
        meshcatalog register

        # Only refresh generated components
        meshcatalog register --no-static
    """
    from meshcatalog.core.settings import ConfigError
    from meshcatalog.core.static import load_static_capabilities, register_static_capabilities
    from meshcatalog.log import configure_logging
    from meshcatalog.refresh.tasks import registration_cycle

    settings = ctx.settings
    configure_logging(settings.debug or ctx.verbose)

    static_catalog = None
    if do_static:
        try:
            static_catalog = load_static_capabilities(catalog)
        except ConfigError as e:
            raise click.ClickException(str(e)) from e

    failed: list[str] = []
    with RegistrationClient() as client:
        if static_catalog is not None:
            if not register_static_capabilities(client, settings, static_catalog):
                failed.append("static")
        if do_dynamic:
            if not registration_cycle(settings, client):
                failed.append("dynamic")

    if failed:
        console.print(f"[red]Registration failed:[/red] {', '.join(failed)}")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Registered with {settings.server_address}")
