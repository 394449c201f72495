"""Source and filter inspection CLI commands."""

from __future__ import annotations

import json

import click
from rich.console import Console

from meshcatalog.cli.main import Context, pass_context

console = Console()


@click.command()
@click.option(
    "--version",
    "mesh_version",
    help="Mesh version to resolve for (default: adapter version)",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON",
)
@pass_context
def resolve(ctx: Context, mesh_version: str | None, output_json: bool) -> None:
    """
    Show the component source the next registration cycle would use.

    Examples:

        # Default upstream chart for the adapter version
        meshcatalog resolve

        # Upstream chart for a specific release
        meshcatalog resolve --version 1.15.0

        # Honour an override
        COMP_GEN_URL=https://example.com/chart COMP_GEN_METHOD=Helm meshcatalog resolve
    """
    from meshcatalog.core.source import resolve_source

    settings = ctx.settings
    source = resolve_source(settings, mesh_version or settings.version)

    if output_json:
        console.print(json.dumps(source.model_dump(mode="json"), indent=2), soft_wrap=True)
        return

    console.print(f"[bold]URL:[/bold]    {source.url}", soft_wrap=True)
    console.print(f"[bold]Method:[/bold] {source.method.value}")


@click.command()
def filters() -> None:
    """Print the CRD filter specification sent with each registration."""
    from meshcatalog.core.filters import build_filter_spec

    console.print_json(json.dumps(build_filter_spec().to_wire()))
