"""Long-running registration CLI command."""

from __future__ import annotations

import logging

import click

from meshcatalog.cli.main import Context, pass_context

logger = logging.getLogger(__name__)


@click.command()
@pass_context
def run(ctx: Context) -> None:
    """
    Register capabilities and keep them fresh until interrupted.

    Static workloads and traits are registered once; generated components
    are registered now and every 24 hours.
    """
    from meshcatalog.core.settings import ConfigError, ensure_root_path
    from meshcatalog.log import configure_logging
    from meshcatalog.refresh.tasks import start_registration

    settings = ctx.settings
    configure_logging(settings.debug or ctx.verbose)

    try:
        ensure_root_path(settings)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    tasks = start_registration(settings)
    logger.info("Adapter %s registering with %s", settings.adapter_address, settings.server_address)

    try:
        tasks.dynamic.join()
    except KeyboardInterrupt:
        logger.info("Shutting down")
