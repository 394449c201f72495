"""Registration cycle and the adapter's background tasks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from meshcatalog.client.registration import DEFAULT_TIMEOUT, RegistrationClient
from meshcatalog.core.filters import build_filter_spec
from meshcatalog.core.mesh import CILIUM, MeshDistribution
from meshcatalog.core.schema import RegistrationRequest, StaticCatalog
from meshcatalog.core.settings import Settings
from meshcatalog.core.source import resolve_source
from meshcatalog.core.static import register_static_capabilities
from meshcatalog.refresh.scheduler import RefreshScheduler
from meshcatalog.refresh.supervisor import supervise

logger = logging.getLogger(__name__)


def build_request(settings: Settings, mesh: MeshDistribution = CILIUM) -> RegistrationRequest:
    """Resolve source and filters into this cycle's registration request."""
    return RegistrationRequest(
        server_address=settings.server_address,
        adapter_address=settings.adapter_address,
        source=resolve_source(settings, settings.version, mesh),
        filter=build_filter_spec(),
        mesh_name=mesh.name,
        mesh_version=settings.version,
        operation=mesh.operation,
        timeout=DEFAULT_TIMEOUT,
    )


def registration_cycle(
    settings: Settings,
    client: RegistrationClient,
    mesh: MeshDistribution = CILIUM,
) -> bool:
    """Run one dynamic registration against the server; True on success."""
    return client.register_dynamic(build_request(settings, mesh))


@dataclass
class BackgroundTasks:
    """Handles of the running registration tasks."""

    static: threading.Thread
    scheduler: RefreshScheduler
    dynamic: threading.Thread


def start_registration(
    settings: Settings,
    client: RegistrationClient | None = None,
    catalog: StaticCatalog | None = None,
    mesh: MeshDistribution = CILIUM,
) -> BackgroundTasks:
    """
    Launch static and dynamic registration without waiting for either.

    Static registration runs once; dynamic registration runs immediately and
    then every 24 hours. Both run on supervised threads so neither can
    disturb the caller.
    """
    if client is None:
        client = RegistrationClient()

    static = supervise("static-registration", register_static_capabilities, client, settings, catalog)

    scheduler = RefreshScheduler(lambda: registration_cycle(settings, client, mesh))
    dynamic = scheduler.start()

    logger.debug("Registration tasks started for %s", settings.adapter_address)
    return BackgroundTasks(static=static, scheduler=scheduler, dynamic=dynamic)
