"""Component source resolution for dynamic registration."""

from __future__ import annotations

import logging

from meshcatalog.core.mesh import CILIUM, MeshDistribution
from meshcatalog.core.schema import GenerationMethod, RegistrationSource
from meshcatalog.core.settings import Settings

logger = logging.getLogger(__name__)


def resolve_method(value: str | None) -> GenerationMethod:
    """Exact ``Helm`` or ``Manifest``; anything else falls back to Manifest."""
    for method in GenerationMethod:
        if value == method.value:
            return method
    return GenerationMethod.MANIFEST


def resolve_source(
    settings: Settings,
    version: str,
    mesh: MeshDistribution = CILIUM,
) -> RegistrationSource:
    """
    Decide which source the next registration cycle generates components from.

    An overridden URL is used verbatim. Its method defaults to Manifest
    unless the override names one exactly, so a Helm chart URL needs an
    explicit ``Helm`` method. Without an override, the upstream Chart.yaml
    of ``version`` is read as a manifest.
    """
    if settings.component_url:
        method = resolve_method(settings.component_method)
        logger.info(
            "Registering workload components from url %s using %s method...",
            settings.component_url,
            method.value,
        )
        return RegistrationSource(url=settings.component_url, method=method)

    logger.info("Registering latest workload components for version %s", version)
    return RegistrationSource(
        url=mesh.default_source_url(version),
        method=GenerationMethod.MANIFEST,
    )
