"""Static workload and trait definitions shipped with the adapter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from meshcatalog.core.schema import StaticCatalog
from meshcatalog.core.settings import ConfigError, Settings

if TYPE_CHECKING:
    from meshcatalog.client.registration import RegistrationClient

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "capabilities.yml"


def load_static_capabilities(path: str | Path | None = None) -> StaticCatalog:
    """
    Load the static capability catalog from YAML.

    Raises:
        ConfigError: if the catalog cannot be read or fails validation
    """
    path = Path(path) if path else DEFAULT_CATALOG
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return StaticCatalog(**data)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid static capability catalog {path}: {e}") from e


def register_static_capabilities(
    client: RegistrationClient,
    settings: Settings,
    catalog: StaticCatalog | None = None,
) -> bool:
    """Register the fixed capabilities once; remote failures are only logged."""
    if catalog is None:
        catalog = load_static_capabilities()
    return client.register_static(settings.server_address, settings.adapter_address, catalog)
