"""Core domain models for capability registration."""

from meshcatalog.core.filters import build_filter_spec
from meshcatalog.core.mesh import CILIUM, MeshDistribution
from meshcatalog.core.schema import (
    FilterSpec,
    GenerationMethod,
    RegistrationRequest,
    RegistrationSource,
    StaticCapability,
    StaticCatalog,
)
from meshcatalog.core.settings import ConfigError, Settings
from meshcatalog.core.source import resolve_source

__all__ = [
    "build_filter_spec",
    "CILIUM",
    "MeshDistribution",
    "FilterSpec",
    "GenerationMethod",
    "RegistrationRequest",
    "RegistrationSource",
    "StaticCapability",
    "StaticCatalog",
    "ConfigError",
    "Settings",
    "resolve_source",
]
