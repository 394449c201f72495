"""
Meshcatalog - capability registration for service-mesh adapters.

This package provides tools for:
- Resolving where a mesh's latest CRDs live (upstream chart or override)
- Describing where CRD metadata sits inside manifest documents
- Registering static and generated components with a Meshery server
- Refreshing the registered catalog on a fixed schedule
"""

__version__ = "0.1.0"

from meshcatalog.core.settings import Settings
from meshcatalog.core.source import resolve_source
from meshcatalog.core.filters import build_filter_spec
from meshcatalog.client.registration import RegistrationClient
from meshcatalog.refresh.tasks import start_registration

__all__ = [
    "__version__",
    "Settings",
    "resolve_source",
    "build_filter_spec",
    "RegistrationClient",
    "start_registration",
]
