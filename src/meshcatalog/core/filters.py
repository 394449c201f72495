"""CRD filter expressions for the component generator."""

from __future__ import annotations

from meshcatalog.core.schema import FilterSpec

# Must match the CRD documents the Cilium chart ships. A mismatch is not
# reported anywhere; the server just registers fewer components.
_CILIUM_CRD_FILTER = FilterSpec(
    root_filter=('$[?(@.kind=="CustomResourceDefinition")]',),
    name_filter=('$..["spec"]["names"]["kind"]',),
    version_filter=("$[0]..spec.versions[0]",),
    group_filter=("$[0]..spec",),
    spec_filter=("$[0]..openAPIV3Schema.properties.spec",),
    iteration_filter=("$[?(@.spec.names.kind",),
    iteration_spec_filter=("$[?(@.spec.names.kind",),
    version_field="name",
    group_field="group",
)


def build_filter_spec() -> FilterSpec:
    """Filter set locating kind, group, version and schema of each CRD."""
    return _CILIUM_CRD_FILTER
