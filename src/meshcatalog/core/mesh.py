"""Identity of the service-mesh distribution an adapter serves."""

from __future__ import annotations

from pydantic import BaseModel


class MeshDistribution(BaseModel):
    """
    Static description of a mesh distribution.

    The upstream repository and chart path drive the default component
    source: the Chart.yaml of the release matching the adapter build.
    """

    name: str
    display_name: str
    upstream_repo: str
    chart_path: str
    operation: str

    model_config = {"frozen": True}

    def default_source_url(self, version: str) -> str:
        """Raw Chart.yaml URL of ``version`` in the upstream repository."""
        return f"https://raw.githubusercontent.com/{self.upstream_repo}/{version}/{self.chart_path}"


CILIUM = MeshDistribution(
    name="CILIUM_SERVICE_MESH",
    display_name="Cilium",
    upstream_repo="cilium/cilium",
    chart_path="install/kubernetes/cilium/Chart.yaml",
    operation="cilium_service_mesh",
)
