"""Pydantic schemas for registration sources, filters and capabilities."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class GenerationMethod(str, Enum):
    """How a component source must be interpreted by the server."""

    MANIFEST = "Manifest"
    HELM = "Helm"


class RegistrationSource(BaseModel):
    """Where the latest CRDs of a mesh live and how to read them."""

    url: str
    method: GenerationMethod = GenerationMethod.MANIFEST

    model_config = {"frozen": True}


class FilterSpec(BaseModel):
    """
    Path expressions locating CRD metadata inside manifest documents.

    Field aliases are the names the component generator on the server
    expects, so ``model_dump(by_alias=True)`` yields the wire format.
    The expressions are evaluated server-side, never here.
    """

    root_filter: tuple[str, ...] = Field(alias="RootFilter")
    name_filter: tuple[str, ...] = Field(alias="NameFilter")
    version_filter: tuple[str, ...] = Field(alias="VersionFilter")
    group_filter: tuple[str, ...] = Field(alias="GroupFilter")
    spec_filter: tuple[str, ...] = Field(alias="SpecFilter")
    iteration_filter: tuple[str, ...] = Field(alias="ItrFilter")
    iteration_spec_filter: tuple[str, ...] = Field(alias="ItrSpecFilter")
    version_field: str = Field(alias="VField")
    group_field: str = Field(alias="GField")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RegistrationRequest(BaseModel):
    """One dynamic registration attempt; built fresh every cycle."""

    server_address: str
    adapter_address: str
    source: RegistrationSource
    filter: FilterSpec
    mesh_name: str
    mesh_version: str
    operation: str
    timeout: timedelta = timedelta(minutes=30)

    model_config = {"frozen": True}

    @property
    def timeout_minutes(self) -> int:
        return int(self.timeout.total_seconds() // 60)

    def to_payload(self) -> dict[str, Any]:
        """Request body for the server's component generator."""
        return {
            "url": self.source.url,
            "generationMethod": self.source.method.value,
            "config": {
                "name": self.mesh_name,
                "meshVersion": self.mesh_version,
                "filter": self.filter.to_wire(),
            },
            "operation": self.operation,
            "host": self.adapter_address,
            "timeoutInMinutes": self.timeout_minutes,
        }


# --- Static capability schemas ---


CapabilityKind = Literal["WorkloadDefinition", "TraitDefinition"]


class StaticCapability(BaseModel):
    """
    A fixed OAM definition shipped with the adapter.

    ``definition`` is the OAM object itself; ``ref_schema`` is an optional
    JSON schema string describing the settings the definition accepts.
    """

    name: str
    definition: dict[str, Any]
    metadata: dict[str, str] = Field(default_factory=dict)
    ref_schema: str = Field(default="", alias="schema")

    model_config = {"populate_by_name": True}

    @property
    def kind(self) -> str:
        return self.definition.get("kind", "")

    def to_payload(self, host: str) -> dict[str, Any]:
        return {
            "oam_definition": self.definition,
            "oam_ref_schema": self.ref_schema,
            "host": host,
            "metadata": self.metadata,
        }


class StaticCatalog(BaseModel):
    """Workloads and traits registered once at adapter start."""

    workloads: list[StaticCapability] = Field(default_factory=list)
    traits: list[StaticCapability] = Field(default_factory=list)

    @field_validator("workloads")
    @classmethod
    def validate_workload_kinds(cls, v: list[StaticCapability]) -> list[StaticCapability]:
        return _require_kind(v, "WorkloadDefinition")

    @field_validator("traits")
    @classmethod
    def validate_trait_kinds(cls, v: list[StaticCapability]) -> list[StaticCapability]:
        return _require_kind(v, "TraitDefinition")

    def __len__(self) -> int:
        return len(self.workloads) + len(self.traits)


def _require_kind(items: list[StaticCapability], kind: CapabilityKind) -> list[StaticCapability]:
    for item in items:
        if item.kind != kind:
            raise ValueError(f"{item.name}: expected kind {kind}, got {item.kind or 'none'}")
    return items
