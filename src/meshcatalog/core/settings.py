"""Adapter settings resolved from environment variables and a config file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_SERVER_ADDRESS = "http://localhost:9081"
DEFAULT_SERVICE_ADDR = "localhost"
DEFAULT_PORT = 10012
DEFAULT_VERSION = "edge"

# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "COMP_GEN_URL": "component_url",
    "COMP_GEN_METHOD": "component_method",
    "MESHERY_SERVER": "server",
    "SERVICE_ADDR": "service_addr",
    "ADAPTER_PORT": "port",
    "ADAPTER_VERSION": "version",
    "MESHERY_ROOT": "root_path",
}


class ConfigError(Exception):
    """Raised when adapter configuration cannot be loaded."""

    pass


def _default_root() -> Path:
    return Path.home() / ".meshery"


class Settings(BaseModel):
    """
    Snapshot of the adapter's configuration surface.

    Raw override values are kept as given (``component_method`` may hold
    any string); interpretation happens in the resolvers that consume them.
    Empty strings count as unset.
    """

    component_url: str | None = None
    component_method: str | None = None
    server: str | None = None
    service_addr: str | None = None
    debug: bool = False
    port: int = DEFAULT_PORT
    version: str = DEFAULT_VERSION
    root_path: Path = Field(default_factory=_default_root)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("component_url", "component_method", "server", "service_addr", mode="before")
    @classmethod
    def empty_as_unset(cls, v: Any) -> Any:
        if v == "":
            return None
        return v

    @field_validator("root_path", mode="before")
    @classmethod
    def expand_root(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from an environment mapping (``os.environ`` by default)."""
        if environ is None:
            environ = os.environ
        try:
            return cls(**_env_overrides(environ))
        except ValidationError as e:
            raise ConfigError(f"Invalid adapter environment: {e}") from e

    @classmethod
    def load(cls, path: str | Path, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Load settings from a YAML file, with environment variables on top.

        Raises:
            ConfigError: if the file cannot be read or fails validation
        """
        if environ is None:
            environ = os.environ
        path = Path(path)
        try:
            with path.open() as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read adapter config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Adapter config {path} must be a mapping")

        data.update(_env_overrides(environ))
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid adapter config {path}: {e}") from e

    @property
    def server_address(self) -> str:
        """Orchestration server URL; scheme-less overrides get ``http://``."""
        if self.server:
            if self.server.startswith(("http://", "https://")):
                return self.server
            return f"http://{self.server}"
        return DEFAULT_SERVER_ADDRESS

    @property
    def service_address(self) -> str:
        return self.service_addr or DEFAULT_SERVICE_ADDR

    @property
    def adapter_address(self) -> str:
        """Address the server uses to call back into this adapter."""
        return f"{self.service_address}:{self.port}"


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        value = environ.get(var)
        if value:
            values[field] = value
    if "DEBUG" in environ:
        values["debug"] = environ["DEBUG"] == "true"
    return values


def ensure_root_path(settings: Settings) -> Path:
    """Create ``<root>/bin``, which the rest of the adapter expects to exist."""
    bin_path = settings.root_path / "bin"
    try:
        bin_path.mkdir(mode=0o750, parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create {bin_path}: {e}") from e
    return bin_path
