"""HTTP client for registering components with the orchestration server."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Any

import httpx

from meshcatalog.core.schema import RegistrationRequest, StaticCapability, StaticCatalog

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=30)

GENERATE_PATH = "/api/meshmodel/components/generate"
WORKLOAD_PATH = "/api/oam/workload"
TRAIT_PATH = "/api/oam/trait"


class RegistrationError(Exception):
    """Raised when the server cannot be reached or rejects a registration."""

    pass


class RegistrationClient:
    """
    Best-effort registration calls against an orchestration server.

    Public ``register_*`` methods never raise for remote failures: the
    error is logged and ``False`` returned, so a bad cycle cannot take
    the adapter down. Every call is bounded by a timeout.
    """

    def __init__(
        self,
        timeout: timedelta = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            timeout: Upper bound for each request
            transport: Optional httpx transport (used by tests)
        """
        self._timeout = timeout
        self._http = httpx.Client(timeout=timeout.total_seconds(), transport=transport)

    def register_dynamic(self, request: RegistrationRequest) -> bool:
        """Ask the server to generate and store components from a live source."""
        try:
            self._post(
                request.server_address,
                GENERATE_PATH,
                request.to_payload(),
                timeout=request.timeout,
            )
        except RegistrationError as e:
            logger.info("%s", e)
            return False
        logger.info("Latest workload components successfully registered.")
        return True

    def register_static(
        self,
        server_address: str,
        adapter_address: str,
        catalog: StaticCatalog,
    ) -> bool:
        """
        Register fixed workload and trait definitions.

        Each definition is posted on its own; one failure does not stop the
        rest. Returns True only if every definition was accepted.
        """
        logger.info("Registering static workloads...")
        workloads_ok = self._register_all(server_address, WORKLOAD_PATH, adapter_address, catalog.workloads)
        logger.info("Registering static workloads completed")

        traits_ok = self._register_all(server_address, TRAIT_PATH, adapter_address, catalog.traits)
        return workloads_ok and traits_ok

    def _register_all(
        self,
        server_address: str,
        path: str,
        adapter_address: str,
        capabilities: list[StaticCapability],
    ) -> bool:
        ok = True
        for capability in capabilities:
            try:
                self._post(server_address, path, capability.to_payload(adapter_address))
            except RegistrationError as e:
                logger.info("%s: %s", capability.name, e)
                ok = False
            else:
                logger.debug("Registered %s %s", capability.kind, capability.name)
        return ok

    def _post(
        self,
        server_address: str,
        path: str,
        payload: dict[str, Any],
        timeout: timedelta | None = None,
    ) -> bytes:
        """
        POST ``payload`` and return the response body.

        The whole exchange, body included, must finish within ``timeout``.
        The body is streamed and the deadline checked after every chunk, so
        a server trickling bytes cannot keep the call open past its bound.
        """
        url = f"{server_address.rstrip('/')}{path}"
        timeout = timeout or self._timeout
        deadline = time.monotonic() + timeout.total_seconds()
        abandoned = f"Registration at {url} abandoned after {timeout}"

        chunks: list[bytes] = []
        try:
            with self._http.stream("POST", url, json=payload, timeout=timeout.total_seconds()) as response:
                if time.monotonic() > deadline:
                    raise RegistrationError(abandoned)
                for chunk in response.iter_bytes():
                    if time.monotonic() > deadline:
                        raise RegistrationError(abandoned)
                    chunks.append(chunk)
        except httpx.TimeoutException as e:
            raise RegistrationError(abandoned) from e
        except httpx.HTTPError as e:
            raise RegistrationError(f"Registration at {url} failed: {e}") from e

        body = b"".join(chunks)
        if response.is_error:
            text = body.decode(errors="replace")
            raise RegistrationError(
                f"Registration at {url} rejected: HTTP {response.status_code} {text}".rstrip()
            )
        return body

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> RegistrationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
