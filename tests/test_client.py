"""Tests for the registration client."""

import json
import time
from datetime import timedelta

import httpx
import pytest

from meshcatalog.client.registration import RegistrationClient
from meshcatalog.core.static import load_static_capabilities
from meshcatalog.core.schema import StaticCatalog
from meshcatalog.core.settings import Settings
from meshcatalog.refresh.tasks import build_request


class Recorder:
    """Mock transport handler that records requests."""

    def __init__(self, status: int = 200, fail_paths: tuple[str, ...] = (), error: Exception | None = None):
        self.status = status
        self.fail_paths = fail_paths
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.path in self.fail_paths:
            return httpx.Response(500, text="boom")
        return httpx.Response(self.status, json={})

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings():
    return Settings.from_env({
        "MESHERY_SERVER": "meshery.local:9081",
        "SERVICE_ADDR": "cilium-adapter",
        "ADAPTER_VERSION": "1.15.0",
    })


@pytest.fixture
def catalog():
    return load_static_capabilities()


def make_client(handler) -> RegistrationClient:
    return RegistrationClient(transport=httpx.MockTransport(handler))


class TestRegisterDynamic:
    """Tests for dynamic component registration."""

    def test_success(self, settings):
        """Test a successful generation request."""
        recorder = Recorder()
        with make_client(recorder) as client:
            assert client.register_dynamic(build_request(settings)) is True

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://meshery.local:9081/api/meshmodel/components/generate"

    def test_payload(self, settings):
        """Test the request body sent to the server."""
        recorder = Recorder()
        with make_client(recorder) as client:
            client.register_dynamic(build_request(settings))

        body = recorder.body()
        assert body["url"] == (
            "https://raw.githubusercontent.com/cilium/cilium/1.15.0/install/kubernetes/cilium/Chart.yaml"
        )
        assert body["generationMethod"] == "Manifest"
        assert body["host"] == "cilium-adapter:10012"
        assert body["timeoutInMinutes"] == 30
        assert body["operation"] == "cilium_service_mesh"
        assert body["config"]["name"] == "CILIUM_SERVICE_MESH"
        assert body["config"]["meshVersion"] == "1.15.0"
        assert body["config"]["filter"]["RootFilter"] == ['$[?(@.kind=="CustomResourceDefinition")]']

    def test_rejected(self, settings, caplog):
        """Test that a server error is logged, not raised."""
        caplog.set_level("INFO", logger="meshcatalog")
        with make_client(Recorder(status=422)) as client:
            assert client.register_dynamic(build_request(settings)) is False

        assert "HTTP 422" in caplog.text

    def test_timeout(self, settings, caplog):
        """Test that a timed-out call is abandoned and logged."""
        caplog.set_level("INFO", logger="meshcatalog")
        recorder = Recorder(error=httpx.ReadTimeout("timed out"))
        with make_client(recorder) as client:
            assert client.register_dynamic(build_request(settings)) is False

        assert len(recorder.requests) == 1  # no retry
        assert "abandoned after 0:30:00" in caplog.text

    def test_connection_error(self, settings, caplog):
        """Test that an unreachable server is logged, not raised."""
        caplog.set_level("INFO", logger="meshcatalog")
        with make_client(Recorder(error=httpx.ConnectError("refused"))) as client:
            assert client.register_dynamic(build_request(settings)) is False

        assert "failed: refused" in caplog.text

    def test_request_timeout_applied(self, settings):
        """Test that the request's own timeout bounds the call."""
        seen = {}

        def handler(request):
            seen.update(request.extensions["timeout"])
            return httpx.Response(200)

        with make_client(handler) as client:
            client.register_dynamic(build_request(settings))

        assert seen["read"] == timedelta(minutes=30).total_seconds()

    def test_trickling_response_abandoned(self, settings, caplog):
        """Test that a body sent slowly cannot stretch the call past its timeout."""
        caplog.set_level("INFO", logger="meshcatalog")

        def trickle():
            for _ in range(10):
                time.sleep(0.2)
                yield b"x"

        def handler(request):
            return httpx.Response(200, content=trickle())

        timeout = timedelta(seconds=0.5)
        request = build_request(settings).model_copy(update={"timeout": timeout})
        client = RegistrationClient(timeout=timeout, transport=httpx.MockTransport(handler))

        started = time.monotonic()
        with client:
            assert client.register_dynamic(request) is False
        elapsed = time.monotonic() - started

        assert elapsed < 1.5
        assert "abandoned after 0:00:00.500000" in caplog.text

    def test_slow_body_within_timeout(self, settings):
        """Test that a streamed body finishing in time still succeeds."""

        def chunks():
            for _ in range(3):
                time.sleep(0.01)
                yield b"{}"

        def handler(request):
            return httpx.Response(200, content=chunks())

        with make_client(handler) as client:
            assert client.register_dynamic(build_request(settings)) is True


class TestRegisterStatic:
    """Tests for static capability registration."""

    def test_posts_workloads_then_traits(self, settings, catalog):
        """Test that each definition goes to its endpoint."""
        recorder = Recorder()
        with make_client(recorder) as client:
            ok = client.register_static(settings.server_address, settings.adapter_address, catalog)

        assert ok is True
        expected = ["/api/oam/workload"] * len(catalog.workloads) + ["/api/oam/trait"] * len(catalog.traits)
        assert recorder.paths == expected

    def test_payload(self, settings, catalog):
        """Test the body of a workload registration."""
        recorder = Recorder()
        with make_client(recorder) as client:
            client.register_static(settings.server_address, settings.adapter_address, catalog)

        body = recorder.body(0)
        assert body["host"] == "cilium-adapter:10012"
        assert body["oam_definition"]["kind"] == "WorkloadDefinition"
        assert body["metadata"]["adapter.meshery.io/name"] == "CILIUM_SERVICE_MESH"
        assert json.loads(body["oam_ref_schema"])["type"] == "object"

    def test_workload_failure_does_not_skip_traits(self, settings, catalog, caplog):
        """Test that a failed workload still lets traits register."""
        caplog.set_level("INFO", logger="meshcatalog")
        recorder = Recorder(fail_paths=("/api/oam/workload",))
        with make_client(recorder) as client:
            ok = client.register_static(settings.server_address, settings.adapter_address, catalog)

        assert ok is False
        assert "/api/oam/trait" in recorder.paths
        assert "Registering static workloads completed" in caplog.text

    def test_server_down(self, settings, catalog):
        """Test static registration against an unreachable server."""
        with make_client(Recorder(error=httpx.ConnectError("refused"))) as client:
            ok = client.register_static(settings.server_address, settings.adapter_address, catalog)
        assert ok is False

    def test_empty_catalog(self, settings):
        """Test that an empty catalog makes no requests."""
        recorder = Recorder()
        with make_client(recorder) as client:
            assert client.register_static(settings.server_address, settings.adapter_address, StaticCatalog())
        assert recorder.requests == []
