"""Unit tests for the CloudStack API client."""

import asyncio
import time

import httpx
import pytest

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.config import Credentials
from cloudstack_mcp.errors import RemoteApiError, TransportError
from cloudstack_mcp.signing import sign


def make_client(credentials, handler):
    return CloudStackClient(credentials, transport=httpx.MockTransport(handler))


@pytest.fixture
async def trickling_server():
    """Local HTTP server that sends its JSON body one byte every 0.3s."""
    body = b'{"listzonesresponse": {"count": 0}}'
    connections = []

    async def handle(reader, writer):
        connections.append(asyncio.current_task())
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n"
            )
            for i in range(len(body)):
                writer.write(body[i : i + 1])
                await writer.drain()
                await asyncio.sleep(0.3)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}/client/api"

    for task in connections:
        task.cancel()
    server.close()
    await server.wait_closed()


class TestBuildParams:
    def test_injects_command_key_format_and_timestamp(self, credentials):
        client = CloudStackClient(credentials)

        query = client.build_params("listZones", {"available": True})

        assert query["command"] == "listZones"
        assert query["apiKey"] == "test-api-key"
        assert query["response"] == "json"
        assert query["available"] == "true"
        assert query["_"].isdigit()

    def test_signature_covers_every_other_parameter(self, credentials):
        client = CloudStackClient(credentials)

        query = client.build_params("listVirtualMachines", {"id": "vm-1", "page": 2})
        signature = query.pop("signature")

        assert signature == sign("test-secret-key", query)

    def test_none_values_dropped(self, credentials):
        client = CloudStackClient(credentials)

        query = client.build_params("listVolumes", {"virtualmachineid": None, "zoneid": "z-1"})

        assert "virtualmachineid" not in query
        assert query["zoneid"] == "z-1"

    def test_numbers_rendered_for_the_wire(self, credentials):
        client = CloudStackClient(credentials)

        query = client.build_params("resizeVolume", {"id": "vol-1", "size": 20.0})

        assert query["size"] == "20"


class TestRequest:
    async def test_sends_signed_get_to_endpoint(self, credentials):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"listzonesresponse": {"count": 0}})

        async with make_client(credentials, handler) as client:
            body = await client.list_zones({"available": True})

        assert body == {"listzonesresponse": {"count": 0}}
        request = seen[0]
        assert request.method == "GET"
        assert str(request.url).startswith("https://cloud.example.com/client/api?")
        params = dict(request.url.params)
        signature = params.pop("signature")
        assert params["command"] == "listZones"
        assert params["available"] == "true"
        assert signature == sign("test-secret-key", params)

    async def test_errortext_in_wrapper_raises_remote_error(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"listvirtualmachinesresponse": {"errortext": "Unable to find VM", "errorcode": 431}},
            )

        async with make_client(credentials, handler) as client:
            with pytest.raises(RemoteApiError) as exc_info:
                await client.list_virtual_machines({"id": "vm-1"})

        assert "Unable to find VM" in str(exc_info.value)
        assert exc_info.value.errortext == "Unable to find VM"
        assert exc_info.value.errorcode == 431

    async def test_errortext_at_top_level_raises_remote_error(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"errortext": "Bad request"})

        async with make_client(credentials, handler) as client:
            with pytest.raises(RemoteApiError, match="CloudStack API Error: Bad request"):
                await client.list_zones()

    async def test_http_error_status_carries_errortext_and_status(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                431,
                json={"deployvirtualmachineresponse": {"errortext": "Invalid parameter", "errorcode": 431}},
            )

        async with make_client(credentials, handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.deploy_virtual_machine({"zoneid": "z-1"})

        error = exc_info.value
        assert error.status_code == 431
        assert error.errortext == "Invalid parameter"
        assert "Invalid parameter" in str(error)
        assert error.has_code(431)

    async def test_http_error_status_without_json_body(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        async with make_client(credentials, handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.list_zones()

        error = exc_info.value
        assert error.status_code == 502
        assert error.errortext is None
        assert str(error) == "CloudStack API request failed: HTTP 502 Bad Gateway"
        assert "test-api-key" not in str(error)
        assert "signature=" not in str(error)

    async def test_connection_failure_raises_transport_error(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_client(credentials, handler) as client:
            with pytest.raises(TransportError, match="Connection refused"):
                await client.list_zones()

    async def test_timeout_bounds_the_whole_request(self, trickling_server):
        credentials = Credentials(
            api_url=trickling_server, api_key="key", secret_key="secret", timeout_ms=1000
        )
        # Explicit transport keeps proxy environment variables out of the way
        client = CloudStackClient(credentials, transport=httpx.AsyncHTTPTransport())

        started = time.monotonic()
        async with client:
            with pytest.raises(TransportError, match="timed out after 1000ms"):
                await client.list_zones()
        elapsed = time.monotonic() - started

        assert elapsed < 2.0

    async def test_non_json_body_raises_transport_error(self, credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>login</html>")

        async with make_client(credentials, handler) as client:
            with pytest.raises(TransportError, match="invalid JSON"):
                await client.list_zones()


class TestCommandWrappers:
    async def test_list_templates_defaults_to_featured(self, credentials):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(dict(request.url.params))
            return httpx.Response(200, json={"listtemplatesresponse": {}})

        async with make_client(credentials, handler) as client:
            await client.list_templates()
            await client.list_templates({"templatefilter": "self"})

        assert seen[0]["templatefilter"] == "featured"
        assert seen[1]["templatefilter"] == "self"

    async def test_metrics_uses_metrics_command(self, credentials):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params["command"])
            return httpx.Response(200, json={})

        async with make_client(credentials, handler) as client:
            await client.list_virtual_machine_metrics()
            await client.list_ssh_key_pairs()
            await client.expunge_virtual_machine({"id": "vm-1"})

        assert seen == ["listVirtualMachinesMetrics", "listSSHKeyPairs", "expungeVirtualMachine"]
