"""Async HTTP client for the CloudStack management API."""

import asyncio
import time
from typing import Any

import httpx

from cloudstack_mcp.config import Credentials
from cloudstack_mcp.core.logging import get_logger
from cloudstack_mcp.errors import RemoteApiError, TransportError
from cloudstack_mcp.signing import sign, to_wire

logger = get_logger(__name__)

Params = dict[str, Any]


def _extract_error(body: Any, command: str) -> tuple[str | None, int | None]:
    """Find ``errortext``/``errorcode`` at the top level or inside the command wrapper."""
    if not isinstance(body, dict):
        return None, None
    candidates = [body]
    wrapper = body.get(f"{command.lower()}response")
    if isinstance(wrapper, dict):
        candidates.append(wrapper)
    for candidate in candidates:
        if candidate.get("errortext"):
            return str(candidate["errortext"]), candidate.get("errorcode")
    return None, None


class CloudStackClient:
    """Client for the CloudStack API.

    Every call is a signed GET against the configured endpoint. Failures are
    raised as ``RemoteApiError`` or ``TransportError``; nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.credentials = credentials
        self.client = httpx.AsyncClient(
            timeout=credentials.timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "CloudStackClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def build_params(self, command: str, params: Params | None = None) -> dict[str, str]:
        """Render, complete and sign the query parameters for one command.

        Args:
            command: CloudStack command name (e.g. ``listZones``)
            params: Caller parameters; ``None`` values are dropped

        Returns:
            The exact query parameters to send, including ``signature``
        """
        query = {
            key: to_wire(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        query["command"] = command
        query["apiKey"] = self.credentials.api_key
        query["response"] = "json"
        query["_"] = str(int(time.time() * 1000))
        query["signature"] = sign(self.credentials.secret_key, query)
        return query

    async def request(self, command: str, params: Params | None = None) -> dict[str, Any]:
        """Call a CloudStack command and return the parsed JSON body.

        Args:
            command: CloudStack command name
            params: Command parameters

        Returns:
            Response JSON, keyed by ``<command lowercased>response``

        Raises:
            RemoteApiError: The API returned an ``errortext``
            TransportError: The HTTP request failed, took longer than the
                configured timeout, or the body was not JSON
        """
        query = self.build_params(command, params)
        logger.debug(f"CloudStack request: {command}")

        # The httpx timeout bounds each phase; wait_for bounds the whole call
        try:
            response = await asyncio.wait_for(
                self.client.get(self.credentials.api_url, params=query),
                timeout=self.credentials.timeout_seconds,
            )
            response.raise_for_status()
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"CloudStack API request failed: {command} timed out after "
                f"{self.credentials.timeout_ms}ms"
            ) from e
        except httpx.HTTPStatusError as e:
            try:
                body = e.response.json()
            except ValueError:
                body = None
            errortext, errorcode = _extract_error(body, command)
            # str(e) would carry the signed URL, including apiKey and signature
            status = f"HTTP {e.response.status_code} {e.response.reason_phrase}".rstrip()
            raise TransportError(
                f"CloudStack API request failed: {errortext or status}",
                errortext=errortext,
                errorcode=errorcode,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"CloudStack API request failed: {str(e) or type(e).__name__}"
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"CloudStack API request failed: invalid JSON response for {command}: {e}",
                status_code=response.status_code,
            ) from e

        errortext, errorcode = _extract_error(body, command)
        if errortext:
            raise RemoteApiError(
                f"CloudStack API Error: {errortext}",
                errortext=errortext,
                errorcode=errorcode,
                status_code=response.status_code,
            )
        return body

    # Virtual machines

    async def list_virtual_machines(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listVirtualMachines", params)

    async def deploy_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("deployVirtualMachine", params)

    async def start_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("startVirtualMachine", params)

    async def stop_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("stopVirtualMachine", params)

    async def reboot_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("rebootVirtualMachine", params)

    async def destroy_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("destroyVirtualMachine", params)

    async def expunge_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("expungeVirtualMachine", params)

    async def scale_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("scaleVirtualMachine", params)

    async def migrate_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("migrateVirtualMachine", params)

    async def reset_password_for_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("resetPasswordForVirtualMachine", params)

    async def change_service_for_virtual_machine(self, params: Params) -> dict[str, Any]:
        return await self.request("changeServiceForVirtualMachine", params)

    # Zones, templates, offerings, jobs

    async def list_zones(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listZones", params)

    async def list_templates(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listTemplates", {"templatefilter": "featured", **(params or {})})

    async def list_service_offerings(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listServiceOfferings", params)

    async def query_async_job_result(self, params: Params) -> dict[str, Any]:
        return await self.request("queryAsyncJobResult", params)

    # Storage

    async def list_volumes(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listVolumes", params)

    async def create_volume(self, params: Params) -> dict[str, Any]:
        return await self.request("createVolume", params)

    async def attach_volume(self, params: Params) -> dict[str, Any]:
        return await self.request("attachVolume", params)

    async def detach_volume(self, params: Params) -> dict[str, Any]:
        return await self.request("detachVolume", params)

    async def resize_volume(self, params: Params) -> dict[str, Any]:
        return await self.request("resizeVolume", params)

    async def create_snapshot(self, params: Params) -> dict[str, Any]:
        return await self.request("createSnapshot", params)

    async def list_snapshots(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listSnapshots", params)

    # Networking

    async def list_networks(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listNetworks", params)

    async def create_network(self, params: Params) -> dict[str, Any]:
        return await self.request("createNetwork", params)

    async def list_public_ip_addresses(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listPublicIpAddresses", params)

    async def associate_ip_address(self, params: Params) -> dict[str, Any]:
        return await self.request("associateIpAddress", params)

    async def enable_static_nat(self, params: Params) -> dict[str, Any]:
        return await self.request("enableStaticNat", params)

    async def create_firewall_rule(self, params: Params) -> dict[str, Any]:
        return await self.request("createFirewallRule", params)

    async def list_load_balancer_rules(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listLoadBalancerRules", params)

    async def create_load_balancer_rule(self, params: Params) -> dict[str, Any]:
        return await self.request("createLoadBalancerRule", params)

    # Monitoring

    async def list_virtual_machine_metrics(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listVirtualMachinesMetrics", params)

    async def list_events(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listEvents", params)

    async def list_alerts(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listAlerts", params)

    async def list_capacity(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listCapacity", params)

    async def list_async_jobs(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listAsyncJobs", params)

    # Accounts and users

    async def list_accounts(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listAccounts", params)

    async def list_users(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listUsers", params)

    async def list_domains(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listDomains", params)

    async def list_usage_records(self, params: Params) -> dict[str, Any]:
        return await self.request("listUsageRecords", params)

    # Infrastructure

    async def list_hosts(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listHosts", params)

    async def list_clusters(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listClusters", params)

    async def list_storage_pools(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listStoragePools", params)

    async def list_system_vms(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listSystemVms", params)

    async def list_capabilities(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listCapabilities", params)

    # Security

    async def list_ssh_key_pairs(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listSSHKeyPairs", params)

    async def create_ssh_key_pair(self, params: Params) -> dict[str, Any]:
        return await self.request("createSSHKeyPair", params)

    async def list_security_groups(self, params: Params | None = None) -> dict[str, Any]:
        return await self.request("listSecurityGroups", params)

    async def authorize_security_group_ingress(self, params: Params) -> dict[str, Any]:
        return await self.request("authorizeSecurityGroupIngress", params)
