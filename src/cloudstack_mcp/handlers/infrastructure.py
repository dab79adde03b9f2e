"""Zone, template, offering and physical infrastructure handlers."""

from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.handlers.formatting import (
    field,
    forwarded,
    found,
    gigabytes,
    listing,
    response_body,
    response_items,
    text_result,
)


def _render_zone(zone: dict[str, Any]) -> str:
    return (
        f"• {field(zone, 'name')} ({field(zone, 'id')})\n"
        f"  Network Type: {field(zone, 'networktype')}\n"
        f"  State: {field(zone, 'allocationstate')}\n"
    )


def _render_template(template: dict[str, Any]) -> str:
    return (
        f"• {field(template, 'name')} ({field(template, 'id')})\n"
        f"  Description: {field(template, 'displaytext')}\n"
        f"  OS: {field(template, 'ostypename')}\n"
        f"  Size: {gigabytes(template.get('size'))}\n"
        f"  Ready: {field(template, 'isready')}\n"
        f"  Created: {field(template, 'created')}\n"
    )


def _render_offering(offering: dict[str, Any]) -> str:
    return (
        f"• {field(offering, 'name')} ({field(offering, 'id')})\n"
        f"  CPU: {field(offering, 'cpunumber')} cores\n"
        f"  Memory: {field(offering, 'memory')}MB\n"
        f"  Storage: {field(offering, 'storagetype')}\n"
    )


def _render_host(host: dict[str, Any]) -> str:
    return (
        f"• {field(host, 'name')} ({field(host, 'id')})\n"
        f"  Type: {field(host, 'type')}\n"
        f"  State: {field(host, 'state')}\n"
        f"  Zone: {field(host, 'zonename')}\n"
        f"  Cluster: {field(host, 'clustername')}\n"
    )


def _render_cluster(cluster: dict[str, Any]) -> str:
    return (
        f"• {field(cluster, 'name')} ({field(cluster, 'id')})\n"
        f"  Hypervisor: {field(cluster, 'hypervisortype')}\n"
        f"  Zone: {field(cluster, 'zonename')}\n"
        f"  State: {field(cluster, 'allocationstate')}\n"
    )


def _render_pool(pool: dict[str, Any]) -> str:
    return (
        f"• {field(pool, 'name')} ({field(pool, 'id')})\n"
        f"  Type: {field(pool, 'type')}\n"
        f"  Zone: {field(pool, 'zonename')}\n"
        f"  State: {field(pool, 'state')}\n"
        f"  Size: {gigabytes(pool.get('disksizeallocated'))} used / "
        f"{gigabytes(pool.get('disksizetotal'))} total\n"
    )


def _render_system_vm(vm: dict[str, Any]) -> str:
    return (
        f"• {field(vm, 'name')} ({field(vm, 'id')})\n"
        f"  Type: {field(vm, 'systemvmtype')}\n"
        f"  State: {field(vm, 'state')}\n"
        f"  Zone: {field(vm, 'zonename')}\n"
    )


async def handle_list_zones(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_zones(forwarded(args))
    zones = response_items(result, "listZones", "zone")
    return listing(found(len(zones), "zones"), zones, _render_zone)


async def handle_list_templates(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_templates(forwarded(args))
    templates = response_items(result, "listTemplates", "template")
    return listing(found(len(templates), "templates"), templates, _render_template)


async def handle_list_service_offerings(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_service_offerings(forwarded(args))
    offerings = response_items(result, "listServiceOfferings", "serviceoffering")
    return listing(found(len(offerings), "service offerings"), offerings, _render_offering)


async def handle_list_hosts(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_hosts(forwarded(args))
    hosts = response_items(result, "listHosts", "host")
    return listing(found(len(hosts), "hosts"), hosts, _render_host)


async def handle_list_clusters(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_clusters(forwarded(args))
    clusters = response_items(result, "listClusters", "cluster")
    return listing(found(len(clusters), "clusters"), clusters, _render_cluster)


async def handle_list_storage_pools(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_storage_pools(forwarded(args))
    pools = response_items(result, "listStoragePools", "storagepool")
    return listing(found(len(pools), "storage pools"), pools, _render_pool)


async def handle_list_system_vms(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_system_vms(forwarded(args))
    system_vms = response_items(result, "listSystemVms", "systemvm")
    return listing(found(len(system_vms), "system VMs"), system_vms, _render_system_vm)


async def handle_list_capabilities(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_capabilities()
    capability = response_body(result, "listCapabilities").get("capability")
    if not isinstance(capability, dict):
        capability = {}
    return text_result(
        "CloudStack Capabilities:\n"
        f"  Version: {field(capability, 'cloudstackversion')}\n"
        f"  Security Groups: {field(capability, 'securitygroupsenabled')}\n"
        f"  Dynamic Scaling: {field(capability, 'dynamicscalingenabled')}\n"
        f"  Custom Disk Max Size: {field(capability, 'customdiskofferingmaxsize')}GB\n"
        f"  KVM Snapshots: {field(capability, 'kvmsnapshotenabled')}\n"
    )
