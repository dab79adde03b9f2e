"""Volume and snapshot handlers."""

from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.handlers.formatting import (
    field,
    forwarded,
    found,
    gigabytes,
    job_id,
    listing,
    response_items,
    text_result,
)
from cloudstack_mcp.handlers.workflows import require_confirmation


def _render_volume(volume: dict[str, Any]) -> str:
    return (
        f"• {field(volume, 'name')} ({field(volume, 'id')})\n"
        f"  Type: {field(volume, 'type')}\n"
        f"  Size: {gigabytes(volume.get('size'))}\n"
        f"  State: {field(volume, 'state')}\n"
        f"  Attached to: {field(volume, 'vmname', default='None')}\n"
        f"  Zone: {field(volume, 'zonename')}\n"
        f"  Created: {field(volume, 'created')}\n"
    )


def _render_snapshot(snapshot: dict[str, Any]) -> str:
    return (
        f"• {field(snapshot, 'name')} ({field(snapshot, 'id')})\n"
        f"  Volume: {field(snapshot, 'volumename')}\n"
        f"  Type: {field(snapshot, 'snapshottype')}\n"
        f"  State: {field(snapshot, 'state')}\n"
        f"  Created: {field(snapshot, 'created')}\n"
    )


async def handle_list_volumes(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_volumes(forwarded(args))
    volumes = response_items(result, "listVolumes", "volume")
    return listing(found(len(volumes), "volumes"), volumes, _render_volume)


async def handle_create_volume(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.create_volume(forwarded(args))
    return text_result(f"Volume creation initiated. Job ID: {job_id(result, 'createVolume')}")


async def handle_attach_volume(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.attach_volume(forwarded(args))
    return text_result(
        f"Volume {args.get('id')} attachment initiated. Job ID: {job_id(result, 'attachVolume')}"
    )


async def handle_detach_volume(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    require_confirmation(
        args,
        "POTENTIALLY DANGEROUS ACTION BLOCKED: Detaching a mounted volume may cause data loss. "
        "Unmount it first, then set confirm=true to proceed.",
    )
    result = await client.detach_volume(forwarded(args))
    return text_result(
        f"Volume {args.get('id')} detachment initiated. Job ID: {job_id(result, 'detachVolume')}"
    )


async def handle_resize_volume(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    require_confirmation(
        args,
        "STORAGE MODIFICATION BLOCKED: Resizing may require manual filesystem expansion. "
        "Please set confirm=true to proceed.",
    )
    result = await client.resize_volume(forwarded(args))
    return text_result(
        f"Volume {args.get('id')} resize to {args.get('size')}GB initiated. "
        f"Job ID: {job_id(result, 'resizeVolume')}"
    )


async def handle_create_snapshot(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.create_snapshot(forwarded(args))
    return text_result(
        f"Snapshot creation initiated for volume {args.get('volumeid')}. "
        f"Job ID: {job_id(result, 'createSnapshot')}"
    )


async def handle_list_snapshots(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_snapshots(forwarded(args))
    snapshots = response_items(result, "listSnapshots", "snapshot")
    return listing(found(len(snapshots), "snapshots"), snapshots, _render_snapshot)
