"""Virtual machine handlers, including the destroy and deploy workflows."""

import asyncio
from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.core.logging import get_logger
from cloudstack_mcp.errors import CloudStackError, invalid_request
from cloudstack_mcp.handlers.formatting import (
    field,
    first_item,
    forwarded,
    found,
    job_id,
    job_status,
    listing,
    response_body,
    response_items,
    text_result,
)
from cloudstack_mcp.handlers.workflows import WorkflowResult, require_confirmation

logger = get_logger(__name__)

# Pauses that give CloudStack time to act on an async stop/destroy
STOP_SETTLE_SECONDS = 3.0
DESTROY_SETTLE_SECONDS = 2.0

# CloudStack error codes recognised by the deploy workflow
RESOURCE_LIMIT_ERROR = 530
PARAMETER_ERROR = 431

DEPLOY_REQUIRED = ("serviceofferingid", "templateid", "zoneid")


def _render_vm(vm: dict[str, Any]) -> str:
    return (
        f"• {field(vm, 'name')} ({field(vm, 'id')})\n"
        f"  State: {field(vm, 'state')}\n"
        f"  Zone: {field(vm, 'zonename')}\n"
        f"  Template: {field(vm, 'templatename')}\n"
        f"  CPU: {field(vm, 'cpunumber')}, Memory: {field(vm, 'memory')}MB\n"
        f"  Created: {field(vm, 'created')}\n"
    )


async def handle_list_virtual_machines(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_virtual_machines(forwarded(args))
    vms = response_items(result, "listVirtualMachines", "virtualmachine")
    return listing(found(len(vms), "virtual machines"), vms, _render_vm)


async def handle_get_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    vm_id = args.get("id")
    result = await client.list_virtual_machines({"id": vm_id})
    vm = first_item(result, "listVirtualMachines", "virtualmachine")
    if vm is None:
        raise invalid_request(f"Virtual machine with ID {vm_id} not found")

    text = (
        "Virtual Machine Details:\n"
        f"Name: {field(vm, 'name')}\n"
        f"Display Name: {field(vm, 'displayname')}\n"
        f"ID: {field(vm, 'id')}\n"
        f"State: {field(vm, 'state')}\n"
        f"Zone: {field(vm, 'zonename')}\n"
        f"Template: {field(vm, 'templatename')}\n"
        f"Service Offering: {field(vm, 'serviceofferingname')}\n"
        f"CPU: {field(vm, 'cpunumber')}\n"
        f"Memory: {field(vm, 'memory')}MB\n"
        f"Created: {field(vm, 'created')}\n"
    )
    nics = [nic for nic in vm.get("nic") or [] if isinstance(nic, dict)]
    if nics:
        text += "\nNetwork:\n" + "\n".join(
            f"  IP: {field(nic, 'ipaddress')}, Network: {field(nic, 'networkname')}"
            for nic in nics
        )
    return text_result(text)


async def handle_start_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.start_virtual_machine({"id": args.get("id")})
    return text_result(
        f"Virtual machine {args.get('id')} start initiated. "
        f"Job ID: {job_id(result, 'startVirtualMachine')}"
    )


async def handle_stop_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.stop_virtual_machine(forwarded(args))
    forced = " (forced)" if args.get("forced") else ""
    return text_result(
        f"Virtual machine {args.get('id')} stop initiated{forced}. "
        f"Job ID: {job_id(result, 'stopVirtualMachine')}"
    )


async def handle_reboot_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.reboot_virtual_machine({"id": args.get("id")})
    return text_result(
        f"Virtual machine {args.get('id')} reboot initiated. "
        f"Job ID: {job_id(result, 'rebootVirtualMachine')}"
    )


async def handle_destroy_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    """Destroy a VM: stop if needed, destroy, then expunge unless expunge=false.

    The VM lookup and the destroy call are fatal on failure. The stop and
    the expunge attempts are best effort: CloudStack rejects them in some
    VM states and API versions, and the VM still ends up destroyed.
    """
    require_confirmation(
        args,
        "DESTRUCTIVE ACTION BLOCKED: This will permanently delete the virtual machine. "
        "Please set confirm=true to proceed. THIS CANNOT BE UNDONE.",
    )
    vm_id = args.get("id")
    expunge = args.get("expunge") is not False

    vms = await client.list_virtual_machines({"id": vm_id})
    vm = first_item(vms, "listVirtualMachines", "virtualmachine")
    if vm is None:
        raise invalid_request(f"Virtual machine {vm_id} not found")

    name = field(vm, "name", default=vm_id)
    state = vm.get("state")
    workflow = WorkflowResult()

    if state in ("Running", "Error"):
        logger.info(f"VM {name} is in {state} state, stopping first")
        await workflow.attempt(
            "Stop",
            lambda: client.stop_virtual_machine({"id": vm_id, "forced": state == "Error"}),
            "stopVirtualMachine",
        )
        await asyncio.sleep(STOP_SETTLE_SECONDS)

    logger.info(f"Destroying VM {name}")
    destroyed = await client.destroy_virtual_machine({"id": vm_id, "expunge": False})
    workflow.record(destroyed, "destroyVirtualMachine")
    await asyncio.sleep(DESTROY_SETTLE_SECONDS)

    expunged = False
    if expunge:
        logger.info(f"Expunging VM {name}")
        response = await workflow.attempt(
            "Expunge",
            lambda: client.expunge_virtual_machine({"id": vm_id}),
            "expungeVirtualMachine",
        )
        if response is None:
            response = await workflow.attempt(
                "Destroy with expunge",
                lambda: client.destroy_virtual_machine({"id": vm_id, "expunge": True}),
                "destroyVirtualMachine",
            )
        expunged = response is not None

    outcome = "destroyed and expunged" if expunged else "destroyed (not expunged)"
    text = (
        f"⚠️  DESTRUCTIVE ACTION EXECUTED: Virtual machine {name} ({vm_id}) "
        "destruction workflow completed.\n\n"
        f"Job IDs: {', '.join(workflow.job_ids) or 'none'}\n\n"
        f"The VM has been {outcome}.\n\n"
    )
    if workflow.warnings:
        text += "Warnings:\n" + "\n".join(f"  - {w}" for w in workflow.warnings) + "\n\n"
    text += "Note: It may take a few moments for the VM to be fully removed."
    return text_result(text)


async def _resolve_network(client: CloudStackClient, zone_id: str) -> str | None:
    """Pick a network for zones that cannot deploy without one.

    Returns:
        The first network id of an Advanced zone, or None for other zones

    Raises:
        McpError: The zone is Advanced and has no networks
    """
    zones = await client.list_zones({"id": zone_id})
    zone = first_item(zones, "listZones", "zone")
    if zone is None or zone.get("networktype") != "Advanced":
        return None

    networks = await client.list_networks({"zoneid": zone_id})
    network = first_item(networks, "listNetworks", "network")
    if network is None or not network.get("id"):
        raise invalid_request(
            "This is an Advanced zone but no networks are available. "
            "Please create a network first."
        )
    logger.info(
        f"Auto-selected network {field(network, 'name')} ({network['id']}) for Advanced zone"
    )
    return str(network["id"])


async def handle_deploy_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    """Deploy a VM, choosing a network first when the zone requires one."""
    missing = [name for name in DEPLOY_REQUIRED if not args.get(name)]
    if missing:
        raise invalid_request(f"Missing required parameters: {', '.join(missing)}")

    params = forwarded(args)
    if not params.get("networkids"):
        params.pop("networkids", None)
        network_id = await _resolve_network(client, params["zoneid"])
        if network_id:
            params["networkids"] = network_id

    try:
        result = await client.deploy_virtual_machine(params)
    except CloudStackError as e:
        if e.has_code(RESOURCE_LIMIT_ERROR):
            raise invalid_request(
                "VM limit reached for your account. "
                "Please destroy some existing VMs before creating new ones."
            ) from e
        if e.has_code(PARAMETER_ERROR):
            raise invalid_request(
                "Missing required parameter. "
                "For Advanced zones, you may need to specify networkids."
            ) from e
        raise

    return text_result(
        "Virtual machine deployment initiated successfully!\n"
        f"Job ID: {job_id(result, 'deployVirtualMachine')}\n\n"
        "Tip: Use query_async_job_result with this Job ID to check deployment status."
    )


async def handle_scale_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    require_confirmation(
        args,
        "DISRUPTIVE ACTION BLOCKED: Scaling restarts the virtual machine. "
        "Please set confirm=true to proceed.",
    )
    result = await client.scale_virtual_machine(forwarded(args))
    return text_result(
        f"Virtual machine {args.get('id')} scaling initiated. "
        f"Job ID: {job_id(result, 'scaleVirtualMachine')}"
    )


async def handle_migrate_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    require_confirmation(
        args,
        "DISRUPTIVE ACTION BLOCKED: Migration may cause downtime for the virtual machine. "
        "Please set confirm=true to proceed.",
    )
    result = await client.migrate_virtual_machine(forwarded(args))
    return text_result(
        f"Virtual machine {args.get('virtualmachineid')} migration initiated. "
        f"Job ID: {job_id(result, 'migrateVirtualMachine')}"
    )


async def handle_reset_password_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    require_confirmation(
        args,
        "SECURITY-SENSITIVE ACTION BLOCKED: This changes the virtual machine password. "
        "Please set confirm=true to proceed.",
    )
    result = await client.reset_password_for_virtual_machine(forwarded(args))
    return text_result(
        f"Password reset initiated for VM {args.get('id')}. "
        f"Job ID: {job_id(result, 'resetPasswordForVirtualMachine')}"
    )


async def handle_change_service_offering_virtual_machine(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.change_service_for_virtual_machine(forwarded(args))
    body = response_body(result, "changeServiceForVirtualMachine")
    vm = body.get("virtualmachine") if isinstance(body.get("virtualmachine"), dict) else {}
    offering = field(vm, "serviceofferingname", default=args.get("serviceofferingid"))
    return text_result(f"Service offering for VM {args.get('id')} changed to {offering}.")


async def handle_query_async_job_result(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.query_async_job_result({"jobid": args.get("jobid")})
    body = response_body(result, "queryAsyncJobResult")
    status = job_status(body.get("jobstatus"))

    text = (
        f"Job {args.get('jobid')}\n"
        f"  Status: {status}\n"
        f"  Command: {field(body, 'cmd')}\n"
        f"  Created: {field(body, 'created')}\n"
    )
    job_result = body.get("jobresult")
    if isinstance(job_result, dict) and job_result.get("errortext"):
        text += f"  Error: {job_result['errortext']}\n"
    elif body.get("jobinstanceid"):
        text += (
            f"  Resource: {field(body, 'jobinstancetype')} {body['jobinstanceid']}\n"
        )
    return text_result(text)
