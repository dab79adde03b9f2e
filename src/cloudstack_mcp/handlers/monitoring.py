"""Metrics, events, alerts, capacity and async job handlers."""

from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.handlers.formatting import (
    field,
    forwarded,
    found,
    job_status,
    listing,
    response_items,
)


def _render_metrics(vm: dict[str, Any]) -> str:
    return (
        f"• {field(vm, 'name')} ({field(vm, 'id')})\n"
        f"  CPU Used: {field(vm, 'cpuused')}\n"
        f"  Memory Used: {field(vm, 'memoryused')}\n"
        f"  Network Read: {field(vm, 'networkkbsread')}\n"
        f"  Network Write: {field(vm, 'networkkbswrite')}\n"
    )


def _render_event(event: dict[str, Any]) -> str:
    return (
        f"• {field(event, 'type')} - {field(event, 'description')}\n"
        f"  Level: {field(event, 'level')}\n"
        f"  Created: {field(event, 'created')}\n"
    )


def _render_alert(alert: dict[str, Any]) -> str:
    return f"• {field(alert, 'type')} - {field(alert, 'description')}\n  Sent: {field(alert, 'sent')}\n"


def _render_capacity(cap: dict[str, Any]) -> str:
    return (
        f"• {field(cap, 'name', default=field(cap, 'type'))}: {field(cap, 'percentused')}% used\n"
        f"  Used: {field(cap, 'capacityused')} / {field(cap, 'capacitytotal')}\n"
        f"  Zone: {field(cap, 'zonename')}\n"
    )


def _render_job(job: dict[str, Any]) -> str:
    return (
        f"• Job {field(job, 'jobid')}\n"
        f"  Command: {field(job, 'cmd')}\n"
        f"  Status: {job_status(job.get('jobstatus'))}\n"
        f"  Created: {field(job, 'created')}\n"
    )


async def handle_list_virtual_machine_metrics(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_virtual_machine_metrics(forwarded(args))
    metrics = response_items(result, "listVirtualMachinesMetrics", "virtualmachine")
    return listing("VM Metrics", metrics, _render_metrics)


async def handle_list_events(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_events(forwarded(args))
    events = response_items(result, "listEvents", "event")
    return listing(found(len(events), "events"), events, _render_event)


async def handle_list_alerts(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_alerts(forwarded(args))
    alerts = response_items(result, "listAlerts", "alert")
    return listing(found(len(alerts), "alerts"), alerts, _render_alert)


async def handle_list_capacity(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_capacity(forwarded(args))
    capacity = response_items(result, "listCapacity", "capacity")
    return listing("System Capacity", capacity, _render_capacity)


async def handle_list_async_jobs(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_async_jobs(forwarded(args))
    jobs = response_items(result, "listAsyncJobs", "asyncjobs")
    return listing(found(len(jobs), "async jobs"), jobs, _render_job)
