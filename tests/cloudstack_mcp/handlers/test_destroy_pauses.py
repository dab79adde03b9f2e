"""The destroy workflow pauses after stopping and after destroying."""

from unittest.mock import AsyncMock, patch

import pytest

from cloudstack_mcp.errors import RemoteApiError
from cloudstack_mcp.handlers.virtual_machines import handle_destroy_virtual_machine


def vm_listing(state):
    return {
        "listvirtualmachinesresponse": {
            "virtualmachine": [{"id": "vm-1", "name": "web-01", "state": state}]
        }
    }


@pytest.fixture
def steps(mock_client):
    """Record every remote call and pause in the order they happen."""
    events = []

    def recorder(name):
        async def step(params):
            events.append((name, params))
            return {}

        return step

    mock_client.stop_virtual_machine.side_effect = recorder("stop")
    mock_client.destroy_virtual_machine.side_effect = recorder("destroy")
    mock_client.expunge_virtual_machine.side_effect = recorder("expunge")
    sleep = AsyncMock(side_effect=lambda seconds: events.append(("sleep", seconds)))
    return events, sleep


async def test_pauses_between_stop_destroy_and_expunge(mock_client, steps):
    events, sleep = steps
    mock_client.list_virtual_machines.return_value = vm_listing("Running")

    with patch("cloudstack_mcp.handlers.virtual_machines.asyncio.sleep", sleep):
        await handle_destroy_virtual_machine(mock_client, {"id": "vm-1", "confirm": True})

    assert events == [
        ("stop", {"id": "vm-1", "forced": False}),
        ("sleep", 3.0),
        ("destroy", {"id": "vm-1", "expunge": False}),
        ("sleep", 2.0),
        ("expunge", {"id": "vm-1"}),
    ]


async def test_pause_after_failed_stop(mock_client, steps):
    events, sleep = steps
    mock_client.list_virtual_machines.return_value = vm_listing("Error")

    async def failing_stop(params):
        events.append(("stop", params))
        raise RemoteApiError("CloudStack API Error: VM is busy")

    mock_client.stop_virtual_machine.side_effect = failing_stop

    with patch("cloudstack_mcp.handlers.virtual_machines.asyncio.sleep", sleep):
        await handle_destroy_virtual_machine(mock_client, {"id": "vm-1", "confirm": True})

    assert [name for name, _ in events] == ["stop", "sleep", "destroy", "sleep", "expunge"]
    assert ("sleep", 3.0) in events


async def test_stopped_vm_only_pauses_after_destroy(mock_client, steps):
    events, sleep = steps
    mock_client.list_virtual_machines.return_value = vm_listing("Stopped")

    with patch("cloudstack_mcp.handlers.virtual_machines.asyncio.sleep", sleep):
        await handle_destroy_virtual_machine(
            mock_client, {"id": "vm-1", "confirm": True, "expunge": False}
        )

    assert events == [("destroy", {"id": "vm-1", "expunge": False}), ("sleep", 2.0)]
