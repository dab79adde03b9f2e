"""Tests for the listing and single-call handlers outside the VM module."""

import pytest

from cloudstack_mcp import handlers


@pytest.mark.parametrize(
    "handler,method,body,header",
    [
        (handlers.handle_list_volumes, "list_volumes", {"listvolumesresponse": {"volume": [{}]}}, "Found 1 volumes"),
        (handlers.handle_list_networks, "list_networks", {"listnetworksresponse": {"network": [{}]}}, "Found 1 networks"),
        (handlers.handle_list_zones, "list_zones", {"listzonesresponse": {"zone": [{}]}}, "Found 1 zones"),
        (handlers.handle_list_hosts, "list_hosts", {"listhostsresponse": {"host": [{}]}}, "Found 1 hosts"),
        (handlers.handle_list_events, "list_events", {"listeventsresponse": {"event": [{}]}}, "Found 1 events"),
        (handlers.handle_list_capacity, "list_capacity", {"listcapacityresponse": {"capacity": [{}]}}, "System Capacity"),
        (handlers.handle_list_accounts, "list_accounts", {"listaccountsresponse": {"account": [{}]}}, "Found 1 accounts"),
        (handlers.handle_list_storage_pools, "list_storage_pools", {"liststoragepoolsresponse": {"storagepool": [{}]}}, "Found 1 storage pools"),
    ],
)
async def test_missing_fields_render_placeholder(mock_client, handler, method, body, header):
    getattr(mock_client, method).return_value = body

    result = await handler(mock_client, {})

    text = result[0].text
    assert text.startswith(f"{header}:\n\n")
    assert "N/A" in text


async def test_arguments_are_forwarded_without_none(mock_client):
    mock_client.list_volumes.return_value = {}

    await handlers.handle_list_volumes(mock_client, {"virtualmachineid": "vm-1", "zoneid": None})

    mock_client.list_volumes.assert_awaited_once_with({"virtualmachineid": "vm-1"})


async def test_volume_sizes_in_gigabytes(mock_client):
    mock_client.list_volumes.return_value = {
        "listvolumesresponse": {
            "volume": [{"id": "vol-1", "name": "ROOT-1", "size": 21474836480, "vmname": "web-01"}]
        }
    }

    result = await handlers.handle_list_volumes(mock_client, {})

    text = result[0].text
    assert "Size: 20GB" in text
    assert "Attached to: web-01" in text


async def test_metrics_use_metrics_response_key(mock_client):
    mock_client.list_virtual_machine_metrics.return_value = {
        "listvirtualmachinesmetricsresponse": {
            "virtualmachine": [{"id": "vm-1", "name": "web-01", "cpuused": "12%"}]
        }
    }

    result = await handlers.handle_list_virtual_machine_metrics(mock_client, {"ids": "vm-1"})

    text = result[0].text
    assert text.startswith("VM Metrics:\n\n")
    assert "CPU Used: 12%" in text


async def test_async_jobs_show_status_names(mock_client):
    mock_client.list_async_jobs.return_value = {
        "listasyncjobsresponse": {
            "asyncjobs": [{"jobid": "job-1", "jobstatus": 0}, {"jobid": "job-2", "jobstatus": 2}]
        }
    }

    result = await handlers.handle_list_async_jobs(mock_client, {})

    text = result[0].text
    assert "Found 2 async jobs" in text
    assert "Status: Pending" in text
    assert "Status: Error" in text


async def test_account_types_are_named(mock_client):
    mock_client.list_accounts.return_value = {
        "listaccountsresponse": {
            "account": [{"name": "admin", "accounttype": 1}, {"name": "alice", "accounttype": 0}]
        }
    }

    result = await handlers.handle_list_accounts(mock_client, {})

    text = result[0].text
    assert "Type: Root Admin" in text
    assert "Type: User" in text


async def test_capabilities(mock_client):
    mock_client.list_capabilities.return_value = {
        "listcapabilitiesresponse": {
            "capability": {"cloudstackversion": "4.19.0", "securitygroupsenabled": False}
        }
    }

    result = await handlers.handle_list_capabilities(mock_client, {})

    text = result[0].text
    assert "Version: 4.19.0" in text
    assert "Security Groups: False" in text
    assert "Dynamic Scaling: N/A" in text


async def test_created_key_pair_shows_private_key(mock_client):
    mock_client.create_ssh_key_pair.return_value = {
        "createsshkeypairresponse": {
            "keypair": {"name": "deploy", "fingerprint": "aa:bb", "privatekey": "-----BEGIN KEY-----"}
        }
    }

    result = await handlers.handle_create_ssh_key_pair(mock_client, {"name": "deploy"})

    text = result[0].text
    assert "Fingerprint: aa:bb" in text
    assert "-----BEGIN KEY-----" in text


async def test_security_group_rule_authorizes_ingress(mock_client):
    mock_client.authorize_security_group_ingress.return_value = {
        "authorizesecuritygroupingressresponse": {"jobid": "job-9"}
    }
    args = {"securitygroupid": "sg-1", "protocol": "TCP", "startport": 22, "endport": 22}

    result = await handlers.handle_create_security_group_rule(mock_client, args)

    mock_client.authorize_security_group_ingress.assert_awaited_once_with(args)
    assert "Job ID: job-9" in result[0].text
