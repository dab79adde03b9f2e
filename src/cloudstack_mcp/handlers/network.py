"""Network, public IP, firewall and load balancer handlers."""

from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.handlers.formatting import (
    field,
    forwarded,
    found,
    job_id,
    listing,
    response_body,
    response_items,
    text_result,
)


def _render_network(network: dict[str, Any]) -> str:
    return (
        f"• {field(network, 'name')} ({field(network, 'id')})\n"
        f"  Type: {field(network, 'type')}\n"
        f"  CIDR: {field(network, 'cidr')}\n"
        f"  Zone: {field(network, 'zonename')}\n"
        f"  State: {field(network, 'state')}\n"
    )


def _render_ip(ip: dict[str, Any]) -> str:
    return (
        f"• {field(ip, 'ipaddress')} ({field(ip, 'id')})\n"
        f"  Zone: {field(ip, 'zonename')}\n"
        f"  State: {field(ip, 'state')}\n"
        f"  Static NAT: {'Yes' if ip.get('isstaticnat') else 'No'}\n"
        f"  Network: {field(ip, 'associatednetworkname', default='None')}\n"
    )


def _render_lb_rule(rule: dict[str, Any]) -> str:
    return (
        f"• {field(rule, 'name')} ({field(rule, 'id')})\n"
        f"  Public IP: {field(rule, 'publicip')}:{field(rule, 'publicport')}\n"
        f"  Private Port: {field(rule, 'privateport')}\n"
        f"  Algorithm: {field(rule, 'algorithm')}\n"
        f"  State: {field(rule, 'state')}\n"
    )


async def handle_list_networks(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_networks(forwarded(args))
    networks = response_items(result, "listNetworks", "network")
    return listing(found(len(networks), "networks"), networks, _render_network)


async def handle_create_network(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.create_network(forwarded(args))
    network = response_body(result, "createNetwork").get("network")
    if isinstance(network, dict):
        return text_result(
            f"Network {field(network, 'name')} created. ID: {field(network, 'id')}"
        )
    return text_result(f"Network creation initiated. Job ID: {job_id(result, 'createNetwork')}")


async def handle_list_public_ip_addresses(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_public_ip_addresses(forwarded(args))
    ips = response_items(result, "listPublicIpAddresses", "publicipaddress")
    return listing(found(len(ips), "public IP addresses"), ips, _render_ip)


async def handle_associate_ip_address(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.associate_ip_address(forwarded(args))
    return text_result(
        f"IP address association initiated. Job ID: {job_id(result, 'associateIpAddress')}"
    )


async def handle_enable_static_nat(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.enable_static_nat(forwarded(args))
    success = response_body(result, "enableStaticNat").get("success")
    return text_result(
        f"Static NAT enabled for IP {args.get('ipaddressid')} to VM "
        f"{args.get('virtualmachineid')}. Success: {success}"
    )


async def handle_create_firewall_rule(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.create_firewall_rule(forwarded(args))
    return text_result(
        f"Firewall rule creation initiated. Job ID: {job_id(result, 'createFirewallRule')}"
    )


async def handle_list_load_balancer_rules(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_load_balancer_rules(forwarded(args))
    rules = response_items(result, "listLoadBalancerRules", "loadbalancerrule")
    return listing(found(len(rules), "load balancer rules"), rules, _render_lb_rule)


async def handle_create_load_balancer_rule(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.create_load_balancer_rule(forwarded(args))
    return text_result(
        f"Load balancer rule {args.get('name')} creation initiated. "
        f"Job ID: {job_id(result, 'createLoadBalancerRule')}"
    )
