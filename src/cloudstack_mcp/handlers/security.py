"""SSH key pair and security group handlers."""

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


def _render_key_pair(key_pair: dict[str, Any]) -> str:
    return f"• {field(key_pair, 'name')}\n  Fingerprint: {field(key_pair, 'fingerprint')}\n"


def _render_security_group(group: dict[str, Any]) -> str:
    ingress = group.get("ingressrule") or []
    egress = group.get("egressrule") or []
    return (
        f"• {field(group, 'name')} ({field(group, 'id')})\n"
        f"  Description: {field(group, 'description')}\n"
        f"  Rules: {len(ingress)} ingress, {len(egress)} egress\n"
    )


async def handle_list_ssh_key_pairs(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_ssh_key_pairs(forwarded(args))
    key_pairs = response_items(result, "listSSHKeyPairs", "sshkeypair")
    return listing(found(len(key_pairs), "SSH key pairs"), key_pairs, _render_key_pair)


async def handle_create_ssh_key_pair(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.create_ssh_key_pair(forwarded(args))
    key_pair = response_body(result, "createSSHKeyPair").get("keypair")
    if not isinstance(key_pair, dict):
        key_pair = {}

    text = (
        f"SSH key pair '{args.get('name')}' created successfully.\n"
        f"Fingerprint: {field(key_pair, 'fingerprint')}"
    )
    # The private key is only ever returned by this call
    if key_pair.get("privatekey"):
        text += f"\n\nPrivate key (store it now, it cannot be retrieved again):\n{key_pair['privatekey']}"
    return text_result(text)


async def handle_list_security_groups(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_security_groups(forwarded(args))
    groups = response_items(result, "listSecurityGroups", "securitygroup")
    return listing(found(len(groups), "security groups"), groups, _render_security_group)


async def handle_create_security_group_rule(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.authorize_security_group_ingress(forwarded(args))
    return text_result(
        "Security group rule creation initiated. "
        f"Job ID: {job_id(result, 'authorizeSecurityGroupIngress')}"
    )
