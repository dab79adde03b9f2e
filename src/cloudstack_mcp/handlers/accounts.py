"""Account, user, domain and usage handlers."""

from typing import Any

from mcp.types import TextContent

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.handlers.formatting import (
    MISSING,
    field,
    forwarded,
    found,
    listing,
    response_items,
)

# CloudStack account type codes
ACCOUNT_TYPES = {0: "User", 1: "Root Admin", 2: "Domain Admin"}


def _account_type(value: Any) -> Any:
    if value is None:
        return MISSING
    try:
        return ACCOUNT_TYPES.get(int(value), value)
    except (TypeError, ValueError):
        return value


def _render_account(account: dict[str, Any]) -> str:
    return (
        f"• {field(account, 'name')} ({field(account, 'id')})\n"
        f"  Type: {_account_type(account.get('accounttype'))}\n"
        f"  Domain: {field(account, 'domain')}\n"
        f"  State: {field(account, 'state')}\n"
    )


def _render_user(user: dict[str, Any]) -> str:
    return (
        f"• {field(user, 'username')} ({field(user, 'id')})\n"
        f"  Account: {field(user, 'account')}\n"
        f"  State: {field(user, 'state')}\n"
        f"  Created: {field(user, 'created')}\n"
    )


def _render_domain(domain: dict[str, Any]) -> str:
    return (
        f"• {field(domain, 'name')} ({field(domain, 'id')})\n"
        f"  Path: {field(domain, 'path')}\n"
        f"  Level: {field(domain, 'level')}\n"
    )


def _render_usage(record: dict[str, Any]) -> str:
    return (
        f"• {field(record, 'description')}\n"
        f"  Usage: {field(record, 'usage')}\n"
        f"  Start: {field(record, 'startdate')}\n"
        f"  End: {field(record, 'enddate')}\n"
    )


async def handle_list_accounts(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_accounts(forwarded(args))
    accounts = response_items(result, "listAccounts", "account")
    return listing(found(len(accounts), "accounts"), accounts, _render_account)


async def handle_list_users(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_users(forwarded(args))
    users = response_items(result, "listUsers", "user")
    return listing(found(len(users), "users"), users, _render_user)


async def handle_list_domains(client: CloudStackClient, args: dict[str, Any]) -> list[TextContent]:
    result = await client.list_domains(forwarded(args))
    domains = response_items(result, "listDomains", "domain")
    return listing(found(len(domains), "domains"), domains, _render_domain)


async def handle_list_usage_records(
    client: CloudStackClient, args: dict[str, Any]
) -> list[TextContent]:
    result = await client.list_usage_records(forwarded(args))
    records = response_items(result, "listUsageRecords", "usagerecord")
    return listing(found(len(records), "usage records"), records, _render_usage)
