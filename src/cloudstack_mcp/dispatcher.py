"""Tool dispatch: maps tool names to handlers and types every failure.

``ToolDispatcher.dispatch`` is the single boundary where any exception turns
into an ``McpError``: unknown tools become METHOD_NOT_FOUND, invalid arguments
and failed safety checks stay INVALID_REQUEST, everything else is wrapped as
INTERNAL_ERROR with the tool name and the underlying message.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import TextContent, Tool

from cloudstack_mcp import catalog, handlers
from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.core.logging import bind_context, get_logger, unbind_context
from cloudstack_mcp.errors import internal_error, method_not_found
from cloudstack_mcp.validation import validate_tool_arguments

logger = get_logger(__name__)

Handler = Callable[[CloudStackClient, dict[str, Any]], Awaitable[list[TextContent]]]

HANDLERS: dict[str, Handler] = {
    # Virtual machines
    "list_virtual_machines": handlers.handle_list_virtual_machines,
    "get_virtual_machine": handlers.handle_get_virtual_machine,
    "start_virtual_machine": handlers.handle_start_virtual_machine,
    "stop_virtual_machine": handlers.handle_stop_virtual_machine,
    "reboot_virtual_machine": handlers.handle_reboot_virtual_machine,
    "destroy_virtual_machine": handlers.handle_destroy_virtual_machine,
    "deploy_virtual_machine": handlers.handle_deploy_virtual_machine,
    "scale_virtual_machine": handlers.handle_scale_virtual_machine,
    "migrate_virtual_machine": handlers.handle_migrate_virtual_machine,
    "reset_password_virtual_machine": handlers.handle_reset_password_virtual_machine,
    "change_service_offering_virtual_machine": handlers.handle_change_service_offering_virtual_machine,
    "query_async_job_result": handlers.handle_query_async_job_result,
    # Storage
    "list_volumes": handlers.handle_list_volumes,
    "create_volume": handlers.handle_create_volume,
    "attach_volume": handlers.handle_attach_volume,
    "detach_volume": handlers.handle_detach_volume,
    "resize_volume": handlers.handle_resize_volume,
    "create_snapshot": handlers.handle_create_snapshot,
    "list_snapshots": handlers.handle_list_snapshots,
    # Networking
    "list_networks": handlers.handle_list_networks,
    "create_network": handlers.handle_create_network,
    "list_public_ip_addresses": handlers.handle_list_public_ip_addresses,
    "associate_ip_address": handlers.handle_associate_ip_address,
    "enable_static_nat": handlers.handle_enable_static_nat,
    "create_firewall_rule": handlers.handle_create_firewall_rule,
    "list_load_balancer_rules": handlers.handle_list_load_balancer_rules,
    "create_load_balancer_rule": handlers.handle_create_load_balancer_rule,
    # Monitoring
    "list_virtual_machine_metrics": handlers.handle_list_virtual_machine_metrics,
    "list_events": handlers.handle_list_events,
    "list_alerts": handlers.handle_list_alerts,
    "list_capacity": handlers.handle_list_capacity,
    "list_async_jobs": handlers.handle_list_async_jobs,
    # Accounts
    "list_accounts": handlers.handle_list_accounts,
    "list_users": handlers.handle_list_users,
    "list_domains": handlers.handle_list_domains,
    "list_usage_records": handlers.handle_list_usage_records,
    # Infrastructure
    "list_zones": handlers.handle_list_zones,
    "list_templates": handlers.handle_list_templates,
    "list_service_offerings": handlers.handle_list_service_offerings,
    "list_hosts": handlers.handle_list_hosts,
    "list_clusters": handlers.handle_list_clusters,
    "list_storage_pools": handlers.handle_list_storage_pools,
    "list_system_vms": handlers.handle_list_system_vms,
    "list_capabilities": handlers.handle_list_capabilities,
    # Security
    "list_ssh_key_pairs": handlers.handle_list_ssh_key_pairs,
    "create_ssh_key_pair": handlers.handle_create_ssh_key_pair,
    "list_security_groups": handlers.handle_list_security_groups,
    "create_security_group_rule": handlers.handle_create_security_group_rule,
}


class ToolDispatcher:
    """Routes MCP tool calls to handlers bound to one CloudStack client."""

    def __init__(self, client: CloudStackClient):
        self.client = client

    def list_tools(self) -> list[Tool]:
        return catalog.list_tools()

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Run one tool call.

        Args:
            name: Tool name from the catalog
            arguments: Tool arguments (None is treated as no arguments)

        Returns:
            Text content blocks produced by the handler

        Raises:
            McpError: On every failure, typed as described in the module docstring
        """
        handler = HANDLERS.get(name)
        tool = catalog.get_tool(name)
        if handler is None or tool is None:
            raise method_not_found(f"Unknown tool: {name}")

        args = dict(arguments or {})
        bind_context(tool=name)
        try:
            validate_tool_arguments(name, tool.inputSchema, args)
            logger.info(f"Executing tool {name}")
            return await handler(self.client, args)
        except McpError as e:
            logger.warning(f"Tool {name} rejected: {e.error.message}")
            raise
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            raise internal_error(f"Error executing tool {name}: {e}") from e
        finally:
            unbind_context("tool")
