"""Tool handlers, one per catalog entry.

Every handler has the signature ``(client, args) -> list[TextContent]``.
"""

from cloudstack_mcp.handlers.accounts import (
    handle_list_accounts,
    handle_list_domains,
    handle_list_usage_records,
    handle_list_users,
)
from cloudstack_mcp.handlers.infrastructure import (
    handle_list_capabilities,
    handle_list_clusters,
    handle_list_hosts,
    handle_list_service_offerings,
    handle_list_storage_pools,
    handle_list_system_vms,
    handle_list_templates,
    handle_list_zones,
)
from cloudstack_mcp.handlers.monitoring import (
    handle_list_alerts,
    handle_list_async_jobs,
    handle_list_capacity,
    handle_list_events,
    handle_list_virtual_machine_metrics,
)
from cloudstack_mcp.handlers.network import (
    handle_associate_ip_address,
    handle_create_firewall_rule,
    handle_create_load_balancer_rule,
    handle_create_network,
    handle_enable_static_nat,
    handle_list_load_balancer_rules,
    handle_list_networks,
    handle_list_public_ip_addresses,
)
from cloudstack_mcp.handlers.security import (
    handle_create_security_group_rule,
    handle_create_ssh_key_pair,
    handle_list_security_groups,
    handle_list_ssh_key_pairs,
)
from cloudstack_mcp.handlers.storage import (
    handle_attach_volume,
    handle_create_snapshot,
    handle_create_volume,
    handle_detach_volume,
    handle_list_snapshots,
    handle_list_volumes,
    handle_resize_volume,
)
from cloudstack_mcp.handlers.virtual_machines import (
    handle_change_service_offering_virtual_machine,
    handle_deploy_virtual_machine,
    handle_destroy_virtual_machine,
    handle_get_virtual_machine,
    handle_list_virtual_machines,
    handle_migrate_virtual_machine,
    handle_query_async_job_result,
    handle_reboot_virtual_machine,
    handle_reset_password_virtual_machine,
    handle_scale_virtual_machine,
    handle_start_virtual_machine,
    handle_stop_virtual_machine,
)

__all__ = [
    # Virtual machines
    "handle_list_virtual_machines",
    "handle_get_virtual_machine",
    "handle_start_virtual_machine",
    "handle_stop_virtual_machine",
    "handle_reboot_virtual_machine",
    "handle_destroy_virtual_machine",
    "handle_deploy_virtual_machine",
    "handle_scale_virtual_machine",
    "handle_migrate_virtual_machine",
    "handle_reset_password_virtual_machine",
    "handle_change_service_offering_virtual_machine",
    "handle_query_async_job_result",
    # Storage
    "handle_list_volumes",
    "handle_create_volume",
    "handle_attach_volume",
    "handle_detach_volume",
    "handle_resize_volume",
    "handle_create_snapshot",
    "handle_list_snapshots",
    # Networking
    "handle_list_networks",
    "handle_create_network",
    "handle_list_public_ip_addresses",
    "handle_associate_ip_address",
    "handle_enable_static_nat",
    "handle_create_firewall_rule",
    "handle_list_load_balancer_rules",
    "handle_create_load_balancer_rule",
    # Monitoring
    "handle_list_virtual_machine_metrics",
    "handle_list_events",
    "handle_list_alerts",
    "handle_list_capacity",
    "handle_list_async_jobs",
    # Accounts
    "handle_list_accounts",
    "handle_list_users",
    "handle_list_domains",
    "handle_list_usage_records",
    # Infrastructure
    "handle_list_zones",
    "handle_list_templates",
    "handle_list_service_offerings",
    "handle_list_hosts",
    "handle_list_clusters",
    "handle_list_storage_pools",
    "handle_list_system_vms",
    "handle_list_capabilities",
    # Security
    "handle_list_ssh_key_pairs",
    "handle_create_ssh_key_pair",
    "handle_list_security_groups",
    "handle_create_security_group_rule",
]
