"""Tool catalog: the MCP tool definitions advertised by the server.

Every tool maps onto one handler in ``cloudstack_mcp.handlers``. Tools with
irreversible or disruptive effects take a required ``confirm`` flag that
defaults to false; their handlers refuse to run unless it is true.
"""

from typing import Any

from mcp.types import Tool


def _string(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def _number(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "number", "description": description, **extra}


def _boolean(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "boolean", "description": description, **extra}


def _confirm(description: str) -> dict[str, Any]:
    return _boolean(f"{description} (REQUIRED for safety)", default=False)


def _tool(
    name: str,
    description: str,
    properties: dict[str, Any] | None = None,
    required: list[str] | None = None,
) -> Tool:
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties or {},
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return Tool(name=name, description=description, inputSchema=schema)


# ============================================================
# Virtual machines
# ============================================================

VIRTUAL_MACHINE_TOOLS = [
    _tool(
        "list_virtual_machines",
        "List virtual machines in CloudStack",
        {
            "zoneid": _string("Zone ID to filter VMs"),
            "state": _string("VM state (Running, Stopped, etc.)"),
            "keyword": _string("Keyword to search VMs"),
        },
    ),
    _tool(
        "get_virtual_machine",
        "Get details of a specific virtual machine",
        {"id": _string("VM ID")},
        ["id"],
    ),
    _tool(
        "start_virtual_machine",
        "Start a virtual machine",
        {"id": _string("VM ID to start")},
        ["id"],
    ),
    _tool(
        "stop_virtual_machine",
        "Stop a virtual machine",
        {
            "id": _string("VM ID to stop"),
            "forced": _boolean("Force stop the VM", default=False),
        },
        ["id"],
    ),
    _tool(
        "reboot_virtual_machine",
        "Reboot a virtual machine",
        {"id": _string("VM ID to reboot")},
        ["id"],
    ),
    _tool(
        "destroy_virtual_machine",
        "Destroy a virtual machine using the stop -> destroy -> expunge workflow. "
        "Handles VMs in any state including Error. (DESTRUCTIVE - cannot be undone)",
        {
            "id": _string("VM ID to destroy"),
            "expunge": _boolean(
                "Expunge the VM after destroying it (PERMANENT deletion). "
                "Set to false to leave it recoverable",
                default=True,
            ),
            "confirm": _confirm("Confirm this DESTRUCTIVE action - VM will be deleted"),
        },
        ["id", "confirm"],
    ),
    _tool(
        "deploy_virtual_machine",
        "Deploy a new virtual machine. Auto-selects a network for Advanced zones if "
        "none is specified. Use list_zones, list_templates and list_service_offerings "
        "to get the required IDs.",
        {
            "serviceofferingid": _string("Service offering ID"),
            "templateid": _string("Template ID"),
            "zoneid": _string("Zone ID"),
            "name": _string("VM name"),
            "displayname": _string("VM display name"),
            "networkids": _string("Comma separated network IDs (auto-selected in Advanced zones)"),
            "diskofferingid": _string("Disk offering ID for an additional data disk"),
            "keypair": _string("SSH key pair name"),
            "hostid": _string("Host ID to deploy on (admin only)"),
            "userdata": _string("Base64 encoded user data"),
        },
        ["serviceofferingid", "templateid", "zoneid"],
    ),
    _tool(
        "scale_virtual_machine",
        "Scale (resize) a virtual machine (requires VM restart)",
        {
            "id": _string("VM ID"),
            "serviceofferingid": _string("New service offering ID"),
            "confirm": _confirm("Confirm this disruptive action - VM will be restarted"),
        },
        ["id", "serviceofferingid", "confirm"],
    ),
    _tool(
        "migrate_virtual_machine",
        "Migrate a virtual machine to another host (may cause brief downtime)",
        {
            "virtualmachineid": _string("VM ID"),
            "hostid": _string("Target host ID (optional)"),
            "confirm": _confirm("Confirm this disruptive action - VM may experience downtime"),
        },
        ["virtualmachineid", "confirm"],
    ),
    _tool(
        "reset_password_virtual_machine",
        "Reset password for a virtual machine (changes VM credentials)",
        {
            "id": _string("VM ID"),
            "confirm": _confirm(
                "Confirm this security-sensitive action - VM password will be changed"
            ),
        },
        ["id", "confirm"],
    ),
    _tool(
        "change_service_offering_virtual_machine",
        "Change service offering for a virtual machine",
        {
            "id": _string("VM ID"),
            "serviceofferingid": _string("New service offering ID"),
        },
        ["id", "serviceofferingid"],
    ),
    _tool(
        "query_async_job_result",
        "Check the status and result of an asynchronous job",
        {"jobid": _string("Job ID returned by an asynchronous operation")},
        ["jobid"],
    ),
]

# ============================================================
# Storage
# ============================================================

STORAGE_TOOLS = [
    _tool(
        "list_volumes",
        "List storage volumes",
        {
            "virtualmachineid": _string("VM ID to filter volumes"),
            "type": _string("Volume type (ROOT, DATADISK)"),
            "zoneid": _string("Zone ID to filter volumes"),
        },
    ),
    _tool(
        "create_volume",
        "Create a new storage volume",
        {
            "name": _string("Volume name"),
            "zoneid": _string("Zone ID"),
            "diskofferingid": _string("Disk offering ID"),
            "size": _number("Size in GB (for custom disk offerings)"),
        },
        ["name", "zoneid"],
    ),
    _tool(
        "attach_volume",
        "Attach a volume to a virtual machine",
        {
            "id": _string("Volume ID"),
            "virtualmachineid": _string("VM ID"),
        },
        ["id", "virtualmachineid"],
    ),
    _tool(
        "detach_volume",
        "Detach a volume from a virtual machine (may cause data loss if not safely unmounted)",
        {
            "id": _string("Volume ID"),
            "confirm": _confirm(
                "Confirm this potentially dangerous action - "
                "ensure the volume is safely unmounted first"
            ),
        },
        ["id", "confirm"],
    ),
    _tool(
        "resize_volume",
        "Resize a storage volume (may require filesystem expansion)",
        {
            "id": _string("Volume ID"),
            "size": _number("New size in GB"),
            "confirm": _confirm(
                "Confirm this storage modification - "
                "may require manual filesystem expansion"
            ),
        },
        ["id", "size", "confirm"],
    ),
    _tool(
        "create_snapshot",
        "Create a snapshot of a volume",
        {
            "volumeid": _string("Volume ID"),
            "name": _string("Snapshot name"),
        },
        ["volumeid"],
    ),
    _tool(
        "list_snapshots",
        "List volume snapshots",
        {
            "volumeid": _string("Volume ID to filter snapshots"),
            "snapshottype": _string("Snapshot type (MANUAL, RECURRING)"),
        },
    ),
]

# ============================================================
# Networking
# ============================================================

NETWORK_TOOLS = [
    _tool(
        "list_networks",
        "List networks",
        {
            "zoneid": _string("Zone ID to filter networks"),
            "type": _string("Network type"),
        },
    ),
    _tool(
        "create_network",
        "Create a new network",
        {
            "name": _string("Network name"),
            "displaytext": _string("Network description"),
            "networkofferingid": _string("Network offering ID"),
            "zoneid": _string("Zone ID"),
        },
        ["name", "networkofferingid", "zoneid"],
    ),
    _tool(
        "list_public_ip_addresses",
        "List public IP addresses",
        {
            "zoneid": _string("Zone ID to filter IPs"),
            "associatednetworkid": _string("Network ID to filter IPs"),
        },
    ),
    _tool(
        "associate_ip_address",
        "Acquire a new public IP address",
        {
            "zoneid": _string("Zone ID"),
            "networkid": _string("Network ID (optional)"),
        },
        ["zoneid"],
    ),
    _tool(
        "enable_static_nat",
        "Enable static NAT for an IP address",
        {
            "ipaddressid": _string("Public IP ID"),
            "virtualmachineid": _string("VM ID"),
        },
        ["ipaddressid", "virtualmachineid"],
    ),
    _tool(
        "create_firewall_rule",
        "Create a firewall rule",
        {
            "ipaddressid": _string("Public IP ID"),
            "protocol": _string("Protocol (TCP, UDP, ICMP)"),
            "startport": _number("Start port"),
            "endport": _number("End port"),
            "cidrlist": _string("CIDR list (comma separated)"),
        },
        ["ipaddressid", "protocol"],
    ),
    _tool(
        "list_load_balancer_rules",
        "List load balancer rules",
        {
            "publicipid": _string("Public IP ID to filter rules"),
            "zoneid": _string("Zone ID to filter rules"),
        },
    ),
    _tool(
        "create_load_balancer_rule",
        "Create a load balancer rule on a public IP",
        {
            "name": _string("Rule name"),
            "publicipid": _string("Public IP ID"),
            "publicport": _number("Public port"),
            "privateport": _number("Private port"),
            "algorithm": _string("Algorithm (source, roundrobin, leastconn)"),
        },
        ["name", "publicipid", "publicport", "privateport", "algorithm"],
    ),
]

# ============================================================
# Monitoring
# ============================================================

MONITORING_TOOLS = [
    _tool(
        "list_virtual_machine_metrics",
        "Get virtual machine performance metrics",
        {"ids": _string("Comma separated list of VM IDs")},
    ),
    _tool(
        "list_events",
        "List CloudStack events",
        {
            "type": _string("Event type"),
            "level": _string("Event level (INFO, WARN, ERROR)"),
            "startdate": _string("Start date (YYYY-MM-DD)"),
            "pagesize": _number("Number of events to return"),
        },
    ),
    _tool(
        "list_alerts",
        "List system alerts",
        {"type": _string("Alert type")},
    ),
    _tool(
        "list_capacity",
        "List system capacity information",
        {
            "zoneid": _string("Zone ID to filter capacity"),
            "type": _string("Capacity type"),
        },
    ),
    _tool(
        "list_async_jobs",
        "List asynchronous jobs",
        {
            "jobstatus": _number("Job status (0=pending, 1=success, 2=error)"),
            "jobresulttype": _string("Job result type"),
        },
    ),
]

# ============================================================
# Accounts and users
# ============================================================

ACCOUNT_TOOLS = [
    _tool(
        "list_accounts",
        "List CloudStack accounts",
        {
            "domainid": _string("Domain ID to filter accounts"),
            "accounttype": _number("Account type"),
        },
    ),
    _tool(
        "list_users",
        "List users",
        {
            "accountid": _string("Account ID to filter users"),
            "username": _string("Username to search"),
        },
    ),
    _tool(
        "list_domains",
        "List CloudStack domains",
        {"name": _string("Domain name to search")},
    ),
    _tool(
        "list_usage_records",
        "List resource usage records",
        {
            "startdate": _string("Start date (YYYY-MM-DD)"),
            "enddate": _string("End date (YYYY-MM-DD)"),
            "type": _string("Usage type"),
        },
        ["startdate", "enddate"],
    ),
]

# ============================================================
# Infrastructure
# ============================================================

INFRASTRUCTURE_TOOLS = [
    _tool(
        "list_zones",
        "List all zones in CloudStack",
        {"available": _boolean("Show only available zones")},
    ),
    _tool(
        "list_templates",
        "List available templates",
        {
            "templatefilter": _string(
                "Template filter (featured, self, selfexecutable, etc.)",
                default="featured",
            ),
            "zoneid": _string("Zone ID to filter templates"),
        },
    ),
    _tool(
        "list_service_offerings",
        "List service offerings",
        {
            "name": _string("Service offering name"),
            "domainid": _string("Domain ID"),
        },
    ),
    _tool(
        "list_hosts",
        "List physical hosts",
        {
            "zoneid": _string("Zone ID to filter hosts"),
            "type": _string("Host type (Routing, Storage, etc.)"),
            "state": _string("Host state"),
        },
    ),
    _tool(
        "list_clusters",
        "List host clusters",
        {"zoneid": _string("Zone ID to filter clusters")},
    ),
    _tool(
        "list_storage_pools",
        "List storage pools",
        {
            "zoneid": _string("Zone ID to filter storage pools"),
            "clusterid": _string("Cluster ID to filter storage pools"),
        },
    ),
    _tool(
        "list_system_vms",
        "List system virtual machines",
        {
            "zoneid": _string("Zone ID to filter system VMs"),
            "systemvmtype": _string(
                "System VM type (domainrouter, consoleproxy, secondarystoragevm)"
            ),
        },
    ),
    _tool(
        "list_capabilities",
        "Show the CloudStack version and cloud-wide capabilities",
    ),
]

# ============================================================
# Security
# ============================================================

SECURITY_TOOLS = [
    _tool(
        "list_ssh_key_pairs",
        "List SSH key pairs",
        {"name": _string("Key pair name")},
    ),
    _tool(
        "create_ssh_key_pair",
        "Create a new SSH key pair",
        {"name": _string("Key pair name")},
        ["name"],
    ),
    _tool(
        "list_security_groups",
        "List security groups",
        {"securitygroupname": _string("Security group name")},
    ),
    _tool(
        "create_security_group_rule",
        "Create a security group ingress rule",
        {
            "securitygroupid": _string("Security group ID"),
            "protocol": _string("Protocol (TCP, UDP, ICMP)"),
            "startport": _number("Start port"),
            "endport": _number("End port"),
            "cidrlist": _string("CIDR list"),
        },
        ["securitygroupid", "protocol"],
    ),
]

TOOLS: list[Tool] = (
    VIRTUAL_MACHINE_TOOLS
    + STORAGE_TOOLS
    + NETWORK_TOOLS
    + MONITORING_TOOLS
    + ACCOUNT_TOOLS
    + INFRASTRUCTURE_TOOLS
    + SECURITY_TOOLS
)

TOOLS_BY_NAME: dict[str, Tool] = {tool.name: tool for tool in TOOLS}

# Tools whose handlers refuse to run without confirm=true
CONFIRMATION_REQUIRED = frozenset(
    name for name, tool in TOOLS_BY_NAME.items()
    if "confirm" in tool.inputSchema.get("properties", {})
)


def list_tools() -> list[Tool]:
    """Return the full tool catalog."""
    return list(TOOLS)


def get_tool(name: str) -> Tool | None:
    return TOOLS_BY_NAME.get(name)
