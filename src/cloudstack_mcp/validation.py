"""Input validation utilities."""

from typing import Any

from jsonschema import Draft7Validator

from cloudstack_mcp.core.logging import get_logger
from cloudstack_mcp.errors import invalid_request

logger = get_logger(__name__)


def _describe(error) -> str:
    path = ".".join(str(part) for part in error.absolute_path)
    return f"{path}: {error.message}" if path else error.message


def validate_tool_arguments(
    tool_name: str, tool_schema: dict[str, Any], arguments: dict[str, Any]
) -> None:
    """Validate tool arguments against the tool's JSON schema.

    All violations are collected into a single error so the caller can fix
    them in one round trip.

    Args:
        tool_name: Name of the tool being called
        tool_schema: JSON schema for the tool
        arguments: Arguments to validate

    Raises:
        McpError: INVALID_REQUEST listing every violation
    """
    errors = sorted(
        Draft7Validator(tool_schema).iter_errors(arguments),
        key=lambda e: [str(part) for part in e.absolute_path],
    )
    if not errors:
        logger.debug("Tool arguments validated successfully")
        return

    problems = "; ".join(_describe(e) for e in errors)
    logger.warning(f"Tool argument validation failed for {tool_name}: {problems}")
    raise invalid_request(f"Invalid arguments for tool {tool_name}: {problems}")
