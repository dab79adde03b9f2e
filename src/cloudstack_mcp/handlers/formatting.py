"""Helpers for navigating CloudStack responses and rendering tool output.

CloudStack responses are loosely shaped: the payload sits under
``<command lowercased>response`` and any field may be missing depending on
the command, the API version and the caller's permissions. These helpers
never raise on a missing key; they fall back to empty values instead.
"""

from collections.abc import Callable, Iterable
from typing import Any

from mcp.types import TextContent

MISSING = "N/A"

_GIB = 1024 ** 3


def response_body(result: Any, command: str) -> dict[str, Any]:
    """Return the ``<command>response`` object, or an empty dict."""
    if not isinstance(result, dict):
        return {}
    body = result.get(f"{command.lower()}response")
    return body if isinstance(body, dict) else {}


def response_items(result: Any, command: str, key: str) -> list[dict[str, Any]]:
    """Return the list of resources under ``key`` in a listing response."""
    items = response_body(result, command).get(key)
    if isinstance(items, dict):
        return [items]
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def first_item(result: Any, command: str, key: str) -> dict[str, Any] | None:
    items = response_items(result, command, key)
    return items[0] if items else None


def job_id(result: Any, command: str) -> str | None:
    """Return the async job id of a response, if the command produced one."""
    value = response_body(result, command).get("jobid")
    return str(value) if value else None


def field(item: dict[str, Any], key: str, default: str = MISSING) -> Any:
    value = item.get(key)
    return default if value is None or value == "" else value


_JOB_STATUS = {0: "Pending", 1: "Success", 2: "Error"}


def job_status(value: Any) -> str:
    """Name of an async job status code (0 pending, 1 success, 2 error)."""
    try:
        return _JOB_STATUS.get(int(value), "Unknown")
    except (TypeError, ValueError):
        return "Unknown"


def gigabytes(value: Any) -> str:
    """Render a byte count as whole GB."""
    try:
        return f"{round(float(value) / _GIB)}GB"
    except (TypeError, ValueError):
        return MISSING


def text_result(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def listing(
    header: str,
    items: Iterable[dict[str, Any]],
    render: Callable[[dict[str, Any]], str],
) -> list[TextContent]:
    """Render a ``header:`` line followed by one block per item."""
    blocks = [render(item) for item in items]
    return text_result(f"{header}:\n\n" + "\n".join(blocks))


def found(count: int, noun: str) -> str:
    return f"Found {count} {noun}"


def forwarded(args: dict[str, Any]) -> dict[str, Any]:
    """Caller arguments to pass to the API: no ``confirm``, no None values."""
    return {k: v for k, v in args.items() if k != "confirm" and v is not None}
