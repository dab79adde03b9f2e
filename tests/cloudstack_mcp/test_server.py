"""Tests for the MCP server wiring."""

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import (
    INVALID_REQUEST,
    CallToolRequest,
    CallToolRequestParams,
    ListToolsRequest,
)

from cloudstack_mcp.dispatcher import ToolDispatcher
from cloudstack_mcp.server import create_server


@pytest.fixture
def server(mock_client):
    return create_server(ToolDispatcher(mock_client), version="0.1.0")


def call(name, arguments=None):
    return CallToolRequest(
        method="tools/call", params=CallToolRequestParams(name=name, arguments=arguments)
    )


async def test_lists_catalog(server):
    handler = server.request_handlers[ListToolsRequest]

    result = await handler(ListToolsRequest(method="tools/list"))

    assert len(result.root.tools) == 48


async def test_call_returns_handler_content(server, mock_client):
    mock_client.list_zones.return_value = {"listzonesresponse": {"zone": [{"id": "z-1"}]}}
    handler = server.request_handlers[CallToolRequest]

    result = await handler(call("list_zones"))

    assert result.root.isError is False
    assert result.root.content[0].text.startswith("Found 1 zones")


async def test_call_raises_typed_error(server, mock_client):
    handler = server.request_handlers[CallToolRequest]

    with pytest.raises(McpError) as exc_info:
        await handler(call("destroy_virtual_machine", {"id": "vm-1", "confirm": False}))

    assert exc_info.value.error.code == INVALID_REQUEST
    assert mock_client.mock_calls == []
