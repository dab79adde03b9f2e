"""Unit tests for the tool catalog."""

from cloudstack_mcp import catalog
from cloudstack_mcp.dispatcher import HANDLERS


class TestCatalog:
    def test_tool_count(self):
        assert len(catalog.list_tools()) == 48

    def test_names_are_unique(self):
        names = [tool.name for tool in catalog.list_tools()]
        assert len(names) == len(set(names))

    def test_every_tool_has_a_handler(self):
        assert {tool.name for tool in catalog.list_tools()} == set(HANDLERS)

    def test_list_tools_is_stable(self):
        first = [tool.name for tool in catalog.list_tools()]
        second = [tool.name for tool in catalog.list_tools()]
        assert first == second

    def test_list_tools_returns_a_copy(self):
        tools = catalog.list_tools()
        tools.clear()
        assert len(catalog.list_tools()) == 48

    def test_schemas_are_closed_objects(self):
        for tool in catalog.list_tools():
            assert tool.inputSchema["type"] == "object"
            assert tool.inputSchema["additionalProperties"] is False
            for name in tool.inputSchema.get("required", []):
                assert name in tool.inputSchema["properties"]

    def test_get_tool(self):
        assert catalog.get_tool("list_zones").name == "list_zones"
        assert catalog.get_tool("drop_database") is None


class TestConfirmationGates:
    def test_gated_tools(self):
        assert catalog.CONFIRMATION_REQUIRED == {
            "destroy_virtual_machine",
            "scale_virtual_machine",
            "migrate_virtual_machine",
            "reset_password_virtual_machine",
            "detach_volume",
            "resize_volume",
        }

    def test_confirm_is_required_and_defaults_to_false(self):
        for name in catalog.CONFIRMATION_REQUIRED:
            schema = catalog.get_tool(name).inputSchema
            assert "confirm" in schema["required"]
            assert schema["properties"]["confirm"]["type"] == "boolean"
            assert schema["properties"]["confirm"]["default"] is False

    def test_destroy_expunges_by_default(self):
        schema = catalog.get_tool("destroy_virtual_machine").inputSchema
        assert schema["properties"]["expunge"]["default"] is True

    def test_deploy_required_fields(self):
        schema = catalog.get_tool("deploy_virtual_machine").inputSchema
        assert schema["required"] == ["serviceofferingid", "templateid", "zoneid"]
