"""Tests for the MCP server wiring"""

import json
import logging
import sys

import pytest
from mcp import types

from target_mcp.server import SERVER_NAME, build_server, configure_logging
from target_mcp.services.dispatcher import ToolDispatcher
from target_mcp.services.error_handler import TemplateError
from target_mcp.tools import load_tools


@pytest.fixture
def server(context):
    return build_server(ToolDispatcher(load_tools(), context), context.templates, version="2.0.0")


class TestBuildServer:
    def test_server_identity(self, server):
        assert server.name == SERVER_NAME
        assert server.version == "2.0.0"

    def test_handlers_registered(self, server):
        for request_type in (
            types.ListToolsRequest,
            types.CallToolRequest,
            types.ListResourcesRequest,
            types.ReadResourceRequest,
        ):
            assert request_type in server.request_handlers

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        handler = server.request_handlers[types.ListToolsRequest]

        result = await handler(types.ListToolsRequest(method="tools/list"))

        tools = {tool.name: tool for tool in result.root.tools}
        assert "listActivities" in tools
        assert "sortBy" in tools["listActivities"].inputSchema["properties"]
        assert tools["getOffer"].inputSchema["required"] == ["id"]

    @pytest.mark.asyncio
    async def test_call_tool(self, server, fake_api):
        fake_api.respond(200, {"mboxes": []})
        handler = server.request_handlers[types.CallToolRequest]

        result = await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(name="listMboxes", arguments={}),
            )
        )

        assert result.root.isError is False
        assert json.loads(result.root.content[0].text) == {"mboxes": []}

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self, server):
        handler = server.request_handlers[types.CallToolRequest]

        result = await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(name="nope", arguments={}),
            )
        )

        assert result.root.isError is True
        assert result.root.content[0].text == "Error: Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_list_and_read_resources(self, server):
        list_handler = server.request_handlers[types.ListResourcesRequest]
        read_handler = server.request_handlers[types.ReadResourceRequest]

        listing = await list_handler(types.ListResourcesRequest(method="resources/list"))
        uris = [str(resource.uri) for resource in listing.root.resources]
        assert "template://html/cta-button" in uris

        result = await read_handler(
            types.ReadResourceRequest(
                method="resources/read",
                params=types.ReadResourceRequestParams(uri="template://html/cta-button"),
            )
        )

        contents = result.root.contents[0]
        assert contents.mimeType == "application/json"
        assert json.loads(contents.text)["name"]

    @pytest.mark.asyncio
    async def test_read_unknown_resource(self, server):
        read_handler = server.request_handlers[types.ReadResourceRequest]

        with pytest.raises(TemplateError) as exc_info:
            await read_handler(
                types.ReadResourceRequest(
                    method="resources/read",
                    params=types.ReadResourceRequestParams(uri="template://json/missing"),
                )
            )

        assert str(exc_info.value).startswith("Failed to read template: Template not found")


def test_configure_logging_uses_stderr():
    root = logging.getLogger()
    saved = root.handlers[:]
    saved_level = root.level
    root.handlers = []
    try:
        configure_logging("debug")
        handler = root.handlers[0]
        assert handler.stream is sys.stderr
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved
        root.setLevel(saved_level)
