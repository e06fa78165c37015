# tests/test_mcp_server.py
import asyncio
import json

from fastmcp import Client

from conftest import FakeGleanClient, json_response
from core.glean_client import HttpResponse
from core.registry import TOOLS
from tools.mcp_server import create_server


def list_tools(server):
    async def _run():
        async with Client(server) as client:
            return await client.list_tools()
    return asyncio.run(_run())


def call_tool(server, name, arguments):
    async def _run():
        async with Client(server) as client:
            return await client.call_tool_mcp(name, arguments)
    return asyncio.run(_run())


def test_server_lists_registry_tools(config):
    tools = {tool.name: tool for tool in list_tools(create_server(config, client=FakeGleanClient()))}

    assert set(tools) == {"search", "chat"}
    for descriptor in TOOLS:
        listed = tools[descriptor.name]
        assert listed.description == descriptor.description
        assert listed.inputSchema["required"] == list(descriptor.input_schema["required"])
        for arg, schema in descriptor.input_schema["properties"].items():
            assert listed.inputSchema["properties"][arg]["type"] == "string"
            assert listed.inputSchema["properties"][arg]["description"] == schema["description"]


def test_search_round_trips_upstream_json(config):
    upstream = {"results": [{"title": "A"}, {"title": "B"}], "nested": {"n": [1, 2.5, None, True]}}
    fake = FakeGleanClient(response=json_response(upstream))

    result = call_tool(create_server(config, client=fake), "search", {"query": "a"})

    assert not result.isError
    assert json.loads(result.content[0].text) == upstream
    assert fake.calls == [("search", {"query": "a"})]


def test_chat_returns_normalized_text(config):
    body = {"messages": [{"messageType": "CONTENT", "fragments": [{"text": "Hi"}],
                          "citations": [{"sourcePerson": {"name": "Sam"}}]}]}
    fake = FakeGleanClient(response=json_response(body))

    result = call_tool(create_server(config, client=fake), "chat", {"message": "hello"})

    assert not result.isError
    assert result.content[0].type == "text"
    assert result.content[0].text == "Hi\nSources:\nSource 1: Sam\n"


def test_chat_http_failure_is_flagged_at_protocol_level(config):
    fake = FakeGleanClient(response=HttpResponse(status=500, body=b"oops"))

    result = call_tool(create_server(config, client=fake), "chat", {"message": "hello"})

    assert result.isError is True
    assert "500" in result.content[0].text
    assert "oops" in result.content[0].text


def test_chat_malformed_body_surfaces_as_error_result(config):
    fake = FakeGleanClient(response=json_response("just a string"))

    result = call_tool(create_server(config, client=fake), "chat", {"message": "hello"})

    assert result.isError is True


def test_unknown_tool_is_flagged_with_exact_text_and_no_request(config):
    fake = FakeGleanClient(response=json_response({}))

    result = call_tool(create_server(config, client=fake), "foo", {})

    assert result.isError is True
    assert result.content[0].text == "Unknown tool: foo"
    assert fake.calls == []
