from __future__ import annotations

import asyncio
import json
import time

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError

from confluence_search.client import (
    RemoteResponseError,
    RemoteTransportError,
    create_client,
)
from mcp_servers.confluence.router import register_mcp_routes
from tests.helpers.fakes import FakeClient, FakeSession

TOOL_NAMES = {
    "confluence_search_cql",
    "confluence_get_page_by_id",
    "confluence_list_pages_in_space",
    "confluence_list_page_children",
    "confluence_list_pages_by_user",
    "search_user",
}


def _build_app(client_factory, configured: bool = True) -> FastMCP:
    app = FastMCP(name="confluence-search-test")
    register_mcp_routes(
        mcp=app,
        client_factory=client_factory,
        credentials_configured=lambda: configured,
    )
    return app


def test_mcp_server_exports_mcp_instance():
    import mcp_servers.confluence_server as srv

    assert hasattr(srv, "mcp")
    assert isinstance(srv.mcp, FastMCP)
    assert srv.mcp.name == "confluence-search"
    assert "first 20 results" in srv.mcp.instructions


@pytest.mark.asyncio
async def test_all_tools_are_registered_read_only(client_factory):
    app = _build_app(client_factory)

    async with Client(app) as client:
        tools = await client.list_tools()

    assert {tool.name for tool in tools} == TOOL_NAMES
    for tool in tools:
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.title
        assert len(tool.inputSchema["required"]) == 1


@pytest.mark.asyncio
async def test_tool_parameter_names_match_contract(client_factory):
    app = _build_app(client_factory)

    async with Client(app) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    expected = {
        "confluence_search_cql": "cql",
        "confluence_get_page_by_id": "id",
        "confluence_list_pages_in_space": "spaceKey",
        "confluence_list_page_children": "id",
        "confluence_list_pages_by_user": "userAccountId",
        "search_user": "query",
    }
    for name, param in expected.items():
        schema = tools[name].inputSchema
        assert schema["required"] == [param]
        assert schema["properties"][param]["type"] == "string"


@pytest.mark.asyncio
async def test_search_cql_end_to_end():
    fake = FakeClient(
        default={
            "results": [
                {"id": "10001", "title": "Roadmap"},
                {"id": "10002", "title": "Notes"},
            ]
        }
    )
    app = _build_app(lambda: fake)

    async with Client(app) as client:
        result = await client.call_tool(
            "confluence_search_cql", {"cql": 'type=page AND space="DEV"'}
        )

    assert [block.type for block in result.content] == ["text", "text"]
    assert [block.text for block in result.content] == [
        '{"id":"10001","title":"Roadmap"}',
        '{"id":"10002","title":"Notes"}',
    ]


@pytest.mark.asyncio
async def test_search_user_end_to_end_reports_null_email():
    fake = FakeClient(default=[{"accountId": "a1", "displayName": "Alice"}])
    app = _build_app(lambda: fake)

    async with Client(app) as client:
        result = await client.call_tool("search_user", {"query": "alice@example.com"})

    assert json.loads(result.content[0].text) == {
        "accountId": "a1",
        "displayName": "Alice",
        "email": None,
    }


@pytest.mark.asyncio
async def test_empty_parameter_is_reported_as_tool_error():
    fake = FakeClient()
    app = _build_app(lambda: fake)

    async with Client(app) as client:
        with pytest.raises(ToolError, match="cannot be empty"):
            await client.call_tool("confluence_list_pages_in_space", {"spaceKey": ""})

    assert fake.calls == []


@pytest.mark.asyncio
async def test_missing_parameter_is_rejected_without_network():
    fake = FakeClient()
    app = _build_app(lambda: fake)

    async with Client(app) as client:
        with pytest.raises(ToolError):
            await client.call_tool("confluence_get_page_by_id", {})

    assert fake.calls == []


@pytest.mark.asyncio
async def test_configuration_error_does_not_stop_the_server(credentials, page_payload):
    session = FakeSession()
    broken = credentials.model_copy(update={"token": ""})
    app = _build_app(lambda: create_client(broken, session=session), configured=False)

    async with Client(app) as client:
        with pytest.raises(ToolError, match="ATLAS_KEY"):
            await client.call_tool("search_user", {"query": "alice"})
        with pytest.raises(ToolError, match="ATLAS_KEY"):
            await client.call_tool("confluence_get_page_by_id", {"id": "10001"})

    assert session.calls == []


@pytest.mark.asyncio
async def test_get_page_missing_body_is_reported_as_tool_error():
    fake = FakeClient(default={"id": "1", "title": "Bare"})
    app = _build_app(lambda: fake)

    async with Client(app) as client:
        with pytest.raises(ToolError, match="confluence_get_page_by_id failed"):
            await client.call_tool("confluence_get_page_by_id", {"id": "1"})


@pytest.mark.asyncio
async def test_cql_docs_resource(client_factory):
    app = _build_app(client_factory)

    async with Client(app) as client:
        resources = {str(item.uri): item for item in await client.list_resources()}
        contents = await client.read_resource("docs://confluence/cql")

    assert resources["docs://confluence/cql"].mimeType == "text/markdown"
    assert resources["docs://confluence/cql"].name == "confluence_cql_docs"
    assert contents[0].text.startswith("# Confluence Query Language (CQL) Documentation")
    assert 'now("-1w")' in contents[0].text


@pytest.mark.asyncio
async def test_health_resource_reports_configuration_and_metrics(client_factory):
    app = _build_app(client_factory, configured=False)

    async with Client(app) as client:
        await client.call_tool("confluence_search_cql", {"cql": "type=page"})
        contents = await client.read_resource("status://health")

    health = json.loads(contents[0].text)
    assert health["status"] == "unconfigured"
    assert health["credentials_configured"] is False
    assert health["tool_metrics"]["per_tool"]["confluence_search_cql"]["calls"] >= 1


class _FailingClient:
    def __init__(self, exc: Exception):
        self.exc = exc

    def get_json(self, path, params=None):
        raise self.exc


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, error_type",
    [
        (RemoteTransportError("GET /x failed: boom"), "RemoteTransportError"),
        (RemoteResponseError("Unexpected content list response"), "RemoteResponseError"),
    ],
)
async def test_error_kind_is_visible_to_the_caller(exc, error_type):
    app = _build_app(lambda: _FailingClient(exc))

    async with Client(app) as client:
        with pytest.raises(ToolError) as excinfo:
            await client.call_tool("confluence_search_cql", {"cql": "type=page"})

    message = str(excinfo.value)
    assert f"confluence_search_cql failed ({error_type})" in message
    assert str(exc) in message


@pytest.mark.asyncio
async def test_validation_and_configuration_errors_are_named(credentials):
    broken = credentials.model_copy(update={"user": ""})
    app = _build_app(lambda: create_client(broken, session=FakeSession()))

    async with Client(app) as client:
        with pytest.raises(ToolError, match=r"\(ValidationError\)"):
            await client.call_tool("search_user", {"query": " "})
        with pytest.raises(ToolError, match=r"\(ConfigurationError\)"):
            await client.call_tool("search_user", {"query": "alice"})


class _SlowClient(FakeClient):
    def __init__(self, delay: float):
        super().__init__(default={"results": [{"id": "1", "title": "Slow"}]})
        self.delay = delay

    def get_json(self, path, params=None):
        time.sleep(self.delay)
        return super().get_json(path, params)


@pytest.mark.asyncio
async def test_concurrent_calls_do_not_wait_for_each_other():
    slow = _SlowClient(delay=0.5)
    app = _build_app(lambda: slow)

    async with Client(app) as client:
        started = time.perf_counter()
        results = await asyncio.gather(
            *(
                client.call_tool("confluence_search_cql", {"cql": f"title ~ {n}"})
                for n in range(3)
            )
        )
        elapsed = time.perf_counter() - started

    assert len(results) == 3
    assert all(result.content[0].text == '{"id":"1","title":"Slow"}' for result in results)
    assert elapsed < 1.2


@pytest.mark.asyncio
async def test_health_resource_answers_while_a_tool_is_blocked():
    slow = _SlowClient(delay=1.0)
    app = _build_app(lambda: slow)

    async with Client(app) as client:
        pending = asyncio.ensure_future(
            client.call_tool("confluence_search_cql", {"cql": "type=page"})
        )
        await asyncio.sleep(0.1)
        started = time.perf_counter()
        contents = await client.read_resource("status://health")
        health_elapsed = time.perf_counter() - started
        await pending

    assert json.loads(contents[0].text)["server"] == "confluence-search"
    assert health_elapsed < 0.5
