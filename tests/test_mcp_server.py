"""Tests for the MCP reference tools."""

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

import backend.mcp_server as mcp_server
from mother.models import Planet
from mother.reference import ReferenceStore


@pytest.fixture(autouse=True)
def fresh_store():
    mcp_server.set_store(ReferenceStore())
    yield
    mcp_server.set_store(ReferenceStore())


def test_search_reference():
    results = mcp_server.search_reference("planet", "lv-426")
    assert [r["id"] for r in results] == ["lv-426"]


def test_search_reference_lists_all():
    results = mcp_server.search_reference("movie")
    assert [r["name"] for r in results] == ["Alien", "Alien: Romulus"]


def test_search_reference_bad_kind():
    with pytest.raises(ValueError):
        mcp_server.search_reference("droid", "")


def test_search_all_reference():
    hits = mcp_server.search_all_reference("bishop")
    assert {(h["kind"], h["record"]["id"]) for h in hits} == {
        ("character", "bishop"),
        ("alien", "synthetic"),
    }


def test_set_store():
    mcp_server.set_store(ReferenceStore([
        Planet(id="fiorina", name="Fiorina 161", franchise="Alien", description="Foundry.", type="planet"),
    ]))
    assert [r["id"] for r in mcp_server.search_reference("planet")] == ["fiorina"]
    assert mcp_server.search_reference("alien") == []


async def test_tools_over_mcp():
    async with create_connected_server_and_client_session(mcp_server.mcp._mcp_server) as client:
        tools = await client.list_tools()
        assert {t.name for t in tools.tools} == {"search_reference", "search_all_reference"}
        result = await client.call_tool("search_reference", {"kind": "planet", "query": "lv-426"})
        assert not result.isError
        text = "".join(c.text for c in result.content)
        assert "LV-426 (Acheron)" in text
