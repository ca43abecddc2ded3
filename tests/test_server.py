"""End-to-end server tests."""

import json

import pytest

from pkgdmp.server import call_tool, list_tools


@pytest.mark.asyncio
async def test_server_lists_tools():
    """Test that server lists both tools."""
    tools = await list_tools()

    assert {t.name for t in tools} == {"dump_package", "list_symbol_kinds"}


@pytest.mark.asyncio
async def test_dump_package_tool_schema():
    """Test dump_package tool has correct schema."""
    tools = await list_tools()

    dump = next(t for t in tools if t.name == "dump_package")
    props = dump.inputSchema["properties"]

    assert dump.inputSchema["required"] == ["path"]
    for name in ("matching", "exclude_matching", "only", "exclude", "unexported",
                 "no_docs", "full_docs", "no_tags", "exclude_files", "format"):
        assert name in props
    assert props["format"]["enum"] == ["text", "json"]


@pytest.mark.asyncio
async def test_call_dump_package(tmp_path):
    (tmp_path / "a.go").write_text("package a\n\n// Ping pings.\nfunc Ping() error { return nil }\n")

    content = await call_tool("dump_package", {"path": str(tmp_path), "format": "json"})
    result = json.loads(content[0].text)

    assert result["success"] is True
    assert result["packages"][0]["funcs"] == [
        {"name": "Ping", "doc": "Ping pings.", "results": [{"type": "error"}]},
    ]


@pytest.mark.asyncio
async def test_call_list_symbol_kinds():
    content = await call_tool("list_symbol_kinds", {})
    assert json.loads(content[0].text)["count"] == 10


@pytest.mark.asyncio
async def test_call_errors():
    content = await call_tool("nope", {})
    assert json.loads(content[0].text) == {"error": "Unknown tool: nope"}

    content = await call_tool("dump_package", {})
    assert "error" in json.loads(content[0].text)
