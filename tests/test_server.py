"""Tests for the testcase-pipeline MCP server."""

import pytest


class TestServerBasics:
    """Basic server tests."""

    def test_version(self):
        from testcase_pipeline_mcp import __version__
        assert __version__ == "0.1.0"

    def test_server_creation(self):
        from testcase_pipeline_mcp.server import server
        assert server.name == "testcase-pipeline"

    @pytest.mark.asyncio
    async def test_list_tools(self):
        from testcase_pipeline_mcp.server import list_tools

        tools = await list_tools()
        assert [t.name for t in tools] == ["analyze_code", "generate_tests"]

    @pytest.mark.asyncio
    async def test_call_tool_routes(self):
        from testcase_pipeline_mcp.server import call_tool

        result = await call_tool("analyze_code", {"code": "function f() {}"})
        assert '"name": "f"' in result[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        from testcase_pipeline_mcp.server import call_tool

        result = await call_tool("run_tests", {})
        assert result[0].text == "Unknown tool: run_tests"
