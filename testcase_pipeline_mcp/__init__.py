"""Test case pipeline: JavaScript structural analysis and heuristic test synthesis over MCP."""

__version__ = "0.1.0"
