"""Registry for core MCP tool definitions and handlers."""

from .analyze_code import (
    TOOL_DEFINITION as ANALYZE_CODE_TOOL,
    handle as handle_analyze_code,
)
from .generate_tests import (
    TOOL_DEFINITION as GENERATE_TESTS_TOOL,
    handle as handle_generate_tests,
)

# All Core tool definitions
TOOLS = [
    ANALYZE_CODE_TOOL,
    GENERATE_TESTS_TOOL,
]

# Tool name to handler mapping
HANDLERS = {
    "analyze_code": handle_analyze_code,
    "generate_tests": handle_generate_tests,
}


__all__ = [
    # Tool definitions
    "TOOLS",
    "ANALYZE_CODE_TOOL",
    "GENERATE_TESTS_TOOL",
    # Handlers
    "HANDLERS",
    "handle_analyze_code",
    "handle_generate_tests",
]
