"""MCP handler for the analyze_code tool (delegates to AnalysisService)."""

from __future__ import annotations

import json

from mcp.types import TextContent, Tool

from ...constants import DEFAULT_LANGUAGE
from ...services import AnalysisService, ServiceResult

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="analyze_code",
    description=(
        "Analyze JavaScript code structure. Validates syntax and extracts "
        "functions, classes, variables, imports, exports, conditionals, loops "
        "and try blocks, with cyclomatic complexity and nesting depth."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "file_path": {
                "type": "string",
                "description": "Path to the JavaScript file to analyze"
            },
            "code": {
                "type": "string",
                "description": "JavaScript code content (alternative to file_path)"
            },
            "language": {
                "type": "string",
                "description": "Source language (default: javascript)"
            },
            "max_size": {
                "type": "integer",
                "description": "Maximum accepted code size in characters"
            },
            "include_ast": {
                "type": "boolean",
                "description": "Whether to include the serialized syntax tree (default: false)"
            }
        }
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Analyze code from 'code' or 'file_path' and return JSON results."""
    service = AnalysisService()

    result = service.analyze(
        code=arguments.get("code"),
        file_path=arguments.get("file_path"),
        language=arguments.get("language", DEFAULT_LANGUAGE),
        max_size=arguments.get("max_size")
    )

    if not result.success:
        return _error_response(result)

    response = result.data.to_dict(include_ast=arguments.get("include_ast", False))

    return [TextContent(type="text", text=json.dumps(response, indent=2))]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    text = f"Error: {result.error.message}"
    if result.error.details:
        text += f"\nDetails: {json.dumps(result.error.details)}"
    return [TextContent(type="text", text=text)]
