"""Syntax Validator - Locate the first parse error in a syntax tree."""

from dataclasses import dataclass

from .syntax_tree import SyntaxNode, SyntaxTree

# How much of an unexpected fragment to quote in the message
_SNIPPET_LENGTH = 30


@dataclass
class SyntaxResult:
    """Result of syntax validation."""
    is_valid: bool
    error_message: str | None = None
    error_line: int | None = None
    error_offset: int | None = None


def validate_syntax(tree: SyntaxTree) -> SyntaxResult:
    """Validate a parsed tree and return a structured result."""

    for node in tree.root.walk():
        if node.is_missing:
            return _error_result(f"Missing '{node.kind}'", node)
        if node.is_error:
            snippet = tree.text_of(node).strip().splitlines()
            fragment = snippet[0][:_SNIPPET_LENGTH] if snippet else ""
            return _error_result(f"Unexpected '{fragment}'", node)

    return SyntaxResult(is_valid=True)


def _error_result(message: str, node: SyntaxNode) -> SyntaxResult:
    return SyntaxResult(
        is_valid=False,
        error_message=message,
        error_line=node.span.start_line,
        error_offset=node.span.start_column + 1
    )
