"""
Complexity - Per-function cyclomatic complexity.

Cyclomatic Complexity = Number of decision points + 1

Decision points inside a function's own body:
- if
- switch case / default
- for, for-in, for-of, while, do-while
- ternary (a ? b : c)
- && and || operators

Nested functions, methods and classes are scored on their own.
"""

from .grammar import LOOP_KINDS, SCOPE_KINDS, SHORT_CIRCUIT_OPERATORS, SWITCH_CLAUSE_KINDS
from .syntax_tree import SyntaxNode


def calculate_complexity(function_node: SyntaxNode) -> int:
    """Calculate cyclomatic complexity for a function node."""

    complexity = 1  # Base complexity

    stack = list(reversed(function_node.children))
    while stack:
        node = stack.pop()

        if node.kind in SCOPE_KINDS:
            continue

        if node.kind == "if_statement":
            complexity += 1
        elif node.kind in SWITCH_CLAUSE_KINDS:
            complexity += 1
        elif node.kind in LOOP_KINDS:
            complexity += 1
        elif node.kind == "ternary_expression":
            complexity += 1
        elif node.kind == "binary_expression":
            operator = node.child_by_field("operator")
            if operator is not None and operator.kind in SHORT_CIRCUIT_OPERATORS:
                complexity += 1

        stack.extend(reversed(node.children))

    return complexity
