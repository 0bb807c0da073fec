"""Node kinds of the tree-sitter JavaScript grammar the analyzer reacts to."""

from typing import Final

# Function-like nodes → FunctionInfo.kind
FUNCTION_KINDS: Final[dict[str, str]] = {
    "function_declaration": "declaration",
    "generator_function_declaration": "declaration",
    "function_expression": "expression",
    "function": "expression",  # name used by older grammar releases
    "generator_function": "expression",
    "arrow_function": "arrow",
}

GENERATOR_KINDS: Final[frozenset[str]] = frozenset({
    "generator_function_declaration", "generator_function"
})

# Nodes that open a new function scope (local complexity stops here)
SCOPE_KINDS: Final[frozenset[str]] = frozenset(
    {*FUNCTION_KINDS, "method_definition", "class_declaration", "class"}
)

LOOP_KINDS: Final[frozenset[str]] = frozenset({
    "for_statement", "for_in_statement", "while_statement", "do_statement"
})

SWITCH_CLAUSE_KINDS: Final[frozenset[str]] = frozenset({"switch_case", "switch_default"})

SHORT_CIRCUIT_OPERATORS: Final[frozenset[str]] = frozenset({"&&", "||"})

# Entering one of these increases the nesting depth
NESTING_KINDS: Final[frozenset[str]] = frozenset({
    "statement_block",
    "function_declaration",
    "generator_function_declaration",
    "if_statement",
    "try_statement",
    *LOOP_KINDS,
})

PARAMETER_PATTERN_KINDS: Final[frozenset[str]] = frozenset({
    "identifier", "assignment_pattern", "rest_pattern", "object_pattern", "array_pattern"
})
