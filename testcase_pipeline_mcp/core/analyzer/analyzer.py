"""
Code Analyzer - Main analysis engine that combines parsing and validation.
"""

import logging

from ...constants import DEFAULT_LANGUAGE, MAX_CODE_SIZE, SUPPORTED_LANGUAGES
from ..errors import InvalidInputError, SizeLimitExceededError, SyntaxAnalysisError
from .models import AnalysisResult, ComplexityMetrics
from .parser import StructureVisitor
from .syntax_tree import parse_source
from .syntax_validator import validate_syntax

logger = logging.getLogger(__name__)


def analyze_code(
    code: str,
    size_limit: int = MAX_CODE_SIZE,
    language: str = DEFAULT_LANGUAGE
) -> AnalysisResult:
    """
    Analyze JavaScript code completely.

    This is the main entry point that:
    1. Rejects input that cannot be analyzed (before any parsing)
    2. Parses code into a syntax tree
    3. Validates syntax
    4. Extracts structure and complexity in one traversal

    Args:
        code: Source code as string
        size_limit: Maximum accepted size in characters
        language: Grammar to parse with

    Returns:
        AnalysisResult with all analysis data

    Raises:
        InvalidInputError: Empty, non-text or unsupported-language input
        SizeLimitExceededError: Source longer than size_limit
        SyntaxAnalysisError: The parser rejected the source
    """
    # Step 1: Validate input
    _check_input(code, size_limit, language)

    # Step 2: Parse code
    tree = parse_source(code, language)

    # Step 3: Validate syntax
    syntax_result = validate_syntax(tree)
    if not syntax_result.is_valid:
        raise SyntaxAnalysisError(
            syntax_result.error_message,
            line=syntax_result.error_line,
            column=syntax_result.error_offset
        )

    # Step 4: Extract structure
    visitor = StructureVisitor(tree)
    visitor.visit()

    complexity = ComplexityMetrics(
        cyclomatic_complexity=visitor.cyclomatic_complexity,
        lines_of_code=code.count("\n") + 1,
        functions_count=len(visitor.functions),
        classes_count=len(visitor.classes),
        max_nesting_depth=visitor.max_nesting_depth
    )

    logger.debug(
        f"Analyzed {complexity.lines_of_code} lines: {complexity.functions_count} functions, "
        f"{complexity.classes_count} classes, complexity {complexity.cyclomatic_complexity}"
    )

    return AnalysisResult(
        functions=tuple(visitor.functions),
        classes=tuple(visitor.classes),
        variables=tuple(visitor.variables),
        imports=tuple(visitor.imports),
        exports=tuple(visitor.exports),
        conditionals=tuple(visitor.conditionals),
        loops=tuple(visitor.loops),
        try_blocks=tuple(visitor.try_blocks),
        complexity=complexity,
        language=language,
        syntax_tree=tree
    )


def _check_input(code: str, size_limit: int, language: str) -> None:
    """Reject input before parsing."""
    if not isinstance(code, str):
        raise InvalidInputError(f"Source code must be text (got {type(code).__name__})")

    if not code:
        raise InvalidInputError("Source code is empty")

    if "\x00" in code:
        raise InvalidInputError("Source code contains binary data")

    if language not in SUPPORTED_LANGUAGES:
        raise InvalidInputError(
            f"Unsupported language: {language}. "
            f"Supported languages: {sorted(SUPPORTED_LANGUAGES)}"
        )

    if len(code) > size_limit:
        raise SizeLimitExceededError(len(code), size_limit)
