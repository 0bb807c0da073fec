"""Core domain logic for the test case pipeline."""

from .analyzer import AnalysisResult, ClassInfo, FunctionInfo, analyze_code
from .errors import (
    InvalidInputError,
    ParseError,
    SizeLimitExceededError,
    SyntaxAnalysisError,
    UnsupportedConstructError,
)
from .generators import (
    GeneratedSuite,
    TemplateCatalog,
    TestCaseDescriptor,
    TestCaseSynthesizer,
    build_suite,
    render,
    synthesize,
)
from .pipeline import AnalysisOptions, PipelineResult, analyze_and_synthesize

__all__ = [
    # Analyzer
    "analyze_code",
    "AnalysisResult",
    "FunctionInfo",
    "ClassInfo",
    # Errors
    "ParseError",
    "InvalidInputError",
    "SizeLimitExceededError",
    "SyntaxAnalysisError",
    "UnsupportedConstructError",
    # Generators
    "synthesize",
    "build_suite",
    "render",
    "TestCaseDescriptor",
    "GeneratedSuite",
    "TestCaseSynthesizer",
    "TemplateCatalog",
    # Pipeline
    "analyze_and_synthesize",
    "AnalysisOptions",
    "PipelineResult",
]
