"""Analyzer - code parsing, validation, and analysis."""

from .analyzer import analyze_code
from .models import (
    AnalysisResult,
    ClassInfo,
    ComplexityMetrics,
    ConditionalInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    LoopInfo,
    MethodInfo,
    ParameterInfo,
    PropertyInfo,
    TryInfo,
    VariableInfo,
)
from .syntax_tree import SyntaxNode, SyntaxTree, parse_source

__all__ = [
    "analyze_code",
    "parse_source",
    "SyntaxNode",
    "SyntaxTree",
    "AnalysisResult",
    "ComplexityMetrics",
    "FunctionInfo",
    "ParameterInfo",
    "ClassInfo",
    "MethodInfo",
    "PropertyInfo",
    "VariableInfo",
    "ImportInfo",
    "ExportInfo",
    "ConditionalInfo",
    "LoopInfo",
    "TryInfo",
]
