"""
Base interface for test synthesizers.
Allows swapping the heuristic synthesizer for another implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

from ..analyzer.models import AnalysisResult, ClassInfo, FunctionInfo
from .literals import to_jsonable

TestKind = Literal["unit", "integration", "edge_case", "negative"]
Priority = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class TestCaseDescriptor:
    """
    A single synthesized test case.

    input_data and expected_output are wrapped read-only on creation; values
    nested inside them (sample objects, constructor argument lists) are not.
    """
    __test__ = False  # not a pytest class

    owner_name: str                    # "add", "Calculator.add", "loop_0"
    test_kind: TestKind
    description: str
    input_data: Mapping[str, Any]
    expected_output: Mapping[str, Any]
    rendered_code: str
    priority: Priority
    scenario: str                      # "basic", "invalid_param", "true_path", ...
    source_line: int = 0
    status: str = "generated"

    def __post_init__(self):
        object.__setattr__(self, "input_data", MappingProxyType(dict(self.input_data)))
        object.__setattr__(self, "expected_output", MappingProxyType(dict(self.expected_output)))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON response."""
        return {
            "owner_name": self.owner_name,
            "test_kind": self.test_kind,
            "scenario": self.scenario,
            "description": self.description,
            "input_data": to_jsonable(self.input_data),
            "expected_output": to_jsonable(self.expected_output),
            "rendered_code": self.rendered_code,
            "priority": self.priority,
            "status": self.status,
            "source_line": self.source_line
        }


@dataclass
class GeneratedSuite:
    """Complete generated test file."""
    module_name: str
    imports: list[str]
    test_cases: list[TestCaseDescriptor]
    framework: str = "jest"
    warnings: list[str] = field(default_factory=list)

    def to_code(self) -> str:
        """Convert to a JavaScript test file."""
        lines = []

        lines.append(f"// Tests for {self.module_name} ({self.framework})")
        if self.imports:
            imports_str = ", ".join(self.imports)
            lines.append(f"const {{ {imports_str} }} = require('./{self.module_name}');")
        lines.append("")

        for test in self.test_cases:
            lines.append(f"// [{test.test_kind}/{test.priority}] {test.description}")
            lines.append(test.rendered_code)
            lines.append("")

        return "\n".join(lines)


class TestSynthesizerBase(ABC):
    """Abstract base class for test synthesizers."""

    __test__ = False

    @abstractmethod
    def synthesize(self, analysis: AnalysisResult) -> list[TestCaseDescriptor]:
        """Synthesize test cases for a whole analysis."""
        pass

    @abstractmethod
    def generate_for_function(self, func: FunctionInfo) -> list[TestCaseDescriptor]:
        """Generate test cases for a single function."""
        pass

    @abstractmethod
    def generate_for_class(self, cls: ClassInfo) -> list[TestCaseDescriptor]:
        """Generate test cases for a class."""
        pass
