"""
Test Case Synthesizer - Main test generation engine.

Turns an AnalysisResult into an ordered list of TestCaseDescriptors:
- Functions: basic, valid/invalid per parameter, null parameters, async
- Classes: instantiation plus one case per non-constructor method
- Conditionals: true path and false path
- Loops: normal iteration and zero iterations
"""

from __future__ import annotations

import logging
import random
from typing import Any

from ...constants import (
    DEFAULT_FRAMEWORK,
    DEFAULT_LANGUAGE,
    HIGH_COMPLEXITY,
    MEDIUM_COMPLEXITY,
    NEGATIVE_CASE_SEED,
)
from ..analyzer.models import (
    ANONYMOUS,
    AnalysisResult,
    ClassInfo,
    ConditionalInfo,
    FunctionInfo,
    LoopInfo,
    MethodInfo,
    ParameterInfo,
)
from .base import GeneratedSuite, Priority, TestCaseDescriptor, TestKind, TestSynthesizerBase
from .heuristics import DEFAULT_HEURISTICS, ValueHeuristics
from .literals import NAN, UNDEFINED, js_literal
from .templates import TemplateCatalog

logger = logging.getLogger(__name__)

# Cycled through by parameter position for the invalid-parameter case
INVALID_VALUES: tuple[Any, ...] = (None, UNDEFINED, "", 0, -1, NAN, {}, [], False)

NORMAL_ITERATIONS = 5


class TestCaseSynthesizer(TestSynthesizerBase):
    """Synthesize test case descriptors from a structural analysis."""

    __test__ = False

    def __init__(
        self,
        heuristics: ValueHeuristics | None = None,
        catalog: TemplateCatalog | None = None,
        language: str = DEFAULT_LANGUAGE,
        framework: str = DEFAULT_FRAMEWORK,
        seed: int | None = NEGATIVE_CASE_SEED
    ):
        """
        Create a synthesizer.

        Args:
            heuristics: Value strategy (name-based defaults if None)
            catalog: Template catalog (built-in templates only if None)
            language: Language used to resolve templates
            framework: Test framework used to resolve templates
            seed: Seed for the null/undefined parameter case; None leaves it unseeded
        """
        self.heuristics = heuristics or DEFAULT_HEURISTICS
        self.catalog = catalog or TemplateCatalog()
        self.language = language
        self.framework = framework
        self.seed = seed

    def synthesize(self, analysis: AnalysisResult) -> list[TestCaseDescriptor]:
        """Synthesize every test case for an analysis, in inventory order."""
        tests = []

        for func in analysis.functions:
            tests.extend(self.generate_for_function(func))

        for cls in analysis.classes:
            tests.extend(self.generate_for_class(cls))

        tests.extend(self.generate_for_conditionals(analysis.conditionals))
        tests.extend(self.generate_for_loops(analysis.loops))

        _check_owners(analysis, tests)

        logger.info(f"Generated {len(tests)} test cases")
        return tests

    # =========================================================================
    # Functions
    # =========================================================================

    def generate_for_function(self, func: FunctionInfo) -> list[TestCaseDescriptor]:
        """Generate test cases for a single function."""
        tests = [self._generate_basic_test(func)]
        keys = _input_keys(func.parameters)

        for index, (param, key) in enumerate(zip(func.parameters, keys)):
            tests.append(self._generate_valid_param_test(func, param, key))
            tests.append(self._generate_invalid_param_test(func, index, param, key))

        if func.parameters:
            tests.append(self._generate_null_params_test(func))

        if func.is_async:
            tests.append(self._generate_async_test(func))

        return tests

    def _generate_basic_test(self, func: FunctionInfo) -> TestCaseDescriptor:
        """Basic case: sample inputs, output shape guessed from the name."""
        input_data = self._build_input_data(func.parameters)
        expected = self.heuristics.expected_output(func.name)

        code = self._render_call("unit", func, input_data, expected, "basic",
                                 f"should run {func.name} correctly")

        return self._descriptor(
            func.name, "unit", f"Basic test for function {func.name}",
            input_data, expected, code, _priority_for(func.complexity),
            "basic", func.line_number
        )

    def _generate_valid_param_test(
        self,
        func: FunctionInfo,
        param: ParameterInfo,
        key: str
    ) -> TestCaseDescriptor:
        """One parameter gets a realistic value, the rest get samples."""
        input_data = self._build_input_data(func.parameters)
        input_data[key] = self.heuristics.quality_value(param.name)
        expected = self.heuristics.expected_output(func.name)

        code = self._render_call("unit", func, input_data, expected, "valid_param",
                                 f"should accept a valid {param.name}")

        return self._descriptor(
            func.name, "unit", f"Test with valid parameter {param.name}",
            input_data, expected, code, "medium", "valid_param", func.line_number
        )

    def _generate_invalid_param_test(
        self,
        func: FunctionInfo,
        index: int,
        param: ParameterInfo,
        key: str
    ) -> TestCaseDescriptor:
        """One parameter gets an invalid value; the call is expected to throw."""
        input_data = self._build_input_data(func.parameters)
        input_data[key] = _copy_value(INVALID_VALUES[index % len(INVALID_VALUES)])
        expected = self._error_expectation(func.name)

        code = self._render("edge_case", func.name, "invalid_param", {
            "functionName": func.name,
            "edgeCase": f"invalid {param.name}",
            "inputData": self._build_arguments(func.parameters, input_data),
            "expectation": "toThrow()",
            "testDescription": f"should reject an invalid {param.name}",
        })

        return self._descriptor(
            func.name, "edge_case", f"Test with invalid parameter {param.name}",
            input_data, expected, code, "high", "invalid_param", func.line_number
        )

    def _generate_null_params_test(self, func: FunctionInfo) -> TestCaseDescriptor:
        """Every parameter independently set to null or undefined."""
        rng = self._coin_flips(func)
        input_data = {
            key: None if rng.random() > 0.5 else UNDEFINED
            for key in _input_keys(func.parameters)
        }
        expected = self._error_expectation(func.name)

        code = self._render("negative", func.name, "null_params", {
            "functionName": func.name,
            "inputData": self._build_arguments(func.parameters, input_data),
            "expectation": "toThrow()",
            "testDescription": "should reject null/undefined parameters",
        })

        return self._descriptor(
            func.name, "negative", f"Test with null/undefined parameters for {func.name}",
            input_data, expected, code, "high", "null_params", func.line_number
        )

    def _generate_async_test(self, func: FunctionInfo) -> TestCaseDescriptor:
        """Async functions: the expected output is what the promise resolves to."""
        input_data = self._build_input_data(func.parameters)
        resolved = self.heuristics.expected_output(func.name)
        expected = {"type": "promise", "resolves": resolved}

        code = self._render_call("async", func, input_data, resolved, "async",
                                 "should resolve correctly")

        return self._descriptor(
            func.name, "unit", f"Async test for {func.name}",
            input_data, expected, code, "medium", "async", func.line_number
        )

    # =========================================================================
    # Classes
    # =========================================================================

    def generate_for_class(self, cls: ClassInfo) -> list[TestCaseDescriptor]:
        """Generate test cases for a class (constructor covered by instantiation)."""
        tests = [self._generate_class_init_test(cls)]

        for method in cls.testable_methods:
            tests.append(self._generate_method_test(cls, method))

        return tests

    def _generate_class_init_test(self, cls: ClassInfo) -> TestCaseDescriptor:
        constructor = cls.constructor
        args = [self._value_for(p) for p in constructor.parameters] if constructor else []
        input_data = {"constructorArgs": args}
        expected = {"type": "object", "instanceof": cls.name}

        code = self._render("class", cls.name, "instantiation", {
            "className": cls.name,
            "constructorArgs": ", ".join(js_literal(a) for a in args),
            "testDescription": f"should create an instance of {cls.name}",
        })

        return self._descriptor(
            cls.name, "unit", f"Instantiation test for class {cls.name}",
            input_data, expected, code, "high", "instantiation", cls.line_number
        )

    def _generate_method_test(self, cls: ClassInfo, method: MethodInfo) -> TestCaseDescriptor:
        owner = f"{cls.name}.{method.name}"
        input_data = self._build_input_data(method.parameters)
        expected = self.heuristics.expected_output(method.name)

        code = self._render("method", owner, "method", {
            "className": cls.name,
            "methodName": method.name,
            "inputData": js_literal(input_data),
            "inputParams": self._build_param_refs(method.parameters),
            "testDescription": f"should run {owner} correctly",
        })

        return self._descriptor(
            owner, "unit", f"Test of method {method.name} of class {cls.name}",
            input_data, expected, code, "medium", "method",
            method.line_number or cls.line_number
        )

    # =========================================================================
    # Control flow
    # =========================================================================

    def generate_for_conditionals(
        self,
        conditionals: tuple[ConditionalInfo, ...]
    ) -> list[TestCaseDescriptor]:
        """Two cases per conditional: true path and false path."""
        tests = []

        for index, conditional in enumerate(conditionals):
            owner = f"conditional_{index}"
            for path in ("true", "false"):
                scenario = f"{path}_path"
                code = self._render("conditional", owner, scenario, {
                    "conditionalKind": conditional.kind,
                    "line": conditional.line_number,
                    "path": path,
                })
                tests.append(self._descriptor(
                    owner, "unit",
                    f"Test of the {path} path of the {conditional.kind} on line {conditional.line_number}",
                    {"condition": path == "true", "testCase": scenario},
                    {"path": path},
                    code, "medium", scenario, conditional.line_number
                ))

        return tests

    def generate_for_loops(self, loops: tuple[LoopInfo, ...]) -> list[TestCaseDescriptor]:
        """Two cases per loop: normal iteration count and zero iterations."""
        tests = []

        for index, loop in enumerate(loops):
            owner = f"loop_{index}"
            cases: tuple[tuple[str, int, TestKind, Priority, str], ...] = (
                ("normal", NORMAL_ITERATIONS, "unit", "medium", "Normal iteration"),
                ("zero", 0, "edge_case", "high", "Zero iterations"),
            )
            for scenario, iterations, kind, priority, label in cases:
                code = self._render("loop", owner, scenario, {
                    "loopKind": loop.kind,
                    "line": loop.line_number,
                    "iterations": iterations,
                })
                tests.append(self._descriptor(
                    owner, kind, f"{label} of the {loop.kind} loop on line {loop.line_number}",
                    {"iterations": iterations, "testCase": scenario},
                    {"completed": True, "iterations": iterations},
                    code, priority, scenario, loop.line_number
                ))

        return tests

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _coin_flips(self, func: FunctionInfo) -> random.Random:
        """Random source for one function; seeded runs repeat exactly."""
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{func.name}:{func.line_number}")

    def _value_for(self, param: ParameterInfo) -> Any:
        return self.heuristics.sample_value(param.name)

    def _build_input_data(self, parameters: tuple[ParameterInfo, ...]) -> dict[str, Any]:
        """Sample value for every parameter, keyed by name."""
        return {
            key: self._value_for(param)
            for param, key in zip(parameters, _input_keys(parameters))
        }

    def _build_arguments(
        self,
        parameters: tuple[ParameterInfo, ...],
        input_data: dict[str, Any]
    ) -> str:
        """Inline argument list: 1, "Test Name", null."""
        return ", ".join(js_literal(input_data[key]) for key in _input_keys(parameters))

    def _build_param_refs(self, parameters: tuple[ParameterInfo, ...]) -> str:
        """Argument list reading from the input object: input.a, ...input.rest."""
        refs = []
        for param, key in zip(parameters, _input_keys(parameters)):
            prefix = "..." if param.kind == "rest" else ""
            refs.append(f"{prefix}input.{key}")
        return ", ".join(refs)

    def _render_call(
        self,
        template: str,
        func: FunctionInfo,
        input_data: dict[str, Any],
        expected: dict[str, Any],
        scenario: str,
        description: str
    ) -> str:
        assertion, expected_literal = _assertion_for(expected)
        return self._render(template, func.name, scenario, {
            "functionName": func.name,
            "testDescription": description,
            "inputData": js_literal(input_data),
            "inputParams": self._build_param_refs(func.parameters),
            "assertion": assertion,
            "expectedOutput": expected_literal,
        })

    def _render(self, template: str, owner: str, scenario: str, bindings: dict[str, Any]) -> str:
        return self.catalog.render(self.language, self.framework, template, {
            "ownerName": owner,
            "scenario": scenario,
            **bindings,
        })

    def _error_expectation(self, name: str) -> dict[str, Any]:
        return {
            "type": "error",
            "shouldThrow": True,
            "errorType": "Error",
            "message": f"Expected error from {name} with invalid parameters"
        }

    def _descriptor(
        self,
        owner: str,
        kind: TestKind,
        description: str,
        input_data: dict[str, Any],
        expected: dict[str, Any],
        code: str,
        priority: Priority,
        scenario: str,
        line: int
    ) -> TestCaseDescriptor:
        return TestCaseDescriptor(
            owner_name=owner,
            test_kind=kind,
            description=description,
            input_data=input_data,
            expected_output=expected,
            rendered_code=code,
            priority=priority,
            scenario=scenario,
            source_line=line
        )


def _priority_for(complexity: int) -> Priority:
    if complexity >= HIGH_COMPLEXITY:
        return "high"
    if complexity >= MEDIUM_COMPLEXITY:
        return "medium"
    return "low"


def _assertion_for(expected: dict[str, Any]) -> tuple[str, str]:
    """Pick a Jest matcher and the literal it compares against."""
    kind = expected.get("type")
    if kind in ("boolean", "number"):
        return "toBe", js_literal(expected["value"])
    if kind in ("array", "object"):
        return "toEqual", js_literal(expected["value"])
    return "not.toBe", "undefined"


def _input_keys(parameters: tuple[ParameterInfo, ...]) -> list[str]:
    """Input key per parameter; a repeated name gets its position appended (a, a_1)."""
    keys: list[str] = []
    for index, param in enumerate(parameters):
        key = param.name
        while key in keys:
            key = f"{key}_{index}"
        keys.append(key)
    return keys


def _copy_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return type(value)()
    return value


def _check_owners(analysis: AnalysisResult, tests: list[TestCaseDescriptor]) -> None:
    owners = {f.name for f in analysis.functions}
    for cls in analysis.classes:
        owners.add(cls.name)
        owners.update(f"{cls.name}.{m.name}" for m in cls.methods)
    owners.update(f"conditional_{i}" for i in range(len(analysis.conditionals)))
    owners.update(f"loop_{i}" for i in range(len(analysis.loops)))

    for test in tests:
        assert test.owner_name in owners, f"Unknown test owner: {test.owner_name}"


def synthesize(
    analysis: AnalysisResult,
    heuristics: ValueHeuristics | None = None,
    catalog: TemplateCatalog | None = None,
    framework: str = DEFAULT_FRAMEWORK,
    seed: int | None = NEGATIVE_CASE_SEED
) -> list[TestCaseDescriptor]:
    """Synthesize test cases for an analysis with a one-off synthesizer."""
    synthesizer = TestCaseSynthesizer(
        heuristics=heuristics,
        catalog=catalog,
        language=analysis.language,
        framework=framework,
        seed=seed
    )
    return synthesizer.synthesize(analysis)


def build_suite(
    analysis: AnalysisResult,
    test_cases: list[TestCaseDescriptor],
    module_name: str = "module",
    framework: str = DEFAULT_FRAMEWORK
) -> GeneratedSuite:
    """Group test cases into a test file importing the analyzed names."""
    imports: list[str] = []
    names = [f.name for f in analysis.functions] + [c.name for c in analysis.classes]
    for name in names:
        if name not in imports and name != ANONYMOUS:
            imports.append(name)

    warnings = []
    if not test_cases:
        warnings.append("No testable functions, classes or control flow found")

    return GeneratedSuite(
        module_name=module_name,
        imports=imports,
        test_cases=list(test_cases),
        framework=framework,
        warnings=warnings
    )
