"""Tests for the structural analyzer."""

import pytest

from testcase_pipeline_mcp.core.analyzer import analyze_code
from testcase_pipeline_mcp.core.analyzer.models import ANONYMOUS, COMPUTED
from testcase_pipeline_mcp.core.errors import (
    InvalidInputError,
    ParseError,
    SizeLimitExceededError,
    SyntaxAnalysisError,
)


# =============================================================================
# Input Validation Tests
# =============================================================================

class TestInputValidation:
    """Tests for inputs rejected before parsing."""

    def test_empty_code_rejected(self):
        with pytest.raises(InvalidInputError, match="empty"):
            analyze_code("")

    def test_non_text_rejected(self):
        with pytest.raises(InvalidInputError, match="text"):
            analyze_code(b"function f() {}")

    def test_binary_content_rejected(self):
        with pytest.raises(InvalidInputError, match="binary"):
            analyze_code("function f() {}\x00")

    def test_unsupported_language_rejected(self):
        with pytest.raises(InvalidInputError, match="Unsupported language"):
            analyze_code("x = 1", language="python")

    def test_size_limit_exceeded(self):
        """Oversized code fails before any parsing, even when malformed."""
        code = "function f() {" + " " * 100

        with pytest.raises(SizeLimitExceededError) as exc_info:
            analyze_code(code, size_limit=50)

        assert exc_info.value.size == len(code)
        assert exc_info.value.limit == 50
        assert "too large" in exc_info.value.message

    def test_size_limit_is_inclusive(self):
        code = "let x = 1;"
        result = analyze_code(code, size_limit=len(code))
        assert len(result.variables) == 1

    def test_whitespace_only_is_valid(self):
        result = analyze_code("   \n  ")

        assert result.functions == ()
        assert result.complexity.cyclomatic_complexity == 1
        assert result.complexity.lines_of_code == 2

    def test_errors_share_base_class(self):
        for error_type in (InvalidInputError, SizeLimitExceededError, SyntaxAnalysisError):
            assert issubclass(error_type, ParseError)


# =============================================================================
# Syntax Error Tests
# =============================================================================

class TestSyntaxErrors:
    """Tests for malformed source."""

    def test_unbalanced_braces(self):
        with pytest.raises(SyntaxAnalysisError) as exc_info:
            analyze_code("function broken() {\n  if (x) {\n")

        error = exc_info.value
        assert error.line is not None
        assert error.column is not None
        assert error.message.startswith("Syntax error at line")

    def test_garbage_tokens(self):
        with pytest.raises(SyntaxAnalysisError):
            analyze_code("let = = ;")

    def test_error_location_points_into_source(self):
        code = "const a = 1;\nconst b = 2;\nfunction (\n"
        with pytest.raises(SyntaxAnalysisError) as exc_info:
            analyze_code(code)

        assert 1 <= exc_info.value.line <= 4


# =============================================================================
# Function Extraction Tests
# =============================================================================

class TestFunctionExtraction:
    """Tests for function inventories."""

    def test_simple_function(self):
        result = analyze_code("function add(a, b) { return a + b; }")

        assert len(result.functions) == 1
        func = result.functions[0]
        assert func.name == "add"
        assert func.kind == "declaration"
        assert [p.name for p in func.parameters] == ["a", "b"]
        assert func.complexity == 1
        assert func.line_number == 1
        assert func.is_async is False
        assert func.is_generator is False

    def test_async_function(self):
        result = analyze_code("async function fetchUser(id) { return await load(id); }")

        assert result.functions[0].is_async is True

    def test_generator_function(self):
        result = analyze_code("function* counter() { yield 1; }")

        func = result.functions[0]
        assert func.name == "counter"
        assert func.is_generator is True
        assert func.kind == "declaration"

    def test_arrow_function_is_anonymous(self):
        result = analyze_code("const double = (x) => x * 2;")

        func = result.functions[0]
        assert func.name == ANONYMOUS
        assert func.is_anonymous
        assert func.kind == "arrow"
        assert func.parameters[0].name == "x"

    def test_arrow_function_single_bare_parameter(self):
        result = analyze_code("const inc = n => n + 1;")

        params = result.functions[0].parameters
        assert len(params) == 1
        assert params[0].name == "n"
        assert params[0].kind == "plain"

    def test_async_arrow_function(self):
        result = analyze_code("const load = async () => fetch('/x');")

        assert result.functions[0].is_async is True

    def test_named_function_expression(self):
        result = analyze_code("const f = function helper(a) { return a; };")

        func = result.functions[0]
        assert func.name == "helper"
        assert func.kind == "expression"

    def test_nested_functions_in_pre_order(self):
        code = """
function outer() {
  function inner() {}
  return inner;
}
function last() {}
"""
        result = analyze_code(code)

        assert [f.name for f in result.functions] == ["outer", "inner", "last"]
        assert [f.line_number for f in result.functions] == [2, 3, 6]


# =============================================================================
# Complexity Tests
# =============================================================================

class TestComplexity:
    """Tests for module and per-function complexity."""

    def test_base_complexity(self):
        result = analyze_code("let x = 1;")
        assert result.complexity.cyclomatic_complexity == 1

    def test_if_else_at_top_level(self):
        result = analyze_code("if (x) { } else { }")

        assert result.complexity.cyclomatic_complexity == 2
        assert len(result.conditionals) == 1
        conditional = result.conditionals[0]
        assert conditional.kind == "if"
        assert conditional.has_alternate_branch is True

    def test_if_without_else(self):
        result = analyze_code("if (x) { y(); }")
        assert result.conditionals[0].has_alternate_branch is False

    def test_switch_counts_every_clause(self):
        code = """
switch (x) {
  case 1: break;
  case 2: break;
  default: break;
}
"""
        result = analyze_code(code)

        assert result.complexity.cyclomatic_complexity == 4
        assert result.conditionals[0].kind == "switch"
        assert result.conditionals[0].case_count == 3

    def test_ternary(self):
        result = analyze_code("const y = x ? 1 : 2;")

        assert result.complexity.cyclomatic_complexity == 2
        assert result.conditionals[0].kind == "ternary"

    def test_loops(self):
        code = """
for (let i = 0; i < 3; i++) {}
while (a) {}
do {} while (b);
for (const k in obj) {}
for (const v of list) {}
"""
        result = analyze_code(code)

        assert [lp.kind for lp in result.loops] == ["for", "while", "do-while", "for-in", "for-of"]
        assert result.complexity.cyclomatic_complexity == 6

    def test_try_counts_once(self):
        code = "try { a(); } catch (e) { b(); } finally { c(); }"
        result = analyze_code(code)

        assert result.complexity.cyclomatic_complexity == 2
        block = result.try_blocks[0]
        assert block.has_catch is True
        assert block.has_finally is True

    def test_try_finally_without_catch(self):
        result = analyze_code("try { a(); } finally { c(); }")

        block = result.try_blocks[0]
        assert block.has_catch is False
        assert block.has_finally is True

    def test_short_circuit_only_counts_locally(self):
        """&& and || raise a function's score but not the module's."""
        code = "function check(a, b) { if (a && b || c) { return 1; } return 0; }"
        result = analyze_code(code)

        assert result.functions[0].complexity == 4
        assert result.complexity.cyclomatic_complexity == 2

    def test_nested_function_scored_separately(self):
        code = """
function outer(a) {
  if (a) {}
  function inner(b) {
    if (b) {}
    while (b) {}
  }
}
"""
        result = analyze_code(code)
        outer, inner = result.functions

        assert outer.complexity == 2
        assert inner.complexity == 3
        assert result.complexity.cyclomatic_complexity == 4

    def test_function_complexity_floor(self):
        result = analyze_code("const f = () => 1;")
        assert result.functions[0].complexity == 1


# =============================================================================
# Nesting Depth Tests
# =============================================================================

class TestNestingDepth:
    """Tests for max nesting depth."""

    def test_no_nesting(self):
        result = analyze_code("let x = 1;")
        assert result.complexity.max_nesting_depth == 0

    def test_function_and_body(self):
        result = analyze_code("function add(a, b) { return a + b; }")
        assert result.complexity.max_nesting_depth == 2

    def test_if_else(self):
        result = analyze_code("if (x) { } else { }")
        assert result.complexity.max_nesting_depth == 2

    def test_deeper_nesting(self):
        code = """
function f(a) {
  if (a) {
    for (;;) {
      break;
    }
  }
}
"""
        result = analyze_code(code)

        # function, body, if, block, for, block
        assert result.complexity.max_nesting_depth == 6

    def test_depth_is_restored_after_siblings(self):
        code = "if (a) { if (b) {} }\nif (c) {}"
        result = analyze_code(code)
        assert result.complexity.max_nesting_depth == 4


# =============================================================================
# Class Extraction Tests
# =============================================================================

class TestClassExtraction:
    """Tests for class inventories."""

    def test_class_members(self):
        code = """
class Calculator extends Base {
  static precision = 2;
  total = 0;

  constructor(initial) {
    super();
    this.total = initial;
  }

  add(value) { return this.total + value; }

  get current() { return this.total; }

  set current(value) { this.total = value; }

  static create() { return new Calculator(0); }

  async save() {}
}
"""
        result = analyze_code(code)

        assert len(result.classes) == 1
        cls = result.classes[0]
        assert cls.name == "Calculator"
        assert cls.superclass == "Base"
        assert cls.line_number == 2

        roles = {m.name + ":" + m.role for m in cls.methods}
        assert "constructor:constructor" in roles
        assert "add:method" in roles
        assert "current:getter" in roles
        assert "current:setter" in roles

        create = next(m for m in cls.methods if m.name == "create")
        assert create.is_static is True
        save = next(m for m in cls.methods if m.name == "save")
        assert save.is_async is True

        assert [(p.name, p.is_static) for p in cls.properties] == [
            ("precision", True), ("total", False)
        ]

    def test_constructor_parameters(self):
        result = analyze_code("class User { constructor(name, email) {} }")

        constructor = result.classes[0].constructor
        assert constructor is not None
        assert [p.name for p in constructor.parameters] == ["name", "email"]

    def test_testable_methods_exclude_constructor(self):
        result = analyze_code("class A { constructor() {} run() {} stop() {} }")

        assert [m.name for m in result.classes[0].testable_methods] == ["run", "stop"]

    def test_computed_method_name(self):
        result = analyze_code("class A { [Symbol.iterator]() {} }")
        assert result.classes[0].methods[0].name == COMPUTED

    def test_methods_are_not_functions(self):
        result = analyze_code("class A { run() {} }")

        assert result.functions == ()
        assert result.complexity.classes_count == 1
        assert result.complexity.functions_count == 0

    def test_class_without_superclass(self):
        result = analyze_code("class Plain {}")
        assert result.classes[0].superclass is None


# =============================================================================
# Variables, Imports and Exports Tests
# =============================================================================

class TestDeclarations:
    """Tests for variable, import and export records."""

    def test_variables(self):
        code = "var a = 1;\nlet b;\nconst c = 3, d = 4;\nconst { e } = obj;"
        result = analyze_code(code)

        assert [(v.name, v.kind, v.has_initializer) for v in result.variables] == [
            ("a", "var", True),
            ("b", "let", False),
            ("c", "const", True),
            ("d", "const", True),
        ]
        assert result.variables[2].line_number == 3

    def test_imports(self):
        code = """
import React from 'react';
import * as path from "path";
import { readFile, writeFile as write } from 'fs';
import './side-effect.js';
"""
        result = analyze_code(code)

        assert [i.source for i in result.imports] == ["react", "path", "fs", "./side-effect.js"]

        default, namespace, named, bare = result.imports
        assert default.specifiers[0].kind == "default"
        assert default.specifiers[0].local == "React"
        assert namespace.specifiers[0].kind == "namespace"
        assert namespace.specifiers[0].local == "path"
        assert [(s.local, s.imported) for s in named.specifiers] == [
            ("readFile", "readFile"), ("write", "writeFile")
        ]
        assert bare.specifiers == ()

    def test_exports(self):
        code = """
export function add(a, b) { return a + b; }
export class Shape {}
export const PI = 3.14, E = 2.71;
export default add;
export { add as sum };
export * from './utils';
"""
        result = analyze_code(code)
        kinds = [(e.kind, e.declaration_kind, e.names) for e in result.exports]

        assert kinds[0] == ("named", "function", ("add",))
        assert kinds[1] == ("named", "class", ("Shape",))
        assert kinds[2] == ("named", "variable", ("PI", "E"))
        assert kinds[3][0] == "default"
        assert kinds[4] == ("named", None, ("sum",))
        assert kinds[5][0] == "all"
        assert result.exports[5].source == "./utils"

    def test_exported_function_still_inventoried(self):
        result = analyze_code("export default function main() {}")

        assert [f.name for f in result.functions] == ["main"]
        assert result.exports[0].kind == "default"


# =============================================================================
# Result Invariant Tests
# =============================================================================

class TestAnalysisResult:
    """Tests for result-wide properties."""

    SAMPLE = """
import { db } from './db';

class Repo {
  constructor(conn) { this.conn = conn; }
  findAll() { return this.conn.all(); }
}

export async function getUser(id) {
  try {
    return id > 0 ? await db.get(id) : null;
  } catch (err) {
    return null;
  }
}

for (const item of [1, 2]) {
  if (item && item > 1) { console.log(item); }
}
"""

    def test_counts_match_inventories(self):
        result = analyze_code(self.SAMPLE)

        assert result.complexity.functions_count == len(result.functions)
        assert result.complexity.classes_count == len(result.classes)

    def test_deterministic(self):
        first = analyze_code(self.SAMPLE)
        second = analyze_code(self.SAMPLE)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_lines_of_code(self):
        result = analyze_code("a();\nb();\nc();")
        assert result.complexity.lines_of_code == 3

    def test_to_dict_without_ast(self):
        data = analyze_code(self.SAMPLE).to_dict()

        assert data["language"] == "javascript"
        assert data["functions"][0]["name"] == "getUser"
        assert data["classes"][0]["methods"][1]["name"] == "findAll"
        assert "ast" not in data

    def test_to_dict_with_ast(self):
        data = analyze_code("let x = 1;").to_dict(include_ast=True)

        assert data["ast"]["language"] == "javascript"
        assert data["ast"]["root"]["kind"] == "program"

    def test_result_is_immutable(self):
        result = analyze_code("let x = 1;")

        with pytest.raises(AttributeError):
            result.functions = ()
