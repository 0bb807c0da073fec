"""Data models for code analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .syntax_tree import SyntaxTree

ANONYMOUS = "<anonymous>"
COMPUTED = "<computed>"

FunctionKind = Literal["declaration", "expression", "arrow"]

# Parameter kinds as written in the function signature
ParameterKind = Literal[
    "plain",      # a
    "defaulted",  # a = 1
    "rest",       # ...args
    "complex"     # { a, b } / [a, b]
]

MethodRole = Literal["constructor", "getter", "setter", "method"]
VariableKind = Literal["var", "let", "const"]
ConditionalKind = Literal["if", "switch", "ternary"]
LoopKind = Literal["for", "while", "do-while", "for-in", "for-of"]


@dataclass(frozen=True)
class ParameterInfo:
    """Information about a function parameter."""
    name: str
    kind: ParameterKind = "plain"


@dataclass(frozen=True)
class FunctionInfo:
    """Information about a function, function expression or arrow function."""
    name: str
    kind: FunctionKind
    parameters: tuple[ParameterInfo, ...] = ()
    is_async: bool = False
    is_generator: bool = False
    line_number: int = 0
    complexity: int = 1

    @property
    def is_anonymous(self) -> bool:
        return self.name == ANONYMOUS


@dataclass(frozen=True)
class MethodInfo:
    """Information about a class method."""
    name: str
    role: MethodRole = "method"
    is_static: bool = False
    is_async: bool = False
    parameters: tuple[ParameterInfo, ...] = ()
    line_number: int = 0


@dataclass(frozen=True)
class PropertyInfo:
    """Information about a class field."""
    name: str
    is_static: bool = False


@dataclass(frozen=True)
class ClassInfo:
    """Information about a class."""
    name: str
    methods: tuple[MethodInfo, ...] = ()
    properties: tuple[PropertyInfo, ...] = ()
    superclass: str | None = None
    line_number: int = 0

    @property
    def constructor(self) -> MethodInfo | None:
        for method in self.methods:
            if method.role == "constructor":
                return method
        return None

    @property
    def testable_methods(self) -> tuple[MethodInfo, ...]:
        """Methods other than the constructor."""
        return tuple(m for m in self.methods if m.role != "constructor")


@dataclass(frozen=True)
class VariableInfo:
    """A variable bound to a plain identifier."""
    name: str
    kind: VariableKind
    has_initializer: bool = False
    line_number: int = 0


@dataclass(frozen=True)
class ImportSpecifier:
    """One name bound by an import statement."""
    kind: Literal["default", "namespace", "named"]
    local: str
    imported: str | None = None


@dataclass(frozen=True)
class ImportInfo:
    """An import statement."""
    source: str
    specifiers: tuple[ImportSpecifier, ...] = ()
    line_number: int = 0


@dataclass(frozen=True)
class ExportInfo:
    """An export statement."""
    kind: Literal["named", "default", "all"]
    declaration_kind: Literal["function", "class", "variable"] | None = None
    names: tuple[str, ...] = ()
    source: str | None = None
    line_number: int = 0


@dataclass(frozen=True)
class ConditionalInfo:
    """Location and shape of an if/switch/ternary."""
    kind: ConditionalKind
    line_number: int = 0
    has_alternate_branch: bool = False
    case_count: int = 0


@dataclass(frozen=True)
class LoopInfo:
    """Location and shape of a loop."""
    kind: LoopKind
    line_number: int = 0


@dataclass(frozen=True)
class TryInfo:
    """Location and shape of a try statement."""
    kind: Literal["try"] = "try"
    line_number: int = 0
    has_catch: bool = False
    has_finally: bool = False


@dataclass(frozen=True)
class ComplexityMetrics:
    """Aggregate metrics for one source file."""
    cyclomatic_complexity: int = 1
    lines_of_code: int = 0
    functions_count: int = 0
    classes_count: int = 0
    max_nesting_depth: int = 0


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis result for a JavaScript source file."""
    functions: tuple[FunctionInfo, ...] = ()
    classes: tuple[ClassInfo, ...] = ()
    variables: tuple[VariableInfo, ...] = ()
    imports: tuple[ImportInfo, ...] = ()
    exports: tuple[ExportInfo, ...] = ()
    conditionals: tuple[ConditionalInfo, ...] = ()
    loops: tuple[LoopInfo, ...] = ()
    try_blocks: tuple[TryInfo, ...] = ()
    complexity: ComplexityMetrics = field(default_factory=ComplexityMetrics)
    language: str = "javascript"

    # Kept for serialization; not part of the analysis identity
    syntax_tree: SyntaxTree | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        assert self.complexity.functions_count == len(self.functions)
        assert self.complexity.classes_count == len(self.classes)
        assert self.complexity.cyclomatic_complexity >= 1

    def to_dict(self, include_ast: bool = False) -> dict:
        """Convert to dictionary for JSON response."""
        result = {
            "language": self.language,
            "functions": [
                {
                    "name": f.name,
                    "kind": f.kind,
                    "parameters": [{"name": p.name, "kind": p.kind} for p in f.parameters],
                    "is_async": f.is_async,
                    "is_generator": f.is_generator,
                    "complexity": f.complexity,
                    "line_number": f.line_number
                }
                for f in self.functions
            ],
            "classes": [
                {
                    "name": c.name,
                    "superclass": c.superclass,
                    "methods": [
                        {
                            "name": m.name,
                            "role": m.role,
                            "is_static": m.is_static,
                            "is_async": m.is_async,
                            "parameters": [p.name for p in m.parameters]
                        }
                        for m in c.methods
                    ],
                    "properties": [
                        {"name": p.name, "is_static": p.is_static} for p in c.properties
                    ],
                    "line_number": c.line_number
                }
                for c in self.classes
            ],
            "variables": [
                {
                    "name": v.name,
                    "kind": v.kind,
                    "has_initializer": v.has_initializer,
                    "line_number": v.line_number
                }
                for v in self.variables
            ],
            "imports": [
                {
                    "source": i.source,
                    "specifiers": [
                        {"kind": s.kind, "local": s.local, "imported": s.imported}
                        for s in i.specifiers
                    ],
                    "line_number": i.line_number
                }
                for i in self.imports
            ],
            "exports": [
                {
                    "kind": e.kind,
                    "declaration_kind": e.declaration_kind,
                    "names": list(e.names),
                    "source": e.source,
                    "line_number": e.line_number
                }
                for e in self.exports
            ],
            "conditionals": [
                {
                    "kind": c.kind,
                    "line_number": c.line_number,
                    "has_alternate_branch": c.has_alternate_branch,
                    "case_count": c.case_count
                }
                for c in self.conditionals
            ],
            "loops": [{"kind": lp.kind, "line_number": lp.line_number} for lp in self.loops],
            "try_blocks": [
                {
                    "line_number": t.line_number,
                    "has_catch": t.has_catch,
                    "has_finally": t.has_finally
                }
                for t in self.try_blocks
            ],
            "complexity": {
                "cyclomatic_complexity": self.complexity.cyclomatic_complexity,
                "lines_of_code": self.complexity.lines_of_code,
                "functions_count": self.complexity.functions_count,
                "classes_count": self.complexity.classes_count,
                "max_nesting_depth": self.complexity.max_nesting_depth
            }
        }
        if include_ast and self.syntax_tree is not None:
            result["ast"] = self.syntax_tree.to_dict()
        return result
