"""Code Parser - Walk a JavaScript syntax tree once and extract its structure."""

from __future__ import annotations

from typing import Callable

from .complexity import calculate_complexity
from .grammar import FUNCTION_KINDS, GENERATOR_KINDS, NESTING_KINDS
from .models import (
    ANONYMOUS,
    COMPUTED,
    ClassInfo,
    ConditionalInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    ImportSpecifier,
    LoopInfo,
    MethodInfo,
    ParameterInfo,
    PropertyInfo,
    TryInfo,
    VariableInfo,
)
from .syntax_tree import SyntaxNode, SyntaxTree

_LOOP_NAMES = {
    "for_statement": "for",
    "while_statement": "while",
    "do_statement": "do-while",
}


class StructureVisitor:
    """
    Single pre-order pass over a syntax tree.

    Each node kind of interest has one handler in the dispatch table. Handlers
    append to the inventories and add the construct's weight to the module
    cyclomatic complexity. Nesting depth is tracked with explicit enter/exit
    events so the walk never recurses.
    """

    def __init__(self, tree: SyntaxTree):
        self._tree = tree

        self.functions: list[FunctionInfo] = []
        self.classes: list[ClassInfo] = []
        self.variables: list[VariableInfo] = []
        self.imports: list[ImportInfo] = []
        self.exports: list[ExportInfo] = []
        self.conditionals: list[ConditionalInfo] = []
        self.loops: list[LoopInfo] = []
        self.try_blocks: list[TryInfo] = []

        self.cyclomatic_complexity = 1  # Base path
        self.max_nesting_depth = 0
        self._depth = 0

        self._handlers: dict[str, Callable[[SyntaxNode], None]] = {
            **{kind: self._visit_function for kind in FUNCTION_KINDS},
            "class_declaration": self._visit_class,
            "variable_declaration": self._visit_variables,
            "lexical_declaration": self._visit_variables,
            "import_statement": self._visit_import,
            "export_statement": self._visit_export,
            "if_statement": self._visit_if,
            "switch_statement": self._visit_switch,
            "ternary_expression": self._visit_ternary,
            "for_statement": self._visit_loop,
            "for_in_statement": self._visit_loop,
            "while_statement": self._visit_loop,
            "do_statement": self._visit_loop,
            "try_statement": self._visit_try,
        }

    def visit(self) -> None:
        """Traverse the whole tree."""
        stack: list[tuple[SyntaxNode, bool]] = [(self._tree.root, False)]

        while stack:
            node, leaving = stack.pop()
            if leaving:
                self._depth -= 1
                continue

            handler = self._handlers.get(node.kind)
            if handler is not None:
                handler(node)

            if node.kind in NESTING_KINDS:
                self._depth += 1
                self.max_nesting_depth = max(self.max_nesting_depth, self._depth)
                stack.append((node, True))

            stack.extend((child, False) for child in reversed(node.children) if child.named)

    # =========================================================================
    # Functions and classes
    # =========================================================================

    def _visit_function(self, node: SyntaxNode) -> None:
        name_node = node.child_by_field("name")
        self.functions.append(FunctionInfo(
            name=self._text(name_node) if name_node else ANONYMOUS,
            kind=FUNCTION_KINDS[node.kind],
            parameters=self._parse_parameters(node),
            is_async=node.has_token("async"),
            is_generator=node.kind in GENERATOR_KINDS,
            line_number=node.line,
            complexity=calculate_complexity(node)
        ))

    def _visit_class(self, node: SyntaxNode) -> None:
        name_node = node.child_by_field("name")

        methods = []
        properties = []
        body = node.child_by_field("body")
        for member in body.named_children if body else []:
            if member.kind == "method_definition":
                methods.append(self._parse_method(member))
            elif member.kind == "field_definition":
                properties.append(PropertyInfo(
                    name=self._member_name(member.child_by_field("property")),
                    is_static=member.has_token("static")
                ))

        self.classes.append(ClassInfo(
            name=self._text(name_node) if name_node else ANONYMOUS,
            methods=tuple(methods),
            properties=tuple(properties),
            superclass=self._superclass_name(node),
            line_number=node.line
        ))

    def _parse_method(self, node: SyntaxNode) -> MethodInfo:
        """Parse a method_definition node into MethodInfo."""
        name = self._member_name(node.child_by_field("name"))
        is_static = node.has_token("static") or node.has_token("static get")

        if name == "constructor" and not is_static:
            role = "constructor"
        elif node.has_token("get") or node.has_token("static get"):
            role = "getter"
        elif node.has_token("set"):
            role = "setter"
        else:
            role = "method"

        return MethodInfo(
            name=name,
            role=role,
            is_static=is_static,
            is_async=node.has_token("async"),
            parameters=self._parse_parameters(node),
            line_number=node.line
        )

    def _parse_parameters(self, node: SyntaxNode) -> tuple[ParameterInfo, ...]:
        """
        Parse the parameter list of a function-like node.

        Handles every parameter shape:
        - Plain identifiers (a)
        - Defaults (a = 1)
        - Rest elements (...args)
        - Destructuring patterns, named param<i> by position
        """
        # Arrow functions with a single bare parameter: x => x
        single = node.child_by_field("parameter")
        if single is not None:
            return (ParameterInfo(name=self._text(single), kind="plain"),)

        params_node = node.child_by_field("parameters")
        if params_node is None:
            return ()

        parameters = []
        candidates = [p for p in params_node.named_children if p.kind != "decorator"]
        for index, param in enumerate(candidates):
            if param.kind == "identifier":
                parameters.append(ParameterInfo(name=self._text(param), kind="plain"))
                continue

            if param.kind == "assignment_pattern":
                left = param.child_by_field("left")
                if left is not None and left.kind == "identifier":
                    parameters.append(ParameterInfo(name=self._text(left), kind="defaulted"))
                    continue

            if param.kind == "rest_pattern":
                inner = param.named_children
                if inner and inner[0].kind == "identifier":
                    parameters.append(ParameterInfo(name=self._text(inner[0]), kind="rest"))
                    continue

            parameters.append(ParameterInfo(name=f"param{index}", kind="complex"))

        return tuple(parameters)

    def _superclass_name(self, node: SyntaxNode) -> str | None:
        for heritage in node.children_of_kind("class_heritage"):
            for expression in heritage.named_children:
                if expression.kind in ("identifier", "member_expression"):
                    return self._text(expression)
                return None
        return None

    def _member_name(self, node: SyntaxNode | None) -> str:
        if node is None or node.kind == "computed_property_name":
            return COMPUTED
        if node.kind == "string":
            return self._string_value(node)
        return self._text(node)

    # =========================================================================
    # Declarations, imports and exports
    # =========================================================================

    def _visit_variables(self, node: SyntaxNode) -> None:
        if node.kind == "variable_declaration":
            kind = "var"
        else:
            kind_node = node.child_by_field("kind")
            if kind_node is None:
                kind_node = next((c for c in node.children if not c.named), None)
            kind = self._text(kind_node) if kind_node else "let"

        for declarator in node.children_of_kind("variable_declarator"):
            name_node = declarator.child_by_field("name")
            if name_node is None or name_node.kind != "identifier":
                continue
            self.variables.append(VariableInfo(
                name=self._text(name_node),
                kind=kind,
                has_initializer=declarator.child_by_field("value") is not None,
                line_number=node.line
            ))

    def _visit_import(self, node: SyntaxNode) -> None:
        source_node = node.child_by_field("source")
        specifiers = []

        for clause in node.children_of_kind("import_clause"):
            for child in clause.named_children:
                if child.kind == "identifier":
                    specifiers.append(ImportSpecifier(kind="default", local=self._text(child)))
                elif child.kind == "namespace_import":
                    local = child.named_children
                    if local:
                        specifiers.append(ImportSpecifier(
                            kind="namespace", local=self._text(local[0])
                        ))
                elif child.kind == "named_imports":
                    for spec in child.children_of_kind("import_specifier"):
                        imported = self._member_name(spec.child_by_field("name"))
                        alias = spec.child_by_field("alias")
                        specifiers.append(ImportSpecifier(
                            kind="named",
                            local=self._text(alias) if alias else imported,
                            imported=imported
                        ))

        self.imports.append(ImportInfo(
            source=self._string_value(source_node) if source_node else "",
            specifiers=tuple(specifiers),
            line_number=node.line
        ))

    def _visit_export(self, node: SyntaxNode) -> None:
        declaration = node.child_by_field("declaration") or node.child_by_field("value")
        source_node = node.child_by_field("source")

        if node.has_token("default"):
            kind = "default"
        elif node.has_token("*") and not node.children_of_kind("namespace_export"):
            kind = "all"
        else:
            kind = "named"

        declaration_kind = None
        names: list[str] = []

        if declaration is not None:
            if declaration.kind in FUNCTION_KINDS:
                declaration_kind = "function"
            elif declaration.kind in ("class_declaration", "class"):
                declaration_kind = "class"
            elif declaration.kind in ("lexical_declaration", "variable_declaration"):
                declaration_kind = "variable"
                for declarator in declaration.children_of_kind("variable_declarator"):
                    name_node = declarator.child_by_field("name")
                    if name_node is not None and name_node.kind == "identifier":
                        names.append(self._text(name_node))

            if declaration_kind in ("function", "class"):
                name_node = declaration.child_by_field("name")
                if name_node is not None:
                    names.append(self._text(name_node))

        for clause in node.children_of_kind("export_clause"):
            for spec in clause.children_of_kind("export_specifier"):
                exported = spec.child_by_field("alias") or spec.child_by_field("name")
                if exported is not None:
                    names.append(self._member_name(exported))

        for namespace in node.children_of_kind("namespace_export"):
            for child in namespace.named_children:
                names.append(self._member_name(child))

        self.exports.append(ExportInfo(
            kind=kind,
            declaration_kind=declaration_kind,
            names=tuple(names),
            source=self._string_value(source_node) if source_node else None,
            line_number=node.line
        ))

    # =========================================================================
    # Branching constructs
    # =========================================================================

    def _visit_if(self, node: SyntaxNode) -> None:
        self.conditionals.append(ConditionalInfo(
            kind="if",
            line_number=node.line,
            has_alternate_branch=node.child_by_field("alternative") is not None
        ))
        self.cyclomatic_complexity += 1

    def _visit_switch(self, node: SyntaxNode) -> None:
        body = node.child_by_field("body")
        cases = len(body.children_of_kind("switch_case", "switch_default")) if body else 0
        self.conditionals.append(ConditionalInfo(
            kind="switch",
            line_number=node.line,
            case_count=cases
        ))
        self.cyclomatic_complexity += cases

    def _visit_ternary(self, node: SyntaxNode) -> None:
        self.conditionals.append(ConditionalInfo(kind="ternary", line_number=node.line))
        self.cyclomatic_complexity += 1

    def _visit_loop(self, node: SyntaxNode) -> None:
        if node.kind == "for_in_statement":
            operator = node.child_by_field("operator")
            is_for_of = operator.kind == "of" if operator else node.has_token("of")
            kind = "for-of" if is_for_of else "for-in"
        else:
            kind = _LOOP_NAMES[node.kind]

        self.loops.append(LoopInfo(kind=kind, line_number=node.line))
        self.cyclomatic_complexity += 1

    def _visit_try(self, node: SyntaxNode) -> None:
        self.try_blocks.append(TryInfo(
            line_number=node.line,
            has_catch=node.child_by_field("handler") is not None,
            has_finally=node.child_by_field("finalizer") is not None
        ))
        self.cyclomatic_complexity += 1

    # =========================================================================
    # Helpers
    # =========================================================================

    def _text(self, node: SyntaxNode) -> str:
        return self._tree.text_of(node)

    def _string_value(self, node: SyntaxNode) -> str:
        """Strip the quotes from a string literal node."""
        text = self._text(node)
        if node.kind == "string" and len(text) >= 2:
            return text[1:-1]
        return text
