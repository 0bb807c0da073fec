"""Syntax Tree - Parse JavaScript with tree-sitter into immutable tagged nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, TreeCursor

from ...constants import MAX_AST_DEPTH

_DEFAULT_ENCODING = "utf-8"

_LANGUAGE_REGISTRY: dict[str, Language] = {
    "javascript": Language(tree_sitter_javascript.language()),
}


@dataclass(frozen=True)
class SourceSpan:
    """Location of a node in the source (lines are 1-based, columns 0-based)."""
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_byte: int
    end_byte: int


@dataclass(frozen=True)
class SyntaxNode:
    """
    One syntactic construct.

    Nodes carry no parent links: a tree is serialized by walking children
    only, and parents are recovered from the traversal stack when needed.
    """
    kind: str
    span: SourceSpan
    named: bool = True
    field: str | None = None           # Field label inside the parent ("name", "body", ...)
    text: str | None = None            # Only set on leaves
    children: tuple[SyntaxNode, ...] = ()
    is_error: bool = False
    is_missing: bool = False

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def named_children(self) -> list[SyntaxNode]:
        return [c for c in self.children if c.named and c.kind != "comment"]

    def child_by_field(self, name: str) -> SyntaxNode | None:
        """Return the first child labelled with the given field."""
        for child in self.children:
            if child.field == name:
                return child
        return None

    def children_by_field(self, name: str) -> list[SyntaxNode]:
        return [c for c in self.children if c.field == name]

    def children_of_kind(self, *kinds: str) -> list[SyntaxNode]:
        return [c for c in self.children if c.kind in kinds]

    def has_token(self, token: str) -> bool:
        """Check for an anonymous keyword/punctuation child such as 'async' or '*'."""
        return any(not c.named and c.kind == token for c in self.children)

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and every descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self, max_depth: int = MAX_AST_DEPTH) -> dict:
        """
        Serialize the subtree for JSON output (named children only).

        Nodes more than max_depth levels below this one are left out; their
        parent is marked "truncated" so the output stays small enough for
        json to encode.
        """
        root = self._node_dict()
        stack = [(self, root, 0)]
        while stack:
            node, result, depth = stack.pop()
            if not node.children:
                continue
            named = [c for c in node.children if c.named]
            if named and depth >= max_depth:
                result["truncated"] = True
                continue
            result["children"] = []
            for child in named:
                child_dict = child._node_dict()
                result["children"].append(child_dict)
                stack.append((child, child_dict, depth + 1))
        return root

    def _node_dict(self) -> dict:
        result: dict = {
            "kind": self.kind,
            "span": {
                "start": [self.span.start_line, self.span.start_column],
                "end": [self.span.end_line, self.span.end_column],
            },
        }
        if self.field:
            result["field"] = self.field
        if self.text is not None:
            result["text"] = self.text
        return result


@dataclass(frozen=True)
class SyntaxTree:
    """Parsed source together with the bytes its spans refer to."""
    root: SyntaxNode
    language: str
    source: bytes = field(repr=False)

    @property
    def has_error(self) -> bool:
        return any(n.is_error or n.is_missing for n in self.root.walk())

    def text_of(self, node: SyntaxNode) -> str:
        """Get the source text covered by a node."""
        if node.text is not None:
            return node.text
        return self.source[node.span.start_byte:node.span.end_byte].decode(
            _DEFAULT_ENCODING, errors="replace"
        )

    def to_dict(self) -> dict:
        return {"language": self.language, "root": self.root.to_dict()}


def get_parser(language: str) -> Parser:
    """Create a tree-sitter parser for the given language (KeyError if unknown)."""
    parser = Parser()
    parser.language = _LANGUAGE_REGISTRY[language]
    return parser


def parse_source(source_code: str, language: str = "javascript") -> SyntaxTree:
    """Parse source into a SyntaxTree (syntax errors stay in the tree as error nodes)."""
    source_bytes = source_code.encode(_DEFAULT_ENCODING)
    ts_tree = get_parser(language).parse(source_bytes)
    root = _convert(ts_tree.walk(), source_bytes)
    return SyntaxTree(root=root, language=language, source=source_bytes)


# =============================================================================
# Conversion from tree-sitter nodes
# =============================================================================

class _PendingNode:
    """A tree-sitter node whose children are still being converted."""

    __slots__ = ("node", "field", "children")

    def __init__(self, node: Node, field_name: str | None):
        self.node = node
        self.field = field_name
        self.children: list[SyntaxNode] = []

    def finish(self, source: bytes) -> SyntaxNode:
        node = self.node
        text = None
        if not self.children:
            text = source[node.start_byte:node.end_byte].decode(_DEFAULT_ENCODING, errors="replace")
        return SyntaxNode(
            kind=node.type,
            span=SourceSpan(
                start_line=node.start_point[0] + 1,
                start_column=node.start_point[1],
                end_line=node.end_point[0] + 1,
                end_column=node.end_point[1],
                start_byte=node.start_byte,
                end_byte=node.end_byte,
            ),
            named=node.is_named,
            field=self.field,
            text=text,
            children=tuple(self.children),
            is_error=node.type == "ERROR",
            is_missing=node.is_missing,
        )


def _convert(cursor: TreeCursor, source: bytes) -> SyntaxNode:
    """Convert the tree under the cursor without recursion."""
    stack = [_PendingNode(cursor.node, None)]
    descended = cursor.goto_first_child()

    while True:
        if descended:
            stack.append(_PendingNode(cursor.node, cursor.field_name))
            descended = cursor.goto_first_child()
            continue

        done = stack.pop()
        converted = done.finish(source)
        if not stack:
            return converted
        stack[-1].children.append(converted)

        if cursor.goto_next_sibling():
            stack.append(_PendingNode(cursor.node, cursor.field_name))
            descended = cursor.goto_first_child()
        else:
            cursor.goto_parent()
