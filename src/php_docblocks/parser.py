"""PHP parsing via tree-sitter -- source bytes to method declarations.

The tree keeps exact byte offsets for every node, so the printer can splice
new comments into the original bytes without re-serializing anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_php as tsphp
from loguru import logger
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError
from .models import MethodDeclaration, Parameter
from .render import default_from_node, node_text, type_ref_from_node

log = logger.bind(stage="parser")

PARAMETER_NODES = frozenset(
    {"simple_parameter", "variadic_parameter", "property_promotion_parameter"}
)

_parser: Parser | None = None


@dataclass
class ParsedFile:
    """A parsed source file: tree, original bytes, and its methods."""

    source: bytes
    tree: Tree
    methods: list[MethodDeclaration] = field(default_factory=list)
    path: Path | None = None


def get_parser() -> Parser:
    """Get or create the PHP parser."""
    global _parser
    if _parser is None:
        _parser = Parser(Language(tsphp.language_php()))
    return _parser


def _first_error(root: Node) -> Node | None:
    """Depth-first search for the first ERROR or missing node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        # Only descend into subtrees that contain an error
        stack.extend(c for c in reversed(node.children) if c.has_error or c.is_missing)
    return None


def _error_message(node: Node, source: bytes) -> str:
    if node.is_missing:
        return f"Syntax error, missing '{node.type}'"
    snippet = node_text(node, source).strip().splitlines()
    if snippet:
        return f"Syntax error, unexpected '{snippet[0][:40]}'"
    return "Syntax error, unexpected end of file"


def parse_source(source: bytes, path: Path | None = None) -> ParsedFile:
    """Parse PHP source and extract its method declarations.

    Raises ParseError if tree-sitter had to recover from any syntax error;
    no partial result is returned in that case.
    """
    tree = get_parser().parse(source)
    root = tree.root_node

    if root.has_error:
        bad = _first_error(root) or root
        line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
        raise ParseError(_error_message(bad, source), path=path, line=line, column=column)

    methods = extract_methods(tree, source)
    log.debug(f"Parsed {path or '<source>'}: {len(methods)} methods")
    return ParsedFile(source=source, tree=tree, methods=methods, path=path)


def extract_methods(tree: Tree, source: bytes) -> list[MethodDeclaration]:
    """Return every method_declaration in source order, nested classes included."""
    methods: list[MethodDeclaration] = []

    # Iterative traversal to avoid recursion limit
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "method_declaration":
            methods.append(_method_from_node(node, source))
        stack.extend(reversed(node.children))

    return methods


def _preceding_comments(node: Node, source: bytes) -> list[str]:
    """Texts of the comment run directly before a node, in source order."""
    comments: list[str] = []
    prev = node.prev_sibling
    while prev is not None and prev.type == "comment":
        comments.insert(0, node_text(prev, source))
        prev = prev.prev_sibling
    return comments


def _indent_of(node: Node, source: bytes) -> str:
    """Whitespace a comment needs to line up with the node."""
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    prefix = source[line_start:node.start_byte].decode("utf-8")
    if not prefix.strip():
        return prefix
    # Node shares its line with other code; use the line's own indent
    return prefix[: len(prefix) - len(prefix.lstrip())]


def _variable_identifier(node: Node, source: bytes) -> str:
    """Identifier of a variable_name (or by_ref) node, without the '$'."""
    if node.type != "variable_name":
        found = next(
            (c for c in node.named_children if c.type == "variable_name"), None
        )
        if found is not None:
            node = found
    name = node.child_by_field_name("name") or next(
        (c for c in node.named_children if c.type == "name"), None
    )
    if name is not None:
        return node_text(name, source)
    return node_text(node, source).lstrip("&").lstrip("$")


def _parameter_from_node(node: Node, source: bytes) -> Parameter:
    name_node = node.child_by_field_name("name")
    type_node = node.child_by_field_name("type")
    default_node = node.child_by_field_name("default_value")

    return Parameter(
        name=_variable_identifier(name_node, source) if name_node else "",
        type=type_ref_from_node(type_node, source) if type_node else None,
        default=default_from_node(default_node, source) if default_node else None,
        variadic=node.type == "variadic_parameter",
        by_ref=node.child_by_field_name("reference_modifier") is not None
        or (name_node is not None and name_node.type == "by_ref"),
        promoted=node.type == "property_promotion_parameter",
    )


def _method_from_node(node: Node, source: bytes) -> MethodDeclaration:
    name_node = node.child_by_field_name("name")
    params_node = node.child_by_field_name("parameters")
    return_node = node.child_by_field_name("return_type")

    params: list[Parameter] = []
    if params_node is not None:
        params = [
            _parameter_from_node(p, source)
            for p in params_node.named_children
            if p.type in PARAMETER_NODES
        ]

    return MethodDeclaration(
        name=node_text(name_node, source) if name_node else "",
        params=params,
        return_type=type_ref_from_node(return_node, source) if return_node else None,
        comments=_preceding_comments(node, source),
        start_byte=node.start_byte,
        line=node.start_point[0] + 1,
        indent=_indent_of(node, source),
    )
