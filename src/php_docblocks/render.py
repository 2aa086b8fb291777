"""String forms of types and default values used in synthesized docblocks.

Two halves:
    *_from_node  -- read a tree-sitter node into a TypeRef / DefaultValue
    render_*     -- turn those into the text that lands in the comment
"""

from __future__ import annotations

import re

from tree_sitter import Node

from .models import DefaultKind, DefaultStyle, DefaultValue, TypeRef

CONSTANT_NODES = frozenset({"name", "qualified_name", "boolean", "null"})
NUMBER_NODES = frozenset({"integer", "float"})
STRING_NODES = frozenset({"string", "encapsed_string"})

# Children an encapsed_string may have without interpolating anything
_PLAIN_STRING_PARTS = frozenset({"string_content", "string_value", "escape_sequence"})

# Wrappers some grammar versions put around a single type
_TYPE_WRAPPERS = frozenset({"union_type", "type_list"})

_DOUBLE_QUOTED_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


def node_text(node: Node, source: bytes) -> str:
    """Get text content of a node."""
    return source[node.start_byte:node.end_byte].decode("utf-8")


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _number_value(literal: str) -> str:
    """Value of a PHP number literal as PHP would print it.

    0x1F -> 31, 017 -> 15, 1_000 -> 1000, 1.0 -> 1, 1e3 -> 1000.
    Literals Python cannot read are returned unchanged.
    """
    digits = literal.replace("_", "")
    try:
        if re.fullmatch(r"0[0-7]+", digits):
            return str(int(digits, 8))
        if re.fullmatch(r"0[xXbBoO][0-9a-fA-F]+|[1-9][0-9]*|0", digits):
            return str(int(digits, 0))
        value = float(digits)
    except ValueError:
        return literal
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def type_ref_from_node(node: Node, source: bytes) -> TypeRef:
    """Read a type node.

    Only the nullable wrapper is examined; named, primitive, union,
    intersection and DNF types keep their own string form.
    """
    while node.type in _TYPE_WRAPPERS and node.named_child_count == 1:
        node = node.named_children[0]

    if node.type == "optional_type":
        inner = node.named_children[-1]
        return TypeRef(name=_type_name(inner, source), nullable=True)
    return TypeRef(name=_type_name(node, source))


def _strip_global_prefix(name: str) -> str:
    """Drop the leading backslash of fully-qualified names (\\App\\User -> App\\User)."""
    return re.sub(r"(?<![\w\\])\\", "", name)


def _type_name(node: Node, source: bytes) -> str:
    return _strip_global_prefix("".join(node_text(node, source).split()))


def render_type(type_ref: TypeRef) -> str:
    """Render a type as ``Name`` or ``?Name``."""
    if type_ref.nullable:
        return "?" + type_ref.name
    return type_ref.name


def _unquote(literal: str) -> str:
    """Value of a quoted PHP string literal without interpolation."""
    if literal[:1] in ("b", "B"):
        literal = literal[1:]
    quote, body = literal[:1], literal[1:-1]

    if quote == "'":
        return re.sub(r"\\([\\'])", r"\1", body)

    def _escape(match: re.Match[str]) -> str:
        char = match.group(1)
        return _DOUBLE_QUOTED_ESCAPES.get(char, match.group(0))

    return re.sub(r"\\(.)", _escape, body)


def _is_plain_string(node: Node) -> bool:
    if node.type == "string":
        return True
    return all(child.type in _PLAIN_STRING_PARTS for child in node.named_children)


def default_from_node(node: Node, source: bytes) -> DefaultValue:
    """Classify a default-value expression.

    Constants keep the name as written, scalars keep their value and
    anything else is marked OTHER with its source span kept for display.
    """
    text = node_text(node, source)

    if node.type in CONSTANT_NODES:
        return DefaultValue(DefaultKind.CONSTANT, _strip_global_prefix(text.strip()), node.type)

    if node.type in NUMBER_NODES:
        return DefaultValue(DefaultKind.SCALAR, _number_value(text.strip()), node.type)

    if node.type in STRING_NODES and _is_plain_string(node):
        return DefaultValue(DefaultKind.SCALAR, _unquote(text.strip()), node.type)

    return DefaultValue(DefaultKind.OTHER, _squash(text), node.type)


def render_default(
    default: DefaultValue,
    style: DefaultStyle = DefaultStyle.SOURCE,
) -> str:
    """Render a default value for an ``@param`` line.

    ``*/`` is written as ``*\\/`` so the value cannot close the docblock.
    """
    if default.kind == DefaultKind.OTHER and style == DefaultStyle.CATEGORY:
        return default.category
    return default.text.replace("*/", "*\\/")
