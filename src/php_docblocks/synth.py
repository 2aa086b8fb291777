"""Doc synthesizer -- attaches generated docblocks to undocumented methods."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from .models import (
    MIXED_TYPE,
    VOID_TYPE,
    DefaultStyle,
    DocComment,
    MethodDeclaration,
)
from .render import render_default, render_type

log = logger.bind(stage="synth")


def build_doc_comment(
    method: MethodDeclaration,
    default_style: DefaultStyle = DefaultStyle.SOURCE,
) -> DocComment:
    """Build the docblock for a method from its signature.

    Untyped parameters fall back to ``mixed`` and a missing return type to
    ``void``. With no parameters the ``@param`` block is left out entirely.
    """
    params = []
    for param in method.params:
        type_str = render_type(param.type) if param.type else MIXED_TYPE
        param_name = "$" + param.name
        if param.default is not None:
            param_name += " = " + render_default(param.default, default_style)
        params.append(f" * @param {type_str} {param_name}")

    return_type = render_type(method.return_type) if method.return_type else VOID_TYPE

    lines = ["/**", f" * {method.name} function", " *"]
    lines.extend(params)
    lines.append(f" * @return {return_type}")
    lines.append(" */")
    return DocComment("\n".join(lines))


class DocBlockSynthesizer:
    """Visitor that dispatches on node kind.

    Only ``method_declaration`` nodes are acted on; every other kind falls
    through to ``generic_visit`` and is left unchanged.
    """

    def __init__(self, default_style: DefaultStyle = DefaultStyle.SOURCE) -> None:
        self.default_style = default_style
        self.added = 0

    def visit(self, node) -> None:
        visitor = getattr(self, f"visit_{node.kind}", self.generic_visit)
        visitor(node)

    def generic_visit(self, node) -> None:
        pass

    def visit_method_declaration(self, node: MethodDeclaration) -> None:
        if node.comments or node.leading_comment is not None:
            log.debug(f"Skipping documented method {node.name} (line {node.line})")
            return

        node.leading_comment = build_doc_comment(node, self.default_style)
        self.added += 1
        log.debug(f"Added docblock to {node.name} (line {node.line})")


def synthesize(
    methods: Iterable[MethodDeclaration],
    default_style: DefaultStyle = DefaultStyle.SOURCE,
) -> int:
    """Run the synthesizer over methods in place. Returns comments added."""
    synthesizer = DocBlockSynthesizer(default_style)
    for method in methods:
        synthesizer.visit(method)
    return synthesizer.added
