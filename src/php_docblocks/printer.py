"""Format-preserving printer -- splices new docblocks into the original bytes."""

from __future__ import annotations

from loguru import logger

from .errors import DocblockError
from .models import MethodDeclaration

log = logger.bind(stage="printer")


def detect_newline(source: bytes) -> str:
    """Newline convention of a file (CRLF if it uses any, else LF)."""
    return "\r\n" if b"\r\n" in source else "\n"


def format_comment(text: str, indent: str, newline: str = "\n") -> str:
    """Indent a comment to sit directly above a node at ``indent``.

    The first line is not indented since it is inserted where the node
    starts; the trailing newline and indent put the node back on its column.
    """
    lines = text.split("\n")
    return (newline + indent).join(lines) + newline + indent


def print_format_preserving(
    new_methods: list[MethodDeclaration],
    old_methods: list[MethodDeclaration],
    source: bytes,
) -> bytes:
    """Render source with comments that synthesis added.

    Compares each modified declaration against its original; only a
    ``leading_comment`` the original lacked produces new text. Everything
    else is copied from ``source`` byte for byte.
    """
    if len(new_methods) != len(old_methods):
        raise DocblockError(
            f"Declaration count changed ({len(old_methods)} -> {len(new_methods)})"
        )

    newline = detect_newline(source)
    inserts: list[tuple[int, bytes]] = []
    for new, old in zip(new_methods, old_methods):
        if new.start_byte != old.start_byte:
            raise DocblockError(f"Declaration {new.name} moved during synthesis")
        if new.leading_comment is None or new.leading_comment == old.leading_comment:
            continue
        text = format_comment(new.leading_comment.text, new.indent, newline)
        inserts.append((new.start_byte, text.encode("utf-8")))

    if not inserts:
        return source

    chunks: list[bytes] = []
    pos = 0
    for offset, text in sorted(inserts, key=lambda item: item[0]):
        chunks.append(source[pos:offset])
        chunks.append(text)
        pos = offset
    chunks.append(source[pos:])

    log.debug(f"Inserted {len(inserts)} docblocks")
    return b"".join(chunks)
