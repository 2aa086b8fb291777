"""Core enums, constants, and data types for docblock synthesis.

Enums:
    DefaultKind   -- Shape of a parameter default (constant, scalar, other).
    DefaultStyle  -- How 'other' defaults are displayed (source span or node kind).

Types:
    TypeRef, DefaultValue, Parameter -- signature pieces read from the tree.
    MethodDeclaration -- one method node plus the source anchors the printer needs.
    DocComment -- raw text of a comment attached during synthesis.
"""

from dataclasses import dataclass, field
from enum import StrEnum

MIXED_TYPE = "mixed"
VOID_TYPE = "void"

DEFAULT_ROOT_DIR = "src/Controller"
DEFAULT_FILE_PATTERN = r"^.+\.php$"


class DefaultKind(StrEnum):
    CONSTANT = "constant"
    SCALAR = "scalar"
    OTHER = "other"


class DefaultStyle(StrEnum):
    """Rendering of defaults that are neither constants nor scalars.

    source    -- original source span, whitespace collapsed
    category  -- syntax node kind only (e.g. array_creation_expression)
    """

    SOURCE = "source"
    CATEGORY = "category"


@dataclass(frozen=True)
class TypeRef:
    name: str
    nullable: bool = False


@dataclass(frozen=True)
class DefaultValue:
    kind: DefaultKind
    text: str
    category: str


@dataclass
class Parameter:
    name: str
    type: TypeRef | None = None
    default: DefaultValue | None = None
    variadic: bool = False
    by_ref: bool = False
    promoted: bool = False


@dataclass(frozen=True)
class DocComment:
    text: str


@dataclass
class MethodDeclaration:
    """A method node as seen by the synthesizer.

    ``comments`` holds the comments already preceding the method in the
    source; ``leading_comment`` is only ever set by synthesis.
    """

    name: str
    params: list[Parameter] = field(default_factory=list)
    return_type: TypeRef | None = None
    comments: list[str] = field(default_factory=list)
    leading_comment: DocComment | None = None
    start_byte: int = 0
    line: int = 0
    indent: str = ""

    kind = "method_declaration"


@dataclass
class RunResult:
    """Summary of one traversal run."""

    total: int = 0
    updated: int = 0
    unchanged: int = 0
    failed: int = 0
