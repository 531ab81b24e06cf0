"""
AST (Abstract Syntax Tree) node definitions for TypeScript declarations.

These nodes represent the syntactic shape of the declared types before
any translation to zod or dependency resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .jsdoc import JSDocTags


@dataclass
class TypeNode:
    """Base class for all type expression nodes."""

    # Original source text of the type expression (for error messages)
    source_text: str = ""


@dataclass
class PrimitiveNode(TypeNode):
    """Represents a predefined type (string, number, boolean, null, ...)."""

    type_name: str = ""


@dataclass
class LiteralNode(TypeNode):
    """Represents a literal type ("a", 42, true)."""

    value: Any = None


@dataclass
class UnionNode(TypeNode):
    """Represents a union type (A | B | C), flattened."""

    variants: list[TypeNode] = field(default_factory=list)


@dataclass
class IntersectionNode(TypeNode):
    """Represents an intersection type (A & B), flattened."""

    members: list[TypeNode] = field(default_factory=list)


@dataclass
class ArrayNode(TypeNode):
    """Represents T[]."""

    items: TypeNode | None = None


@dataclass
class TupleNode(TypeNode):
    """Represents [A, B, ...]."""

    items: list[TypeNode] = field(default_factory=list)


@dataclass
class PropertyDef(TypeNode):
    """Represents a property signature in an object type."""

    name: str = ""
    type_node: TypeNode | None = None
    is_optional: bool = False
    jsdoc: JSDocTags = field(default_factory=JSDocTags)
    comment: str | None = None


@dataclass
class ObjectNode(TypeNode):
    """Represents an object type literal or an interface body."""

    properties: list[PropertyDef] = field(default_factory=list)

    # Value type of an index signature ({ [key: string]: T })
    index_value: TypeNode | None = None


@dataclass
class ReferenceNode(TypeNode):
    """Represents a named type reference, possibly generic (Omit<A, "b">)."""

    name: str = ""
    type_arguments: list[TypeNode] = field(default_factory=list)


@dataclass
class UnsupportedNode(TypeNode):
    """A type construct the translator does not handle."""

    reason: str = ""


@dataclass
class DeclarationNode:
    """Represents a top-level named type declaration."""

    name: str = ""
    exported: bool = False
    kind: str = "type_alias"  # "type_alias", "interface" or "enum"
    body: TypeNode | None = None

    # Generic parameters (type Foo<T> = ...)
    type_parameters: list[str] = field(default_factory=list)

    # Interface heritage clause (interface A extends B, C)
    extends: list[TypeNode] = field(default_factory=list)

    jsdoc: JSDocTags = field(default_factory=JSDocTags)
    comment: str | None = None

    # Source span (1-based lines)
    start_line: int = 0
    end_line: int = 0


@dataclass
class SourceAST:
    """Root of the parsed source."""

    declarations: list[DeclarationNode] = field(default_factory=list)

    def get(self, name: str) -> DeclarationNode | None:
        """Get a declaration by name."""
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    @property
    def names(self) -> list[str]:
        return [declaration.name for declaration in self.declarations]
