"""
IR (Intermediate Representation) node definitions.

These nodes represent zod schema expressions, ready for rendering. A schema
expression is a tree: calls on `z`, references to other generated schemas,
literals, and chains of refinement operations (`.min(1).optional()`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResolutionState(Enum):
    """How a declaration's schema can be emitted."""

    RESOLVED = "resolved"  # All dependencies emitted before it
    LAZILY_RESOLVED = "lazily_resolved"  # Self-referential, wrapped in z.lazy()
    UNRESOLVED = "unresolved"  # Multi-node cycle or unsupported type


@dataclass
class Expr:
    """Base class for all schema expression nodes."""


@dataclass
class ZodCall(Expr):
    """A schema constructor on the zod namespace: z.<name>(args)."""

    name: str = ""
    args: list[Expr] = field(default_factory=list)


@dataclass
class SchemaRef(Expr):
    """Reference to another generated schema constant."""

    schema_name: str = ""
    type_name: str = ""


@dataclass
class LiteralValue(Expr):
    """A JSON-like literal argument ("a", 1, true, null)."""

    value: Any = None


@dataclass
class Identifier(Expr):
    """A bare identifier argument (a native enum imported from the source)."""

    name: str = ""


@dataclass
class RegexLiteral(Expr):
    """A regular expression literal: /pattern/."""

    pattern: str = ""


@dataclass
class ObjectEntry:
    """A key/value pair of an object literal."""

    key: str = ""
    value: Expr | None = None
    comment: str | None = None


@dataclass
class ObjectLiteral(Expr):
    """An object literal argument; multiline for shapes, inline for masks."""

    entries: list[ObjectEntry] = field(default_factory=list)
    multiline: bool = True
    quote_keys: bool = False


@dataclass
class ArrayLiteral(Expr):
    """An array literal argument."""

    items: list[Expr] = field(default_factory=list)


@dataclass
class LazyExpr(Expr):
    """A deferred schema: z.lazy(() => body)."""

    body: Expr | None = None


@dataclass
class ZodProperty:
    """A refinement operation applied to a schema: .identifier(args)."""

    identifier: str = ""
    args: list[Expr] = field(default_factory=list)


@dataclass
class MethodChain(Expr):
    """A schema followed by ordered refinement operations."""

    target: Expr | None = None
    properties: list[ZodProperty] = field(default_factory=list)


@dataclass
class UnsupportedExpr(Expr):
    """Marker for a type construct that cannot be translated."""

    reason: str = ""
    source_text: str = ""


@dataclass
class SchemaDef:
    """A schema declaration to generate, one per in-scope type declaration."""

    type_name: str = ""
    schema_name: str = ""
    expression: Expr | None = None

    # Names of the declared types this schema references (ordered, unique)
    dependencies: list[str] = field(default_factory=list)

    exported: bool = False
    comment: str | None = None

    # Reasons for every unsupported construct found during translation
    unsupported: list[str] = field(default_factory=list)

    # Whether the original type must be imported (native enums)
    needs_type_import: bool = False

    @property
    def is_self_referencing(self) -> bool:
        return self.type_name in self.dependencies

    @property
    def is_supported(self) -> bool:
        return not self.unsupported


@dataclass
class IR:
    """The complete Intermediate Representation."""

    # Schema definitions of in-scope declarations, in source order
    schemas: list[SchemaDef] = field(default_factory=list)

    # Declarations excluded by the name filter (assumed to exist elsewhere)
    excluded: list[str] = field(default_factory=list)
