"""
Source AST (Abstract Syntax Tree) module.

Contains the declaration node definitions, the TypeScript parser and the
JSDoc tag extractor.
"""

from __future__ import annotations

from .jsdoc import FORMATS, JSDocTags, parse_jsdoc_tags
from .nodes import (
    ArrayNode,
    DeclarationNode,
    IntersectionNode,
    LiteralNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    ReferenceNode,
    SourceAST,
    TupleNode,
    TypeNode,
    UnionNode,
    UnsupportedNode,
)
from .parser import SourceParseError, SourceParser, TsToZodError

__all__ = [
    "TypeNode",
    "PrimitiveNode",
    "LiteralNode",
    "UnionNode",
    "IntersectionNode",
    "ArrayNode",
    "TupleNode",
    "ObjectNode",
    "PropertyDef",
    "ReferenceNode",
    "UnsupportedNode",
    "DeclarationNode",
    "SourceAST",
    "SourceParser",
    "SourceParseError",
    "TsToZodError",
    "JSDocTags",
    "FORMATS",
    "parse_jsdoc_tags",
]
