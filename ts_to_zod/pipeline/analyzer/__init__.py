"""
Analyzer module.

Contains type translation, dependency resolution and IR building.
"""

from __future__ import annotations

from .analyzer import SourceAnalyzer
from .dependency_resolver import DependencyResolver, ResolutionResult, UnresolvedGroup
from .ir_nodes import (
    IR,
    Expr,
    MethodChain,
    ResolutionState,
    SchemaDef,
    SchemaRef,
    UnsupportedExpr,
    ZodCall,
    ZodProperty,
)
from .translator import TypeTranslator, jsdoc_tags_to_zod_properties

__all__ = [
    "IR",
    "Expr",
    "MethodChain",
    "SchemaDef",
    "SchemaRef",
    "UnsupportedExpr",
    "ZodCall",
    "ZodProperty",
    "ResolutionState",
    "ResolutionResult",
    "UnresolvedGroup",
    "DependencyResolver",
    "SourceAnalyzer",
    "TypeTranslator",
    "jsdoc_tags_to_zod_properties",
]
