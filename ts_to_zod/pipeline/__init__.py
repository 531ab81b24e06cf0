"""
Pipeline - TypeScript declarations to zod schemas generator.

This module provides a multi-phase architecture for generating zod
schemas from TypeScript type declarations:

1. Phase 1 (Parser): Parse TypeScript with tree-sitter into a declaration AST,
   reading JSDoc tags
2. Phase 2 (Analyzer): Translate type expressions into schema expressions (IR)
3. Phase 3 (Resolver): Order schemas by dependencies, classify cycles
4. Phase 4 (Backend): Render the schemas file and the integration test file
"""

from __future__ import annotations

from .config import CodeGeneratorConfig
from .generator import GenerationResult, PipelineGenerator, generate
from .source_ast import SourceParseError, TsToZodError

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "SourceParseError",
    "TsToZodError",
    "generate",
]
