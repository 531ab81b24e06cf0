"""TypeScript to zod schema generator

A Python package for generating zod runtime validation schemas from
TypeScript type declarations, with a companion file asserting that the
inferred schema types match the original types.
"""

__version__ = "1.0.0"

from .pipeline import (
    CodeGeneratorConfig,
    GenerationResult,
    PipelineGenerator,
    SourceParseError,
    TsToZodError,
    generate,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "SourceParseError",
    "TsToZodError",
    "generate",
]
