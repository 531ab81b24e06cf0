"""
Pipeline generator: TypeScript declarations to zod schemas.

Runs the phases in order (parse, analyze, resolve) and returns a
GenerationResult whose renderers produce the schemas file and the
integration test file. Generation is best-effort: problems are collected
in `errors`, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ..logging import get_logger
from .analyzer import IR, DependencyResolver, ResolutionResult, SourceAnalyzer
from .backends import ZodBackend
from .config import CodeGeneratorConfig
from .source_ast import SourceAST, SourceParser

logger = get_logger("generator")


@dataclass
class GenerationResult:
    """Generated artifacts and the errors of a generation run."""

    backend: ZodBackend
    resolution: ResolutionResult
    ir: IR
    ast: SourceAST
    errors: list[str] = field(default_factory=list)

    def get_zod_schemas_file(self, source_module: str) -> str:
        """
        Render the zod schemas file.

        Args:
            source_module: Module reference of the original types (e.g. "./hero")
        """
        return self.backend.render_schemas_file(self.resolution, source_module)

    def get_integration_test_file(self, source_module: str, schema_module: str) -> str:
        """
        Render the file asserting that schemas and original types match.

        Args:
            source_module: Module reference of the original types
            schema_module: Module reference of the generated schemas
        """
        return self.backend.render_integration_test_file(self.resolution, source_module, schema_module)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class PipelineGenerator:
    """Generates zod schemas from TypeScript type declarations."""

    def __init__(self, source_text: str, config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            source_text: TypeScript source declaring the types
            config: Code generation configuration
        """
        self.source_text = source_text
        self.config = config or CodeGeneratorConfig()

    def generate(self) -> GenerationResult:
        """
        Run the pipeline.

        Returns:
            GenerationResult with renderers and errors

        Raises:
            SourceParseError: If the source has syntax errors
            ValueError: If config.max_run is not a positive integer
        """
        # Phase 1: Parse TypeScript into the declaration AST
        parser = SourceParser(parse_jsdoc=not self.config.skip_parse_jsdoc)
        ast = parser.parse(self.source_text)

        # Phase 2: Translate in-scope declarations into schema expressions
        analyzer = SourceAnalyzer(self.config)
        ir = analyzer.analyze(ast)

        # Phase 3: Order schemas by dependencies
        resolver = DependencyResolver(ir, max_run=self.config.max_run)
        resolution = resolver.resolve()

        errors = [group.describe(self.config.max_run) for group in resolution.unresolved_groups]
        logger.debug("Generated %d schemas, %d errors", len(resolution.ordered), len(errors))

        # Phase 4: Backend renders on demand
        return GenerationResult(
            backend=ZodBackend(self.config),
            resolution=resolution,
            ir=ir,
            ast=ast,
            errors=errors,
        )


def generate(source_text: str, config: CodeGeneratorConfig | None = None, **overrides: Any) -> GenerationResult:
    """
    Generate zod schemas from TypeScript source.

    Args:
        source_text: TypeScript source declaring the types
        config: Code generation configuration (defaults when omitted)
        **overrides: Config fields to override (max_run=3, strict=True,
            name_pattern="^Hero", schema_name_suffix="Validator", ...)

    Returns:
        GenerationResult
    """
    config = config or CodeGeneratorConfig()
    if overrides:
        config = replace(config, **overrides)
    return PipelineGenerator(source_text, config).generate()
