"""
Source analyzer that transforms the declaration AST to IR.

Phase 2 of the pipeline: select the in-scope declarations and translate
each of them into a schema definition with its dependency set.
"""

from __future__ import annotations

from ...logging import get_logger
from ..config import CodeGeneratorConfig
from ..source_ast.nodes import SourceAST
from .ir_nodes import IR
from .translator import TypeTranslator

logger = get_logger("analyzer")


class SourceAnalyzer:
    """Analyzes the source AST and builds IR."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration
        """
        self.config = config

    def analyze(self, ast: SourceAST) -> IR:
        """
        Analyze the AST and build IR.

        Args:
            ast: The parsed source AST

        Returns:
            IR with one schema definition per in-scope declaration
        """
        ir = IR()

        translator = TypeTranslator(
            get_schema_name=self.config.get_schema_name,
            declared_names=set(ast.names),
            strict=self.config.strict,
        )

        for declaration in ast.declarations:
            if not self.config.name_filter(declaration.name):
                logger.debug("Skipping %s (excluded by name filter)", declaration.name)
                ir.excluded.append(declaration.name)
                continue

            schema = translator.translate_declaration(declaration)
            if not schema.is_supported:
                logger.debug("Unsupported type in %s: %s", declaration.name, "; ".join(schema.unsupported))
            ir.schemas.append(schema)

        return ir
