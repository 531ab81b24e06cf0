"""
Base class for code generation backends.

Defines the interface that schema library backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.dependency_resolver import ResolutionResult
from ..analyzer.ir_nodes import Expr
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension of the generated files
    FILE_EXTENSION: str = ""

    # Indentation unit of generated code
    INDENT: str = "    "

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

        self.schemas_template = self.jinja_env.get_template(f"schemas.{self.FILE_EXTENSION}.jinja2")
        self.integration_template = self.jinja_env.get_template(f"integration.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def render_expression(self, expr: Expr, level: int = 0) -> str:
        """
        Render a schema expression as source code.

        Args:
            expr: The schema expression
            level: Indentation level of the line the expression starts on

        Returns:
            Source code string
        """

    @abstractmethod
    def render_schemas_file(self, resolution: ResolutionResult, source_module: str) -> str:
        """
        Render the schemas file.

        Args:
            resolution: Resolved schemas in emission order
            source_module: Module reference of the original type declarations

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def render_integration_test_file(self, resolution: ResolutionResult, source_module: str, schema_module: str) -> str:
        """
        Render the file asserting schema and type equivalence.

        Args:
            resolution: Resolved schemas in emission order
            source_module: Module reference of the original type declarations
            schema_module: Module reference of the generated schemas

        Returns:
            Generated code as a string
        """

    def _generation_comment(self) -> str:
        return "Generated by ts_to_zod" if self.config.add_generation_comment else ""

    def _indent_block(self, text: str, level: int) -> str:
        """Indent every line of a multi-line block."""
        prefix = self.INDENT * level
        return "\n".join(prefix + line for line in text.splitlines())
