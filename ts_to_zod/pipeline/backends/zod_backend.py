"""
Zod code generation backend.

Renders schema expression trees as TypeScript code using zod, and the
integration test file asserting that inferred schema types and original
types are mutually assignable.
"""

from __future__ import annotations

import json
import re

from ..analyzer.dependency_resolver import ResolutionResult
from ..analyzer.ir_nodes import (
    ArrayLiteral,
    Expr,
    Identifier,
    LazyExpr,
    LiteralValue,
    MethodChain,
    ObjectLiteral,
    RegexLiteral,
    ResolutionState,
    SchemaRef,
    UnsupportedExpr,
    ZodCall,
)
from .base import CodeBackend

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
# A slash preceded by an even number of backslashes (possibly none) is unescaped
_UNESCAPED_SLASH = re.compile(r"(?<!\\)((?:\\\\)*)/")


class ZodBackend(CodeBackend):
    """Zod (TypeScript) code generation backend."""

    TEMPLATE_LANG = "zod"
    FILE_EXTENSION = "ts"

    # Name of the zod namespace import
    NAMESPACE = "z"

    def render_expression(self, expr: Expr, level: int = 0) -> str:
        """Render a schema expression as TypeScript."""
        if isinstance(expr, ZodCall):
            args = ", ".join(self.render_expression(arg, level) for arg in expr.args)
            return f"{self.NAMESPACE}.{expr.name}({args})"

        if isinstance(expr, SchemaRef):
            return expr.schema_name

        if isinstance(expr, MethodChain):
            code = self.render_expression(expr.target, level)
            for prop in expr.properties:
                args = ", ".join(self.render_expression(arg, level) for arg in prop.args)
                code += f".{prop.identifier}({args})"
            return code

        if isinstance(expr, LiteralValue):
            return self._format_literal(expr.value)

        if isinstance(expr, Identifier):
            return expr.name

        if isinstance(expr, RegexLiteral):
            pattern = _UNESCAPED_SLASH.sub(lambda m: m.group(1) + "\\/", expr.pattern)
            return f"/{pattern}/"

        if isinstance(expr, ObjectLiteral):
            return self._render_object(expr, level)

        if isinstance(expr, ArrayLiteral):
            return "[" + ", ".join(self.render_expression(item, level) for item in expr.items) + "]"

        if isinstance(expr, LazyExpr):
            return f"{self.NAMESPACE}.lazy(() => {self.render_expression(expr.body, level)})"

        if isinstance(expr, UnsupportedExpr):
            raise ValueError(f"Cannot render unsupported type: {expr.reason}")

        raise ValueError(f"Unknown expression node {type(expr).__name__}")

    def _render_object(self, obj: ObjectLiteral, level: int) -> str:
        if not obj.entries:
            return "{}"

        if not obj.multiline:
            entries = ", ".join(f"{self._format_key(entry.key, obj.quote_keys)}: {self.render_expression(entry.value, level)}" for entry in obj.entries)
            return "{ " + entries + " }"

        inner = self.INDENT * (level + 1)
        lines = []
        for entry in obj.entries:
            line = ""
            if entry.comment and self.config.keep_comments:
                line = self._indent_block(entry.comment, level + 1) + "\n"
            line += f"{inner}{self._format_key(entry.key, obj.quote_keys)}: {self.render_expression(entry.value, level + 1)}"
            lines.append(line)
        return "{\n" + ",\n".join(lines) + "\n" + self.INDENT * level + "}"

    def _format_key(self, key: str, quote: bool) -> str:
        if not quote and _IDENTIFIER.match(key):
            return key
        return json.dumps(key, ensure_ascii=False)

    def _format_literal(self, value) -> str:
        """Format a literal value (JSON and TypeScript agree on these)."""
        return json.dumps(value, ensure_ascii=False)

    def _schema_declaration(self, schema, state: ResolutionState) -> tuple[str, str]:
        """Return the declared constant (with annotation) and its value."""
        if state == ResolutionState.LAZILY_RESOLVED:
            value = self.render_expression(LazyExpr(body=schema.expression))
            return f"{schema.schema_name}: {self.NAMESPACE}.ZodSchema<{schema.type_name}>", value
        return schema.schema_name, self.render_expression(schema.expression)

    def render_schemas_file(self, resolution: ResolutionResult, source_module: str) -> str:
        """Render the schemas file."""
        type_imports = []
        schemas = []
        for schema in resolution.ordered:
            state = resolution.states[schema.type_name]
            if state == ResolutionState.LAZILY_RESOLVED or schema.needs_type_import:
                if schema.type_name not in type_imports:
                    type_imports.append(schema.type_name)

            declaration, expression = self._schema_declaration(schema, state)
            schemas.append(
                {
                    "declaration": declaration,
                    "expression": expression,
                    "comment": schema.comment if self.config.keep_comments else None,
                }
            )

        return self.schemas_template.render(
            generation_comment=self._generation_comment(),
            type_imports=type_imports,
            source_module=source_module,
            schemas=schemas,
        )

    def render_integration_test_file(self, resolution: ResolutionResult, source_module: str, schema_module: str) -> str:
        """Render the integration test file, for exported schemas only."""
        tests = [
            {
                "type_name": schema.type_name,
                "schema_name": schema.schema_name,
                "inferred_type": f"{schema.schema_name}InferredType",
            }
            for schema in resolution.ordered
            if schema.exported
        ]

        return self.integration_template.render(
            generation_comment=self._generation_comment(),
            source_module=source_module,
            schema_module=schema_module,
            tests=tests,
        )
