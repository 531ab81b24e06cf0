from unittest import TestCase

import pytest

from ts_to_zod.pipeline.analyzer import IR, DependencyResolver, MethodChain, SchemaDef, SchemaRef, UnsupportedExpr, ZodCall, ZodProperty
from ts_to_zod.pipeline.analyzer.ir_nodes import Identifier, LazyExpr, LiteralValue, ObjectEntry, ObjectLiteral, RegexLiteral
from ts_to_zod.pipeline.backends import ZodBackend
from ts_to_zod.pipeline.config import CodeGeneratorConfig


class TestZodBackend(TestCase):
    """Test rendering of schema expressions and files"""

    def setUp(self):
        self.backend = ZodBackend(CodeGeneratorConfig())

    def test_render_call_chain(self):
        expr = MethodChain(ZodCall("string"), [ZodProperty("min", [LiteralValue(1)]), ZodProperty("optional")])
        self.assertEqual(self.backend.render_expression(expr), "z.string().min(1).optional()")

    def test_render_literals(self):
        self.assertEqual(self.backend.render_expression(LiteralValue("kal-l")), '"kal-l"')
        self.assertEqual(self.backend.render_expression(LiteralValue(None)), "null")
        self.assertEqual(self.backend.render_expression(LiteralValue(False)), "false")

    def test_render_lazy(self):
        expr = LazyExpr(ZodCall("array", [SchemaRef("vilainSchema", "Vilain")]))
        self.assertEqual(self.backend.render_expression(expr), "z.lazy(() => z.array(vilainSchema))")

    def test_render_regex_escapes_slashes(self):
        cases = [
            ("a/b", "/a\\/b/"),
            ("a\\/b", "/a\\/b/"),
            ("a\\\\/b", "/a\\\\\\/b/"),
            ("a\\\\\\/b", "/a\\\\\\/b/"),
        ]
        for pattern, expected in cases:
            with self.subTest(pattern=pattern):
                self.assertEqual(self.backend.render_expression(RegexLiteral(pattern)), expected)

    def test_render_empty_object(self):
        self.assertEqual(self.backend.render_expression(ZodCall("object", [ObjectLiteral()])), "z.object({})")

    def test_comments_only_when_kept(self):
        shape = ObjectLiteral(entries=[ObjectEntry("name", ZodCall("string"), comment="/**\n * Hero name\n */")])
        expr = ZodCall("object", [shape])
        self.assertEqual(self.backend.render_expression(expr), "z.object({\n    name: z.string()\n})")

        backend = ZodBackend(CodeGeneratorConfig(keep_comments=True))
        self.assertEqual(
            backend.render_expression(expr),
            "z.object({\n    /**\n     * Hero name\n     */\n    name: z.string()\n})",
        )

    def test_unsupported_cannot_be_rendered(self):
        with pytest.raises(ValueError, match="unsupported"):
            self.backend.render_expression(UnsupportedExpr(reason="mapped type", source_text="{ [K in X]: Y }"))

    def test_schemas_file_imports_enum_types(self):
        schema = SchemaDef(
            type_name="Power",
            schema_name="powerSchema",
            expression=ZodCall("nativeEnum", [Identifier("Power")]),
            exported=True,
            needs_type_import=True,
        )
        resolution = DependencyResolver(IR(schemas=[schema])).resolve()
        output = self.backend.render_schemas_file(resolution, "./powers")
        self.assertIn('import { Power } from "./powers";\n', output)
        self.assertIn("export const powerSchema = z.nativeEnum(Power);\n", output)

    def test_no_generation_comment(self):
        backend = ZodBackend(CodeGeneratorConfig(add_generation_comment=False))
        output = backend.render_schemas_file(DependencyResolver(IR()).resolve(), "./empty")
        self.assertEqual(output, 'import { z } from "zod";\n')

    def test_integration_file_without_schemas(self):
        output = self.backend.render_integration_test_file(DependencyResolver(IR()).resolve(), "./empty", "./empty.zod")
        self.assertTrue(output.startswith("// Generated by ts_to_zod\n"))
        self.assertTrue(output.endswith("function expectType<T>(_: T) {\n  /* noop */\n}\n"))
        self.assertNotIn("expectType<spec.", output)
